"""
File reads for file-bound attributes.
"""

from pathlib import Path
from typing import Optional

from web_step_engine.exceptions import ResourceNotFound


def read_file(path: str, name: Optional[str] = None) -> str:
    """
    Read the contents of a bound file.
    
    Args:
        path: File path
        name: Name the file is bound to (for error reporting)
        
    Raises:
        ResourceNotFound: If the file does not exist
    """
    file = Path(path)
    if not file.is_file():
        raise ResourceNotFound(name or path, path)
    return file.read_text(encoding="utf-8")
