"""
Screenshot Manager - Capture screenshots and text attachments during runs.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List
import logging
import re

from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)


@dataclass
class Attachment:
    """
    A file captured during a run.
    
    Attributes:
        name: Attachment name
        path: File path to the attachment
        timestamp: When it was captured
        description: Description of what it shows
        is_error: Whether it was captured for a failure
    """
    name: str
    path: Path
    timestamp: datetime
    description: str = ""
    is_error: bool = False


class ScreenshotManager:
    """
    Manage screenshot and attachment capture for a run.
    
    Example:
        >>> manager = ScreenshotManager(output_dir="./output", run_id="run_123")
        >>> manager.capture(driver, description="After login")
        >>> manager.add_attachment("the current URL", "txt", "https://example.com")
    """
    
    def __init__(
        self,
        output_dir: str | Path,
        run_id: str,
        format: str = "png",
    ):
        """
        Initialize the screenshot manager.
        
        Args:
            output_dir: Directory to save attachments
            run_id: Unique run identifier
            format: Image format
        """
        self.output_dir = Path(output_dir) / run_id
        self.run_id = run_id
        self.format = format
        self._attachments: List[Attachment] = []
        self._counter = 0
        
        self.output_dir.mkdir(parents=True, exist_ok=True)
    
    def capture(
        self,
        driver: WebDriver,
        description: str = "",
        is_error: bool = False,
    ) -> Attachment:
        """
        Capture a screenshot of the current browser window.
        
        Args:
            driver: Live WebDriver
            description: Description of the screenshot
            is_error: Whether this is an error screenshot
            
        Returns:
            The captured attachment
        """
        name = "Error screenshot" if is_error else "Screenshot"
        path = self._next_path(name, self.format)
        driver.get_screenshot_as_file(str(path))
        return self._record(name, path, description, is_error)
    
    def add_attachment(self, name: str, extension: str, content: str) -> Attachment:
        """
        Write a text attachment.
        
        Args:
            name: Attachment name
            extension: File extension (e.g. txt, json)
            content: Text content
        """
        path = self._next_path(name, extension)
        path.write_text(content, encoding="utf-8")
        return self._record(name, path)
    
    def get_attachments(self) -> List[Attachment]:
        """Get all captured attachments."""
        return self._attachments.copy()
    
    def _next_path(self, name: str, extension: str) -> Path:
        self._counter += 1
        slug = re.sub(r"[^A-Za-z0-9]+", "-", name).strip("-").lower() or "attachment"
        timestamp = datetime.now().strftime("%H%M%S")
        return self.output_dir / f"{self._counter:03d}-{slug}-{timestamp}.{extension}"
    
    def _record(
        self,
        name: str,
        path: Path,
        description: str = "",
        is_error: bool = False,
    ) -> Attachment:
        attachment = Attachment(
            name=name,
            path=path,
            timestamp=datetime.now(),
            description=description,
            is_error=is_error,
        )
        self._attachments.append(attachment)
        logger.debug(f"Captured {name}: {path}")
        return attachment
