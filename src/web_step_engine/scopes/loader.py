"""
Bindings Loader - Read name/value bindings from YAML into a scope.

The file is a flat mapping of binding keys to scalar values:

    search field/locator: name
    search field/locator/name: q
    search field/type/wait: 1
"""

from pathlib import Path
from typing import Dict, Union
import logging

import yaml

from web_step_engine.exceptions import ConfigurationError
from web_step_engine.scopes.scoped_store import Scope

logger = logging.getLogger(__name__)


def read_bindings(path: Union[str, Path]) -> Dict[str, str]:
    """
    Read bindings from a YAML file.
    
    Scalar values are converted to strings (booleans as `true`/`false`).
    
    Raises:
        ConfigurationError: If the file is missing, unparsable, or not a flat
            mapping of scalars
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Bindings file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    
    if not isinstance(data, dict):
        raise ConfigurationError(f"Bindings file must contain a mapping: {path}")
    
    bindings: Dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            raise ConfigurationError(
                f"Binding '{key}' must be a scalar value",
                details={"file": str(path), "key": str(key)},
            )
        if isinstance(value, bool):
            value = "true" if value else "false"
        bindings[str(key)] = "" if value is None else str(value)
    logger.debug(f"Read {len(bindings)} binding(s) from {path}")
    return bindings


def load_bindings(path: Union[str, Path], scope: Scope) -> int:
    """Bind every entry of a YAML bindings file in a scope; returns the count."""
    bindings = read_bindings(path)
    for key, value in bindings.items():
        scope.set(key, value)
    return len(bindings)
