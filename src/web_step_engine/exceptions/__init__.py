"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout the web step engine,
providing clear error types for binding, browser and evaluation failures.
"""

from web_step_engine.exceptions.base import (
    WebStepEngineError,
    ConfigurationError,
    AssertionFailedError,
)
from web_step_engine.exceptions.binding import (
    BindingError,
    LocatorBindingNotFound,
    UnboundAttributeError,
    UnsupportedLocatorError,
    ResolutionDepthError,
)
from web_step_engine.exceptions.browser import (
    BrowserError,
    TransientDriverError,
    HardTimeout,
)
from web_step_engine.exceptions.evaluation import (
    EvaluationError,
    ResourceNotFound,
)

__all__ = [
    # Base exceptions
    "WebStepEngineError",
    "ConfigurationError",
    "AssertionFailedError",
    # Binding exceptions
    "BindingError",
    "LocatorBindingNotFound",
    "UnboundAttributeError",
    "UnsupportedLocatorError",
    "ResolutionDepthError",
    # Browser exceptions
    "BrowserError",
    "TransientDriverError",
    "HardTimeout",
    # Evaluation exceptions
    "EvaluationError",
    "ResourceNotFound",
]
