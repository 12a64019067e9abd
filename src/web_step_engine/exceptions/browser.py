"""
Browser-related exceptions.
"""

from web_step_engine.exceptions.base import WebStepEngineError


class BrowserError(WebStepEngineError):
    """Base exception for browser-related errors."""
    pass


class TransientDriverError(BrowserError):
    """
    Recoverable driver failure.
    
    Raised for conditions such as an element detached from the DOM or
    a script failing mid-navigation. Interactions retry once and waits
    retry within their time budget.
    """
    pass


class HardTimeout(BrowserError):
    """
    A wait exhausted its time budget.
    
    Fatal to the current step.
    """
    
    def __init__(self, message: str, timeout_seconds: float, reason: str | None = None):
        super().__init__(message, {"timeout_seconds": timeout_seconds, "reason": reason})
        self.timeout_seconds = timeout_seconds
        self.reason = reason
