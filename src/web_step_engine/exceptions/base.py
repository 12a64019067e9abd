"""
Base exceptions for the web step engine.
"""


class WebStepEngineError(Exception):
    """
    Base exception for all web step engine errors.
    
    All custom exceptions inherit from this class, making it easy
    to catch any error raised while resolving bindings or driving the browser.
    
    Attributes:
        message: Human-readable error message
        details: Optional additional error details
    """
    
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(WebStepEngineError):
    """
    Error in configuration.
    
    Raised when there's an issue with settings, environment variables,
    or configuration files.
    """
    pass


class AssertionFailedError(WebStepEngineError, AssertionError):
    """
    A bound value did not satisfy an expected comparison.
    
    Also an AssertionError so step runners report it as a failed check
    rather than an error.
    """
    
    def __init__(self, message: str, name: str, expected: str, actual: str | None):
        super().__init__(message)
        self.name = name
        self.expected = expected
        self.actual = actual
