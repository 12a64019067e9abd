"""
Expression evaluation exceptions.
"""

from web_step_engine.exceptions.base import WebStepEngineError


class EvaluationError(WebStepEngineError):
    """
    An embedded expression could not be evaluated.
    
    Attributes:
        kind: Evaluator that failed (xpath, regex, json path, sysproc, file)
        expression: The expression that was attempted
    """
    
    def __init__(self, message: str, kind: str, expression: str | None = None):
        super().__init__(message, {"kind": kind, "expression": expression})
        self.kind = kind
        self.expression = expression


class ResourceNotFound(EvaluationError):
    """
    A file bound to a name does not exist.
    
    Never swallowed by fallback lookups.
    """
    
    def __init__(self, name: str, path: str):
        super().__init__(f"File bound to '{name}' not found: {path}", "file", path)
        self.name = name
        self.path = path
