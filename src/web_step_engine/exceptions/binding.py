"""
Binding-related exceptions.
"""

from web_step_engine.exceptions.base import WebStepEngineError


class BindingError(WebStepEngineError):
    """Base exception for binding resolution errors."""
    pass


class LocatorBindingNotFound(BindingError):
    """
    No locator is configured for an element.
    
    Raised when either `<element>/locator` or `<element>/locator/<strategy>`
    is missing from the visible scopes.
    """
    
    def __init__(self, element: str, reason: str):
        super().__init__(f"Could not locate {element}: {reason}", {"element": element})
        self.element = element
        self.reason = reason


class UnboundAttributeError(BindingError):
    """
    No value could be resolved for a name by any lookup in the chain.
    """
    
    def __init__(self, name: str, scope: str | None = None):
        location = f" in {scope} scope" if scope else ""
        super().__init__(f"Unbound reference{location}: {name}", {"name": name})
        self.name = name
        self.scope = scope


class UnsupportedLocatorError(BindingError):
    """Locator strategy is not one the driver understands."""
    
    def __init__(self, element: str, strategy: str):
        super().__init__(
            f"Unsupported locator strategy '{strategy}' for {element}",
            {"element": element, "strategy": strategy},
        )
        self.element = element
        self.strategy = strategy


class ResolutionDepthError(BindingError):
    """
    Nested binding resolution went deeper than allowed.
    
    Raised instead of exhausting the stack when bindings reference
    each other in a cycle.
    """
    
    def __init__(self, name: str, max_depth: int):
        super().__init__(
            f"Resolution of '{name}' exceeded maximum depth of {max_depth} "
            f"(circular binding reference?)",
            {"name": name, "max_depth": max_depth},
        )
        self.name = name
        self.max_depth = max_depth
