"""
Web Step Engine - Binding resolution and resilient interaction for browser tests.

Test steps refer to page elements and values by name. This package resolves
those names through layered scopes into locators and values, and performs
actions on the located elements with retries and post-action waits.

Example:
    >>> from web_step_engine import WebContext
    >>> with WebContext.create() as context:
    ...     context.store.set("search field/locator", "name")
    ...     context.store.set("search field/locator/name", "q")
    ...     context.navigate_to("https://www.google.com")
    ...     context.actions.send_keys(context.get_locator_binding("search field"), "cats")
"""

__version__ = "0.1.0"

# Public API exports
from web_step_engine.config.settings import Settings
from web_step_engine.engine.context import WebContext
from web_step_engine.engine.locator import LocatorBinding
from web_step_engine.scopes.scoped_store import ScopedStore

__all__ = [
    "WebContext",
    "LocatorBinding",
    "ScopedStore",
    "Settings",
    "__version__",
]
