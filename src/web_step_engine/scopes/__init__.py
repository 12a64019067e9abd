"""
Scopes module - Feature and page level binding storage.
"""

from web_step_engine.scopes.scoped_store import (
    Scope,
    ScopedStore,
    FEATURE_SCOPE,
    PAGE_SCOPE,
)
from web_step_engine.scopes.loader import read_bindings, load_bindings

__all__ = [
    "Scope",
    "ScopedStore",
    "FEATURE_SCOPE",
    "PAGE_SCOPE",
    "read_bindings",
    "load_bindings",
]
