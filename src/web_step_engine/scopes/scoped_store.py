"""
Scoped Store - Layered name/value bindings for a running feature.

Handles:
- A feature scope that lives for the whole feature
- A stack of page scopes, cleared on navigation or reset
- Prefix-filtered enumeration of everything currently visible

Keys are flat strings. The `/` in keys such as `search/locator/id` is a
naming convention only; the store interprets nothing beyond prefixes.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
import logging

from web_step_engine.exceptions import UnboundAttributeError

logger = logging.getLogger(__name__)

FEATURE_SCOPE = "feature"
PAGE_SCOPE = "page"


@dataclass
class Scope:
    """
    A named layer of bindings.
    
    Bindings are kept in insertion order. Rebinding a key appends a new entry,
    so the newest binding shadows older ones while history is preserved.
    Rebinding an identical value moves the existing entry to the end instead.
    """
    scope_type: str
    name: str
    bindings: List[Tuple[str, str]] = field(default_factory=list)
    
    def set(self, key: str, value: str) -> None:
        """Bind a value to a key in this scope."""
        entry = (key, value)
        if entry in self.bindings:
            self.bindings.remove(entry)
        self.bindings.append(entry)
    
    def get_optional(self, key: str) -> Optional[str]:
        """Get the newest value bound to a key, or None."""
        for name, value in reversed(self.bindings):
            if name == key:
                return value
        return None
    
    def entries(self) -> Iterator[Tuple[str, str]]:
        """Iterate bindings newest first."""
        return reversed(self.bindings)
    
    def clear(self) -> None:
        self.bindings.clear()


class ScopedStore:
    """
    Hierarchical key/value store with a feature scope and page scopes.
    
    Lookups search the current page scope first and then the feature scope.
    Writes go to the current scope (the current page if one is open).
    
    Example:
        >>> store = ScopedStore()
        >>> store.add_scope("google search page")
        >>> store.set("search field/locator", "name")
        >>> store.get("search field/locator")
        'name'
        >>> store.visible_entries_with_prefix("search field")
        [('search field/locator', 'name')]
    """
    
    def __init__(self):
        self._feature = Scope(FEATURE_SCOPE, FEATURE_SCOPE)
        self._pages: List[Scope] = []
    
    @property
    def feature_scope(self) -> Scope:
        """The feature-level scope."""
        return self._feature
    
    @property
    def current(self) -> Scope:
        """The scope that receives writes."""
        return self._pages[-1] if self._pages else self._feature
    
    def add_scope(self, name: str) -> Scope:
        """
        Open (or re-enter) a named page scope.
        
        Re-entering the page that is already current keeps its bindings.
        
        Args:
            name: Page name
            
        Returns:
            The current page scope
        """
        if self._pages and self._pages[-1].name == name:
            return self._pages[-1]
        scope = Scope(PAGE_SCOPE, name)
        self._pages.append(scope)
        logger.debug(f"Opened {PAGE_SCOPE} scope: {name}")
        return scope
    
    def get(self, key: str) -> str:
        """
        Get the value bound to a key in the visible scopes.
        
        Raises:
            UnboundAttributeError: If no visible scope binds the key
        """
        value = self.get_optional(key)
        if value is None:
            raise UnboundAttributeError(key, self.current.scope_type)
        return value
    
    def get_optional(self, key: str) -> Optional[str]:
        """Get the value bound to a key in the visible scopes, or None."""
        for scope in self._visible():
            value = scope.get_optional(key)
            if value is not None:
                return value
        return None
    
    def set(self, key: str, value: str) -> None:
        """Bind a value in the current scope."""
        self.current.set(key, value)
        logger.debug(f"Bound [{self.current.scope_type}] {key} = {repr(value)[:50]}")
    
    def visible_entries_with_prefix(self, prefix: str) -> List[Tuple[str, str]]:
        """
        List visible bindings whose keys start with a prefix.
        
        Entries are ordered newest first within the current page scope,
        followed by the feature scope, which is the order lookups consult them.
        """
        return [
            (key, value)
            for scope in self._visible()
            for key, value in scope.entries()
            if key.startswith(prefix)
        ]
    
    def clear_page_scopes(self) -> None:
        """Drop all page scopes (on navigation or reset)."""
        self._pages.clear()
    
    def reset(self) -> None:
        """Drop every binding (at the end of a feature)."""
        self._pages.clear()
        self._feature.clear()
    
    def _visible(self) -> List[Scope]:
        if self._pages:
            return [self._pages[-1], self._feature]
        return [self._feature]
