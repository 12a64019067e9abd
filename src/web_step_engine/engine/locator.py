"""
Locator Resolver - Turn element names into locator bindings.

An element `search field` is located through two bindings:

    search field/locator       = name
    search field/locator/name  = q

and may optionally be searched within another element:

    search field/locator/name/container = search form
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import logging

from web_step_engine.exceptions import LocatorBindingNotFound

if TYPE_CHECKING:
    from web_step_engine.engine.context import WebContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocatorBinding:
    """
    How to find an element on the page.
    
    Attributes:
        element: Symbolic element name
        locator_strategy: Strategy name (id, name, css selector, xpath, ...)
        expression: Interpolated locator expression
        container: Enclosing element to search within (frames are switched into)
    """
    element: str
    locator_strategy: str
    expression: str
    container: Optional["LocatorBinding"] = None
    
    def __str__(self) -> str:
        text = f"{self.element} [{self.locator_strategy}: {self.expression}]"
        if self.container:
            text += f" in {self.container}"
        return text


class LocatorResolver:
    """
    Resolve locator bindings from the visible scopes.
    
    Only the store is consulted; nothing is looked up in the live browser,
    so resolution behaves the same in dry-run mode.
    """
    
    def __init__(self, context: "WebContext"):
        self._context = context
    
    def resolve(self, element: str) -> LocatorBinding:
        """
        Get the locator binding for an element.
        
        Args:
            element: Element name
            
        Returns:
            The locator binding, with any container resolved recursively
            
        Raises:
            LocatorBindingNotFound: If the locator or its lookup expression
                is not bound
        """
        store = self._context.store
        locator_key = f"{element}/locator"
        with self._context.resolving(locator_key):
            strategy = store.get_optional(locator_key)
            if strategy is None:
                raise LocatorBindingNotFound(element, f"locator binding not found: {locator_key}")
            
            lookup_key = self._context.interpolate(f"{element}/locator/{strategy}")
            expression = store.get_optional(lookup_key)
            if expression is None:
                raise LocatorBindingNotFound(element, f"locator lookup binding not found: {lookup_key}")
            
            container_name = store.get_optional(self._context.interpolate(f"{lookup_key}/container"))
            container = self.resolve(container_name) if container_name else None
            
            binding = LocatorBinding(
                element=element,
                locator_strategy=strategy,
                expression=self._context.interpolate(expression),
                container=container,
            )
        logger.debug(f"get_locator_binding({element})={binding}")
        return binding
