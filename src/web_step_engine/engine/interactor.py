"""
Element Interactor - Run functions against located elements.

Elements go stale when the page re-renders. Every interaction locates the
element afresh and, on a transient driver error, re-locates it and tries
exactly once more.
"""

from typing import Callable, Optional, TypeVar, TYPE_CHECKING
import logging

from selenium.webdriver.remote.webelement import WebElement

from web_step_engine.browsers.session import DriverSession, TRANSIENT_ERRORS
from web_step_engine.config.settings import Settings
from web_step_engine.utils.retry import attempt

if TYPE_CHECKING:
    from web_step_engine.engine.locator import LocatorBinding

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACTION_VERBS = {
    "click": "Clicking",
    "submit": "Submitting",
    "check": "Checking",
    "uncheck": "Unchecking",
}


class ElementInteractor:
    """Locate-and-apply with one retry on transient driver errors."""
    
    def __init__(self, session: DriverSession, settings: Settings):
        self._session = session
        self._settings = settings
    
    def with_element(
        self,
        binding: "LocatorBinding",
        fn: Callable[[WebElement], T],
        action: Optional[str] = None,
    ) -> T:
        """
        Apply a function to the element a binding locates.
        
        The active window is restored afterwards when the binding has a
        container, since frame containers switch the driver into the frame.
        
        Args:
            binding: Locator binding of the element
            fn: Function to apply to the located element
            action: Optional action name, logged before applying
            
        Returns:
            Result of `fn`
            
        Raises:
            The second transient error if the retry fails too
        """
        session = self._session
        
        def apply() -> T:
            element = session.locate(binding)
            if action:
                verb = ACTION_VERBS.get(action, f"Performing {action} on")
                logger.debug(f"{verb} {binding.element}")
            return fn(element)
        
        def before_retry(retries: int, error: BaseException) -> None:
            logger.warning(f"Re-locating {binding.element} after driver error: {error}")
            if binding.container is not None:
                session.with_driver(lambda driver: driver.switch_to.default_content())
        
        with session.preserved_window(enabled=binding.container is not None):
            result = attempt(
                apply,
                max_retries=1,
                retry_on=TRANSIENT_ERRORS,
                before_retry=before_retry,
            )
            if self._settings.web.capture_screenshots:
                session.capture_screenshot(description=binding.element)
        return result
