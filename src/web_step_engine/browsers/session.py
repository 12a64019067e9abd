"""
Driver Session - Scoped access to a live Selenium WebDriver.

Handles:
- Lazy driver start and serialized access
- Locating elements from locator bindings (inside containers and frames)
- Script execution with the throttle pause after truthy results
- Window handle save/restore around container-scoped work
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar, TYPE_CHECKING
import logging
import threading
import time

from selenium.common.exceptions import NoSuchElementException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from web_step_engine.config.settings import Settings
from web_step_engine.exceptions import TransientDriverError, UnsupportedLocatorError

if TYPE_CHECKING:
    from web_step_engine.engine.locator import LocatorBinding
    from web_step_engine.reporting.screenshot_manager import ScreenshotManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors worth another attempt after re-locating or re-polling.
TRANSIENT_ERRORS = (TransientDriverError, WebDriverException)

LOCATOR_STRATEGIES = {
    "id": By.ID,
    "name": By.NAME,
    "tag name": By.TAG_NAME,
    "css selector": By.CSS_SELECTOR,
    "css": By.CSS_SELECTOR,
    "xpath": By.XPATH,
    "class name": By.CLASS_NAME,
    "link text": By.LINK_TEXT,
    "partial link text": By.PARTIAL_LINK_TEXT,
}

FRAME_TAGS = ("iframe", "frame")


class DriverSession:
    """
    Owns one WebDriver for one execution context.
    
    The driver is started on first use through `driver_factory`. All access
    goes through `with_driver`, which serializes callers.
    
    Example:
        >>> session = DriverSession(lambda: create_driver(settings.browser), settings)
        >>> title = session.with_driver(lambda driver: driver.title)
    """
    
    def __init__(
        self,
        driver_factory: Callable[[], WebDriver],
        settings: Settings,
        screenshots: Optional["ScreenshotManager"] = None,
    ):
        """
        Initialize the session.
        
        Args:
            driver_factory: Starts a new WebDriver
            settings: Engine settings
            screenshots: Where captured screenshots are written
        """
        self._driver_factory = driver_factory
        self._settings = settings
        self._screenshots = screenshots
        self._driver: Optional[WebDriver] = None
        self._lock = threading.RLock()
    
    @property
    def is_started(self) -> bool:
        return self._driver is not None
    
    def with_driver(self, fn: Callable[[WebDriver], T]) -> T:
        """Run a function against the live driver, starting it if needed."""
        with self._lock:
            if self._driver is None:
                self._driver = self._driver_factory()
            return fn(self._driver)
    
    def quit(self) -> None:
        """Quit the driver if one was started."""
        with self._lock:
            if self._driver is not None:
                logger.info("Closing browser session")
                try:
                    self._driver.quit()
                finally:
                    self._driver = None
    
    @property
    def current_url(self) -> str:
        return self.with_driver(lambda driver: driver.current_url)
    
    @property
    def title(self) -> str:
        return self.with_driver(lambda driver: driver.title)
    
    def navigate_to(self, url: str) -> None:
        logger.info(f"Navigating to {url}")
        self.with_driver(lambda driver: driver.get(url))
    
    # ==================== Scripts ====================
    
    def execute_script(self, script: str, *args: Any, take_screenshot: bool = False) -> Any:
        """
        Execute javascript on the current page.
        
        A truthy boolean result is followed by a throttle pause so the page
        can react to whatever the script triggered.
        
        Args:
            script: Script to execute
            *args: Script arguments (available as `arguments[n]`)
            take_screenshot: Capture a screenshot afterwards (when screenshots
                are enabled)
        """
        def run(driver: WebDriver) -> Any:
            result = driver.execute_script(script, *args)
            if take_screenshot and self._settings.web.capture_screenshots:
                self.capture_screenshot()
            logger.debug(f"Evaluated javascript: {script}, result='{result}'")
            if result is True:
                time.sleep(self._settings.web.throttle_msecs / 1000)
            return result
        return self.with_driver(run)
    
    def execute_script_predicate(self, script: str, *args: Any) -> bool:
        """Execute a javascript expression and return its boolean result."""
        return bool(self.execute_script(f"return {script}", *args))
    
    # ==================== Elements ====================
    
    def locate(self, binding: "LocatorBinding") -> WebElement:
        """
        Locate the element a binding points to.
        
        When the binding has a container, the container is located first. Frame
        containers are switched into; any other container is searched within.
        
        Raises:
            UnsupportedLocatorError: If the locator strategy is unknown
            NoSuchElementException: If nothing matches
        """
        def find(driver: WebDriver) -> WebElement:
            if binding.container is None:
                return self._find(driver, driver, binding)
            container = self.locate(binding.container)
            if container.tag_name.lower() in FRAME_TAGS:
                driver.switch_to.frame(container)
                return self._find(driver, driver, binding)
            return self._find(driver, container, binding)
        
        return self.with_driver(find)
    
    def _find(self, driver: WebDriver, context: Any, binding: "LocatorBinding") -> WebElement:
        strategy = binding.locator_strategy
        logger.debug(f"Locating {binding.element} by {strategy}: {binding.expression}")
        if strategy == "javascript":
            element = driver.execute_script(f"return {binding.expression}")
            if element is None:
                raise NoSuchElementException(
                    f"No element returned by javascript locator for {binding.element}"
                )
            return element
        by = LOCATOR_STRATEGIES.get(strategy)
        if by is None:
            raise UnsupportedLocatorError(binding.element, strategy)
        return context.find_element(by, binding.expression)
    
    # ==================== Windows ====================
    
    @contextmanager
    def preserved_window(self, enabled: bool = True) -> Iterator[None]:
        """
        Restore the active window on exit, including on errors.
        
        Args:
            enabled: Only save and restore when True
        """
        handle = self.with_driver(lambda driver: driver.current_window_handle) if enabled else None
        try:
            yield
        finally:
            if handle is not None:
                self.with_driver(lambda driver: driver.switch_to.window(handle))
    
    # ==================== Screenshots ====================
    
    def capture_screenshot(self, is_error: bool = False, description: str = "") -> None:
        """Capture a screenshot through the screenshot manager, if one is set."""
        if self._screenshots is None:
            return
        self.with_driver(
            lambda driver: self._screenshots.capture(driver, description=description, is_error=is_error)
        )
