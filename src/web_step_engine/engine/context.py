"""
Web Context - Execution state for one browser session.

A WebContext owns the scoped store, the driver session and every resolver
and action built on them. Parallel sessions use separate contexts.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Iterator, Optional, TypeVar
import logging
import os

from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from web_step_engine.browsers import DriverSession, create_driver
from web_step_engine.config import Settings, get_settings
from web_step_engine.engine.actions import ElementActions
from web_step_engine.engine.assertions import BindingAssertions
from web_step_engine.engine.attributes import CURRENT_URL, AttributeResolver
from web_step_engine.engine.coordinator import BindAndWait
from web_step_engine.engine.interactor import ElementInteractor
from web_step_engine.engine.locator import LocatorBinding, LocatorResolver
from web_step_engine.engine.waits import WaitEngine
from web_step_engine.evaluation import interpolate
from web_step_engine.exceptions import ResolutionDepthError, UnboundAttributeError
from web_step_engine.reporting import ScreenshotManager
from web_step_engine.scopes import ScopedStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WebContext:
    """
    Binding resolution and browser interaction for a running feature.
    
    Example:
        >>> with WebContext.create() as context:
        ...     context.store.add_scope("google search page")
        ...     context.store.set("search field/locator", "name")
        ...     context.store.set("search field/locator/name", "q")
        ...     binding = context.get_locator_binding("search field")
        ...     context.actions.send_keys(binding, "cats", send_enter=True)
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[ScopedStore] = None,
        driver_factory: Optional[Callable[[], WebDriver]] = None,
        screenshots: Optional[ScreenshotManager] = None,
    ):
        """
        Initialize the context.
        
        Args:
            settings: Engine settings (defaults to the global settings)
            store: Binding store (a fresh one by default)
            driver_factory: Starts the WebDriver on first use (defaults to a
                local or remote browser from `settings.browser`)
            screenshots: Where screenshots and attachments are written
        """
        self.settings = settings or get_settings()
        self.store = store or ScopedStore()
        self.screenshots = screenshots
        factory = driver_factory or (lambda: create_driver(self.settings.browser))
        
        self.session = DriverSession(factory, self.settings, screenshots)
        self.waits = WaitEngine(self.session, self.settings)
        self.coordinator = BindAndWait(self.store, self.session, self.waits)
        self.interactor = ElementInteractor(self.session, self.settings)
        self.locators = LocatorResolver(self)
        self.attributes = AttributeResolver(self)
        self.actions = ElementActions(self)
        self.assertions = BindingAssertions(self)
        
        self._depth = 0
    
    @classmethod
    def create(cls, settings: Optional[Settings] = None, run_id: Optional[str] = None) -> "WebContext":
        """Create a context that writes screenshots under `run.output_dir`."""
        settings = settings or get_settings()
        run_id = run_id or datetime.now().strftime("run_%Y%m%d_%H%M%S")
        screenshots = ScreenshotManager(settings.run.output_dir, run_id)
        return cls(settings=settings, screenshots=screenshots)
    
    def __enter__(self) -> "WebContext":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
    
    # ==================== Execution ====================
    
    @property
    def is_dry_run(self) -> bool:
        return self.settings.run.dry_run
    
    def execute(self, fn: Callable[[], T], placeholder: Any = None) -> T:
        """Run `fn`, or return `placeholder` in dry-run mode."""
        if self.is_dry_run:
            return placeholder
        return fn()
    
    @contextmanager
    def resolving(self, name: str) -> Iterator[None]:
        """
        Track nesting of binding resolutions.
        
        Raises:
            ResolutionDepthError: If resolutions nest deeper than
                `web.max_resolution_depth`, which happens with circular bindings
        """
        max_depth = self.settings.web.max_resolution_depth
        if self._depth >= max_depth:
            raise ResolutionDepthError(name, max_depth)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
    
    # ==================== Resolution ====================
    
    def interpolate(self, text: str) -> str:
        """Substitute `${property}` and `$[binding]` references in text."""
        return interpolate(
            text,
            self.attributes.get_bound_reference_value,
            self.get_property,
            max_depth=self.settings.web.max_resolution_depth,
        )
    
    def default_value(self, name: str) -> Optional[str]:
        """Value of a name from settings properties, then the environment."""
        value = self.settings.properties.get(name)
        if value is None:
            value = os.environ.get(name)
        return value
    
    def get_property(self, name: str) -> str:
        value = self.default_value(name)
        if value is None:
            raise UnboundAttributeError(name)
        return value
    
    def get_locator_binding(self, element: str) -> LocatorBinding:
        return self.locators.resolve(element)
    
    def get_attribute(self, name: str) -> str:
        return self.attributes.get_attribute(name)
    
    def get_bound_reference_value(self, name: str) -> str:
        return self.attributes.get_bound_reference_value(name)
    
    def get_element_selection(self, name: str, selection: str) -> str:
        return self.attributes.get_element_selection(name, selection)
    
    def bound_attribute_or_selection(self, element: str, selection: Optional[str]) -> Callable[[], str]:
        return self.attributes.bound_attribute_or_selection(element, selection)
    
    # ==================== Browser ====================
    
    def with_element(
        self,
        binding: LocatorBinding,
        fn: Callable[[WebElement], T],
        action: Optional[str] = None,
    ) -> T:
        return self.interactor.with_element(binding, fn, action)
    
    def wait_until(
        self,
        condition: Callable[[], bool],
        reason: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.waits.wait_until(condition, reason, timeout_seconds)
    
    def bind_and_wait(self, element: str, action: str, value: str) -> None:
        self.coordinator.bind_and_wait(element, action, value)
    
    def execute_script(self, script: str, *args: Any, take_screenshot: bool = False) -> Any:
        return self.session.execute_script(script, *args, take_screenshot=take_screenshot)
    
    def execute_script_predicate(self, script: str, *args: Any) -> bool:
        return self.session.execute_script_predicate(script, *args)
    
    def navigate_to(self, url: str) -> None:
        """Open a URL; bindings of the previous page go out of scope."""
        self.store.clear_page_scopes()
        self.session.navigate_to(url)
    
    def capture_current_url(self) -> str:
        """Bind the browser's current URL as `the current URL` in the feature scope."""
        def read() -> str:
            url = self.session.current_url
            if self.screenshots is not None:
                self.screenshots.add_attachment(CURRENT_URL, "txt", url)
            return url
        
        url = self.execute(read, f"$[url:{CURRENT_URL}]")
        self.store.feature_scope.set(CURRENT_URL, url)
        return url
    
    def add_error_attachments(self) -> None:
        """Capture an error screenshot of the current page."""
        if self.session.is_started:
            self.execute(lambda: self.session.capture_screenshot(is_error=True, description="error"))
    
    # ==================== Lifecycle ====================
    
    def reset(self) -> None:
        """Drop page bindings and close the browser."""
        self.store.clear_page_scopes()
        self.close()
    
    def end_feature(self) -> None:
        """Drop every binding and close the browser."""
        self.store.reset()
        self.close()
    
    def close(self) -> None:
        self.session.quit()
