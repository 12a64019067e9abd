"""
Pytest configuration and fixtures.

Selenium is replaced by small in-memory doubles so the engine can be
exercised without a browser.
"""

import pytest
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys

from web_step_engine.config import Settings
from web_step_engine.engine.attributes import ELEMENT_TEXT_SCRIPT
from web_step_engine.engine.context import WebContext


# =============================================================================
# MOCK DRIVER
# =============================================================================

class MockElement:
    """Mock Selenium element for testing."""
    
    def __init__(
        self,
        tag_name: str = "input",
        text: str = "",
        attrs: Optional[Dict[str, str]] = None,
        inner_text: str = "",
    ):
        self.tag_name = tag_name
        self.text = text
        self.attrs = dict(attrs or {})
        self.inner_text = inner_text
        self.children: Dict[Tuple[str, str], "MockElement"] = {}
        self.selected = False
        self.clicks = 0
        self.submitted = False
        self.keys: List[str] = []
    
    def get_attribute(self, name: str) -> Optional[str]:
        return self.attrs.get(name)
    
    def send_keys(self, *values: str) -> None:
        for value in values:
            self.keys.append(value)
            if value == Keys.SPACE:
                self.selected = not self.selected
            elif value != Keys.RETURN:
                self.attrs["value"] = self.attrs.get("value", "") + value
    
    def clear(self) -> None:
        self.attrs["value"] = ""
    
    def click(self) -> None:
        self.clicks += 1
    
    def submit(self) -> None:
        self.submitted = True
    
    def is_selected(self) -> bool:
        return self.selected
    
    def add_child(self, by: str, value: str, element: "MockElement") -> "MockElement":
        self.children[(by, value)] = element
        return element
    
    def find_element(self, by: str, value: str) -> "MockElement":
        try:
            return self.children[(by, value)]
        except KeyError:
            raise NoSuchElementException(f"No child {by}={value}") from None


class MockSwitchTo:
    """Records window and frame switches."""
    
    def __init__(self, driver: "MockDriver"):
        self._driver = driver
    
    def window(self, handle: str) -> None:
        self._driver.current_window_handle = handle
        self._driver.switches.append(("window", handle))
    
    def frame(self, frame: Any) -> None:
        self._driver.switches.append(("frame", frame))
    
    def default_content(self) -> None:
        self._driver.switches.append(("default_content", None))


class MockDriver:
    """
    Mock WebDriver for testing.
    
    Elements are registered by `(By, value)`. Script results are registered
    by exact script text; a callable result is called with the script args.
    """
    
    def __init__(self):
        self.elements: Dict[Tuple[str, str], MockElement] = {}
        self.scripts: Dict[str, Any] = {}
        self.executed: List[Tuple[str, tuple]] = []
        self.current_url = "about:blank"
        self.title = ""
        self.current_window_handle = "main"
        self.switches: List[Tuple[str, Any]] = []
        self.switch_to = MockSwitchTo(self)
        self.screenshots: List[str] = []
        self.quit_called = False
    
    def add_element(self, by: str, value: str, element: Optional[MockElement] = None, **kwargs) -> MockElement:
        element = element or MockElement(**kwargs)
        self.elements[(by, value)] = element
        return element
    
    def find_element(self, by: str, value: str) -> MockElement:
        try:
            return self.elements[(by, value)]
        except KeyError:
            raise NoSuchElementException(f"No element {by}={value}") from None
    
    def execute_script(self, script: str, *args: Any) -> Any:
        self.executed.append((script, args))
        if script == ELEMENT_TEXT_SCRIPT:
            return args[0].inner_text
        result = self.scripts.get(script)
        if callable(result):
            return result(*args)
        return result
    
    def get(self, url: str) -> None:
        self.current_url = url
    
    def get_screenshot_as_file(self, filename: str) -> bool:
        Path(filename).write_bytes(b"\x89PNG")
        self.screenshots.append(filename)
        return True
    
    def quit(self) -> None:
        self.quit_called = True


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    """Provide test settings with short waits and no throttle."""
    return Settings(
        web={"wait_seconds": 1, "throttle_msecs": 0},
        properties={"env": "test"},
    )


@pytest.fixture
def mock_driver():
    """Provide an empty mock driver."""
    return MockDriver()


@pytest.fixture
def make_context(mock_driver):
    """Factory for contexts backed by the mock driver."""
    def create(settings: Settings, **kwargs) -> WebContext:
        return WebContext(settings=settings, driver_factory=lambda: mock_driver, **kwargs)
    return create


@pytest.fixture
def context(settings, make_context):
    """Provide a web context backed by the mock driver."""
    ctx = make_context(settings)
    yield ctx
    ctx.close()


@pytest.fixture
def dry_run_context(settings, make_context):
    """Provide a dry-run web context."""
    ctx = make_context(settings.merge_with({"run": {"dry_run": True}}))
    yield ctx
    ctx.close()


@pytest.fixture
def search_field(context, mock_driver):
    """Bind a `search field` located by name and register it with the driver."""
    context.store.set("search field/locator", "name")
    context.store.set("search field/locator/name", "q")
    return mock_driver.add_element(By.NAME, "q")


@pytest.fixture
def make_element():
    """Factory for standalone mock elements."""
    return MockElement
