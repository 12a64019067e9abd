"""
Selenium Driver - Create WebDriver instances from browser settings.
"""

from typing import Callable, Dict
import logging

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from web_step_engine.config.settings import BrowserSettings
from web_step_engine.exceptions import BrowserError

logger = logging.getLogger(__name__)


def _chrome_options(settings: BrowserSettings) -> webdriver.ChromeOptions:
    options = webdriver.ChromeOptions()
    if settings.headless:
        options.add_argument("--headless=new")
    options.add_argument(f"--window-size={settings.window_width},{settings.window_height}")
    return options


def _firefox_options(settings: BrowserSettings) -> webdriver.FirefoxOptions:
    options = webdriver.FirefoxOptions()
    if settings.headless:
        options.add_argument("-headless")
    options.add_argument(f"--width={settings.window_width}")
    options.add_argument(f"--height={settings.window_height}")
    return options


def _edge_options(settings: BrowserSettings) -> webdriver.EdgeOptions:
    options = webdriver.EdgeOptions()
    if settings.headless:
        options.add_argument("--headless=new")
    options.add_argument(f"--window-size={settings.window_width},{settings.window_height}")
    return options


def _safari_options(settings: BrowserSettings) -> webdriver.SafariOptions:
    return webdriver.SafariOptions()


_OPTIONS: Dict[str, Callable[[BrowserSettings], object]] = {
    "chrome": _chrome_options,
    "firefox": _firefox_options,
    "edge": _edge_options,
    "safari": _safari_options,
}

_LOCAL_DRIVERS: Dict[str, Callable[..., WebDriver]] = {
    "chrome": webdriver.Chrome,
    "firefox": webdriver.Firefox,
    "edge": webdriver.Edge,
    "safari": webdriver.Safari,
}


def create_driver(settings: BrowserSettings) -> WebDriver:
    """
    Start a Selenium WebDriver for the configured browser.
    
    Starts a remote driver when `remote_url` is set, otherwise a local one.
    
    Args:
        settings: Browser settings
        
    Returns:
        A started WebDriver
        
    Raises:
        BrowserError: If the driver cannot be started
    """
    options = _OPTIONS[settings.browser](settings)
    logger.info(f"Starting {settings.browser} driver (headless={settings.headless})")
    try:
        if settings.remote_url:
            return webdriver.Remote(command_executor=settings.remote_url, options=options)
        return _LOCAL_DRIVERS[settings.browser](options=options)
    except WebDriverException as e:
        raise BrowserError(
            f"Failed to start {settings.browser} driver: {e.msg}",
            {"browser": settings.browser, "remote_url": settings.remote_url},
        ) from e
