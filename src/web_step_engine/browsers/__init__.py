"""
Browsers module - Selenium driver creation and session access.
"""

from web_step_engine.browsers.selenium_driver import create_driver
from web_step_engine.browsers.session import (
    DriverSession,
    TRANSIENT_ERRORS,
    LOCATOR_STRATEGIES,
)

__all__ = [
    "create_driver",
    "DriverSession",
    "TRANSIENT_ERRORS",
    "LOCATOR_STRATEGIES",
]
