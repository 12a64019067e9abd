"""
Wait Engine - Poll a condition until it holds or time runs out.
"""

from typing import Callable, Optional
import logging
import time

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.support.ui import WebDriverWait

from web_step_engine.browsers.session import DriverSession, TRANSIENT_ERRORS
from web_step_engine.config.settings import Settings
from web_step_engine.exceptions import HardTimeout
from web_step_engine.utils.retry import attempt

logger = logging.getLogger(__name__)


class WaitEngine:
    """
    Blocking waits on top of Selenium's WebDriverWait.
    
    A native timeout is fatal and surfaces as `HardTimeout`. Other driver
    errors raised while polling are retried after one throttle interval for
    as long as the time budget lasts.
    
    Example:
        >>> waits.wait_until(lambda: session.execute_script_predicate("document.readyState == 'complete'"))
    """
    
    def __init__(self, session: DriverSession, settings: Settings):
        self._session = session
        self._settings = settings
    
    def wait_until(
        self,
        condition: Callable[[], bool],
        reason: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """
        Block until a condition returns True.
        
        Args:
            condition: Zero-argument predicate
            reason: Logged before waiting and reported on timeout
            timeout_seconds: Budget in seconds (defaults to `web.wait_seconds`)
            
        Raises:
            HardTimeout: If the condition does not hold within the budget
            WebDriverException: If polling keeps failing past the budget
        """
        timeout = self._settings.web.wait_seconds if timeout_seconds is None else timeout_seconds
        throttle = self._settings.web.throttle_msecs / 1000
        if reason:
            logger.info(reason)
        
        started = time.monotonic()
        remaining = float(timeout)
        
        def poll() -> None:
            try:
                self._session.with_driver(
                    lambda driver: WebDriverWait(
                        driver, remaining, poll_frequency=throttle or 0.05
                    ).until(lambda _: condition())
                )
            except TimeoutException as e:
                raise HardTimeout(
                    f"Timed out after {timeout} second(s)"
                    + (f": {reason}" if reason else ""),
                    timeout_seconds=timeout,
                    reason=reason,
                ) from e
        
        def before_retry(retries: int, error: BaseException) -> None:
            nonlocal remaining
            logger.warning(f"Driver error while waiting (retry {retries}): {error}")
            time.sleep(throttle)
            remaining = timeout - (time.monotonic() - started)
            if remaining <= 0:
                raise error
        
        attempt(poll, max_retries=None, retry_on=TRANSIENT_ERRORS, before_retry=before_retry)
