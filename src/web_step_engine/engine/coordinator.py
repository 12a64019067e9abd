"""
Bind-and-Wait Coordinator - Record an action's value and honor post-action waits.

After an action on element `E`:

    E/<action>             = value (always written)
    E/<action>/wait        = seconds to sleep
    E/<action>/condition   = name of a `<condition>/javascript` binding to wait for
"""

import logging
import time

from web_step_engine.browsers.session import DriverSession
from web_step_engine.engine.waits import WaitEngine
from web_step_engine.exceptions import ConfigurationError
from web_step_engine.scopes import ScopedStore

logger = logging.getLogger(__name__)


class BindAndWait:
    """Binds action results and applies configured post-action waits."""
    
    def __init__(self, store: ScopedStore, session: DriverSession, waits: WaitEngine):
        self._store = store
        self._session = session
        self._waits = waits
    
    def bind_and_wait(self, element: str, action: str, value: str) -> None:
        """
        Bind `<element>/<action>` and run its post-action wait and condition.
        
        Raises:
            ConfigurationError: If the wait binding is not a number
            UnboundAttributeError: If the condition has no javascript binding
            HardTimeout: If the condition does not hold in time
        """
        store = self._store
        store.set(f"{element}/{action}", value)
        
        wait = store.get_optional(f"{element}/{action}/wait")
        if wait:
            try:
                secs = float(wait)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid wait for {element}/{action}: {wait}",
                    details={"key": f"{element}/{action}/wait", "value": wait},
                ) from None
            logger.info(f"Waiting for {wait} second(s) (post-{action} wait)")
            time.sleep(secs)
        
        condition = store.get_optional(f"{element}/{action}/condition")
        if condition:
            javascript = store.get(f"{condition}/javascript")
            logger.debug(f"Waiting for script to return true: {javascript}")
            self._waits.wait_until(
                lambda: self._session.execute_script_predicate(javascript),
                reason=f"Waiting until {condition} (post-{action} condition)",
            )