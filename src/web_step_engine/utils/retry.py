"""
Retry utilities for flaky driver calls.

Both element interactions and polling waits recover from transient driver
errors through the same `attempt` combinator; they differ only in how many
retries they allow and what happens between attempts.
"""

import logging
import time
from typing import Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def attempt(
    func: Callable[[], T],
    max_retries: Optional[int] = 1,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    before_retry: Optional[Callable[[int, BaseException], None]] = None,
    delay_ms: int = 0,
) -> T:
    """
    Call a function, retrying it when it raises one of `retry_on`.

    Args:
        func: Zero-argument function to call
        max_retries: Retries allowed after the first call; None retries until
            `before_retry` raises
        retry_on: Exception types that trigger a retry
        before_retry: Hook run before each retry with the retry number and the
            error; it may sleep, or raise to give up
        delay_ms: Fixed delay before each retry

    Returns:
        The first successful result

    Raises:
        The last error once retries are exhausted

    Example:
        >>> attempt(lambda: element.text, retry_on=(StaleElementReferenceException,))
    """
    retries = 0
    while True:
        try:
            return func()
        except retry_on as e:
            if max_retries is not None and retries >= max_retries:
                raise
            retries += 1
            logger.debug(f"Retry {retries} after {type(e).__name__}: {e}")
            if before_retry:
                before_retry(retries, e)
            if delay_ms:
                time.sleep(delay_ms / 1000)
