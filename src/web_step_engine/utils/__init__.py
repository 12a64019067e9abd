"""
Utilities module - Logging setup and retries.
"""

from web_step_engine.utils.logging import setup_logging, configure_logging, get_logger
from web_step_engine.utils.retry import attempt

__all__ = [
    "setup_logging",
    "configure_logging",
    "get_logger",
    "attempt",
]
