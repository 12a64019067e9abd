"""
Logging utilities for the web step engine.

Resolution results are logged at DEBUG, post-action waits at INFO and
driver retries at WARNING. Selenium and its HTTP client log every wire
command at DEBUG, so they are held at WARNING unless asked for.
"""

import logging
from typing import Iterable, Optional, TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from web_step_engine.config.settings import LoggingSettings

NOISY_LOGGERS = ("selenium", "urllib3")

JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    log_format: str = DEFAULT_FORMAT,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Configure root logging with a Rich console handler on stderr.
    
    Args:
        level: Log level name; unknown names fall back to INFO
        log_file: Also write records to this file
        json_format: Write the file as one JSON object per line
        log_format: Format of plain file records
        quiet_loggers: Third-party loggers kept at WARNING or above
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    
    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)
    
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(JSON_FORMAT if json_format else log_format))
        root_logger.addHandler(file_handler)
    
    for name in quiet_loggers:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def configure_logging(settings: "LoggingSettings", level: Optional[str] = None) -> None:
    """Configure logging from logging settings, optionally forcing the level."""
    setup_logging(
        level=level or settings.level,
        log_file=settings.file,
        json_format=settings.json_format,
        log_format=settings.format,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name (usually `__name__`)."""
    return logging.getLogger(name)
