"""
Configuration module - Engine settings from YAML, .env and the environment.

Environment variables beat the config file, and keyword overrides beat both.
WEB_STEP_ENGINE_CONFIG names a config file when none is passed.

Usage:
    from web_step_engine.config import get_settings, load_config
    
    # Process-wide settings, loaded on first use
    settings = get_settings()
    
    # A fresh copy with run-specific overrides
    settings = load_config(web={"wait_seconds": 30})

Environment Variables:
    WEB_STEP_ENGINE__WEB__WAIT_SECONDS=30
    WEB_STEP_ENGINE__WEB__THROTTLE_MSECS=100
    WEB_STEP_ENGINE__BROWSER__BROWSER=firefox
    WEB_STEP_ENGINE__RUN__DRY_RUN=true
"""

from web_step_engine.config.settings import (
    Settings,
    WebSettings,
    BrowserSettings,
    RunSettings,
    LoggingSettings,
)
from web_step_engine.config.loader import ConfigLoader, load_config

_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first call."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "WebSettings",
    "BrowserSettings",
    "RunSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
