"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Settings are read-only once loaded; the engine reads wait timeouts, throttle
intervals, screenshot flags and the highlight style from here.

Example:
    >>> from web_step_engine.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.web.wait_seconds)
    10
"""

from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebSettings(BaseModel):
    """
    Binding resolution and interaction settings.
    
    Attributes:
        wait_seconds: Default timeout for waits
        throttle_msecs: Delay between wait retries, after truthy scripts
            and for highlighting
        capture_screenshots: Capture a screenshot after every element interaction
        capture_screenshots_highlighting: Capture a screenshot while an element
            is highlighted
        highlight_style: CSS appended to an element's style when highlighting
        max_resolution_depth: Maximum nesting of binding references
    """
    wait_seconds: int = Field(default=10, ge=1, le=600)
    throttle_msecs: int = Field(default=200, ge=0, le=10000)
    capture_screenshots: bool = False
    capture_screenshots_highlighting: bool = False
    highlight_style: str = "background: yellow; border: 2px solid gold;"
    max_resolution_depth: int = Field(default=32, ge=1, le=1000)


class BrowserSettings(BaseModel):
    """
    Browser driver settings.
    
    Attributes:
        browser: Selenium driver to start
        headless: Run browser in headless mode
        remote_url: Selenium grid URL (starts a remote driver when set)
        window_width: Browser window width in pixels
        window_height: Browser window height in pixels
    """
    browser: Literal["chrome", "firefox", "edge", "safari"] = "chrome"
    headless: bool = True
    remote_url: Optional[str] = None
    window_width: int = Field(default=1280, ge=320, le=3840)
    window_height: int = Field(default=720, ge=240, le=2160)


class RunSettings(BaseModel):
    """
    Execution mode settings.
    
    Attributes:
        dry_run: Validate bindings without touching a live browser
        output_dir: Directory for screenshots and attachments
    """
    dry_run: bool = False
    output_dir: str = "./output"


class LoggingSettings(BaseModel):
    """
    Logging configuration.
    
    Attributes:
        level: Log level
        format: Log format string
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.
    
    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with WEB_STEP_ENGINE__)
    3. Config file (YAML)
    4. Default values
    
    `properties` holds plain name/value pairs used as the default source for
    names that are not bound in any scope.
    
    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(web=WebSettings(wait_seconds=30))  # Override
    """
    
    model_config = SettingsConfigDict(
        env_prefix="WEB_STEP_ENGINE__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
    
    web: WebSettings = Field(default_factory=WebSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    run: RunSettings = Field(default_factory=RunSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    properties: Dict[str, str] = Field(default_factory=dict)
    
    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.
        
        Args:
            overrides: Dictionary of values to override
            
        Returns:
            New Settings instance with overrides applied
        """
        return Settings(**deep_merge(self.model_dump(), overrides))


def deep_merge(base: dict, updates: dict) -> dict:
    """Recursively merge `updates` into `base` in place and return it."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
