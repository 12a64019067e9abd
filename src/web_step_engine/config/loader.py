"""
Config Loader - Build Settings from a YAML file, the environment and overrides.

Precedence (highest first):
1. Overrides passed to `load()` (the CLI uses this to force dry-run mode)
2. `WEB_STEP_ENGINE__*` environment variables, including those from `.env`
3. The YAML config file
4. Model defaults

The config file is the explicit path if one is given, else the file named by
`WEB_STEP_ENGINE_CONFIG`, else the first default location that exists.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import os

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from web_step_engine.config.settings import Settings, deep_merge
from web_step_engine.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WEB_STEP_ENGINE_CONFIG"


class ConfigLoader:
    """
    Loads engine settings.
    
    Example:
        >>> loader = ConfigLoader("ci/web-step-engine.yaml")
        >>> settings = loader.load(overrides={"run": {"dry_run": True}})
    """
    
    DEFAULT_CONFIG_PATHS = [
        Path("web-step-engine.yaml"),
        Path("web-step-engine.yml"),
        Path("config/web-step-engine.yaml"),
        Path.home() / ".config" / "web-step-engine" / "config.yaml",
    ]
    
    DEFAULT_ENV_FILES = [Path(".env"), Path(".env.local")]
    
    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Args:
            config_path: Config file to use; it must exist
        """
        self.config_path = Path(config_path) if config_path else None
    
    def find_config_file(self) -> Optional[Path]:
        """
        Locate the config file.
        
        Raises:
            ConfigurationError: If an explicitly requested file does not exist
        """
        explicit = self.config_path or (
            Path(os.environ[CONFIG_ENV_VAR]) if os.environ.get(CONFIG_ENV_VAR) else None
        )
        if explicit is not None:
            if not explicit.is_file():
                raise ConfigurationError(f"Config file not found: {explicit}")
            return explicit
        return next((path for path in self.DEFAULT_CONFIG_PATHS if path.is_file()), None)
    
    def load_yaml_config(self, path: Path) -> Dict[str, Any]:
        """
        Read settings from a YAML file.
        
        Property values are converted to strings so that `wait: 5` and
        `wait: "5"` bind the same value.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid config file {path}: {e}") from e
        
        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")
        
        properties = config.get("properties")
        if isinstance(properties, dict):
            config["properties"] = {str(name): _as_text(value) for name, value in properties.items()}
        return config
    
    def load_env_file(self, env_file: Optional[Union[str, Path]] = None) -> None:
        """Export variables from a `.env` file without replacing ones already set."""
        if env_file:
            load_dotenv(env_file)
            return
        for env_path in self.DEFAULT_ENV_FILES:
            if env_path.exists():
                load_dotenv(env_path)
                break
    
    def load(
        self,
        env_file: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Settings:
        """
        Load settings from all sources.
        
        Args:
            env_file: `.env` file to export before reading the environment
            overrides: Values that win over every other source
            
        Raises:
            ConfigurationError: If the config file is missing, unparsable or
                holds invalid values
        """
        self.load_env_file(env_file)
        
        config: Dict[str, Any] = {}
        config_file = self.find_config_file()
        if config_file:
            logger.debug(f"Loading config from {config_file}")
            config = self.load_yaml_config(config_file)
        
        try:
            from_env = Settings().model_dump(exclude_unset=True)
            settings = Settings(**deep_merge(config, from_env))
            if overrides:
                settings = settings.merge_with(overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e
        
        return settings


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> Settings:
    """
    Load settings in one call.
    
    Example:
        >>> settings = load_config()
        >>> settings = load_config(config_path="my-config.yaml")
        >>> settings = load_config(web={"wait_seconds": 30})
    """
    loader = ConfigLoader(config_path)
    return loader.load(env_file=env_file, overrides=overrides or None)
