"""Configuration management for dependency-diagram using YAML files."""

from pathlib import Path
from typing import Any

import structlog
import yaml

from dependency_diagram.renderer import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Style, YumlRenderer

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".dependency-diagram"

# Recognised settings and their defaults
SETTINGS: dict[str, Any] = {
    "renderer.base_url": DEFAULT_BASE_URL,
    "renderer.style": Style.PLAIN.value,
    "renderer.timeout": DEFAULT_TIMEOUT,
}


def validate_setting(key: str, value: str) -> str:
    """Check a setting before it is stored.

    Args:
        key: Configuration key, one of SETTINGS
        value: Raw value from the command line

    Returns:
        The value to store

    Raises:
        ValueError: If the key is unknown or the value is invalid for it
    """
    if key not in SETTINGS:
        raise ValueError(f"Unknown setting: {key} (expected one of: {', '.join(SETTINGS)})")

    if key == "renderer.style":
        return Style.parse(value).value
    if key == "renderer.timeout":
        try:
            float(value)
        except ValueError:
            raise ValueError(f"Invalid renderer.timeout: {value}") from None
    elif key == "renderer.base_url" and "TYPE" not in value:
        raise ValueError(f"renderer.base_url must contain the TYPE placeholder: {value}")
    return value


class Config:
    """Configuration manager using YAML file storage.

    Local config lives in .dependency-diagram/config.yaml in the current
    directory, global config in ~/.dependency-diagram/config.yaml. Reads look
    in local config first, then global config.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
            self.is_global = use_global
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
            self.is_global = True
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
            self.is_global = False

        self.config_file = self.config_dir / "config.yaml"
        self._config: dict[str, Any] = self._load()

        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file.exists() and global_config_file != self.config_file:
                try:
                    with open(global_config_file, "r") as f:
                        global_config = yaml.safe_load(f) or {}
                except Exception as e:
                    logger.warning("Failed to load global config", error=str(e))
                else:
                    if isinstance(global_config, dict):
                        self._global_config = global_config
                    else:
                        logger.warning("Ignoring global config that is not a mapping", path=str(global_config_file))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    def _load(self) -> dict[str, Any]:
        if not self.config_file.exists():
            logger.debug("Config file does not exist, initializing empty config")
            return {}

        try:
            with open(self.config_file, "r") as f:
                config = yaml.safe_load(f) or {}
        except Exception as e:
            logger.error("Failed to load config", error=str(e))
            raise ValueError(f"Failed to load config from {self.config_file}: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Config file {self.config_file} must contain a mapping")
        logger.debug("Config loaded successfully", keys=list(config.keys()))
        return config

    def _save(self) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except Exception as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value, falling back to global config for local instances."""
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]

        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return default

    def set(self, key: str, value: str) -> None:
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """List all configuration settings.

        For local config, merges global config with local config (local takes precedence).
        """
        if self.is_global:
            return self._config.copy()
        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.
    """
    return Config(use_global=use_global)


def renderer_from_config(config: Config) -> YumlRenderer:
    """Build a yUML renderer from the renderer.* settings."""
    base_url = config.get("renderer.base_url", DEFAULT_BASE_URL)
    timeout = config.get("renderer.timeout")
    try:
        timeout = DEFAULT_TIMEOUT if timeout is None else float(timeout)
    except ValueError as e:
        raise ValueError(f"Invalid renderer.timeout: {timeout}") from e
    return YumlRenderer(base_url=base_url, timeout=timeout)
