"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management for the OrangeHRM UI suite.

Features:
    - Flat dotted keys ("app.url") with nested mappings also accepted
    - Runtime overrides fed from pytest command-line options
    - Environment variable override (APP_URL overrides app.url)
    - Environment-specific keys ("app.url.staging" when TEST_ENV=staging)
    - Typed getters with default values

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path (repo_root/config/config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "config.yaml"

# Environment variable selecting the active environment
ENVIRONMENT_VARIABLE = "TEST_ENV"
DEFAULT_ENVIRONMENT = "dev"

_MISSING = object()


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML, environment and override support.

    Configuration hierarchy (highest to lowest priority):
        1. Runtime overrides (set_override / command-line options)
        2. Environment variables (APP_URL)
        3. Environment-specific key (app.url.<environment>)
        4. Base key (app.url)
        5. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("app.url")
        'https://opensource-demo.orangehrmlive.com/web/index.php/auth/login'

        >>> config.get_int("element.wait.timeout", 5000)
        5000
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """
        Singleton pattern - return existing instance if available.

        Configuration is loaded once per process so every fixture, page
        object and hook sees the same overrides.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._overrides: Dict[str, Any] = {}
        self._environment = os.environ.get(ENVIRONMENT_VARIABLE) or DEFAULT_ENVIRONMENT
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(
                f"Loaded configuration from: {self._config_path} "
                f"(environment={self._environment})"
            )
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    @property
    def environment(self) -> str:
        """Active environment name."""
        return self._environment

    def set_environment(self, environment: str) -> None:
        """
        Switch the active environment.

        Args:
            environment: Environment name, e.g. "dev", "staging", "prod"
        """
        self._environment = environment
        logger.info(f"Active environment changed to: {environment}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dotted key.

        Args:
            key: Dotted key (e.g., "app.url")
            default: Default value if key not found

        Returns:
            Configuration value or default

        Examples:
            >>> config.get("browser.name")
            'chromium'

            >>> config.get("missing.key", 3)
            3
        """
        if key in self._overrides:
            return self._overrides[key]

        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._lookup(f"{key}.{self._environment}")
        if value is _MISSING:
            value = self._lookup(key)
        if value is _MISSING:
            return default
        return value

    def get_int(self, key: str, default: int = 0) -> int:
        """Get configuration value as int, falling back to default on bad values."""
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"Invalid integer value for key '{key}': {value!r}")
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get configuration value as bool ("true", "yes", "1", "on" are truthy)."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("true", "1", "yes", "on")

    def _lookup(self, key: str) -> Any:
        """Flat key first, then dot-notation navigation through nested mappings."""
        if key in self._config:
            return self._config[key]

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return _MISSING
        return value

    def set_override(self, key: str, value: Any) -> None:
        """
        Set a runtime override (highest priority).

        Used to layer command-line options on top of the file.
        """
        self._overrides[key] = value
        logger.debug(f"Config override: {key}={value!r}")

    def clear_override(self, key: str) -> None:
        """Remove a runtime override."""
        self._overrides.pop(key, None)

    def reload(self) -> None:
        """
        Reload configuration from file.

        Overrides and the active environment are kept.
        """
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    def describe(self) -> str:
        """Render the active configuration as a log-friendly block."""
        lines = [
            "=" * 60,
            f"ACTIVE TEST CONFIGURATION - {self._environment.upper()}",
            "=" * 60,
            f"Application URL    : {self.get('app.url')}",
            f"Browser            : {self.get('browser.name', 'chromium')} "
            f"(headless={self.get_bool('browser.headless', True)})",
            f"Navigation Timeout : {self.get_int('navigation.timeout', 15000)} ms",
            f"Element Timeout    : {self.get_int('element.wait.timeout', 5000)} ms",
            f"Step Delay         : {self.get_int('test.step.delay', 0)} ms",
            f"Self-Healing       : {self.get_bool('self.healing.enabled', True)}",
            f"Visual Testing     : {self.get_bool('visual.testing.enabled', False)}",
            f"Report Output      : {self.get('report.output.dir', 'reports')}",
            "-" * 60,
        ]
        return "\n".join(lines)

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
]
