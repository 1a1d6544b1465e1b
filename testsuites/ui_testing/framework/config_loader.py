"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - Single YAML file with per-environment blocks (dev, test)
    - Environment variable override (LOCATOR_PRIMARY_TIMEOUT_MS overrides
      locator.primary_timeout_ms)
    - Dot notation path access with default values
    - TEST_ENV environment selection

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


@dataclass(frozen=True)
class Environment:
    """Target environment settings."""
    name: str
    base_url: str
    timeout: int = 30000
    retries: int = 1
    headless: bool = True


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (LOCATOR_FALLBACK_TIMEOUT_MS)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("locator.primary_timeout_ms", 5000)
        5000

        >>> config.get_environment().base_url
        'https://www.saucedemo.com'
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton: configuration is loaded once per process."""
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
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "locator.healing_threshold")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default, env_key)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "locator", "browser")

        Returns:
            Section dictionary or empty dict if not found
        """
        return self._config.get(section, {})

    def get_environment(self, name: Optional[str] = None) -> Environment:
        """
        Resolve the target environment.

        Args:
            name: Environment name; defaults to TEST_ENV, then "dev"

        Returns:
            Environment settings

        Raises:
            ConfigurationError: When the environment is not configured
        """
        name = name or os.getenv("TEST_ENV", "dev")
        environments = self.get_section("environments")
        if name not in environments:
            available = ", ".join(sorted(environments)) or "<none>"
            raise ConfigurationError(
                f"Environment {name} not found. Available environments: {available}"
            )

        block = environments[name] or {}
        # UI_BASE_URL wins so CI can point the suite at another deployment
        base_url = os.getenv("UI_BASE_URL") or block.get("base_url", "")
        return Environment(
            name=name,
            base_url=base_url.rstrip("/"),
            timeout=int(block.get("timeout", 30000)),
            retries=int(block.get("retries", 1)),
            headless=bool(block.get("headless", True)),
        )

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any, env_key: str = "") -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.

        Raises:
            ConfigurationError: When a numeric override does not parse
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, (int, float)):
            try:
                return type(reference)(value)
            except ValueError as e:
                raise ConfigurationError(
                    f"Environment override {env_key}={value!r} is not a valid "
                    f"{type(reference).__name__}"
                ) from e

        return value

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
    "Environment",
    "DEFAULT_CONFIG_PATH",
]
