"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework with self-healing element location.

Components:
    - locator_resolver: Primary + fallback element resolution with healing telemetry
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle management
    - config_loader: YAML configuration with environment overrides
    - logging_config: Loguru setup

Author: Automation Team
License: MIT
================================================================================
"""

from .locator_resolver import (
    HealingRecord,
    LocatorExhausted,
    LocatorExhaustedError,
    LocatorResolver,
    LocatorStrategy,
)
from .page_base import BasePage
from .browser_manager import BrowserManager
from .config_loader import ConfigLoader, ConfigurationError
from .logging_config import init_logger

__all__ = [
    "LocatorResolver",
    "LocatorStrategy",
    "HealingRecord",
    "LocatorExhaustedError",
    "LocatorExhausted",
    "BasePage",
    "BrowserManager",
    "ConfigLoader",
    "ConfigurationError",
    "init_logger",
]
