"""
Repository-level pytest configuration.

Provides safe defaults for the public SauceDemo demo site so a fresh clone
runs without extra setup, and configures logging once per session.

The credentials below are the ones SauceDemo prints on its own login page.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from testsuites.ui_testing.framework.logging_config import init_logger


def pytest_configure(config):
    init_logger()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "TEST_ENV": "dev",
        "UI_USERNAME": "standard_user",
        "UI_PASSWORD": "secret_sauce",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
