"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and gates the browser suites.

Browser tests hit the live SauceDemo site and need installed Playwright
browsers, so they only run when RUN_UI_TESTS=1 (run_tests.py sets it).

================================================================================
"""

import os

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "visual: Visual baseline capture"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-driven tests"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free framework tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to authentication"
    )
    config.addinivalue_line(
        "markers", "inventory: Tests related to the product catalog"
    )
    config.addinivalue_line(
        "markers", "cart: Tests related to the shopping cart"
    )
    config.addinivalue_line(
        "markers", "checkout: Tests related to the checkout flow"
    )
    config.addinivalue_line(
        "markers", "healing: Tests related to self-healing locators"
    )


def pytest_collection_modifyitems(config, items):
    """
    Auto-add domain markers by directory and skip browser tests unless enabled.
    """
    run_ui = os.getenv("RUN_UI_TESTS", "").lower() in ("1", "true", "yes")
    skip_ui = pytest.mark.skip(reason="UI tests disabled; set RUN_UI_TESTS=1 to enable")

    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            if not run_ui:
                item.add_marker(skip_ui)

        if "unit" in path.replace("\\", "/").split("/"):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "SauceDemo E2E Framework (self-healing locators)",
        "=" * 60,
        "",
    ]
