"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Browser and page lifecycle management
- Page Object fixtures sharing one healing record per session
- Screenshot capture on failure
- Locator health report at session end

================================================================================
"""

from typing import AsyncGenerator, Generator

import allure
import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import BrowserContext, Page

from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.config_loader import ConfigLoader
from testsuites.ui_testing.framework.locator_resolver import HealingRecord
from testsuites.ui_testing.framework.page_base import publish_health_report
from testsuites.ui_testing.pages.cart_page import CartPage
from testsuites.ui_testing.pages.checkout_page import CheckoutPage
from testsuites.ui_testing.pages.inventory_page import InventoryPage
from testsuites.ui_testing.pages.login_page import LoginPage


# ================================================================================
# Healing Telemetry
# ================================================================================

@pytest.fixture(scope="session")
def healing_record() -> Generator[HealingRecord, None, None]:
    """
    Session-wide healing record shared by every page object.

    The locator health report is logged and attached to Allure when the
    session ends.
    """
    record = HealingRecord()
    yield record
    publish_health_report(record, ConfigLoader().get("locator.healing_threshold", 3))


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    One browser for the whole session, reducing launch overhead.
    """
    manager = BrowserManager()
    await manager.start()
    yield manager
    await manager.close()


@pytest_asyncio.fixture(loop_scope="session")
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """
    Function-scoped browser context fixture.

    Creates a new browser context for each test, providing isolation.
    """
    context = await browser_manager.new_context()
    yield context
    await browser_manager.close_context(context)


@pytest_asyncio.fixture(loop_scope="session")
async def page(request, context: BrowserContext) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Attaches a full-page screenshot to Allure when the test body failed.
    """
    page = await context.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            allure.attach(
                await page.screenshot(full_page=True),
                name="failure_screenshot",
                attachment_type=allure.attachment_type.PNG,
            )
        except Exception as e:
            logger.warning(f"Failed to capture screenshot on failure: {e}")
    await page.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(page: Page, healing_record: HealingRecord) -> LoginPage:
    return LoginPage(page, healing_record=healing_record)


@pytest.fixture
def inventory_page(page: Page, healing_record: HealingRecord) -> InventoryPage:
    return InventoryPage(page, healing_record=healing_record)


@pytest.fixture
def cart_page(page: Page, healing_record: HealingRecord) -> CartPage:
    return CartPage(page, healing_record=healing_record)


@pytest.fixture
def checkout_page(page: Page, healing_record: HealingRecord) -> CheckoutPage:
    return CheckoutPage(page, healing_record=healing_record)


# ================================================================================
# Authentication Fixtures
# ================================================================================

@pytest_asyncio.fixture(loop_scope="session")
async def authenticated_inventory(
    login_page: LoginPage,
    inventory_page: InventoryPage,
    test_data,
) -> InventoryPage:
    """Inventory page reached by logging in as the standard user."""
    user = test_data["standard_user"]
    await login_page.open()
    await login_page.login(user["username"], user["password"])
    return inventory_page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item so fixtures can see failures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """
    Provides common test data for UI tests.
    """
    return {
        "standard_user": {
            "username": "standard_user",
            "password": "secret_sauce",
        },
        "locked_out_user": {
            "username": "locked_out_user",
            "password": "secret_sauce",
        },
        "invalid_user": {
            "username": "invalid_user",
            "password": "wrong_password",
        },
        "checkout_info": {
            "first_name": "Jane",
            "last_name": "Tester",
            "postal_code": "12345",
        },
    }
