import pytest

from testsuites.ui_testing.framework.locator_resolver import (
    HealingRecord,
    LocatorExhaustedError,
    LocatorResolver,
)
from testsuites.ui_testing.framework import page_base
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.pages.inventory_page import InventoryPage
from testsuites.ui_testing.pages.login_page import LoginPage


def _login_page(page, record=None):
    resolver = LocatorResolver(page, healing_record=record if record is not None else HealingRecord())
    return LoginPage(page, base_url="https://shop.test/", resolver=resolver)


def test_default_base_url_comes_from_environment(fake_page, monkeypatch):
    monkeypatch.delenv("UI_BASE_URL", raising=False)
    monkeypatch.setenv("TEST_ENV", "dev")

    page = BasePage(fake_page())

    assert page.base_url == "https://www.saucedemo.com"
    assert isinstance(page.resolver, LocatorResolver)


def test_url_joins_base_and_path(fake_page):
    assert InventoryPage(fake_page(), base_url="https://shop.test/").url == (
        "https://shop.test/inventory.html"
    )


def test_page_objects_share_injected_healing_record(fake_page):
    record = HealingRecord()
    page = fake_page()

    login = LoginPage(page, base_url="https://shop.test", healing_record=record)
    inventory = InventoryPage(page, base_url="https://shop.test", healing_record=record)

    assert login.resolver.healing_record is record
    assert inventory.resolver.healing_record is record


@pytest.mark.asyncio
async def test_login_heals_drifted_selectors(fake_page):
    page = fake_page(visible={"#user-name", "[data-test='password']", "#login-button"})
    record = HealingRecord()
    login = _login_page(page, record)

    await login.login("standard_user", "secret_sauce", wait_inventory=False)

    assert page.actions == [
        ("fill", "#user-name", "standard_user"),
        ("fill", "[data-test='password']", "secret_sauce"),
        ("click", "#login-button", None),
    ]
    assert record.snapshot() == {
        ("Username Input", "#user-name"): 1,
        ("Login Button", "#login-button"): 1,
    }
    assert "[Login Button]" in login.get_locator_health_report()


@pytest.mark.asyncio
async def test_click_propagates_exhaustion(fake_page):
    login = _login_page(fake_page())

    with pytest.raises(LocatorExhaustedError, match="Login Button"):
        await login.submit()


@pytest.mark.asyncio
async def test_is_visible_swallows_exhaustion(fake_page):
    login = _login_page(fake_page())

    assert await login.is_visible(login.LOGIN_BUTTON, primary_timeout=10, fallback_timeout=10) is False


@pytest.mark.asyncio
async def test_error_message_text(fake_page):
    page = fake_page(
        visible={"[data-test='error']"},
        texts={"[data-test='error']": " Epic sadface: Username is required "},
    )
    login = _login_page(page)

    assert await login.get_error_message() == "Epic sadface: Username is required"
    assert ("[data-test='error']", 2000, "visible") in page.waits


@pytest.mark.asyncio
async def test_error_message_empty_when_absent(fake_page):
    assert await _login_page(fake_page()).get_error_message() == ""


@pytest.mark.asyncio
async def test_verify_form_displayed(fake_page):
    page = fake_page(visible={"[data-test='username']", "[data-test='password']", "#login-button"})

    assert await _login_page(page).verify_form_displayed() is True


def test_product_strategies_are_parametrised_by_id():
    strategy = InventoryPage.add_to_cart_button("sauce-labs-backpack")

    assert strategy.primary == "[data-test='add-to-cart-sauce-labs-backpack']"
    assert strategy.description == "Add to Cart button for sauce-labs-backpack"
    assert len(strategy.fallbacks) == 2


@pytest.mark.asyncio
async def test_absent_error_banner_is_not_reported_as_healing_failure(fake_page, log_records):
    assert await _login_page(fake_page()).get_error_message() == ""

    elevated = [message for level, message in log_records if level in ("WARNING", "ERROR")]
    assert elevated == []


def test_health_report_is_logged_and_attached(monkeypatch, log_records):
    attached = []
    monkeypatch.setattr(
        page_base.allure,
        "attach",
        lambda body, name=None, attachment_type=None: attached.append((body, name, attachment_type)),
    )
    record = HealingRecord()
    record.record("Login Button", "#login-button")

    report = page_base.publish_health_report(record, 3)

    assert attached == [(report, "locator_health_report", page_base.allure.attachment_type.TEXT)]
    assert "Healed by: #login-button (1x)" in report
    assert any(report in message for level, message in log_records if level == "INFO")
