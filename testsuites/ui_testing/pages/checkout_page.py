"""
================================================================================
Checkout Page Object (Async / Playwright)
================================================================================

Covers the three checkout steps: customer information, overview and the
order-complete confirmation.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from testsuites.ui_testing.constants import Paths
from testsuites.ui_testing.framework.locator_resolver import LocatorStrategy
from testsuites.ui_testing.framework.page_base import PageBase


class CheckoutPage(PageBase):
    """Checkout flow page object (async)."""

    URL_PATH = Paths.CHECKOUT_STEP_ONE
    PAGE_IDENTIFIER = "checkout-page"

    TITLE = LocatorStrategy(
        primary="[data-test='title']",
        fallbacks=(".title",),
        description="Checkout Title",
    )
    FIRST_NAME = LocatorStrategy(
        primary="[data-test='firstName']",
        fallbacks=("#first-name", "input[name='firstName']"),
        description="First Name Field",
    )
    LAST_NAME = LocatorStrategy(
        primary="[data-test='lastName']",
        fallbacks=("#last-name", "input[name='lastName']"),
        description="Last Name Field",
    )
    POSTAL_CODE = LocatorStrategy(
        primary="[data-test='postalCode']",
        fallbacks=("#postal-code", "input[name='postalCode']"),
        description="Postal Code Field",
    )
    CONTINUE_BUTTON = LocatorStrategy(
        primary="[data-test='continue']",
        fallbacks=("#continue", "input[value='Continue']"),
        description="Continue Checkout Button",
    )
    FINISH_BUTTON = LocatorStrategy(
        primary="[data-test='finish']",
        fallbacks=("#finish", "button:has-text('Finish')"),
        description="Finish Button",
    )
    COMPLETE_HEADER = LocatorStrategy(
        primary="[data-test='complete-header']",
        fallbacks=(".complete-header", "h2:has-text('Thank you')"),
        description="Thank You Message",
    )
    SUMMARY_TOTAL = LocatorStrategy(
        primary="[data-test='total-label']",
        fallbacks=(".summary_total_label",),
        description="Order Total",
    )
    ERROR_MESSAGE = LocatorStrategy(
        primary="[data-test='error']",
        fallbacks=(".error-message-container h3",),
        description="Checkout Error Message",
    )

    @allure.step("Fill checkout information")
    async def fill_information(self, first_name: str, last_name: str, postal_code: str) -> None:
        logger.info("Filling checkout information")
        await self.fill(self.FIRST_NAME, first_name)
        await self.fill(self.LAST_NAME, last_name)
        await self.fill(self.POSTAL_CODE, postal_code)

    @allure.step("Continue checkout")
    async def continue_checkout(self) -> None:
        await self.click(self.CONTINUE_BUTTON)

    @allure.step("Verify checkout overview")
    async def verify_overview(self) -> None:
        await self.verify_url(Paths.CHECKOUT_STEP_TWO)
        await self.verify_element_text(self.TITLE, "Checkout: Overview")

    async def get_total(self) -> str:
        return (await self.get_text(self.SUMMARY_TOTAL)).strip()

    @allure.step("Finish order")
    async def finish(self) -> None:
        await self.click(self.FINISH_BUTTON)

    @allure.step("Verify order complete")
    async def verify_order_complete(self) -> None:
        await self.verify_url(Paths.CHECKOUT_COMPLETE)
        await self.verify_element_text(self.TITLE, "Checkout: Complete!")
        await self.verify_element_visible(self.COMPLETE_HEADER)

    async def get_error_message(self) -> str:
        if not await self.is_visible(self.ERROR_MESSAGE, primary_timeout=2000, fallback_timeout=1000):
            return ""
        return (await self.get_text(self.ERROR_MESSAGE)).strip()
