"""
================================================================================
Cart Page Object (Async / Playwright)
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import allure
from loguru import logger

from testsuites.ui_testing.constants import Paths
from testsuites.ui_testing.framework.locator_resolver import LocatorStrategy, as_strategy
from testsuites.ui_testing.framework.page_base import PageBase


class CartPage(PageBase):
    """Shopping cart page object (async)."""

    URL_PATH = Paths.CART
    PAGE_IDENTIFIER = "cart-page"

    TITLE = LocatorStrategy(
        primary="[data-test='title']",
        fallbacks=(".title", "span:has-text('Your Cart')"),
        description="Cart Title",
    )
    CHECKOUT_BUTTON = LocatorStrategy(
        primary="[data-test='checkout']",
        fallbacks=("#checkout", "button:has-text('Checkout')"),
        description="Checkout Button",
    )
    CONTINUE_SHOPPING_BUTTON = LocatorStrategy(
        primary="[data-test='continue-shopping']",
        fallbacks=("#continue-shopping", "button:has-text('Continue Shopping')"),
        description="Continue Shopping Button",
    )
    CART_LIST = LocatorStrategy(
        primary="[data-test='cart-list']",
        fallbacks=(".cart_list", ".cart_contents_container"),
        description="Cart Items Container",
    )

    ITEM_NAME = "[data-test='inventory-item-name']"

    @staticmethod
    def remove_button(name: str) -> LocatorStrategy:
        return as_strategy(
            f"[data-test='inventory-item']:has([data-test='inventory-item-name']:text-is('{name}')) "
            f"[data-test^='remove']",
            [f".cart_item:has-text('{name}') button:has-text('Remove')"],
            f"Remove button for {name}",
        )

    async def is_loaded(self) -> bool:
        return Paths.CART in self.page.url and await self.is_visible(self.TITLE)

    @allure.step("Verify cart page loaded")
    async def verify_page_loaded(self) -> None:
        await self.verify_url(Paths.CART)
        await self.verify_element_text(self.TITLE, "Your Cart")

    async def get_cart_items(self) -> List[str]:
        items = await self.page.locator(self.ITEM_NAME).all_text_contents()
        logger.info(f"Found {len(items)} items in cart")
        return items

    async def is_product_in_cart(self, name: str) -> bool:
        return name in await self.get_cart_items()

    @allure.step("Remove from cart: {name}")
    async def remove_product(self, name: str) -> None:
        await self.click(self.remove_button(name))

    @allure.step("Proceed to checkout")
    async def checkout(self) -> None:
        await self.click(self.CHECKOUT_BUTTON)

    @allure.step("Continue shopping")
    async def continue_shopping(self) -> None:
        await self.click(self.CONTINUE_SHOPPING_BUTTON)

    async def capture_cart_visual(self, name: str) -> Path:
        return await self.capture_element_visual(self.CART_LIST, f"cart-items-{name}")
