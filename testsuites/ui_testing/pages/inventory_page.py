"""
================================================================================
Inventory Page Object (Async / Playwright)
================================================================================

Product catalog: listing, sorting, adding/removing items, cart badge and the
burger menu (logout).

================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import allure
from loguru import logger

from testsuites.ui_testing.constants import DYNAMIC_ELEMENTS, Paths, SortOption
from testsuites.ui_testing.framework.locator_resolver import LocatorStrategy, as_strategy
from testsuites.ui_testing.framework.page_base import PageBase


def _parse_price(text: str) -> float:
    return float(text.strip().lstrip("$"))


class InventoryPage(PageBase):
    """Inventory (catalog) page object (async)."""

    URL_PATH = Paths.INVENTORY
    PAGE_IDENTIFIER = "inventory-page"

    TITLE = LocatorStrategy(
        primary="[data-test='title']",
        fallbacks=(".title", "span:has-text('Products')"),
        description="Products Title",
    )
    SHOPPING_CART_LINK = LocatorStrategy(
        primary="[data-test='shopping-cart-link']",
        fallbacks=("#shopping_cart_container a", ".shopping_cart_link"),
        description="Shopping Cart Link",
    )
    SORT_DROPDOWN = LocatorStrategy(
        primary="[data-test='product-sort-container']",
        fallbacks=(".product_sort_container", "select"),
        description="Sort Dropdown",
    )
    MENU_BUTTON = LocatorStrategy(
        primary="#react-burger-menu-btn",
        fallbacks=("[data-test='open-menu']", ".bm-burger-button button"),
        description="Menu Button",
    )
    LOGOUT_LINK = LocatorStrategy(
        primary="[data-test='logout-sidebar-link']",
        fallbacks=("#logout_sidebar_link", "text=Logout"),
        description="Logout Link",
    )
    PRODUCT_GRID = LocatorStrategy(
        primary="[data-test='inventory-list']",
        fallbacks=(".inventory_list", ".inventory_container"),
        description="Product Grid Container",
    )

    ITEM_NAME = "[data-test='inventory-item-name']"
    ITEM_PRICE = "[data-test='inventory-item-price']"
    CART_BADGE = "[data-test='shopping-cart-badge']"

    @staticmethod
    def add_to_cart_button(product_id: str) -> LocatorStrategy:
        return as_strategy(
            f"[data-test='add-to-cart-{product_id}']",
            [f"#add-to-cart-{product_id}", f"button[name='add-to-cart-{product_id}']"],
            f"Add to Cart button for {product_id}",
        )

    @staticmethod
    def remove_button(product_id: str) -> LocatorStrategy:
        return as_strategy(
            f"[data-test='remove-{product_id}']",
            [f"#remove-{product_id}", f"button[name='remove-{product_id}']"],
            f"Remove button for {product_id}",
        )

    @staticmethod
    def product_name(name: str) -> LocatorStrategy:
        return as_strategy(
            f"[data-test='inventory-item-name']:text-is('{name}')",
            [f".inventory_item_name:text-is('{name}')", f"text=\"{name}\""],
            f"Product: {name}",
        )

    async def is_loaded(self) -> bool:
        return Paths.INVENTORY in self.page.url and await self.is_visible(self.TITLE)

    @allure.step("Verify inventory page loaded")
    async def verify_page_loaded(self) -> None:
        await self.verify_url(Paths.INVENTORY)
        await self.verify_element_text(self.TITLE, "Products")

    async def get_product_count(self) -> int:
        count = await self.page.locator("[data-test^='add-to-cart-']").count()
        logger.info(f"Found {count} products on the page")
        return count

    async def get_product_names(self) -> List[str]:
        return await self.page.locator(self.ITEM_NAME).all_text_contents()

    async def get_product_prices(self) -> List[float]:
        texts = await self.page.locator(self.ITEM_PRICE).all_text_contents()
        return [_parse_price(text) for text in texts]

    @allure.step("Add product to cart: {product_id}")
    async def add_product_to_cart(self, product_id: str) -> None:
        await self.click(self.add_to_cart_button(product_id))

    @allure.step("Remove product from cart: {product_id}")
    async def remove_product_from_cart(self, product_id: str) -> None:
        await self.click(self.remove_button(product_id))

    async def get_cart_item_count(self) -> int:
        badge = self.page.locator(self.CART_BADGE)
        if not await badge.is_visible():
            return 0
        return int((await badge.text_content() or "0").strip())

    @allure.step("Open shopping cart")
    async def open_cart(self) -> None:
        await self.click(self.SHOPPING_CART_LINK)

    @allure.step("Sort products: {option}")
    async def sort_by(self, option: SortOption) -> None:
        dropdown = await self.find(self.SORT_DROPDOWN)
        await dropdown.select_option(SortOption(option).value)

    async def is_sorted(self, option: SortOption) -> bool:
        """Whether the grid order matches `option`."""
        option = SortOption(option)
        if option in (SortOption.PRICE_LOW_TO_HIGH, SortOption.PRICE_HIGH_TO_LOW):
            values = await self.get_product_prices()
            reverse = option is SortOption.PRICE_HIGH_TO_LOW
        else:
            values = await self.get_product_names()
            reverse = option is SortOption.NAME_Z_TO_A
        return values == sorted(values, reverse=reverse)

    async def is_product_displayed(self, name: str) -> bool:
        return await self.is_visible(self.product_name(name))

    async def get_product_price(self, name: str) -> float:
        item = self.page.locator("[data-test='inventory-item']").filter(
            has=self.page.locator(f"{self.ITEM_NAME}:text-is('{name}')")
        )
        return _parse_price(await item.locator(self.ITEM_PRICE).text_content() or "0")

    @allure.step("Logout")
    async def logout(self) -> None:
        await self.click(self.MENU_BUTTON)
        # Sidebar slides in; the resolver waits for the link to become visible
        await self.click(self.LOGOUT_LINK)

    async def capture_inventory_visual(self, name: str) -> Path:
        return await self.capture_visual(name, hide=DYNAMIC_ELEMENTS)

    async def capture_product_grid_visual(self, name: str) -> Path:
        return await self.capture_element_visual(self.PRODUCT_GRID, f"product-grid-{name}")
