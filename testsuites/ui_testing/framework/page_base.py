"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation and URL handling
    - Element interaction through the self-healing LocatorResolver
    - Assertions on element text, visibility and URL
    - Screenshot capture for visual baselines (comparison is done elsewhere)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect

from .config_loader import ConfigLoader
from .locator_resolver import (
    HealingRecord,
    LocatorExhaustedError,
    LocatorResolver,
    LocatorStrategy,
)


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare their elements as LocatorStrategy class attributes and
    interact with them through `click`, `fill`, `get_text` and friends, which
    resolve each strategy fresh on every call.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/"
            LOGIN_BUTTON = LocatorStrategy(
                primary="[data-test='login-button']",
                fallbacks=("#login-button",),
                description="Login Button",
            )

            async def submit(self):
                await self.click(self.LOGIN_BUTTON)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_IDENTIFIER: str = "base-page"

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        resolver: Optional[LocatorResolver] = None,
        healing_record: Optional[HealingRecord] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (defaults to the environment)
            resolver: Pre-built resolver; built from configuration if None
            healing_record: Shared healing record for a configuration-built resolver
        """
        self.page = page
        if not base_url:
            base_url = ConfigLoader().get_environment().base_url
        self.base_url = base_url.rstrip("/")
        self.resolver = resolver or LocatorResolver.from_config(
            page, healing_record=healing_record
        )

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    async def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.info(f"Navigated to: {self.url}")

    async def navigate_to(self, path: str, wait_for: str = "load") -> None:
        """Navigate to a path relative to the base URL."""
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            await self.page.goto(full_url, wait_until=wait_for)
            logger.info(f"Navigated to: {full_url}")

    async def wait_for_page_load(
        self,
        state: str = "domcontentloaded",
        timeout: int = 15000,
    ) -> None:
        """
        Wait for the page to reach a stable load state.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
            timeout: Timeout in milliseconds
        """
        await self.page.wait_for_load_state(state, timeout=timeout)

    async def is_loaded(self) -> bool:
        """Whether this page is currently displayed. Override in subclasses."""
        return self.URL_PATH in (self.page.url or "")

    # =========================================================================
    # Self-Healing Element Interactions
    # =========================================================================

    async def find(self, strategy: LocatorStrategy, **timeouts: Any) -> Locator:
        """
        Resolve a strategy to a visible element.

        Raises:
            LocatorExhaustedError: When no selector of the strategy resolves
        """
        return await self.resolver.resolve(strategy, **timeouts)

    async def click(self, strategy: LocatorStrategy, **kwargs: Any) -> None:
        """Click element resolved from `strategy`."""
        with allure.step(f"Click: {strategy.description}"):
            element = await self.find(strategy)
            logger.debug(f"Clicking element: {strategy.description}")
            await element.click(**kwargs)

    async def fill(self, strategy: LocatorStrategy, value: str, **kwargs: Any) -> None:
        """Fill input element resolved from `strategy`."""
        shown = "*" * len(value) if "password" in strategy.description.lower() else value
        with allure.step(f"Fill {strategy.description}: {shown}"):
            element = await self.find(strategy)
            logger.debug(f"Filling element: {strategy.description} with: {shown}")
            await element.fill(value, **kwargs)

    async def get_text(self, strategy: LocatorStrategy) -> str:
        """Get text content of element."""
        element = await self.find(strategy)
        return await element.text_content() or ""

    async def is_visible(self, strategy: LocatorStrategy, **timeouts: Any) -> bool:
        """
        Check if element is visible.

        Returns False instead of raising when the strategy is exhausted.
        """
        try:
            element = await self.resolver.resolve(strategy, quiet=True, **timeouts)
            return await element.is_visible()
        except LocatorExhaustedError:
            logger.debug(f"Element not found or not visible: {strategy.description}")
            return False

    # =========================================================================
    # Verifications
    # =========================================================================

    async def verify_url(self, fragment: str) -> None:
        """Assert the current URL contains `fragment`."""
        logger.info(f"Verifying page URL contains: {fragment}")
        await expect(self.page).to_have_url(re.compile(re.escape(fragment)))

    async def verify_element_text(self, strategy: LocatorStrategy, expected: str) -> None:
        element = await self.find(strategy)
        logger.info(f"Verifying element text: {expected}")
        await expect(element).to_have_text(expected)

    async def verify_element_visible(self, strategy: LocatorStrategy) -> None:
        logger.info(f"Verifying element is visible: {strategy.description}")
        element = await self.find(strategy)
        await expect(element).to_be_visible()

    # =========================================================================
    # Visual Baseline Utilities
    # =========================================================================

    async def wait_for_page_stability(self, timeout: int = 2000) -> None:
        """Let animations and late requests settle before a screenshot."""
        await self.page.wait_for_load_state("networkidle")
        await self.page.wait_for_timeout(timeout)

    async def hide_elements(self, selectors: Iterable[str]) -> None:
        """Hide dynamic elements so baselines stay stable."""
        for selector in selectors:
            try:
                await self.page.evaluate(
                    "(sel) => document.querySelectorAll(sel)"
                    ".forEach(el => { el.style.visibility = 'hidden'; })",
                    selector,
                )
            except PlaywrightError:
                logger.debug(f"Could not hide elements with selector: {selector}")

    async def mask_element(self, strategy: LocatorStrategy) -> None:
        """Blur one element, e.g. a timestamp, before capture."""
        element = await self.find(strategy)
        logger.debug(f"Masking element for visual testing: {strategy.description}")
        await element.evaluate("el => { el.style.filter = 'blur(10px)'; }")

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_visual(
        self,
        name: str,
        hide: Iterable[str] = (),
        full_page: bool = True,
        stability_ms: int = 1000,
    ) -> Path:
        """
        Capture a visual baseline of the current page.

        Args:
            name: Baseline name, prefixed with the page identifier
            hide: Selectors of dynamic elements to hide first
            full_page: Capture full scrollable page
            stability_ms: Settle time before capture
        """
        logger.info(f"Capturing visual baseline: {self.PAGE_IDENTIFIER}-{name}")
        await self.hide_elements(hide)
        await self.wait_for_page_stability(stability_ms)
        return await self.screenshot(f"{self.PAGE_IDENTIFIER}-{name}", full_page=full_page)

    async def capture_element_visual(self, strategy: LocatorStrategy, name: str) -> Path:
        """Capture a visual baseline of a single element."""
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
        element = await self.find(strategy)
        filepath = SCREENSHOT_DIR / f"{self.PAGE_IDENTIFIER}-{name}-element.png"
        await element.screenshot(path=str(filepath), animations="disabled")
        allure.attach.file(
            str(filepath),
            name=f"{name} ({strategy.description})",
            attachment_type=allure.attachment_type.PNG,
        )
        return filepath

    def get_locator_health_report(self) -> str:
        """Get locator health report."""
        return self.resolver.get_health_report()


def publish_health_report(record: HealingRecord, threshold: int) -> str:
    """Log the locator health report and attach it to the Allure results."""
    report = record.report(threshold)
    logger.info("\n" + report)
    allure.attach(
        report,
        name="locator_health_report",
        attachment_type=allure.attachment_type.TEXT,
    )
    return report


__all__ = [
    "BasePage",
    "PageBase",
    "SCREENSHOT_DIR",
    "publish_health_report",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage
