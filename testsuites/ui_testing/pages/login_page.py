"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

SauceDemo login form. Every element is declared as a LocatorStrategy with a
stable `data-test` primary and id/attribute fallbacks, so cosmetic markup
changes heal instead of failing the suite.

================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import allure
from loguru import logger

from testsuites.ui_testing.constants import Paths
from testsuites.ui_testing.framework.locator_resolver import LocatorStrategy
from testsuites.ui_testing.framework.page_base import PageBase


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = Paths.LOGIN
    PAGE_IDENTIFIER = "login-page"

    USERNAME_INPUT = LocatorStrategy(
        primary="[data-test='username']",
        fallbacks=("#user-name", "input[placeholder*='Username']"),
        description="Username Input",
    )
    PASSWORD_INPUT = LocatorStrategy(
        primary="[data-test='password']",
        fallbacks=("#password", "input[placeholder*='Password']"),
        description="Password Input",
    )
    LOGIN_BUTTON = LocatorStrategy(
        primary="[data-test='login-button']",
        fallbacks=("#login-button", "input[type='submit']", "button:has-text('Login')"),
        description="Login Button",
    )
    ERROR_MESSAGE = LocatorStrategy(
        primary="[data-test='error']",
        fallbacks=("h3[data-test='error']", ".error-message-container"),
        description="Error Message",
    )
    LOGIN_FORM = LocatorStrategy(
        primary=".login_wrapper",
        fallbacks=(".login-box", "#login_button_container"),
        description="Login Form Container",
    )

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        """Navigate to the login page."""
        await self.navigate()
        await self.wait_for_page_load()
        return self

    async def is_loaded(self) -> bool:
        return await self.is_visible(self.LOGIN_BUTTON)

    @allure.step("Verify login form is displayed")
    async def verify_form_displayed(self) -> bool:
        """Verify login form elements are visible."""
        username_ok = await self.is_visible(self.USERNAME_INPUT)
        password_ok = await self.is_visible(self.PASSWORD_INPUT)
        button_ok = await self.is_visible(self.LOGIN_BUTTON)
        return username_ok and password_ok and button_ok

    async def enter_username(self, username: str) -> None:
        await self.fill(self.USERNAME_INPUT, username)

    async def enter_password(self, password: str) -> None:
        await self.fill(self.PASSWORD_INPUT, password)

    async def submit(self) -> None:
        await self.click(self.LOGIN_BUTTON)

    @allure.step("Login (username={username})")
    async def login(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        wait_inventory: bool = True,
    ) -> None:
        """
        Perform login.

        Args:
            username: Defaults to the `UI_USERNAME` env var
            password: Defaults to the `UI_PASSWORD` env var
            wait_inventory: Wait for the inventory URL after submitting
        """
        if username is None:
            username = os.getenv("UI_USERNAME", "standard_user")
        if password is None:
            password = os.getenv("UI_PASSWORD", "secret_sauce")

        logger.info(f"Attempting login with user: {username}")
        await self.enter_username(username)
        await self.enter_password(password)
        await self.submit()

        if wait_inventory:
            await self.page.wait_for_url(f"**{Paths.INVENTORY}", timeout=15000)

    async def get_error_message(self) -> str:
        """Text of the error banner, empty when none is shown."""
        if not await self.is_visible(self.ERROR_MESSAGE, primary_timeout=2000, fallback_timeout=1000):
            return ""
        return (await self.get_text(self.ERROR_MESSAGE)).strip()

    @allure.step("Verify login error: {expected}")
    async def verify_error_message(self, expected: str) -> None:
        await self.verify_element_visible(self.ERROR_MESSAGE)
        await self.verify_element_text(self.ERROR_MESSAGE, expected)

    async def capture_login_form_visual(self, name: str) -> Path:
        return await self.capture_element_visual(self.LOGIN_FORM, f"login-form-{name}")

    async def assert_login_page_loaded(self) -> None:
        """Hard assertion helper used by tests."""
        assert await self.verify_form_displayed(), "Login form should be visible"
