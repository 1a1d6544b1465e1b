"""
Browser-free fixtures for framework unit tests.

FakePage mimics the slice of Playwright's async Page used by the resolver and
page objects: `locator(selector)` is lazy and `wait_for` either returns or
raises Playwright's TimeoutError, depending on which selectors are "in the DOM".
"""

from typing import List, Tuple

import pytest
from loguru import logger
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.config_loader import ConfigLoader


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    async def wait_for(self, state: str = "visible", timeout: float = 30000) -> None:
        self.page.waits.append((self.selector, timeout, state))
        if self.selector not in self.page.visible:
            raise PlaywrightTimeoutError(
                f"Locator.wait_for: Timeout {timeout}ms exceeded.\n"
                f"waiting for locator('{self.selector}') to be {state}"
            )

    async def click(self, **kwargs) -> None:
        self.page.actions.append(("click", self.selector, None))

    async def fill(self, value: str, **kwargs) -> None:
        self.page.actions.append(("fill", self.selector, value))

    async def text_content(self) -> str:
        return self.page.texts.get(self.selector, "")

    async def is_visible(self) -> bool:
        return self.selector in self.page.visible


class FakePage:
    def __init__(self, visible=(), texts=None, url: str = "https://www.saucedemo.com/"):
        self.visible = set(visible)
        self.texts = dict(texts or {})
        self.url = url
        self.waits: List[Tuple[str, float, str]] = []
        self.actions: List[Tuple[str, str, object]] = []

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    @property
    def attempted(self) -> List[str]:
        return [selector for selector, _, _ in self.waits]


@pytest.fixture
def fake_page():
    return FakePage


@pytest.fixture
def log_records():
    """Collect (level, message) pairs emitted through loguru."""
    records: List[Tuple[str, str]] = []
    handler_id = logger.add(
        lambda message: records.append(
            (message.record["level"].name, message.record["message"])
        ),
        level="DEBUG",
        format="{message}",
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    yield
    ConfigLoader.reset()
