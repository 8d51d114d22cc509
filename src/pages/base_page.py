"""Base page holding the browser operations shared by every page object.

Concrete page objects hold a ``BasePage`` rather than subclassing it, and
delegate every low-level browser operation to it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from playwright.async_api import Locator, Page, expect

from src.models.config import Settings
from src.url_utils import join_url

logger = logging.getLogger(__name__)

Target = Union[str, Locator]


class BasePage:
    """Operation vocabulary shared by all page objects, bound to one page."""

    def __init__(self, page: Page, settings: Settings):
        if page is None:
            raise ValueError("BasePage requires a bound browser page")
        self.page = page
        self.settings = settings
        self.base_url = settings.base_url

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def goto(self, path: str = "") -> None:
        """Navigate to ``base_url + path`` (the bare base URL when path is empty)."""
        url = join_url(self.base_url, path)
        logger.debug("Navigating to %s", url)
        await self.page.goto(url)

    async def get_title(self) -> str:
        return await self.page.title()

    def get_current_url(self) -> str:
        return self.page.url

    async def wait_for_page_load(self) -> None:
        await self.page.wait_for_load_state("domcontentloaded")

    async def reload(self) -> None:
        await self.page.reload()

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def get_locator(self, selector: str) -> Locator:
        return self.page.locator(selector)

    async def click(self, selector: str) -> None:
        """Click the first element matching *selector*."""
        logger.debug("Clicking: %s", selector)
        await self.page.locator(selector).first.click()

    async def fill(self, selector: str, value: str) -> None:
        """Fill the first input matching *selector*."""
        logger.debug("Filling %s with '%s'", selector,
                     "***" if "password" in selector.lower() else value)
        await self.page.locator(selector).first.fill(value)

    async def select_option(self, selector: str, value: str) -> None:
        logger.debug("Selecting '%s' in %s", value, selector)
        await self.page.locator(selector).first.select_option(value)

    async def clear(self, selector: str) -> None:
        logger.debug("Clearing: %s", selector)
        await self.page.locator(selector).first.clear()

    async def get_text(self, selector: str) -> Optional[str]:
        """Return the text content of the first match, or None."""
        return await self.page.locator(selector).first.text_content()

    async def get_inner_text(self, selector: str) -> str:
        """Rendered text of the first match, with line breaks preserved."""
        return await self.page.locator(selector).first.inner_text()

    async def is_visible(self, selector: str) -> bool:
        """Non-blocking visibility check; False when the element is absent."""
        return await self.page.locator(selector).first.is_visible()

    async def wait_for_selector(self, selector: str, timeout: Optional[float] = None) -> None:
        """Block until the element is visible; raises TimeoutError otherwise."""
        logger.debug("Waiting for selector: %s", selector)
        await self.page.locator(selector).first.wait_for(state="visible", timeout=timeout)

    async def take_screenshot(self, filename: str) -> Path:
        """Capture a full-page screenshot under the configured results dir."""
        path = self.settings.screenshot_dir / f"{filename}.png"
        path.parent.mkdir(parents=True, exist_ok=True)
        await self.page.screenshot(path=str(path), full_page=True)
        logger.debug("Screenshot saved: %s", path)
        return path

    # ------------------------------------------------------------------
    # Assertions (retry until the assertion timeout elapses)
    # ------------------------------------------------------------------

    def _locate(self, target: Target) -> Locator:
        if isinstance(target, str):
            return self.page.locator(target).first
        return target

    @property
    def _assert_timeout(self) -> float:
        return self.settings.browser.assertion_timeout_ms

    async def assert_visible(self, target: Target, message: Optional[str] = None) -> None:
        await expect(self._locate(target), message).to_be_visible(timeout=self._assert_timeout)

    async def assert_hidden(self, target: Target, message: Optional[str] = None) -> None:
        await expect(self._locate(target), message).to_be_hidden(timeout=self._assert_timeout)

    async def assert_text(self, target: Target, text: str, message: Optional[str] = None) -> None:
        """Assert the element contains *text*."""
        await expect(self._locate(target), message).to_contain_text(
            text, timeout=self._assert_timeout)

    async def assert_exact_text(self, target: Target, text: str,
                                message: Optional[str] = None) -> None:
        await expect(self._locate(target), message).to_have_text(
            text, timeout=self._assert_timeout)
