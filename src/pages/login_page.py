"""Login page object: credential entry, error reporting and user hints."""

from __future__ import annotations

import logging
from typing import Optional

from src.selectors.login import LOGIN_SELECTORS

from .base_page import BasePage

logger = logging.getLogger(__name__)

_USERNAMES_HEADER = "Accepted usernames are:"


def parse_accepted_usernames(text: Optional[str]) -> list[str]:
    """Split the credential-hint block into usernames, dropping the header."""
    if not text:
        return []
    lines = (line.strip() for line in text.splitlines())
    return [line for line in lines if line and line != _USERNAMES_HEADER]


class LoginPage:
    """Interactions with the application's login screen."""

    def __init__(self, base: BasePage):
        self.base = base
        self.page = base.page

    async def goto(self) -> None:
        await self.base.goto()
        await self.base.wait_for_page_load()

    async def login(self, username: str, password: str) -> None:
        """Fill both fields and submit. Does not wait for navigation."""
        logger.info("Logging in as %s", username)
        await self.fill_username(username)
        await self.fill_password(password)
        await self.click_login_button()

    async def fill_username(self, username: str) -> None:
        await self.base.fill(LOGIN_SELECTORS["username_input"], username)

    async def fill_password(self, password: str) -> None:
        await self.base.fill(LOGIN_SELECTORS["password_input"], password)

    async def click_login_button(self) -> None:
        await self.base.click(LOGIN_SELECTORS["login_button"])

    async def clear_username(self) -> None:
        await self.base.clear(LOGIN_SELECTORS["username_input"])

    async def clear_password(self) -> None:
        await self.base.clear(LOGIN_SELECTORS["password_input"])

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    async def get_error_message(self) -> Optional[str]:
        if not await self.is_error_visible():
            return None
        return await self.base.get_text(LOGIN_SELECTORS["error_message"])

    async def is_error_visible(self) -> bool:
        return await self.base.is_visible(LOGIN_SELECTORS["error_message"])

    async def dismiss_error(self) -> None:
        """Close the error banner via its dismiss button."""
        await self.base.click(LOGIN_SELECTORS["error_button"])

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    async def assert_login_page_loaded(self) -> None:
        for key in ("logo", "username_input", "password_input", "login_button"):
            await self.base.assert_visible(LOGIN_SELECTORS[key])

    async def assert_error_message(self, expected_message: str) -> None:
        await self.base.assert_visible(LOGIN_SELECTORS["error_message"])
        await self.base.assert_text(LOGIN_SELECTORS["error_message"], expected_message)

    async def get_available_usernames(self) -> list[str]:
        """Usernames listed in the demo's credential-hint block."""
        # inner_text keeps the <br> separators that text_content drops
        text = await self.base.get_inner_text(LOGIN_SELECTORS["login_credentials"])
        return parse_accepted_usernames(text)
