"""Authentication manager: logs in once and caches the session state."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from playwright.async_api import Page, async_playwright

from src.models.config import Settings
from src.pages.base_page import BasePage
from src.pages.inventory_page import INVENTORY_PATH
from src.pages.login_page import LoginPage
from src.selectors.inventory import INVENTORY_SELECTORS
from src.selectors.login import LOGIN_SELECTORS
from src.url_utils import same_host
from src.utils.browser import create_context, launch_browser

logger = logging.getLogger(__name__)

DEFAULT_AUTH_STATE_FILE = "user.json"


class AuthStatus(str, Enum):
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"
    UNKNOWN = "unknown"


class AuthManager:
    """Drives the login page and persists the resulting storage state."""

    def __init__(self, page: Page, settings: Settings, auth_dir: str | Path | None = None):
        self.page = page
        self.settings = settings
        self.auth_dir = Path(auth_dir if auth_dir is not None else settings.auth_dir)

    async def authenticate_as_user(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        """Log in through the login page and wait for the inventory route.

        Defaults to the configured credentials. Raises the underlying
        TimeoutError if the post-login route is never reached.
        """
        creds = self.settings.credentials
        login_page = LoginPage(BasePage(self.page, self.settings))
        await login_page.goto()
        await login_page.login(
            creds.username if username is None else username,
            creds.password if password is None else password,
        )
        await self.page.wait_for_url(f"**/{INVENTORY_PATH}")
        logger.info("Authenticated, landed on %s", self.page.url)

    async def save_auth_state(self, filename: str = DEFAULT_AUTH_STATE_FILE) -> Path:
        """Write cookies + storage to the auth dir, replacing any previous file."""
        path = self.get_auth_state_path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        await self.page.context.storage_state(path=str(path))
        logger.info("Saved auth state to %s", path)
        return path

    def is_authenticated(self) -> bool:
        """Loose URL heuristic: on the inventory route, or off the application host.

        Being on any other host counts as authenticated; use get_auth_status()
        for a check that does not guess.
        """
        current_url = self.page.url
        return INVENTORY_PATH in current_url or not same_host(current_url, self.settings.base_url)

    async def get_auth_status(self) -> AuthStatus:
        """Tri-state check keyed on which screen's landmark element is visible."""
        if not same_host(self.page.url, self.settings.base_url):
            return AuthStatus.UNKNOWN
        if await self.page.locator(INVENTORY_SELECTORS["inventory_container"]).first.is_visible():
            return AuthStatus.AUTHENTICATED
        if await self.page.locator(LOGIN_SELECTORS["login_button"]).first.is_visible():
            return AuthStatus.UNAUTHENTICATED
        return AuthStatus.UNKNOWN

    async def clear_auth_state(self) -> None:
        """Clear cookies and permissions on the live context; the file is kept."""
        context = self.page.context
        await context.clear_cookies()
        await context.clear_permissions()

    def get_auth_state_path(self, filename: str = DEFAULT_AUTH_STATE_FILE) -> Path:
        return auth_state_path(self.auth_dir, filename)


def auth_state_path(auth_dir: str | Path, filename: str = DEFAULT_AUTH_STATE_FILE) -> Path:
    return Path(auth_dir) / filename


def remove_auth_state(path: Path) -> bool:
    """Delete a persisted auth state file. Returns False if there was none."""
    if not path.exists():
        return False
    path.unlink()
    logger.info("Removed auth state %s", path)
    return True


async def capture_auth_state(settings: Settings, filename: str = DEFAULT_AUTH_STATE_FILE) -> Path:
    """Log in from a fresh browser and save the session artifact.

    The browser is always closed before returning.
    """
    async with async_playwright() as p:
        browser = await launch_browser(p, settings.browser)
        try:
            context = await create_context(browser, settings.browser)
            page = await context.new_page()
            manager = AuthManager(page, settings)
            await manager.authenticate_as_user()
            return await manager.save_auth_state(filename)
        finally:
            await browser.close()
