"""Integration tests for the e2e suite.

These tests verify that settings, page objects, the auth manager and the
browser factory work together. Playwright itself is mocked, the wiring
between components is real.
"""

from unittest.mock import AsyncMock, patch

import pytest

from src.auth.auth_manager import AuthManager, AuthStatus, capture_auth_state
from src.models.config import ConfigurationError, Settings
from src.pages.base_page import BasePage
from src.pages.inventory_page import InventoryPage
from src.pages.login_page import LoginPage
from src.selectors.inventory import INVENTORY_SELECTORS
from src.selectors.login import LOGIN_SELECTORS
from src.utils.browser import create_context


@pytest.mark.integration
class TestSettingsFlow:
    """Environment to settings to page objects."""

    def test_env_settings_drive_page_urls(self, env, mock_page, tmp_path):
        settings = Settings.from_env({**env, "AUTH_STATE_DIR": str(tmp_path / "auth")})
        base = BasePage(mock_page, settings)

        assert settings.base_url == "https://www.saucedemo.com/"
        assert AuthManager(mock_page, settings).get_auth_state_path() == tmp_path / "auth" / "user.json"
        assert base.settings is settings

    def test_missing_env_stops_before_browser(self, mock_page):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env({"USER_NAME": "standard_user"})
        assert exc_info.value.missing == ["USER_PASSWORD", "BASE_URL"]
        mock_page.goto.assert_not_called()


@pytest.mark.integration
@pytest.mark.asyncio
class TestLoginToInventoryFlow:
    """Login page hands off to the inventory page on a shared base page."""

    async def test_login_then_add_to_cart(self, base_page, mock_page, mock_expect, make_locator):
        mock_page.locators[INVENTORY_SELECTORS["inventory_item"]] = make_locator(count=1)
        mock_page.locators[INVENTORY_SELECTORS["shopping_cart_badge"]] = make_locator(
            text="1", visible=True)

        login = LoginPage(base_page)
        await login.goto()
        await login.login("standard_user", "secret_sauce")

        inventory = InventoryPage(base_page)
        await inventory.add_product_to_cart("Sauce Labs Backpack")

        mock_page.locators[LOGIN_SELECTORS["login_button"]].click.assert_awaited_once()
        mock_page.locators[INVENTORY_SELECTORS["inventory_item"]].click.assert_awaited_once()
        assert await inventory.get_cart_item_count() == 1
        await inventory.assert_cart_item_count(1)

    async def test_auth_manager_login_reports_status(self, mock_page, settings, make_locator):
        manager = AuthManager(mock_page, settings)
        await manager.authenticate_as_user()

        mock_page.url = "https://www.saucedemo.com/inventory.html"
        mock_page.locators[INVENTORY_SELECTORS["inventory_container"]] = make_locator(visible=True)

        assert manager.is_authenticated()
        assert await manager.get_auth_status() is AuthStatus.AUTHENTICATED


@pytest.mark.integration
@pytest.mark.asyncio
class TestAuthStateFlow:
    """Captured auth state is what a restored context is created from."""

    async def test_capture_then_restore(self, settings, mock_page):
        mock_pw = AsyncMock()
        mock_pw.__aenter__ = AsyncMock(return_value=mock_pw)
        mock_pw.__aexit__ = AsyncMock(return_value=False)
        mock_browser = AsyncMock()
        mock_page.context.new_page = AsyncMock(return_value=mock_page)
        mock_browser.new_context = AsyncMock(return_value=mock_page.context)
        mock_pw.chromium.launch = AsyncMock(return_value=mock_browser)

        with patch("src.auth.auth_manager.async_playwright", return_value=mock_pw):
            path = await capture_auth_state(settings)

        await create_context(mock_browser, settings.browser, storage_state=path)

        first_kwargs = mock_browser.new_context.call_args_list[0].kwargs
        restored_kwargs = mock_browser.new_context.call_args_list[1].kwargs
        assert first_kwargs["storage_state"] is None
        assert restored_kwargs["storage_state"] == str(path)
        mock_page.context.storage_state.assert_awaited_once_with(path=str(path))
