"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.models.config import BrowserConfig, Credentials, Settings
from src.pages.base_page import BasePage
from src.pages.inventory_page import InventoryPage
from src.pages.login_page import LoginPage


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def env() -> dict[str, str]:
    """A complete set of required environment variables."""
    return {
        "BASE_URL": "https://www.saucedemo.com",
        "USER_NAME": "standard_user",
        "USER_PASSWORD": "secret_sauce",
    }


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with auth and results dirs under a temp directory."""
    return Settings(
        base_url="https://www.saucedemo.com/",
        credentials=Credentials(username="standard_user", password="secret_sauce"),
        browser=BrowserConfig(),
        auth_dir=str(tmp_path / "auth"),
        results_dir=str(tmp_path / "results"),
    )


# ============================================================================
# Mock Browser Fixtures
# ============================================================================


def _make_locator(
    text: Optional[str] = None,
    visible: bool = False,
    count: int = 0,
) -> MagicMock:
    """Create a mock Playwright locator; ``.first``, ``filter`` and ``locator`` return itself."""
    locator = MagicMock(name="Locator")
    locator.first = locator
    locator.filter.return_value = locator
    locator.locator.return_value = locator
    for name in ("click", "fill", "clear", "select_option", "wait_for"):
        setattr(locator, name, AsyncMock())
    locator.text_content = AsyncMock(return_value=text)
    locator.inner_text = AsyncMock(return_value=text or "")
    locator.is_visible = AsyncMock(return_value=visible)
    locator.count = AsyncMock(return_value=count)
    locator.all = AsyncMock(return_value=[])
    locator.all_text_contents = AsyncMock(return_value=[])
    return locator


@pytest.fixture
def make_locator() -> Callable[..., MagicMock]:
    """Factory for mock locators."""
    return _make_locator


@pytest.fixture
def mock_context() -> MagicMock:
    """Create a mock Playwright browser context."""
    context = MagicMock(name="BrowserContext")
    context.storage_state = AsyncMock(return_value={"cookies": [], "origins": []})
    context.clear_cookies = AsyncMock()
    context.clear_permissions = AsyncMock()
    context.new_page = AsyncMock()
    return context


@pytest.fixture
def mock_page(mock_context: MagicMock) -> MagicMock:
    """Create a mock Playwright page.

    ``page.locator(selector)`` returns one mock locator per selector; tests
    pre-register configured locators in ``page.locators``.
    """
    page = MagicMock(name="Page")
    page.url = "https://www.saucedemo.com/"
    page.context = mock_context
    page.locators = {}
    page.locator.side_effect = lambda selector: page.locators.setdefault(selector, _make_locator())
    page.get_by_text.side_effect = lambda text: page.locators.setdefault(
        f"text={text}", _make_locator())
    page.goto = AsyncMock()
    page.title = AsyncMock(return_value="Swag Labs")
    page.reload = AsyncMock()
    page.content = AsyncMock(return_value="<html><body>Swag Labs</body></html>")
    page.screenshot = AsyncMock()
    page.wait_for_url = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    return page


@pytest.fixture
def mock_expect():
    """Patch Playwright's ``expect`` in the base page with awaitable assertions."""
    assertions = MagicMock(name="LocatorAssertions")
    for name in ("to_be_visible", "to_be_hidden", "to_contain_text", "to_have_text"):
        setattr(assertions, name, AsyncMock())
    with patch("src.pages.base_page.expect", return_value=assertions) as mock:
        yield mock


# ============================================================================
# Page Object Fixtures
# ============================================================================


@pytest.fixture
def base_page(mock_page: MagicMock, settings: Settings) -> BasePage:
    return BasePage(mock_page, settings)


@pytest.fixture
def login_page(base_page: BasePage) -> LoginPage:
    return LoginPage(base_page)


@pytest.fixture
def inventory_page(base_page: BasePage) -> InventoryPage:
    return InventoryPage(base_page)
