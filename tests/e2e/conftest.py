"""Fixtures for the end-to-end tests that drive a real browser.

These tests hit the live application at BASE_URL and are deselected by
default; run them with ``pytest -m e2e``. The environment is validated once
per session before any browser is launched. A failing test leaves a
screenshot and HTML dump under RESULTS_DIR, plus its video and trace when
RECORD_VIDEO or TRACE is set.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
import pytest_asyncio
from playwright.async_api import async_playwright

from src.auth.auth_manager import capture_auth_state
from src.models.config import ConfigurationError, Settings, load_environment
from src.pages.base_page import BasePage
from src.pages.inventory_page import InventoryPage
from src.pages.login_page import LoginPage
from src.utils.browser import close_test_context, launch_browser, open_test_context
from src.utils.helpers import artifact_name, node_failed, record_phase_report


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    record_phase_report(item, outcome.get_result())


@pytest.fixture(scope="session")
def settings() -> Settings:
    load_environment(".env")
    try:
        return Settings.from_env()
    except ConfigurationError as e:
        pytest.exit(str(e), returncode=4)


@pytest.fixture(scope="session")
def auth_state_file(settings: Settings) -> Path:
    """Log in once per session and cache the storage state for authenticated tests."""
    # Own thread and loop, so the per-test event loops are left alone
    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, capture_auth_state(settings)).result()


@pytest_asyncio.fixture
async def browser(settings: Settings):
    async with async_playwright() as p:
        browser = await launch_browser(p, settings.browser)
        try:
            yield browser
        finally:
            await browser.close()


@pytest_asyncio.fixture
async def page(browser, settings: Settings, request):
    """A page in a fresh, unauthenticated context."""
    context = await open_test_context(browser, settings)
    page = await context.new_page()
    yield page
    await close_test_context(
        context, page, settings,
        artifact_name(request.node.nodeid), node_failed(request.node))


@pytest_asyncio.fixture
async def authenticated_page(browser, settings: Settings, auth_state_file: Path, request):
    """A page whose context is restored from the cached auth state."""
    context = await open_test_context(browser, settings, storage_state=auth_state_file)
    page = await context.new_page()
    yield page
    await close_test_context(
        context, page, settings,
        artifact_name(request.node.nodeid), node_failed(request.node))


@pytest.fixture
def login_page(page, settings: Settings) -> LoginPage:
    return LoginPage(BasePage(page, settings))


@pytest.fixture
def inventory_page(authenticated_page, settings: Settings) -> InventoryPage:
    return InventoryPage(BasePage(authenticated_page, settings))
