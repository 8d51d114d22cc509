"""Browser utilities: launch a configured browser and create test contexts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright

from src.models.config import BrowserConfig, Settings
from src.utils.helpers import capture_failure_artifacts

logger = logging.getLogger(__name__)


async def launch_browser(playwright: Playwright, config: BrowserConfig) -> Browser:
    """Launch the configured browser engine."""
    browser_type = getattr(playwright, config.browser_name)
    logger.debug("Launching %s (headless=%s)", config.browser_name, config.headless)
    return await browser_type.launch(
        headless=config.headless,
        slow_mo=config.slow_mo_ms,
    )


async def create_context(
    browser: Browser,
    config: BrowserConfig,
    storage_state: Optional[dict | str | Path] = None,
    record_video_dir: str | None = None,
) -> BrowserContext:
    """Create an isolated browser context with the configured defaults.

    Args:
        storage_state: Optional Playwright storage state (cookies + localStorage)
            to seed the context with. Accepts a dict or a path to a JSON file.
        record_video_dir: Optional directory path for Playwright video recording.
    """
    viewport = config.viewport.model_dump()
    context_kwargs: dict = {
        "viewport": viewport,
        "ignore_https_errors": config.ignore_https_errors,
        "storage_state": str(storage_state) if isinstance(storage_state, Path) else storage_state,
    }
    if record_video_dir:
        context_kwargs["record_video_dir"] = record_video_dir
        context_kwargs["record_video_size"] = viewport

    context = await browser.new_context(**context_kwargs)
    context.set_default_timeout(config.action_timeout_ms)
    context.set_default_navigation_timeout(config.navigation_timeout_ms)
    return context


async def open_test_context(
    browser: Browser,
    settings: Settings,
    storage_state: Optional[dict | str | Path] = None,
) -> BrowserContext:
    """Context for one test, recording video and trace when enabled in settings."""
    context = await create_context(
        browser,
        settings.browser,
        storage_state=storage_state,
        record_video_dir=str(settings.video_dir) if settings.record_video else None,
    )
    if settings.trace:
        await context.tracing.start(screenshots=True, snapshots=True, sources=True)
    return context


async def close_test_context(
    context: BrowserContext,
    page: Page,
    settings: Settings,
    name: str,
    failed: bool,
) -> None:
    """Close a per-test context, keeping its artifacts only if the test failed.

    A failed test leaves a screenshot and HTML dump, plus the trace and video
    when those are enabled. A passing test leaves nothing behind.
    """
    if failed:
        await capture_failure_artifacts(page, name, settings.screenshot_dir, settings.html_dir)
    if settings.trace:
        if failed:
            trace_path = settings.trace_dir / f"{name}.zip"
            trace_path.parent.mkdir(parents=True, exist_ok=True)
            await context.tracing.stop(path=str(trace_path))
            logger.info("Trace saved: %s", trace_path)
        else:
            await context.tracing.stop()
    video = page.video
    await context.close()
    if video is not None and not failed:
        await video.delete()
