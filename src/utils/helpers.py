"""Stateless helpers for tests and page objects: waits, test data, debugging."""

from __future__ import annotations

import logging
import random
import re
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Pattern, Union

from playwright.async_api import Page

from src.models.config import DEFAULT_RESULTS_DIR

logger = logging.getLogger(__name__)

SCREENSHOT_DIR = Path(DEFAULT_RESULTS_DIR) / "screenshots"
HTML_DIR = Path(DEFAULT_RESULTS_DIR) / "html"

_ALPHABET = string.ascii_lowercase + string.digits


# ---------------------------------------------------------------------------
# Waits
# ---------------------------------------------------------------------------


async def wait_for_visible(page: Page, selector: str, timeout: Optional[float] = None) -> None:
    await page.locator(selector).first.wait_for(state="visible", timeout=timeout)


async def wait_for_hidden(page: Page, selector: str, timeout: Optional[float] = None) -> None:
    await page.locator(selector).first.wait_for(state="hidden", timeout=timeout)


async def wait_for_url(
    page: Page,
    pattern: Union[str, Pattern[str]],
    timeout: Optional[float] = None,
) -> None:
    """Wait until the URL matches a glob string or compiled regex."""
    await page.wait_for_url(pattern, timeout=timeout)


async def wait_for_dom_content_loaded(page: Page) -> None:
    await page.wait_for_load_state("domcontentloaded")


async def wait_for_text(page: Page, text: str, timeout: Optional[float] = None) -> None:
    """Wait until some element showing *text* becomes visible."""
    await page.get_by_text(text).first.wait_for(state="visible", timeout=timeout)


# ---------------------------------------------------------------------------
# Test data
# ---------------------------------------------------------------------------


def generate_random_string(length: int = 10) -> str:
    return "".join(random.choices(_ALPHABET, k=length))


def generate_unique_id() -> str:
    """Timestamp-seeded identifier, e.g. ``test_1718000000000_k3j9x0a``."""
    return f"test_{int(time.time() * 1000)}_{generate_random_string(7)}"


def get_timestamp() -> str:
    """Filesystem-safe ISO-8601 UTC timestamp."""
    iso = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return re.sub(r"[:.]", "-", iso)


# ---------------------------------------------------------------------------
# Debugging
# ---------------------------------------------------------------------------


async def take_screenshot(page: Page, name: str, output_dir: Optional[Path] = None) -> Path:
    """Full-page screenshot named ``<name>_<timestamp>.png``.

    Callers with settings pass ``settings.screenshot_dir``; the default is
    the screenshots folder of the default results dir.
    """
    path = Path(output_dir or SCREENSHOT_DIR) / f"{name}_{get_timestamp()}.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    await page.screenshot(path=str(path), full_page=True)
    logger.debug("Screenshot saved: %s", path)
    return path


async def log_page_info(page: Page) -> None:
    logger.info("Current URL: %s", page.url)
    logger.info("Page Title: %s", await page.title())


async def save_page_html(page: Page, filename: str, output_dir: Optional[Path] = None) -> Path:
    """Dump the current DOM to ``<output_dir>/<filename>.html``."""
    path = Path(output_dir or HTML_DIR) / f"{filename}.html"
    path.parent.mkdir(parents=True, exist_ok=True)
    content = await page.content()
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.debug("Page HTML saved: %s", path)
    return path


def artifact_name(test_id: str) -> str:
    """Filesystem-safe name for a pytest node id such as ``tests/x.py::test_a[p-1]``."""
    return re.sub(r"[^\w.-]+", "_", test_id.split("::", 1)[-1]).strip("_")


async def capture_failure_artifacts(
    page: Page,
    name: str,
    screenshot_dir: Path,
    html_dir: Path,
) -> tuple[Optional[Path], Optional[Path]]:
    """Save a screenshot and the DOM of a failed test.

    Capture is best effort: a page that is already gone yields ``None``
    for that artifact and a warning, and the test's own failure stands.
    """
    screenshot: Optional[Path] = None
    html: Optional[Path] = None
    try:
        screenshot = await take_screenshot(page, name, screenshot_dir)
    except Exception as e:
        logger.warning("Failure screenshot for %s not captured: %s", name, e)
    try:
        html = await save_page_html(page, f"{name}_{get_timestamp()}", html_dir)
    except Exception as e:
        logger.warning("Failure HTML for %s not captured: %s", name, e)
    logger.info("Failure artifacts for %s: %s, %s", name, screenshot, html)
    return screenshot, html


# ---------------------------------------------------------------------------
# Test outcome tracking (fed by pytest_runtest_makereport)
# ---------------------------------------------------------------------------


def record_phase_report(item, report) -> None:
    """Keep each phase report on the test item as ``rep_setup`` / ``rep_call``."""
    setattr(item, f"rep_{report.when}", report)


def node_failed(node) -> bool:
    """True if the setup or call phase of *node* failed."""
    for phase in ("setup", "call"):
        report = getattr(node, f"rep_{phase}", None)
        if report is not None and report.failed:
            return True
    return False
