"""
Fixtures for browser-backed tests.

Every test gets its own headless Chromium session pointed at a local copy
of the practice form, and a screenshot of the final page at teardown.
"""

from pathlib import Path

import pytest
import pytest_asyncio

from form_harness.browser import BrowserConfig, BrowserController
from form_harness.config import HarnessConfig
from form_harness.diagnostics import DiagnosticSink
from form_harness.pages import PracticeFormPage

from practice_page import build_practice_page, write_page


@pytest.fixture
def practice_form_url(tmp_path: Path) -> str:
    return write_page(tmp_path, "practice_form.html", build_practice_page())


@pytest.fixture
def harness_config(tmp_path: Path, practice_form_url: str) -> HarnessConfig:
    """Short waits so failing strategies do not stall the suite."""
    return HarnessConfig(
        form_url=practice_form_url,
        locator_timeout_ms=1500,
        action_retries=3,
        action_backoff_ms=50,
        ready_state_timeout_ms=5000,
        submit_settle_ms=200,
        screenshot_dir=tmp_path / "screenshots",
    )


@pytest_asyncio.fixture
async def browser(request, harness_config: HarnessConfig):
    """One fresh headless Chromium per test, screenshotted at teardown."""
    controller = BrowserController(BrowserConfig(browser_type="chromium", headless=True))
    try:
        await controller.initialize()
    except Exception as e:
        await controller.close()
        pytest.skip(f"Chromium is not available: {e}")

    yield controller

    report = getattr(request.node, "rep_call", None)
    outcome = report.outcome if report is not None else "not_run"
    sink = DiagnosticSink(harness_config.screenshot_dir)
    await sink.capture(controller.page, f"{request.node.name}_{outcome}")
    await controller.close()


@pytest_asyncio.fixture
async def form(browser: BrowserController, harness_config: HarnessConfig) -> PracticeFormPage:
    """Practice form facade, already navigated to the local page."""
    page = PracticeFormPage(browser.page, harness_config)
    await page.navigate()
    return page
