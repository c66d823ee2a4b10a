"""
Diagnostic Capture

Screenshot persistence used when element resolution fails and at test
teardown. Capture is best-effort: every failure here is logged and
swallowed so it never hides the error that triggered it.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from playwright.async_api import Page

from .locators.models import LocatorStrategy

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

# Keep generated names well under common filesystem limits
MAX_NAME_LENGTH = 180


def safe_filename(name: str, suffix: str = ".png") -> str:
    """
    Turn an arbitrary label into a filesystem-safe file name.

    Examples:
        >>> safe_filename("test_submit[chromium] failed")
        'test_submit_chromium_failed.png'
    """
    stem = _UNSAFE_CHARS.sub("_", name).strip("_") or "screenshot"
    if stem.endswith(suffix):
        stem = stem[: -len(suffix)]
    return stem[:MAX_NAME_LENGTH] + suffix


def failure_screenshot_name(
    strategies: Iterable[LocatorStrategy],
    when: Optional[datetime] = None,
) -> str:
    """Name for the screenshot taken when a strategy chain is exhausted."""
    timestamp = (when or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    names = "_".join(s.description.replace(" ", "_").replace(":", "") for s in strategies)
    return safe_filename(f"element_not_found_{timestamp}_{names}")


class DiagnosticSink:
    """
    Persists diagnostic screenshots under a directory.

    Usage:
        >>> sink = DiagnosticSink(Path("logs/screenshots"))
        >>> await sink.capture(page, "login_failed")
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def persist(self, filename: str, data: bytes) -> Optional[Path]:
        """
        Write image bytes to the sink directory.

        Args:
            filename: Target file name (sanitized before use)
            data: Encoded image bytes

        Returns:
            Path written, or None if persisting failed
        """
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self.directory / safe_filename(filename)
            path.write_bytes(data)
            logger.info(f"[SCREENSHOT] Saved to: {path}")
            return path
        except Exception as e:
            logger.warning(f"[SCREENSHOT] Error saving screenshot {filename}: {e}")
            return None

    async def capture(self, page: Page, filename: str, full_page: bool = False) -> Optional[Path]:
        """
        Take a screenshot of the page and persist it.

        Args:
            page: Playwright Page instance
            filename: Target file name
            full_page: Whether to capture the full scrollable page

        Returns:
            Path written, or None if capture or persisting failed
        """
        try:
            data = await page.screenshot(type="png", full_page=full_page)
        except Exception as e:
            logger.warning(f"[SCREENSHOT] Failed to capture screenshot: {e}")
            return None
        return self.persist(filename, data)
