"""
Browser Controller

Owns one Playwright browser, context and page per test session.
Sessions are never pooled or persisted; every test launches a fresh
browser and tears it down afterwards.
"""

import logging
import os
from dataclasses import dataclass
from typing import Literal, Optional

from dotenv import load_dotenv
from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

load_dotenv()

logger = logging.getLogger(__name__)

BrowserType = Literal["chromium", "firefox", "webkit"]

# Friendly names accepted in BROWSER_TYPE
BROWSER_ALIASES = {
    "chrome": "chromium",
    "chromium": "chromium",
    "firefox": "firefox",
    "webkit": "webkit",
    "safari": "webkit",
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class BrowserConfig:
    """
    Configuration for a browser session.

    Reads from environment variables with sensible defaults.
    """

    browser_type: BrowserType = "chromium"

    # Runs are unattended, so headless unless asked otherwise
    headless: bool = True

    viewport_width: int = 1280
    viewport_height: int = 720

    # Slow motion delay in ms (useful for debugging)
    slow_mo: int = 0

    # Default action timeout in ms
    page_load_timeout: int = 30000

    # Navigation timeout in ms
    navigation_timeout: int = 30000

    @classmethod
    def from_env(cls) -> "BrowserConfig":
        """
        Create BrowserConfig from environment variables.

        Environment variables:
            BROWSER_TYPE: chrome, chromium, firefox, webkit or safari (default: chromium)
            BROWSER_HEADLESS: true/false (default: true)
            BROWSER_VIEWPORT_WIDTH: int (default: 1280)
            BROWSER_VIEWPORT_HEIGHT: int (default: 720)
            BROWSER_SLOW_MO: int in ms (default: 0)
            PAGE_LOAD_TIMEOUT: int in ms (default: 30000)
            NAVIGATION_TIMEOUT: int in ms (default: 30000)
        """
        env_type = os.getenv("BROWSER_TYPE", "chromium").lower()

        return cls(
            browser_type=BROWSER_ALIASES.get(env_type, "chromium"),
            headless=_env_flag("BROWSER_HEADLESS", "true"),
            viewport_width=int(os.getenv("BROWSER_VIEWPORT_WIDTH", "1280")),
            viewport_height=int(os.getenv("BROWSER_VIEWPORT_HEIGHT", "720")),
            slow_mo=int(os.getenv("BROWSER_SLOW_MO", "0")),
            page_load_timeout=int(os.getenv("PAGE_LOAD_TIMEOUT", "30000")),
            navigation_timeout=int(os.getenv("NAVIGATION_TIMEOUT", "30000")),
        )


class BrowserController:
    """
    Launches and tears down a single browser session.

    Usage:
        >>> async with BrowserController(BrowserConfig(headless=True)) as browser:
        ...     await browser.page.goto("https://example.com")
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig.from_env()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def is_initialized(self) -> bool:
        return self._browser is not None

    @property
    def page(self) -> Page:
        """The session's page."""
        if self._page is None:
            raise RuntimeError("Browser session not initialized")
        return self._page

    async def initialize(self) -> None:
        """Start Playwright, launch the browser and open one page."""
        if self._playwright is not None:
            return

        self._playwright = await async_playwright().start()
        launcher = self._get_browser_launcher()

        logger.info(
            f"[BROWSER] Launching {self.config.browser_type} (headless={self.config.headless})"
        )
        try:
            self._browser = await launcher.launch(
                headless=self.config.headless,
                slow_mo=self.config.slow_mo,
            )
            self._context = await self._browser.new_context(
                viewport={
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                },
            )
        except Exception:
            await self.close()
            raise

        self._context.set_default_timeout(self.config.page_load_timeout)
        self._context.set_default_navigation_timeout(self.config.navigation_timeout)
        self._page = await self._context.new_page()

    def _get_browser_launcher(self):
        """Get the appropriate browser launcher based on config."""
        if self._playwright is None:
            raise RuntimeError("Playwright not initialized")

        launchers = {
            "chromium": self._playwright.chromium,
            "firefox": self._playwright.firefox,
            "webkit": self._playwright.webkit,
        }
        return launchers.get(self.config.browser_type, self._playwright.chromium)

    async def close(self) -> None:
        """Close the browser and release Playwright. Safe to call twice."""
        self._page = None

        if self._context:
            try:
                await self._context.close()
            except Exception as e:
                logger.debug(f"[BROWSER] Error closing context: {e}")
            self._context = None

        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug(f"[BROWSER] Error closing browser: {e}")
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.debug(f"[BROWSER] Error stopping Playwright: {e}")
            self._playwright = None

    async def __aenter__(self) -> "BrowserController":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_browser(config: Optional[BrowserConfig] = None) -> BrowserController:
    """
    Create an uninitialized browser controller.

    Use with async context manager:
        >>> async with create_browser() as browser:
        ...     await browser.page.goto("https://example.com")
    """
    return BrowserController(config)
