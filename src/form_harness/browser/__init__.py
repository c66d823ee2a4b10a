"""Browser session management."""

from .controller import BrowserConfig, BrowserController, create_browser

__all__ = ["BrowserConfig", "BrowserController", "create_browser"]
