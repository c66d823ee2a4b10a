"""
Configuration and Logging Setup

Provides centralized configuration and logging for the form harness.
Reads LOG_LEVEL and harness tunables from environment variables.

Usage:
    from form_harness.config import configure_logging, get_logger, HarnessConfig

    # Configure at test session startup
    configure_logging()

    # Get logger in any module
    logger = get_logger(__name__)

    # Timeouts, retries and paths
    config = HarnessConfig.from_env()
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.logging import RichHandler

# Load environment variables
load_dotenv()

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s: %(message)s"

DEFAULT_FORM_URL = "https://app.cloudqa.io/home/AutomationPracticeForm"

# Valid log levels
VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level() -> int:
    """
    Get the log level from LOG_LEVEL environment variable.

    Returns:
        Logging level constant (e.g., logging.INFO)

    Supported values:
        DEBUG, INFO, WARNING, ERROR, CRITICAL
    """
    level_str = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    if level_str not in VALID_LEVELS:
        print(
            f"Warning: Invalid LOG_LEVEL '{level_str}'. "
            f"Valid values: {', '.join(VALID_LEVELS.keys())}. "
            f"Using {DEFAULT_LOG_LEVEL}.",
            file=sys.stderr,
        )
        return VALID_LEVELS[DEFAULT_LOG_LEVEL]

    return VALID_LEVELS[level_str]


def configure_logging(
    level: Optional[int] = None,
    verbose: bool = False,
    rich_output: bool = False,
) -> None:
    """
    Configure logging for the form harness.

    Should be called once at test session startup.

    Args:
        level: Override log level (default: from LOG_LEVEL env var)
        verbose: Use detailed format with timestamps (default: simple format)
        rich_output: Render records through rich's RichHandler

    Environment Variables:
        LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL
    """
    if level is None:
        level = get_log_level()

    if rich_output:
        # RichHandler renders its own time and level columns
        logging.basicConfig(
            level=level,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(show_time=verbose, rich_tracebacks=True)],
            force=True,
        )
    else:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT if verbose else LOG_FORMAT_SIMPLE,
            stream=sys.stderr,
            force=True,
        )

    logging.getLogger("form_harness").setLevel(level)

    # Quiet noisy third-party loggers in non-debug mode
    if level > logging.DEBUG:
        logging.getLogger("playwright").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        print(
            f"Warning: Invalid {name} '{raw}', expected an integer. Using {default}.",
            file=sys.stderr,
        )
        return default


@dataclass
class HarnessConfig:
    """
    Tunables for element resolution, actions and response reading.

    All durations are milliseconds.
    """

    # Page under test
    form_url: str = DEFAULT_FORM_URL

    # Bounded wait applied to each locator strategy
    locator_timeout_ms: int = 10000

    # Best-effort action retries and fixed backoff between them
    action_retries: int = 3
    action_backoff_ms: int = 500

    # Wait for document.readyState == "complete" after context switches
    ready_state_timeout_ms: int = 10000

    # Delay before reading the page after a submit
    submit_settle_ms: int = 2000

    # Where diagnostic screenshots are written
    screenshot_dir: Path = field(default_factory=lambda: Path("logs") / "screenshots")

    # Custom element that hosts the shadow-DOM form
    shadow_host_tag: str = "shadow-form"

    def __post_init__(self):
        if self.action_retries < 1:
            raise ValueError("action_retries must be >= 1")
        # Playwright reads a zero timeout as "wait forever"
        if self.locator_timeout_ms <= 0:
            raise ValueError("locator_timeout_ms must be > 0")
        if self.ready_state_timeout_ms <= 0:
            raise ValueError("ready_state_timeout_ms must be > 0")

    @classmethod
    def from_env(cls) -> "HarnessConfig":
        """
        Create HarnessConfig from environment variables.

        Environment variables:
            FORM_URL: URL of the practice form
            LOCATOR_TIMEOUT_MS: per-strategy lookup timeout (default: 10000)
            ACTION_RETRIES: click/type attempts (default: 3)
            ACTION_BACKOFF_MS: delay between attempts (default: 500)
            READY_STATE_TIMEOUT_MS: ready-state wait (default: 10000)
            SUBMIT_SETTLE_MS: settle delay after submit (default: 2000)
            SCREENSHOT_DIR: path (default: logs/screenshots)
            SHADOW_HOST_TAG: shadow host tag name (default: shadow-form)
        """
        return cls(
            form_url=os.getenv("FORM_URL", DEFAULT_FORM_URL),
            locator_timeout_ms=_env_int("LOCATOR_TIMEOUT_MS", 10000),
            action_retries=_env_int("ACTION_RETRIES", 3),
            action_backoff_ms=_env_int("ACTION_BACKOFF_MS", 500),
            ready_state_timeout_ms=_env_int("READY_STATE_TIMEOUT_MS", 10000),
            submit_settle_ms=_env_int("SUBMIT_SETTLE_MS", 2000),
            screenshot_dir=Path(os.getenv("SCREENSHOT_DIR", str(Path("logs") / "screenshots"))),
            shadow_host_tag=os.getenv("SHADOW_HOST_TAG", "shadow-form"),
        )
