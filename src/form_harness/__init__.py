"""
Form Harness

End-to-end UI test harness for a practice web form rendered in four DOM
placements: the main document, an iframe with an id, an iframe without
one, and a shadow-DOM hosted sub-form.
"""

__version__ = "0.1.0"

from .config import HarnessConfig, configure_logging, get_logger
from .context import TOP_LEVEL, BrowsingContext
from .diagnostics import DiagnosticSink
from .errors import (
    ContextFailure,
    HarnessError,
    ResolutionFailure,
    ShadowElementNotFound,
)
from .locators import LocatorKind, LocatorStrategy, StrategyAttempt
from .locators.resolver import ElementResolver, ResolvedElement
from .actions import ActionLayer
from .navigation import ContextNavigator
from .response import ResponseInterpreter
from .pages import PracticeFormPage
from .browser import BrowserConfig, BrowserController

__all__ = [
    "__version__",
    "HarnessConfig",
    "configure_logging",
    "get_logger",
    "TOP_LEVEL",
    "BrowsingContext",
    "DiagnosticSink",
    "HarnessError",
    "ResolutionFailure",
    "ContextFailure",
    "ShadowElementNotFound",
    "LocatorKind",
    "LocatorStrategy",
    "StrategyAttempt",
    "ElementResolver",
    "ResolvedElement",
    "ActionLayer",
    "ContextNavigator",
    "ResponseInterpreter",
    "PracticeFormPage",
    "BrowserConfig",
    "BrowserController",
]
