"""
Element Location

Locator strategy models and the fallback-chain resolver.
The resolver lives in ``form_harness.locators.resolver``.
"""

from .models import (
    LocatorKind,
    LocatorStrategy,
    StrategyAttempt,
    StrategyChain,
    by_css,
    by_id,
    by_label,
    by_name,
    by_partial_text,
    by_placeholder,
    by_xpath,
    css_attr_value,
    xpath_literal,
)

__all__ = [
    "LocatorKind",
    "LocatorStrategy",
    "StrategyAttempt",
    "StrategyChain",
    "by_css",
    "by_id",
    "by_label",
    "by_name",
    "by_partial_text",
    "by_placeholder",
    "by_xpath",
    "css_attr_value",
    "xpath_literal",
]
