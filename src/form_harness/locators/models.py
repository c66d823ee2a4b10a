"""
Data models for element location.

This module defines Pydantic models for the fallback locator chain:
- LocatorKind: Closed set of ways to find an element
- LocatorStrategy: One immutable way to find an element
- StrategyAttempt: Record of a single strategy attempt (for diagnostics)

Strategies are plain data. The resolver dispatches on ``kind``; there is no
subclass per strategy.
"""

from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field


class LocatorKind(str, Enum):
    """How a strategy finds its element."""

    LABEL_TEXT = "label_text"
    ID = "id"
    NAME = "name"
    PLACEHOLDER = "placeholder"
    XPATH = "xpath"
    CSS_SELECTOR = "css_selector"
    PARTIAL_TEXT = "partial_text"


class LocatorStrategy(BaseModel):
    """One way to find an element.

    Validation Rules:
    - Immutable once constructed
    - kind and value together fully determine lookup behavior
    - description is only used for logs and failure messages
    """

    model_config = ConfigDict(frozen=True)

    kind: LocatorKind
    """Lookup technique."""

    value: str = Field(min_length=1)
    """Raw selector or text to match."""

    description: str
    """Human-readable label used in diagnostics."""

    def __str__(self) -> str:
        return self.description


# A chain is ordered by trust: label association first, brittle XPath last.
StrategyChain = Sequence[LocatorStrategy]


def by_label(label_text: str) -> LocatorStrategy:
    return LocatorStrategy(kind=LocatorKind.LABEL_TEXT, value=label_text, description="Label Text")


def by_id(element_id: str) -> LocatorStrategy:
    return LocatorStrategy(kind=LocatorKind.ID, value=element_id, description=f"ID: {element_id}")


def by_name(name: str) -> LocatorStrategy:
    return LocatorStrategy(kind=LocatorKind.NAME, value=name, description=f"Name: {name}")


def by_placeholder(placeholder: str) -> LocatorStrategy:
    return LocatorStrategy(
        kind=LocatorKind.PLACEHOLDER, value=placeholder, description=f"Placeholder: {placeholder}"
    )


def by_xpath(xpath: str) -> LocatorStrategy:
    return LocatorStrategy(kind=LocatorKind.XPATH, value=xpath, description="XPath")


def by_css(css: str) -> LocatorStrategy:
    return LocatorStrategy(kind=LocatorKind.CSS_SELECTOR, value=css, description=f"CSS: {css}")


def by_partial_text(text: str) -> LocatorStrategy:
    return LocatorStrategy(
        kind=LocatorKind.PARTIAL_TEXT, value=text, description=f"Partial Text: {text}"
    )


class StrategyAttempt(BaseModel):
    """Record of a single strategy attempt.

    Collected by the resolver in attempt order and carried by
    ResolutionFailure.

    Validation Rules:
    - duration_ms must be >= 0
    - error should be None if success is True
    """

    strategy: LocatorStrategy
    """Strategy that was tried."""

    success: bool
    """Whether the strategy produced an interactable element."""

    duration_ms: int = Field(ge=0)
    """Time taken for this attempt in milliseconds."""

    error: Optional[str] = None
    """Error message if failed."""


def xpath_literal(text: str) -> str:
    """
    Quote text for use as an XPath 1.0 string literal.

    XPath 1.0 has no escape sequences, so text containing both quote
    characters is split and joined with concat().

    Examples:
        >>> xpath_literal("Email")
        "'Email'"
        >>> xpath_literal("O'Brien")
        '"O\\'Brien"'
    """
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def css_attr_value(text: str) -> str:
    """Quote text as a double-quoted CSS attribute value."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
