"""
Harness error taxonomy.

Resolution and context failures are fatal to a single test case and always
reach the caller. Action and interpretation problems never raise; they are
reported as falsy/empty results by their layers.
"""

from typing import Optional, Sequence

from .locators.models import LocatorStrategy, StrategyAttempt


class HarnessError(Exception):
    """Base class for all harness errors."""


class ResolutionFailure(HarnessError):
    """No strategy in a chain located an interactable element.

    Attributes:
        attempts: Every strategy tried, in order, with its error message
    """

    def __init__(self, message: str, attempts: Sequence[StrategyAttempt] = ()):
        super().__init__(message)
        self.attempts: list[StrategyAttempt] = list(attempts)

    @property
    def strategies(self) -> list[LocatorStrategy]:
        """Strategies attempted, in the order they were attempted."""
        return [attempt.strategy for attempt in self.attempts]

    @property
    def last_error(self) -> Optional[str]:
        for attempt in reversed(self.attempts):
            if attempt.error:
                return attempt.error
        return None

    @classmethod
    def from_attempts(cls, attempts: Sequence[StrategyAttempt]) -> "ResolutionFailure":
        descriptions = ", ".join(a.strategy.description for a in attempts)
        last = next((a.error for a in reversed(attempts) if a.error), None)
        message = (
            f"Element not found using any of {len(attempts)} strategies.\n"
            f"Strategies tried: {descriptions}\n"
            f"Last error: {last}"
        )
        return cls(message, attempts)


class ContextFailure(ResolutionFailure):
    """A frame or shadow host could not be located or entered."""


class ShadowElementNotFound(ContextFailure):
    """Every shadow lookup tier failed for a selector."""

    def __init__(
        self,
        selector: str,
        tried: Sequence[str],
        details: Optional[str] = None,
        attempts: Sequence[StrategyAttempt] = (),
    ):
        self.selector = selector
        self.tried = list(tried)
        message = (
            f"Element not found in shadow host (all strategies): {selector}. "
            f"Strategies tried: {', '.join(self.tried)}"
        )
        if details:
            message += f". Details: {details}"
        super().__init__(message, attempts)
