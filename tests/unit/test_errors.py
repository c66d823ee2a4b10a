"""
Unit tests for the error taxonomy and rich failure reports.
"""

from io import StringIO

from rich.console import Console

from form_harness.errors import (
    ContextFailure,
    HarnessError,
    ResolutionFailure,
    ShadowElementNotFound,
)
from form_harness.locators import StrategyAttempt, by_id, by_label, by_xpath
from form_harness.reporting import print_resolution_failure, render_resolution_failure


def _attempts():
    return [
        StrategyAttempt(strategy=by_label("Email"), success=False, duration_ms=10, error="no label"),
        StrategyAttempt(strategy=by_id("email"), success=False, duration_ms=20, error="Timeout"),
        StrategyAttempt(strategy=by_xpath("//input"), success=False, duration_ms=30, error="hidden"),
    ]


class TestResolutionFailure:
    """Failures carry every attempted strategy in attempt order."""

    def test_from_attempts(self):
        failure = ResolutionFailure.from_attempts(_attempts())

        assert failure.strategies == [by_label("Email"), by_id("email"), by_xpath("//input")]
        assert failure.last_error == "hidden"
        message = str(failure)
        assert "any of 3 strategies" in message
        assert "Strategies tried: Label Text, ID: email, XPath" in message
        assert "Last error: hidden" in message

    def test_last_error_skips_empty_errors(self):
        attempts = _attempts()[:1] + [
            StrategyAttempt(strategy=by_id("x"), success=False, duration_ms=0)
        ]
        assert ResolutionFailure.from_attempts(attempts).last_error == "no label"

    def test_hierarchy(self):
        assert issubclass(ResolutionFailure, HarnessError)
        assert issubclass(ContextFailure, ResolutionFailure)
        assert issubclass(ShadowElementNotFound, ContextFailure)

    def test_shadow_failure_message(self):
        failure = ShadowElementNotFound("select#state", ["light", "shadow"], "no match")

        assert failure.selector == "select#state"
        assert failure.tried == ["light", "shadow"]
        assert failure.attempts == []
        assert str(failure) == (
            "Element not found in shadow host (all strategies): select#state. "
            "Strategies tried: light, shadow. Details: no match"
        )


class TestFailureReport:
    """Rich rendering of failures."""

    def test_one_row_per_attempt(self):
        table = render_resolution_failure(ResolutionFailure.from_attempts(_attempts()))
        assert table.row_count == 3
        assert table.title == "ResolutionFailure"

    def test_shadow_tiers_are_listed(self):
        table = render_resolution_failure(ShadowElementNotFound("input", ["a", "b", "c"]))
        assert table.row_count == 3

    def test_print(self):
        buffer = StringIO()
        console = Console(file=buffer, width=200, color_system=None)

        print_resolution_failure(ResolutionFailure.from_attempts(_attempts()), console)

        output = buffer.getvalue()
        assert "Element not found using any of 3 strategies." in output
        assert "ID: email" in output
        assert "Timeout" in output
