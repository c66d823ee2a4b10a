"""
Unit tests for locator strategy models.

Covers strategy factories, immutability, attempt records and the quoting
helpers used to build XPath and CSS selectors.
"""

import pytest
from pydantic import ValidationError

from form_harness.locators import (
    LocatorKind,
    LocatorStrategy,
    StrategyAttempt,
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
from form_harness.locators.resolver import label_xpath, selector_for


class TestStrategyFactories:
    """Factories set kind, value and a diagnostic description."""

    @pytest.mark.parametrize(
        "strategy, kind, description",
        [
            (by_label("First Name"), LocatorKind.LABEL_TEXT, "Label Text"),
            (by_id("fname"), LocatorKind.ID, "ID: fname"),
            (by_name("First Name"), LocatorKind.NAME, "Name: First Name"),
            (by_placeholder("Name"), LocatorKind.PLACEHOLDER, "Placeholder: Name"),
            (by_xpath("//input[1]"), LocatorKind.XPATH, "XPath"),
            (by_css("input.form-control"), LocatorKind.CSS_SELECTOR, "CSS: input.form-control"),
            (by_partial_text("mail"), LocatorKind.PARTIAL_TEXT, "Partial Text: mail"),
        ],
    )
    def test_factory(self, strategy, kind, description):
        assert strategy.kind is kind
        assert strategy.description == description
        assert str(strategy) == description

    def test_strategies_are_immutable(self):
        strategy = by_id("fname")
        with pytest.raises(ValidationError):
            strategy.value = "lname"

    def test_empty_value_rejected(self):
        with pytest.raises(ValidationError):
            LocatorStrategy(kind=LocatorKind.ID, value="", description="ID")

    def test_equal_strategies_compare_equal(self):
        assert by_id("fname") == by_id("fname")
        assert by_id("fname") != by_name("fname")


class TestStrategyAttempt:
    def test_failed_attempt(self):
        attempt = StrategyAttempt(
            strategy=by_id("fname"), success=False, duration_ms=1500, error="Timeout"
        )
        assert attempt.success is False
        assert attempt.error == "Timeout"

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            StrategyAttempt(strategy=by_id("fname"), success=True, duration_ms=-1)


class TestQuoting:
    """Quoting helpers keep arbitrary text usable inside selectors."""

    def test_xpath_literal_plain(self):
        assert xpath_literal("Email") == "'Email'"

    def test_xpath_literal_single_quote(self):
        assert xpath_literal("O'Brien") == '"O\'Brien"'

    def test_xpath_literal_both_quotes(self):
        literal = xpath_literal("""He said "it's" fine""")
        assert literal == """concat('He said "it', "'", 's" fine')"""

    def test_css_attr_value_escapes(self):
        assert css_attr_value('a"b') == '"a\\"b"'
        assert css_attr_value("a\\b") == '"a\\\\b"'


class TestSelectorFor:
    """Each non-label kind maps to one Playwright selector."""

    @pytest.mark.parametrize(
        "strategy, selector",
        [
            (by_id("fname"), 'css=[id="fname"]'),
            (by_name("First Name"), 'css=[name="First Name"]'),
            (by_placeholder("Name"), 'css=input[placeholder="Name"], textarea[placeholder="Name"]'),
            (by_xpath("//input"), "xpath=//input"),
            (by_css("#fname"), "css=#fname"),
            (by_partial_text("mail"), "xpath=//*[@*[contains(., 'mail')]]"),
        ],
    )
    def test_selector(self, strategy, selector):
        assert selector_for(strategy) == selector

    def test_label_has_no_single_selector(self):
        with pytest.raises(ValueError):
            selector_for(by_label("Email"))

    def test_label_xpath(self):
        assert label_xpath("Email") == "//label[contains(normalize-space(text()), 'Email')]"
