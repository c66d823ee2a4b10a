"""
Integration tests for reading the page shown after a submit.

Confirmation needs a submission heading AND a JSON-shaped payload; pages
with only one of the two signals are not treated as confirmed.
"""

import pytest

from form_harness.response import ResponseInterpreter

HEADING_ONLY = """
<div id="response"><h2>Submit Data</h2><p>Thank you for your submission.</p></div>
"""

PAYLOAD_ONLY = """
<div id="response"><pre>{"First Name": "John", "Email": "john.doe@example.com"}</pre></div>
"""

BOTH = """
<div id="response">
  <h3>Submitted Data</h3>
  <pre>{
  "First Name": "John",
  "Email": "john.doe@example.com"
}</pre>
</div>
"""

GENERIC_PAYLOAD = """
<div><h2>Form Data</h2><pre>{"fname": "A", "lname": "B"}</pre></div>
"""


@pytest.fixture
def interpreter(harness_config) -> ResponseInterpreter:
    return ResponseInterpreter(harness_config)


@pytest.mark.submission
class TestConjunctiveConfirmation:
    """Either signal alone is not a confirmation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "markup, expected",
        [
            (HEADING_ONLY, False),
            (PAYLOAD_ONLY, False),
            (BOTH, True),
            (GENERIC_PAYLOAD, True),
            ("<p>Nothing happened</p>", False),
        ],
        ids=["heading-only", "payload-only", "both", "generic-payload", "empty"],
    )
    async def test_confirmation(self, browser, interpreter, markup, expected):
        await browser.page.set_content(markup)
        assert await interpreter.is_submission_confirmed(browser.page.main_frame) is expected

    @pytest.mark.asyncio
    async def test_extracts_pairs_under_heading(self, browser, interpreter):
        await browser.page.set_content(BOTH)

        data = await interpreter.extract_submission_data(browser.page.main_frame)

        assert data == {"First Name": "John", "Email": "john.doe@example.com"}

    @pytest.mark.asyncio
    async def test_markup_scan_without_heading(self, browser, interpreter):
        await browser.page.set_content(PAYLOAD_ONLY)

        data = await interpreter.extract_submission_data(browser.page.main_frame, settle=False)

        assert data["First Name"] == "John"

    @pytest.mark.asyncio
    async def test_nothing_to_extract(self, browser, interpreter):
        await browser.page.set_content(HEADING_ONLY)

        data = await interpreter.extract_submission_data(browser.page.main_frame, settle=False)

        assert data == {}
