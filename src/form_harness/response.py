"""
Response Interpreter

Reads back what a submit actually sent by scanning the rendered page.
The target application has no stable success marker, so everything here
is heuristic:
- HeadingTextScan: key: value lines in the container of a "Submit Data"
  style heading
- MarkupPatternScan: quoted "key": "value" pairs anywhere in the markup

Nothing in this module raises on unparsable output. No data yields an
empty dict and confirmation yields False. A missing key means the value
could not be recovered, not that the field was empty.
"""

import asyncio
import logging
import re
from typing import Iterable, Optional, Protocol

from playwright.async_api import Frame

from .config import HarnessConfig
from .locators.models import xpath_literal
from .locators.resolver import describe_error

logger = logging.getLogger(__name__)

SUBMISSION_HEADINGS = ("Submit Data", "Submitted Data", "Form Data")

HEADING_TAGS = ("h1", "h2", "h3", "h4")

EXPECTED_KEYS = frozenset(
    {
        "First Name",
        "Last Name",
        "Gender",
        "Date of Birth",
        "Mobile Number",
        "Email",
        "Country",
        "State",
        "Hobbies",
        "About Yourself",
        "Username",
        "Password",
        "Confirm Password",
        "Agreement",
    }
)

QUOTED_PAIR_RE = re.compile(r'"([^"\\]{1,100})"\s*:\s*"((?:[^"\\]|\\.)*)"')

# "key: value" with optional quotes and a trailing comma, as rendered JSON shows
TEXT_PAIR_RE = re.compile(r'^\s*"?([^":{}\[\]]{1,100}?)"?\s*:\s*"?(.*?)"?\s*,?\s*$')


def _unescape(value: str) -> str:
    return value.replace('\\"', '"').replace("\\\\", "\\")


def parse_key_value_text(text: str) -> dict[str, str]:
    """
    Parse ``key: value`` lines from rendered text.

    Braces, quotes and trailing commas are stripped so pretty-printed
    JSON parses the same as plain text.

    Examples:
        >>> parse_key_value_text('{\\n  "First Name": "John",\\n  "Email": "j@x.io"\\n}')
        {'First Name': 'John', 'Email': 'j@x.io'}
    """
    pairs: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line in ("{", "}", "[", "]"):
            continue
        match = TEXT_PAIR_RE.match(line)
        if not match:
            continue
        key = match.group(1).strip()
        value = _unescape(match.group(2).strip())
        if key and key not in pairs:
            pairs[key] = value
    return pairs


def scan_quoted_pairs(
    markup: str,
    expected_keys: Iterable[str] = EXPECTED_KEYS,
) -> dict[str, str]:
    """
    Collect ``"key": "value"`` pairs from markup.

    If any pair has an expected key, only pairs with expected keys are
    kept. Otherwise every pair found is returned.
    """
    expected = set(expected_keys)
    found: dict[str, str] = {}
    for key, value in QUOTED_PAIR_RE.findall(markup):
        key = key.strip()
        if key not in found:
            found[key] = _unescape(value)

    relevant = {key: value for key, value in found.items() if key in expected}
    return relevant or found


def has_expected_payload(markup: str, expected_keys: Iterable[str] = EXPECTED_KEYS) -> bool:
    """True if markup has a quoted pair whose key is expected."""
    expected = set(expected_keys)
    return any(key.strip() in expected for key, _ in QUOTED_PAIR_RE.findall(markup))


def has_generic_payload(markup: str, minimum: int = 2) -> bool:
    """True if markup has at least ``minimum`` quoted key:value pairs anywhere."""
    return len(QUOTED_PAIR_RE.findall(markup)) >= minimum


def heading_xpath(headings: Iterable[str] = SUBMISSION_HEADINGS) -> str:
    tags = " or ".join(f"self::{tag}" for tag in HEADING_TAGS)
    texts = " or ".join(f"contains(normalize-space(.), {xpath_literal(h)})" for h in headings)
    return f"//*[({tags}) and ({texts})]"


class ScanStage(Protocol):
    """One way of recovering submitted data from a frame."""

    name: str

    async def scan(self, frame: Frame) -> dict[str, str]:
        ...


class HeadingTextScan:
    """Parse the text of the container around a submission heading."""

    name = "heading text"

    def __init__(self, headings: Iterable[str] = SUBMISSION_HEADINGS):
        self.headings = tuple(headings)

    async def scan(self, frame: Frame) -> dict[str, str]:
        heading = frame.locator(f"xpath={heading_xpath(self.headings)}").first
        if await heading.count() == 0:
            return {}
        container = heading.locator("xpath=..")
        text = await container.inner_text()
        return parse_key_value_text(text)


class MarkupPatternScan:
    """Regex scan of the full frame markup."""

    name = "markup pattern"

    def __init__(self, expected_keys: Iterable[str] = EXPECTED_KEYS):
        self.expected_keys = frozenset(expected_keys)

    async def scan(self, frame: Frame) -> dict[str, str]:
        return scan_quoted_pairs(await frame.content(), self.expected_keys)


class ResponseInterpreter:
    """
    Heuristic reader for the page shown after a submit.

    Usage:
        >>> interpreter = ResponseInterpreter(config)
        >>> data = await interpreter.extract_submission_data(page.main_frame)
        >>> data.get("First Name")
        'John'
    """

    def __init__(
        self,
        config: Optional[HarnessConfig] = None,
        headings: Iterable[str] = SUBMISSION_HEADINGS,
        expected_keys: Iterable[str] = EXPECTED_KEYS,
    ):
        self.config = config or HarnessConfig.from_env()
        self.headings = tuple(headings)
        self.expected_keys = frozenset(expected_keys)
        self.stages: list[ScanStage] = [
            HeadingTextScan(self.headings),
            MarkupPatternScan(self.expected_keys),
        ]

    async def settle(self) -> None:
        await asyncio.sleep(self.config.submit_settle_ms / 1000)

    async def extract_submission_data(self, frame: Frame, settle: bool = True) -> dict[str, str]:
        """
        Recover submitted key/value data from the frame.

        Earlier stages win; later stages only fill in missing keys.

        Returns:
            Mapping of field label to submitted value (empty if nothing found)
        """
        if settle:
            await self.settle()

        data: dict[str, str] = {}
        for stage in self.stages:
            try:
                found = await stage.scan(frame)
            except Exception as e:
                logger.warning(f"[RESPONSE] {stage.name} scan failed: {describe_error(e)}")
                continue
            logger.debug(f"[RESPONSE] {stage.name} scan found {len(found)} pairs")
            for key, value in found.items():
                data.setdefault(key, value)

        logger.info(f"[RESPONSE] Recovered {len(data)} submitted fields")
        return data

    async def has_submission_heading(self, frame: Frame) -> bool:
        try:
            return await frame.locator(f"xpath={heading_xpath(self.headings)}").count() > 0
        except Exception as e:
            logger.warning(f"[RESPONSE] Heading check failed: {describe_error(e)}")
            return False

    async def is_submission_confirmed(self, frame: Frame, settle: bool = True) -> bool:
        """
        True only if a submission heading AND a JSON-shaped payload are present.

        The payload is either a quoted pair with an expected key, or at
        least two quoted key:value pairs anywhere on the page.
        """
        if settle:
            await self.settle()

        heading = await self.has_submission_heading(frame)
        try:
            markup = await frame.content()
        except Exception as e:
            logger.warning(f"[RESPONSE] Could not read markup: {describe_error(e)}")
            return False

        payload = has_expected_payload(markup, self.expected_keys) or has_generic_payload(markup)
        logger.info(f"[RESPONSE] heading={heading} payload={payload}")
        return heading and payload
