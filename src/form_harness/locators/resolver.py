"""
Element Resolver

Finds interactable elements by walking a priority-ordered strategy chain:
- Each strategy gets a bounded lookup in the current scope
- The first element that is found AND visible AND enabled wins
- Later strategies are never consulted once an earlier one succeeds
- Exhausting the chain raises ResolutionFailure with every attempt and
  takes a best-effort diagnostic screenshot
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Union

from playwright.async_api import ElementHandle, Frame, Locator, Page

from ..config import HarnessConfig
from ..context import TOP_LEVEL, BrowsingContext
from ..diagnostics import DiagnosticSink, failure_screenshot_name
from ..errors import ResolutionFailure
from .models import (
    LocatorKind,
    LocatorStrategy,
    StrategyAttempt,
    StrategyChain,
    css_attr_value,
    xpath_literal,
)

logger = logging.getLogger(__name__)

# Anything lookups can be scoped to: a page, a frame, or a shadow host locator
Scope = Union[Page, Frame, Locator]

# Resolved handles: locators re-query on every call, handles come from scripts
Element = Union[Locator, ElementHandle]

INTERACTIVE_XPATH = "*[self::input or self::select or self::textarea]"


class ElementNotInteractable(Exception):
    """Element was located but is hidden or disabled."""


@dataclass(frozen=True)
class ResolvedElement:
    """
    A live element produced by one resolution call.

    Interactability is volatile; call is_interactable() before relying on it.
    Do not keep instances across navigations or context switches.
    """

    element: Element
    strategy: LocatorStrategy
    context: BrowsingContext = TOP_LEVEL

    async def is_interactable(self) -> bool:
        return await is_interactable(self.element)


async def is_interactable(element: Element) -> bool:
    """Point-in-time check that an element is visible and enabled."""
    try:
        return await element.is_visible() and await element.is_enabled()
    except Exception as e:
        logger.debug(f"Interactability check failed: {e}")
        return False


def page_of(scope: Scope) -> Page:
    """Owning page of a page, frame or locator."""
    if isinstance(scope, Page):
        return scope
    return scope.page


def describe_error(error: Exception) -> str:
    """First line of an error message; Playwright appends long call logs."""
    text = str(error).strip()
    first_line = text.splitlines()[0] if text else ""
    return first_line or type(error).__name__


def selector_for(strategy: LocatorStrategy) -> str:
    """
    Playwright selector for a non-label strategy.

    Id, name and placeholder lookups use CSS so they also work from a
    shadow host scope, where Playwright's CSS engine pierces open roots.
    """
    kind, value = strategy.kind, strategy.value

    if kind is LocatorKind.ID:
        return f"css=[id={css_attr_value(value)}]"
    if kind is LocatorKind.NAME:
        return f"css=[name={css_attr_value(value)}]"
    if kind is LocatorKind.PLACEHOLDER:
        quoted = css_attr_value(value)
        return f"css=input[placeholder={quoted}], textarea[placeholder={quoted}]"
    if kind is LocatorKind.XPATH:
        return f"xpath={value}"
    if kind is LocatorKind.CSS_SELECTOR:
        return f"css={value}"
    if kind is LocatorKind.PARTIAL_TEXT:
        return f"xpath=//*[@*[contains(., {xpath_literal(value)})]]"

    raise ValueError(f"No single selector for locator kind: {kind.value}")


def label_xpath(label_text: str) -> str:
    return f"//label[contains(normalize-space(text()), {xpath_literal(label_text)})]"


class ElementResolver:
    """
    Resolves strategy chains against a scope.

    Usage:
        >>> resolver = ElementResolver(HarnessConfig(), DiagnosticSink(Path("logs/screenshots")))
        >>> resolved = await resolver.resolve(page.main_frame, [by_label("Email"), by_id("email")])
        >>> await resolved.element.fill("john@example.com")
    """

    def __init__(
        self,
        config: Optional[HarnessConfig] = None,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        self.config = config or HarnessConfig.from_env()
        self.diagnostics = diagnostics

    @property
    def timeout_ms(self) -> int:
        return self.config.locator_timeout_ms

    async def resolve(
        self,
        scope: Scope,
        strategies: StrategyChain,
        context: BrowsingContext = TOP_LEVEL,
    ) -> ResolvedElement:
        """
        Return the element found by the highest-priority working strategy.

        Args:
            scope: Page, Frame or shadow host Locator to search in
            strategies: Non-empty chain, most trusted first
            context: Browsing context the scope belongs to

        Returns:
            ResolvedElement from the first strategy whose element is interactable

        Raises:
            ValueError: If the chain is empty
            ResolutionFailure: If every strategy failed
        """
        chain = list(strategies)
        if not chain:
            raise ValueError("Strategy chain must contain at least one strategy")

        attempts: list[StrategyAttempt] = []

        for strategy in chain:
            logger.info(f"[LOCATOR] Trying strategy: {strategy.description} ({context})")
            start_time = time.monotonic()

            try:
                element = await self._find(scope, strategy)
                if not await is_interactable(element):
                    raise ElementNotInteractable(
                        f"Element found by {strategy.description} is not visible and enabled"
                    )
            except Exception as e:
                duration_ms = int((time.monotonic() - start_time) * 1000)
                error = describe_error(e)
                attempts.append(
                    StrategyAttempt(
                        strategy=strategy, success=False, duration_ms=duration_ms, error=error
                    )
                )
                logger.warning(f"[LOCATOR] ✗ Failed: {strategy.description} - {error}")
                continue

            duration_ms = int((time.monotonic() - start_time) * 1000)
            attempts.append(StrategyAttempt(strategy=strategy, success=True, duration_ms=duration_ms))
            logger.info(f"[LOCATOR] ✓ Success with: {strategy.description} ({duration_ms}ms)")
            return ResolvedElement(element=element, strategy=strategy, context=context)

        failure = ResolutionFailure.from_attempts(attempts)
        await self._capture_failure(scope, chain)
        raise failure

    async def _find(self, scope: Scope, strategy: LocatorStrategy) -> Locator:
        if strategy.kind is LocatorKind.LABEL_TEXT:
            return await self._find_by_label(scope, strategy.value)

        locator = scope.locator(selector_for(strategy)).first
        await locator.wait_for(state="attached", timeout=self.timeout_ms)
        return locator

    async def _find_by_label(self, scope: Scope, label_text: str) -> Locator:
        """
        Find the control associated with a label, in three tiers.

        1. Label's ``for`` attribute resolved by id
        2. First input/select/textarea after the label in document order
        3. First input/select/textarea inside the label's parent
        """
        base = label_xpath(label_text)
        label = scope.locator(f"xpath={base}").first
        await label.wait_for(state="attached", timeout=self.timeout_ms)

        for_attribute = await label.get_attribute("for")
        if for_attribute:
            target = scope.locator(f"css=[id={css_attr_value(for_attribute)}]").first
            if await target.count() > 0:
                logger.debug(f"Label '{label_text}' resolved through for='{for_attribute}'")
                return target
            logger.debug(f"Label '{label_text}' points at missing id '{for_attribute}'")

        following = scope.locator(f"xpath={base}/following::{INTERACTIVE_XPATH}[1]").first
        if await following.count() > 0:
            logger.debug(f"Label '{label_text}' resolved through following control")
            return following

        nested = scope.locator(f"xpath={base}/..//{INTERACTIVE_XPATH}").first
        if await nested.count() > 0:
            logger.debug(f"Label '{label_text}' resolved through parent container")
            return nested

        raise LookupError(f"Could not find element by label text: {label_text}")

    async def _capture_failure(self, scope: Scope, chain: list[LocatorStrategy]) -> None:
        if self.diagnostics is None:
            return
        try:
            await self.diagnostics.capture(page_of(scope), failure_screenshot_name(chain))
        except Exception as e:
            logger.warning(f"[SCREENSHOT] Failed to capture screenshot: {e}")
