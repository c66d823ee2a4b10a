"""
Context Navigator

Makes crossing iframe and shadow-DOM boundaries an explicit operation:
- Entering iframes by id or by the heading that precedes them
- Returning to the top-level document (always to the root, never the parent)
- Locating shadow hosts by heading and resolving elements inside them
- Scoped context managers that restore the top level even on errors

Only one context is current at a time. Every lookup made through
``navigator.scope`` runs against it.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Union

from playwright.async_api import ElementHandle, Frame, Locator, Page

from .config import HarnessConfig
from .context import TOP_LEVEL, BrowsingContext
from .errors import ContextFailure, ResolutionFailure, ShadowElementNotFound
from .locators.models import (
    LocatorKind,
    LocatorStrategy,
    StrategyAttempt,
    StrategyChain,
    by_id,
    by_xpath,
    xpath_literal,
)
from .locators.resolver import ElementResolver, ResolvedElement, describe_error

logger = logging.getLogger(__name__)

# Heading tags tried, in order, when an iframe has no stable id
IFRAME_HEADING_TAGS = ("h1", "h2", "label")

SHADOW_TIERS = ("host light DOM", "shadow root query", "script shadowRoot query")


class ContextNavigator:
    """
    Tracks and switches the active browsing context of one page.

    Usage:
        >>> navigator = ContextNavigator(page, resolver)
        >>> async with navigator.iframe_by_id("iframeId") as frame:
        ...     resolved = await resolver.resolve(navigator.scope, chain, navigator.current)
        >>> navigator.current.is_top_level
        True
    """

    def __init__(
        self,
        page: Page,
        resolver: ElementResolver,
        config: Optional[HarnessConfig] = None,
    ):
        self.page = page
        self.resolver = resolver
        self.config = config or resolver.config

        self._context: BrowsingContext = TOP_LEVEL
        self._scopes: list[Union[Frame, Locator]] = []

    @property
    def current(self) -> BrowsingContext:
        """The active browsing context."""
        return self._context

    @property
    def scope(self) -> Union[Frame, Locator]:
        """Frame or shadow host that lookups run against."""
        if self._scopes:
            return self._scopes[-1]
        return self.page.main_frame

    @property
    def frame(self) -> Frame:
        """Innermost entered frame (main frame at the top level)."""
        for scope in reversed(self._scopes):
            if isinstance(scope, Frame):
                return scope
        return self.page.main_frame

    async def wait_for_ready_state(self, frame: Optional[Frame] = None) -> None:
        """
        Wait until the frame's document.readyState is "complete".

        Raises:
            ContextFailure: If the document does not finish loading in time
        """
        frame = frame or self.frame
        try:
            await frame.wait_for_function(
                "() => document.readyState === 'complete'",
                timeout=self.config.ready_state_timeout_ms,
            )
        except Exception as e:
            raise ContextFailure(
                f"Document in {self._context} did not reach readyState 'complete': {describe_error(e)}"
            ) from e

    async def _enter_frame(self, strategies: StrategyChain, description: str) -> Frame:
        try:
            resolved = await self.resolver.resolve(self.scope, strategies, self._context)
        except ResolutionFailure as e:
            raise ContextFailure(f"Could not locate {description}.\n{e}", e.attempts) from e

        element = resolved.element
        if isinstance(element, ElementHandle):
            frame = await element.content_frame()
        else:
            handle = await element.element_handle(timeout=self.config.locator_timeout_ms)
            try:
                frame = await handle.content_frame()
            finally:
                await handle.dispose()

        if frame is None:
            raise ContextFailure(
                f"Element for {description} has no content frame",
                [StrategyAttempt(strategy=resolved.strategy, success=False, duration_ms=0,
                                 error="not an iframe")],
            )

        self._scopes.append(frame)
        self._context = self._context.push("frame", description)
        await self.wait_for_ready_state(frame)
        logger.info(f"[IFRAME] Now in: {self._context}")
        return frame

    async def enter_iframe_by_id(self, iframe_id: str) -> Frame:
        """
        Switch into an iframe by its id attribute.

        Falls back to an XPath on the id attribute when the direct id lookup fails.
        """
        logger.info(f"[IFRAME] Switching to iframe by id: {iframe_id}")
        return await self._enter_frame(
            [
                by_id(iframe_id),
                by_xpath(f"//iframe[@id={xpath_literal(iframe_id)}]"),
            ],
            f"iframe#{iframe_id}",
        )

    async def enter_iframe_following_heading(self, heading_text: str) -> Frame:
        """
        Switch into the first iframe after a heading with the given text.

        For iframes without stable attributes: h1, h2 and label headings are
        tried in that order, each taking the nearest following iframe.
        """
        logger.info(f"[IFRAME] Switching to iframe following heading: {heading_text}")
        literal = xpath_literal(heading_text)
        return await self._enter_frame(
            [
                by_xpath(f"//{tag}[contains(normalize-space(text()), {literal})]/following::iframe[1]")
                for tag in IFRAME_HEADING_TAGS
            ],
            f"iframe after '{heading_text}'",
        )

    async def return_to_top_level(self) -> None:
        """Switch back to the top-level document. Safe to call at any time."""
        logger.info("[IFRAME] Switching back to default content")
        self._scopes.clear()
        self._context = TOP_LEVEL
        await self.wait_for_ready_state(self.page.main_frame)

    async def locate_shadow_host(self, heading_text: str) -> Locator:
        """
        Find the shadow host element that follows an h1 with exactly this text.

        Raises:
            ContextFailure: If no host follows the heading
        """
        tag = self.config.shadow_host_tag
        strategy = by_xpath(
            f"//h1[normalize-space(text())={xpath_literal(heading_text)}]/following::{tag}[1]"
        )
        logger.info(f"[SHADOW] Locating shadow host by heading: {heading_text}")

        host = self.scope.locator(f"xpath={strategy.value}").first
        try:
            await host.wait_for(state="attached", timeout=self.config.locator_timeout_ms)
        except Exception as e:
            error = describe_error(e)
            raise ContextFailure(
                f"Shadow host <{tag}> after heading '{heading_text}' not found: {error}",
                [StrategyAttempt(strategy=strategy, success=False, duration_ms=0, error=error)],
            ) from e
        return host

    async def resolve_in_shadow(self, heading_text: str, selector: str) -> ResolvedElement:
        """
        Find an element under the shadow host that follows a heading.

        Tiers, first non-null result wins:
        1. The host's light-DOM descendants (slotted content lives here)
        2. Playwright's shadow-piercing CSS query from the host
        3. Script query against ``host.shadowRoot ?? host``

        Raises:
            ContextFailure: If the host is missing
            ShadowElementNotFound: If every tier came back empty
        """
        host = await self.locate_shadow_host(heading_text)
        context = self._context.push(
            "shadow", f"<{self.config.shadow_host_tag}> after '{heading_text}'"
        )

        try:
            handle = await host.element_handle(timeout=self.config.locator_timeout_ms)
        except Exception as e:
            raise ShadowElementNotFound(selector, [], describe_error(e)) from e

        try:
            return await self._search_shadow_tiers(host, handle, selector, context)
        finally:
            await handle.dispose()

    async def _search_shadow_tiers(
        self, host: Locator, handle: ElementHandle, selector: str, context: BrowsingContext
    ) -> ResolvedElement:
        errors: list[str] = []
        try:
            element = await self._query_from_host(handle, "host", selector)
            if element is not None:
                logger.info(f"[SHADOW] Found element as host child (light DOM): {selector}")
                return ResolvedElement(element, _shadow_strategy(SHADOW_TIERS[0], selector), context)
            errors.append(f"{SHADOW_TIERS[0]}: no match")
        except Exception as e:
            errors.append(f"{SHADOW_TIERS[0]}: {describe_error(e)}")

        try:
            locator = host.locator(f"css={selector}").first
            if await locator.count() > 0:
                logger.info(f"[SHADOW] Found element in shadow root: {selector}")
                return ResolvedElement(locator, _shadow_strategy(SHADOW_TIERS[1], selector), context)
            errors.append(f"{SHADOW_TIERS[1]}: no match")
        except Exception as e:
            logger.info(f"[SHADOW] Shadow root lookup failed: {describe_error(e)}. Trying script fallback")
            errors.append(f"{SHADOW_TIERS[1]}: {describe_error(e)}")

        try:
            element = await self._query_from_host(handle, "(host.shadowRoot ?? host)", selector)
            if element is not None:
                logger.info(f"[SHADOW] Found element in shadow root using script fallback: {selector}")
                return ResolvedElement(element, _shadow_strategy(SHADOW_TIERS[2], selector), context)
            errors.append(f"{SHADOW_TIERS[2]}: no match")
        except Exception as e:
            errors.append(f"{SHADOW_TIERS[2]}: {describe_error(e)}")

        raise ShadowElementNotFound(selector, SHADOW_TIERS, "; ".join(errors))

    @staticmethod
    async def _query_from_host(
        handle: ElementHandle, root: str, selector: str
    ) -> Optional[ElementHandle]:
        """Run querySelector from the host; a null result handle is disposed."""
        found = await handle.evaluate_handle(
            f"(host, selector) => {root}.querySelector(selector)", selector
        )
        element = found.as_element()
        if element is None:
            await found.dispose()
        return element

    async def enter_shadow_host(self, heading_text: str) -> Locator:
        """Make the shadow host after a heading the lookup scope."""
        host = await self.locate_shadow_host(heading_text)
        self._scopes.append(host)
        self._context = self._context.push(
            "shadow", f"<{self.config.shadow_host_tag}> after '{heading_text}'"
        )
        logger.info(f"[SHADOW] Now in: {self._context}")
        return host

    @asynccontextmanager
    async def iframe_by_id(self, iframe_id: str) -> AsyncIterator[Frame]:
        """Enter an iframe by id for the duration of the block."""
        try:
            yield await self.enter_iframe_by_id(iframe_id)
        finally:
            await self.return_to_top_level()

    @asynccontextmanager
    async def iframe_following_heading(self, heading_text: str) -> AsyncIterator[Frame]:
        """Enter the iframe after a heading for the duration of the block."""
        try:
            yield await self.enter_iframe_following_heading(heading_text)
        finally:
            await self.return_to_top_level()

    @asynccontextmanager
    async def shadow_host(self, heading_text: str) -> AsyncIterator[Locator]:
        """Scope lookups to a shadow host for the duration of the block."""
        try:
            yield await self.enter_shadow_host(heading_text)
        finally:
            await self.return_to_top_level()


def _shadow_strategy(tier: str, selector: str) -> LocatorStrategy:
    return LocatorStrategy(
        kind=LocatorKind.CSS_SELECTOR, value=selector, description=f"{tier}: {selector}"
    )
