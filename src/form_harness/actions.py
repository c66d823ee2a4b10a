"""
Action Layer

Best-effort interaction primitives on resolved elements:
- click: wait for interactability, click, retry with fixed backoff
- type_and_verify: clear, fill, read back, retry until the value sticks
- select_by_text_or_value: dropdown selection with value fallback
- set_checked: idempotent checkbox/radio selection

Retry exhaustion never raises. Each primitive returns False instead and the
caller asserts on the resulting page state.
"""

import asyncio
import logging
import time
from typing import Optional

from .config import HarnessConfig
from .locators.resolver import Element, describe_error, is_interactable

logger = logging.getLogger(__name__)

# Interval for polling displayed/enabled state
POLL_INTERVAL_MS = 100


class ActionLayer:
    """
    Retrying interactions shared by every form context.

    Usage:
        >>> actions = ActionLayer(HarnessConfig(action_retries=3, action_backoff_ms=500))
        >>> await actions.type_and_verify(resolved.element, "John")
        >>> await actions.click(submit.element)
    """

    def __init__(self, config: Optional[HarnessConfig] = None):
        self.config = config or HarnessConfig.from_env()

    @property
    def retries(self) -> int:
        return self.config.action_retries

    async def _backoff(self) -> None:
        await asyncio.sleep(self.config.action_backoff_ms / 1000)

    async def wait_until_interactable(
        self,
        element: Element,
        timeout_ms: Optional[int] = None,
    ) -> bool:
        """
        Poll until the element is displayed and enabled.

        Args:
            element: Locator or ElementHandle
            timeout_ms: Maximum wait (default: locator_timeout_ms)

        Returns:
            True once interactable, False on timeout
        """
        if timeout_ms is None:
            timeout_ms = self.config.locator_timeout_ms

        deadline = time.monotonic() + timeout_ms / 1000
        while True:
            if await is_interactable(element):
                return True
            if time.monotonic() >= deadline:
                return False
            await asyncio.sleep(POLL_INTERVAL_MS / 1000)

    async def click(self, element: Element, js_fallback: bool = False) -> bool:
        """
        Click an element, retrying on any error.

        Args:
            element: Locator or ElementHandle
            js_fallback: Dispatch a script click once the retries are spent

        Returns:
            True if a click went through, False after exhausting retries
        """
        for attempt in range(1, self.retries + 1):
            try:
                if not await self.wait_until_interactable(element):
                    raise TimeoutError("element never became displayed and enabled")
                await element.click()
                return True
            except Exception as e:
                logger.info(f"[CLICK] Retry {attempt}/{self.retries}: {describe_error(e)}")
                if attempt < self.retries:
                    await self._backoff()

        if js_fallback:
            try:
                await element.evaluate("el => el.click()")
                logger.info("[CLICK] Used script click after retries were exhausted")
                return True
            except Exception as e:
                logger.warning(f"[CLICK] Script click failed: {describe_error(e)}")

        logger.warning(f"[CLICK] Giving up after {self.retries} attempts")
        return False

    async def type_and_verify(self, element: Element, text: str) -> bool:
        """
        Replace the element's value with text and confirm it was accepted.

        Args:
            element: Input or textarea Locator/ElementHandle
            text: Text to enter

        Returns:
            True if the read-back value equals text, False after exhausting retries
        """
        for attempt in range(1, self.retries + 1):
            try:
                if not await self.wait_until_interactable(element):
                    raise TimeoutError("element never became displayed and enabled")
                await element.fill("")
                await element.fill(text)

                actual = await element.input_value()
                if actual == text:
                    return True
                logger.info(
                    f"[SEND_KEYS] Retry {attempt}/{self.retries}: "
                    f"read back {len(actual)} chars, expected {len(text)}"
                )
            except Exception as e:
                logger.info(f"[SEND_KEYS] Retry {attempt}/{self.retries}: {describe_error(e)}")

            if attempt < self.retries:
                await self._backoff()

        logger.warning(f"[SEND_KEYS] Value not confirmed after {self.retries} attempts")
        return False

    async def select_by_text_or_value(self, element: Element, option: str) -> list[str]:
        """
        Select a dropdown option by visible text, falling back to its value.

        Args:
            element: Select Locator/ElementHandle
            option: Visible text or underlying value

        Returns:
            Values that ended up selected

        Raises:
            Exception: Playwright error when neither text nor value matches
        """
        timeout = self.config.locator_timeout_ms
        try:
            return await element.select_option(label=option, timeout=timeout)
        except Exception as e:
            logger.debug(f"[SELECT] No option with text '{option}' ({describe_error(e)}), trying value")
        return await element.select_option(value=option, timeout=timeout)

    async def set_checked(self, element: Element, checked: bool) -> bool:
        """
        Bring a checkbox or radio into the requested state.

        Clicks only when the state actually has to change.

        Args:
            element: Checkbox or radio Locator/ElementHandle
            checked: Target state

        Returns:
            True if a click was issued, False if it was already in that state
        """
        if await element.is_checked() == checked:
            logger.debug(f"[CHECK] Already {'checked' if checked else 'unchecked'}, no click")
            return False
        await self.click(element)
        return True
