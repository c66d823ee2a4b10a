"""
Practice Form Facade

One object per page under test that hides strategy chains, context
switching and retries behind semantic operations:
- Generic operations keyed by field name (enter_text, select_option, ...)
- Named wrappers for every field of the practice form
- Shadow-DOM operations addressed by the heading before the host
- Iframe scoping that always ends back at the top-level document

Field lookups follow the navigator's current context. After entering an
iframe, the same calls act on the iframe's copy of the form.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Frame, Page

from ..actions import ActionLayer
from ..config import HarnessConfig
from ..context import BrowsingContext
from ..diagnostics import DiagnosticSink
from ..errors import ShadowElementNotFound
from ..locators.models import StrategyChain, by_css, by_xpath, xpath_literal
from ..locators.resolver import ElementResolver, ResolvedElement
from ..navigation import ContextNavigator
from ..response import ResponseInterpreter
from . import fields
from .fields import FieldContext, FieldDescriptor, field_descriptor

logger = logging.getLogger(__name__)

SHADOW_FORM_ID = "shadowdomautomationtestform"

_SELECTED_TEXT_JS = "el => el.selectedIndex >= 0 ? el.options[el.selectedIndex].text.trim() : ''"
_OPTION_TEXTS_JS = "el => Array.from(el.options).map(o => o.text.trim())"


class PracticeFormPage:
    """
    Facade over the automation practice form.

    Usage:
        >>> form = PracticeFormPage(page, config)
        >>> await form.navigate()
        >>> await form.enter_first_name("John")
        >>> async with form.in_iframe_by_id("iframeId"):
        ...     await form.select_state("India")
        >>> await form.submit()
        >>> await form.is_submission_confirmed()
        True
    """

    def __init__(
        self,
        page: Page,
        config: Optional[HarnessConfig] = None,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        self.page = page
        self.config = config or HarnessConfig.from_env()
        self.diagnostics = diagnostics or DiagnosticSink(self.config.screenshot_dir)

        self.resolver = ElementResolver(self.config, self.diagnostics)
        self.actions = ActionLayer(self.config)
        self.navigator = ContextNavigator(page, self.resolver, self.config)
        self.response = ResponseInterpreter(self.config)

    # -- navigation and context ------------------------------------------------

    @property
    def context(self) -> BrowsingContext:
        return self.navigator.current

    async def navigate(self, url: Optional[str] = None) -> None:
        """Load the form and wait until the document is complete."""
        target = url or self.config.form_url
        logger.info(f"[NAVIGATE] Opening {target}")
        await self.page.goto(target)
        await self.navigator.return_to_top_level()

    async def return_to_top_level(self) -> None:
        await self.navigator.return_to_top_level()

    @asynccontextmanager
    async def in_iframe_by_id(self, iframe_id: str) -> AsyncIterator[Frame]:
        """Run field operations against the iframe with this id."""
        async with self.navigator.iframe_by_id(iframe_id) as frame:
            yield frame

    @asynccontextmanager
    async def in_iframe_following_heading(self, heading_text: str) -> AsyncIterator[Frame]:
        """Run field operations against the iframe after this heading."""
        async with self.navigator.iframe_following_heading(heading_text) as frame:
            yield frame

    # -- generic field operations ---------------------------------------------

    def _descriptor(self, name: str) -> FieldDescriptor:
        context = FieldContext.IFRAME if self.context.in_frame else FieldContext.DOCUMENT
        return field_descriptor(name, context)

    async def _resolve_chain(self, strategies: StrategyChain) -> ResolvedElement:
        return await self.resolver.resolve(self.navigator.scope, strategies, self.context)

    async def _resolve(self, name: str) -> ResolvedElement:
        return await self._resolve_chain(self._descriptor(name).strategies)

    async def enter_text(self, name: str, text: str) -> bool:
        """
        Replace a text field's value.

        Returns:
            True if the field read back exactly ``text``
        """
        logger.info(f"[FIELD] Entering into {name}: {text[:40]}")
        resolved = await self._resolve(name)
        return await self.actions.type_and_verify(resolved.element, text)

    async def get_value(self, name: str) -> str:
        resolved = await self._resolve(name)
        return await resolved.element.input_value()

    async def clear_field(self, name: str) -> None:
        resolved = await self._resolve(name)
        await resolved.element.fill("")

    async def select_option(self, name: str, option: str) -> list[str]:
        """Select a dropdown option by visible text, falling back to its value."""
        logger.info(f"[SELECT] {name}: {option}")
        resolved = await self._resolve(name)
        return await self.actions.select_by_text_or_value(resolved.element, option)

    async def select_option_by_index(self, name: str, index: int) -> list[str]:
        logger.info(f"[SELECT] {name} by index: {index}")
        resolved = await self._resolve(name)
        return await resolved.element.select_option(
            index=index, timeout=self.config.locator_timeout_ms
        )

    async def get_selected_option(self, name: str) -> str:
        """Visible text of the selected option (empty if none)."""
        resolved = await self._resolve(name)
        return await resolved.element.evaluate(_SELECTED_TEXT_JS)

    async def get_options(self, name: str) -> list[str]:
        resolved = await self._resolve(name)
        return await resolved.element.evaluate(_OPTION_TEXTS_JS)

    async def set_checked(self, name: str, checked: bool = True) -> bool:
        """Bring a checkbox into the requested state. True if a click was needed."""
        resolved = await self._resolve(name)
        return await self.actions.set_checked(resolved.element, checked)

    async def is_checked(self, name: str) -> bool:
        resolved = await self._resolve(name)
        return await resolved.element.is_checked()

    async def click_button(self, name: str) -> bool:
        resolved = await self._resolve(name)
        return await self.actions.click(resolved.element)

    # -- named wrappers ---------------------------------------------------------

    async def enter_first_name(self, first_name: str) -> bool:
        return await self.enter_text(fields.FIRST_NAME, first_name)

    async def get_first_name(self) -> str:
        return await self.get_value(fields.FIRST_NAME)

    async def clear_first_name(self) -> None:
        await self.clear_field(fields.FIRST_NAME)

    async def enter_last_name(self, last_name: str) -> bool:
        return await self.enter_text(fields.LAST_NAME, last_name)

    async def get_last_name(self) -> str:
        return await self.get_value(fields.LAST_NAME)

    async def select_gender(self, gender: str) -> bool:
        """Pick a gender radio by its value (Male, Female, Transgender)."""
        resolved = await self._resolve_chain(fields.gender_strategies(gender))
        return await self.actions.set_checked(resolved.element, True)

    async def is_gender_selected(self, gender: str) -> bool:
        resolved = await self._resolve_chain(fields.gender_strategies(gender))
        return await resolved.element.is_checked()

    async def enter_date_of_birth(self, iso_date: str) -> bool:
        """Date as YYYY-MM-DD, the value format of date inputs."""
        return await self.enter_text(fields.DATE_OF_BIRTH, iso_date)

    async def enter_mobile(self, mobile: str) -> bool:
        return await self.enter_text(fields.MOBILE, mobile)

    async def enter_email(self, email: str) -> bool:
        return await self.enter_text(fields.EMAIL, email)

    async def get_email(self) -> str:
        return await self.get_value(fields.EMAIL)

    async def clear_email(self) -> None:
        await self.clear_field(fields.EMAIL)

    async def is_email_valid(self) -> bool:
        """True if the browser reports no validation message for the email field."""
        resolved = await self._resolve(fields.EMAIL)
        message = await resolved.element.evaluate("el => el.validationMessage")
        return not message

    async def enter_country(self, country: str) -> bool:
        return await self.enter_text(fields.COUNTRY, country)

    async def select_state(self, state: str) -> list[str]:
        return await self.select_option(fields.STATE, state)

    async def select_state_by_index(self, index: int) -> list[str]:
        return await self.select_option_by_index(fields.STATE, index)

    async def get_selected_state(self) -> str:
        return await self.get_selected_option(fields.STATE)

    async def get_all_state_options(self) -> list[str]:
        return await self.get_options(fields.STATE)

    async def set_hobby(self, hobby: str, checked: bool = True) -> bool:
        resolved = await self._resolve_chain(fields.hobby_strategies(hobby))
        return await self.actions.set_checked(resolved.element, checked)

    async def is_hobby_checked(self, hobby: str) -> bool:
        resolved = await self._resolve_chain(fields.hobby_strategies(hobby))
        return await resolved.element.is_checked()

    async def enter_about(self, about: str) -> bool:
        return await self.enter_text(fields.ABOUT, about)

    async def enter_username(self, username: str) -> bool:
        return await self.enter_text(fields.USERNAME, username)

    async def enter_password(self, password: str) -> bool:
        return await self.enter_text(fields.PASSWORD, password)

    async def enter_confirm_password(self, password: str) -> bool:
        return await self.enter_text(fields.CONFIRM_PASSWORD, password)

    async def check_terms(self) -> bool:
        return await self.set_checked(fields.TERMS, True)

    async def uncheck_terms(self) -> bool:
        return await self.set_checked(fields.TERMS, False)

    async def is_terms_checked(self) -> bool:
        return await self.is_checked(fields.TERMS)

    async def submit(self) -> bool:
        logger.info("[SUBMIT] Submitting form")
        return await self.click_button(fields.SUBMIT)

    async def reset(self) -> bool:
        logger.info("[RESET] Resetting form")
        return await self.click_button(fields.RESET)

    async def is_form_valid(self, form_css: str = "form") -> bool:
        """Run the browser's constraint validation on a form in the current context."""
        form = self.navigator.frame.locator(f"css={form_css}").first
        return await form.evaluate("f => f.checkValidity()")

    # -- shadow DOM ------------------------------------------------------------

    async def _resolve_shadow(self, heading_text: str, name: str) -> ResolvedElement:
        selectors = field_descriptor(name, FieldContext.SHADOW).shadow_selectors
        for selector in selectors[:-1]:
            try:
                return await self.navigator.resolve_in_shadow(heading_text, selector)
            except ShadowElementNotFound:
                logger.debug(f"[SHADOW] {name}: no match for {selector}, trying next selector")
        return await self.navigator.resolve_in_shadow(heading_text, selectors[-1])

    async def enter_shadow_first_name(self, heading_text: str, value: str) -> bool:
        logger.info(f"[SHADOW] Entering first name: {value}")
        resolved = await self._resolve_shadow(heading_text, fields.FIRST_NAME)
        return await self.actions.type_and_verify(resolved.element, value)

    async def get_shadow_first_name(self, heading_text: str) -> str:
        resolved = await self._resolve_shadow(heading_text, fields.FIRST_NAME)
        return await resolved.element.input_value()

    async def enter_shadow_last_name(self, heading_text: str, value: str) -> bool:
        logger.info(f"[SHADOW] Entering last name: {value}")
        resolved = await self._resolve_shadow(heading_text, fields.LAST_NAME)
        return await self.actions.type_and_verify(resolved.element, value)

    async def get_shadow_last_name(self, heading_text: str) -> str:
        resolved = await self._resolve_shadow(heading_text, fields.LAST_NAME)
        return await resolved.element.input_value()

    async def select_shadow_state(self, heading_text: str, state: str) -> list[str]:
        logger.info(f"[SHADOW] Selecting state: {state}")
        resolved = await self._resolve_shadow(heading_text, fields.STATE)
        return await self.actions.select_by_text_or_value(resolved.element, state)

    async def get_shadow_state(self, heading_text: str) -> str:
        resolved = await self._resolve_shadow(heading_text, fields.STATE)
        return await resolved.element.evaluate(_SELECTED_TEXT_JS)

    async def is_shadow_first_name_required(self, heading_text: str) -> bool:
        resolved = await self._resolve_shadow(heading_text, fields.FIRST_NAME)
        return await resolved.element.evaluate("el => el.required")

    async def check_shadow_terms_if_present(self, heading_text: str) -> bool:
        """
        Tick the shadow form's terms checkbox when it has one.

        Returns:
            True if the checkbox is now checked, False if there is none
        """
        try:
            resolved = await self._resolve_shadow(heading_text, fields.TERMS)
        except ShadowElementNotFound:
            logger.info("[SHADOW] No terms checkbox in shadow form, skipping")
            return False
        await self.actions.set_checked(resolved.element, True)
        return await resolved.element.is_checked()

    async def submit_shadow_form(self, heading_text: str) -> bool:
        """
        Click the submit button of the form that encloses the shadow host.

        A script click is dispatched if regular clicks keep failing.
        """
        host_xpath = (
            f"//h1[normalize-space(text())={xpath_literal(heading_text)}]"
            f"/following::{self.config.shadow_host_tag}[1]"
        )
        resolved = await self._resolve_chain(
            [
                by_xpath(f"{host_xpath}/ancestor::form[1]//button[@type='submit']"),
                by_css(f"form#{SHADOW_FORM_ID} button[type='submit']"),
                by_css(f"form#{SHADOW_FORM_ID} button"),
            ]
        )
        logger.info("[SHADOW] Submitting shadow form")
        return await self.actions.click(resolved.element, js_fallback=True)

    # -- response ----------------------------------------------------------------

    async def extract_submission_data(self) -> dict[str, str]:
        return await self.response.extract_submission_data(self.navigator.frame)

    async def is_submission_confirmed(self) -> bool:
        return await self.response.is_submission_confirmed(self.navigator.frame)
