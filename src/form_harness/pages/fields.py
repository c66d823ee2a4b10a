"""
Field catalog for the practice form.

Each semantic field maps to a strategy chain per DOM context. Chains are
ordered most stable first:
1. Label text (business meaning, survives markup churn)
2. Name attribute (semantic identifier)
3. Placeholder text (user-facing hint)
4. ID (can change)
5. Structural XPath (last resort)

Shadow chains are plain CSS selectors, each run through the navigator's
shadow tiers in turn, because the slot convention differs from the main
document.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..locators.models import (
    LocatorStrategy,
    by_css,
    by_id,
    by_label,
    by_name,
    by_placeholder,
    by_xpath,
    css_attr_value,
    xpath_literal,
)


class FieldContext(str, Enum):
    """Where a form copy lives."""

    DOCUMENT = "document"
    IFRAME = "iframe"
    SHADOW = "shadow"


class FieldKind(str, Enum):
    TEXT = "text"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    BUTTON = "button"


class FieldDescriptor(BaseModel):
    """Semantic field bound to the chain that finds it in one context."""

    model_config = ConfigDict(frozen=True)

    name: str
    context: FieldContext
    kind: FieldKind
    strategies: tuple[LocatorStrategy, ...]

    @property
    def shadow_selectors(self) -> tuple[str, ...]:
        """CSS selectors for shadow lookups, in priority order."""
        return tuple(strategy.value for strategy in self.strategies)


FIRST_NAME = "First Name"
LAST_NAME = "Last Name"
DATE_OF_BIRTH = "Date of Birth"
MOBILE = "Mobile Number"
EMAIL = "Email"
COUNTRY = "Country"
STATE = "State"
ABOUT = "About Yourself"
USERNAME = "Username"
PASSWORD = "Password"
CONFIRM_PASSWORD = "Confirm Password"
TERMS = "Agreement"
SUBMIT = "Submit"
RESET = "Reset"


def _text(name: str, *strategies: LocatorStrategy, kind: FieldKind = FieldKind.TEXT) -> FieldDescriptor:
    return FieldDescriptor(
        name=name, context=FieldContext.DOCUMENT, kind=kind, strategies=tuple(strategies)
    )


_DOCUMENT_FIELDS = [
    _text(
        FIRST_NAME,
        by_label("First Name"),
        by_name("First Name"),
        by_placeholder("Name"),
        by_id("fname"),
        by_xpath("//input[@type='text' and @class='form-control'][1]"),
    ),
    _text(
        LAST_NAME,
        by_label("Last Name"),
        by_name("Last Name"),
        by_placeholder("Surname"),
        by_id("lname"),
    ),
    _text(
        DATE_OF_BIRTH,
        by_label("Date of Birth"),
        by_name("Date of Birth"),
        by_id("dob"),
        by_xpath("//input[@type='date']"),
    ),
    _text(
        MOBILE,
        by_label("Mobile"),
        by_name("Mobile Number"),
        by_placeholder("Mobile"),
        by_id("mobile"),
    ),
    _text(
        EMAIL,
        by_label("Email"),
        by_name("Email"),
        by_placeholder("Email"),
        by_id("email"),
        by_xpath("//input[@type='text' and contains(@placeholder, 'Email')]"),
        by_xpath("//label[contains(text(), 'Email')]/following::input[1]"),
    ),
    _text(
        COUNTRY,
        by_label("Country"),
        by_name("Country"),
        by_id("countries"),
    ),
    _text(
        STATE,
        by_label("State"),
        by_name("State"),
        by_id("state"),
        by_xpath("//select[@class='form-control']"),
        by_xpath("//label[contains(text(), 'State')]/..//select"),
        kind=FieldKind.SELECT,
    ),
    _text(
        ABOUT,
        by_label("About Yourself"),
        by_name("About Yourself"),
        by_id("about"),
        by_xpath("//textarea[1]"),
    ),
    _text(
        USERNAME,
        by_label("Username"),
        by_name("Username"),
        by_id("username"),
    ),
    # "Password" also matches the "Confirm Password" label, so ids come first
    _text(
        PASSWORD,
        by_id("password"),
        by_name("Password"),
        by_xpath("//input[@type='password'][1]"),
    ),
    _text(
        CONFIRM_PASSWORD,
        by_label("Confirm Password"),
        by_name("Confirm Password"),
        by_id("confirmpassword"),
        by_xpath("(//input[@type='password'])[2]"),
    ),
    _text(
        TERMS,
        by_id("Agreement"),
        by_name("Agreement"),
        by_xpath("//input[@type='checkbox' and contains(@name, 'Agree')]"),
        by_xpath("//label[contains(normalize-space(.), 'terms')]//input[@type='checkbox']"),
        kind=FieldKind.CHECKBOX,
    ),
    _text(
        SUBMIT,
        by_xpath("//button[@type='submit' and contains(text(), 'Submit')]"),
        by_css("button.btn-primary[type='submit']"),
        kind=FieldKind.BUTTON,
    ),
    _text(
        RESET,
        by_xpath("//button[@type='reset']"),
        by_css("button[type='reset']"),
        kind=FieldKind.BUTTON,
    ),
]

DOCUMENT_FIELDS: dict[str, FieldDescriptor] = {f.name: f for f in _DOCUMENT_FIELDS}

# The iframes embed a copy of the main form, so they share its chains
IFRAME_FIELDS: dict[str, FieldDescriptor] = {
    name: field.model_copy(update={"context": FieldContext.IFRAME})
    for name, field in DOCUMENT_FIELDS.items()
}


def _shadow(name: str, *selectors: str, kind: FieldKind = FieldKind.TEXT) -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        context=FieldContext.SHADOW,
        kind=kind,
        strategies=tuple(by_css(selector) for selector in selectors),
    )


# One selector per strategy: a selector list would match in document order
SHADOW_FIELDS: dict[str, FieldDescriptor] = {
    f.name: f
    for f in [
        _shadow(FIRST_NAME, "section[slot='fname'] input", "input#fname", "input[name='fname']"),
        _shadow(LAST_NAME, "section[slot='lname'] input", "input#lname", "input[name='lname']"),
        _shadow(STATE, "select#state", "select[name='State']", kind=FieldKind.SELECT),
        _shadow(
            TERMS,
            "input[type='checkbox'][name*='Agree']",
            "input#Agreement",
            kind=FieldKind.CHECKBOX,
        ),
    ]
}

CATALOGS: dict[FieldContext, dict[str, FieldDescriptor]] = {
    FieldContext.DOCUMENT: DOCUMENT_FIELDS,
    FieldContext.IFRAME: IFRAME_FIELDS,
    FieldContext.SHADOW: SHADOW_FIELDS,
}


def field_descriptor(name: str, context: FieldContext = FieldContext.DOCUMENT) -> FieldDescriptor:
    """
    Look up a field's descriptor for a context.

    Raises:
        KeyError: If the field is not known in that context
    """
    catalog = CATALOGS[context]
    if name not in catalog:
        raise KeyError(f"Unknown field '{name}' in {context.value} context. Known: {', '.join(catalog)}")
    return catalog[name]


def gender_strategies(gender: str) -> tuple[LocatorStrategy, ...]:
    """Chain for one gender radio button."""
    return (
        by_xpath(f"//input[@type='radio' and @value={xpath_literal(gender)}]"),
        by_id(gender.lower()),
        by_css(f"input[type='radio'][name='Gender'][value={css_attr_value(gender)}]"),
        by_xpath(
            f"//label[normalize-space(.)={xpath_literal(gender)}]/preceding-sibling::input[@type='radio'][1]"
        ),
    )


def hobby_strategies(hobby: str) -> tuple[LocatorStrategy, ...]:
    """Chain for one hobby checkbox."""
    return (
        by_xpath(f"//input[@type='checkbox' and @value={xpath_literal(hobby)}]"),
        by_id(hobby.lower()),
        by_xpath(
            f"//label[normalize-space(.)={xpath_literal(hobby)}]/preceding-sibling::input[@type='checkbox'][1]"
        ),
    )
