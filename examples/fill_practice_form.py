#!/usr/bin/env python
"""
Fill Practice Form Example

Fills the automation practice form in the main document, one iframe and
the shadow-DOM sub-form, submits the main form and prints what the page
reports as submitted.

Usage:
    python examples/fill_practice_form.py

Requirements:
    - Form harness installed: pip install -e .
    - Browsers installed: playwright install chromium
    - Optional: FORM_URL to target another copy of the form
"""

import asyncio

from form_harness import (
    BrowserConfig,
    BrowserController,
    HarnessConfig,
    PracticeFormPage,
    ResolutionFailure,
    configure_logging,
)
from form_harness.reporting import print_resolution_failure


async def main():
    """Fill and submit the form, then print the recovered data."""
    configure_logging(rich_output=True)
    config = HarnessConfig.from_env()

    async with BrowserController(BrowserConfig.from_env()) as browser:
        form = PracticeFormPage(browser.page, config)
        await form.navigate()

        try:
            async with form.in_iframe_by_id("iframeId"):
                await form.enter_first_name("Framed")
                await form.select_state("India")

            await form.enter_shadow_first_name("Shadow DOM", "ShadowFirst")

            await form.enter_first_name("John")
            await form.enter_last_name("Doe")
            await form.enter_email("john.doe@example.com")
            await form.select_state("United States")
            await form.check_terms()
            await form.submit()
        except ResolutionFailure as e:
            print_resolution_failure(e)
            return

        print(f"Confirmed: {await form.is_submission_confirmed()}")
        for key, value in (await form.extract_submission_data()).items():
            print(f"  {key}: {value}")


if __name__ == "__main__":
    asyncio.run(main())
