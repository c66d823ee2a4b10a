"""
Shared pytest configuration.

Logging is configured once per session from LOG_LEVEL. When a test fails
on a ResolutionFailure, the strategy attempts are printed as a table so
the report shows which locators were tried and why each missed.
"""

import pytest
from rich.console import Console

from form_harness.config import configure_logging
from form_harness.errors import ResolutionFailure
from form_harness.reporting import print_resolution_failure


def pytest_configure(config):
    configure_logging()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()

    # Fixtures read this at teardown to name screenshots by outcome
    setattr(item, f"rep_{report.when}", report)

    if report.failed and call.excinfo is not None:
        error = call.excinfo.value
        if isinstance(error, ResolutionFailure):
            print_resolution_failure(error, Console(stderr=True, width=160))
