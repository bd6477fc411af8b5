"""Custom pytest configuration and formatters for readable test output."""
from __future__ import annotations

import logging
import re
import sys
from pathlib import Path

import pytest
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add the source tree to the path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent.joinpath("src").resolve()))

# Keep stage debug output out of test runs
logging.getLogger("numerizer").setLevel(logging.CRITICAL)

console = Console()

ASSERTION_PATTERN = re.compile(r"Input '([^']*)' should numerize to '([^']*)', got '([^']*)'")


class NumerizerTestReporter:
    """Custom reporter for numerization tests with a summary table of failures."""

    def __init__(self):
        self.failures: list[tuple[str, str, str, str]] = []
        self.passes = 0
        self.total = 0

    def record_result(self, test_name: str, input_text: str, expected: str, actual: str, passed: bool):
        """Record a test result."""
        self.total += 1
        if passed:
            self.passes += 1
        else:
            self.failures.append((test_name, input_text, expected, actual))

    def print_summary(self):
        """Print a summary of test results."""
        if not self.failures:
            console.print(
                Panel.fit(
                    f"[bold green]All {self.total} numerization checks passed[/bold green]",
                    title="Test Results",
                    border_style="green",
                )
            )
            return

        table = Table(title="Numerization Test Failures", show_header=True, header_style="bold magenta")
        table.add_column("Test", style="cyan", no_wrap=False)
        table.add_column("Input", style="yellow")
        table.add_column("Expected", style="green")
        table.add_column("Actual", style="red")

        for test_name, input_text, expected, actual in self.failures:
            table.add_row(test_name.split("::")[-1], input_text, expected, actual)  # Just the test method name

        console.print(table)

        fail_count = len(self.failures)
        console.print(
            Panel.fit(
                f"[bold red]Failed:[/bold red] {fail_count} | [bold green]Passed:[/bold green] {self.passes} | [bold]Total:[/bold] {self.total}",
                title="Summary",
                border_style="red",
            )
        )


# Global reporter instance
reporter = NumerizerTestReporter()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Hook to capture numerization results for the custom reporter."""
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or "numerization" not in str(item.fspath):
        return

    if report.passed:
        reporter.record_result(item.nodeid, "", "", "", True)
        return

    if report.longrepr:
        match = ASSERTION_PATTERN.search(str(report.longrepr))
        if match:
            reporter.record_result(item.nodeid, match.group(1), match.group(2), match.group(3), False)


def pytest_sessionfinish(session, exitstatus):
    """Print the custom summary at the end of the test session."""
    if reporter.total > 0:
        console.print("\n")
        reporter.print_summary()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, tmp_path_factory, monkeypatch):
    """Run every test against the built-in defaults, away from any numerizer.json."""
    from numerizer.core.config import apply_log_level, reset_config

    monkeypatch.chdir(tmp_path)
    for name in ("NUMERIZER_CONFIG", "LOG_LEVEL", "LOG_OUTPUT", "LOG_FORMAT", "NUMERIZER_ENV"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    # Restore defaults from a clean directory, not one a test may have filled with a numerizer.json
    monkeypatch.chdir(tmp_path_factory.mktemp("teardown"))
    monkeypatch.delenv("NUMERIZER_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    reset_config()
    apply_log_level()


@pytest.fixture(scope="session")
def rule_set():
    """The shared English rule set."""
    from numerizer.numerization import get_rule_set

    return get_rule_set("en", "latn")


@pytest.fixture(scope="session")
def tables():
    """The English rule tables."""
    from numerizer.numerization import load_rule_tables

    return load_rule_tables("en")


@pytest.fixture(scope="session")
def numerize(rule_set):
    """The English numerize function."""
    return rule_set.process
