# lessfilter:header:start
#
#   project      : LessFilter
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""CLI test helpers for running LessFilter through Click's test runner.

`run_cli()` invokes the command in-process. The command reconfigures logging
to write to the runner's (short-lived) stderr, so an autouse fixture restores
the test-session logging configuration afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import pytest
from click.testing import CliRunner, Result

from lessfilter.cli.main import cli
from lessfilter.config import logging
from lessfilter.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Re-install the session logging handler after each CLI invocation."""
    yield
    logging.setup_logging(level=logging.TRACE_LEVEL)


def run_cli(argv: Sequence[str]) -> Result:
    """Invoke the `lessfilter` command with ``argv``.

    Args:
        argv (Sequence[str]): Command-line arguments (without the program name).

    Returns:
        Result: The `click.testing.Result`; exceptions other than `SystemExit`
            propagate.
    """
    return CliRunner().invoke(cli, list(argv), catch_exceptions=False)


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert the exit status, showing the captured output on failure."""
    assert result.exit_code == code, (
        f"expected exit {int(code)}, got {result.exit_code}\n{result.output}"
    )
