# lessfilter:header:start
#
#   project      : LessFilter
#   file         : errors.py
#   file_relpath : src/lessfilter/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Exceptions for the LessFilter CLI.

Usage:
    Raise these exceptions from the command to signal fatal errors with a
    standardized message and exit code. Click prints the message on standard
    error, so standard output (read by the pager) stays clean.
"""

from __future__ import annotations

import click

from lessfilter.core.exit_codes import ExitCode


class LessFilterFatalError(click.ClickException):
    """Fatal resource-acquisition failure (e.g. no scratch area)."""

    exit_code = ExitCode.RESOURCE_ERROR

    def format_message(self) -> str:
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))
