# lessfilter:header:start
#
#   project      : LessFilter
#   file         : main.py
#   file_relpath : src/lessfilter/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""LessFilter command: ``lessfilter [--supports] <file>``.

Designed to be used as the ``LESSOPEN``-style input preprocessor of a pager:

- ``lessfilter <file>`` writes a coloured rendering to standard output and
  exits 0, or exits 1 with no output when the file is not supported;
- ``lessfilter --supports <file>`` only reports supportability via the exit
  status.

Without a file name, the syntax is printed on standard error and the exit
status is 0: a pager probing the filter must not see a failure.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from lessfilter.cli.errors import LessFilterFatalError
from lessfilter.config.logging import get_logger, resolve_env_log_level, setup_logging
from lessfilter.config.model import load_config
from lessfilter.core.errors import ScratchAreaError
from lessfilter.core.exit_codes import ExitCode
from lessfilter.pipeline.context import Mode
from lessfilter.pipeline.engine import run
from lessfilter.rendering.ansi import enable_ansi

if TYPE_CHECKING:
    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.config.model import Config

logger: LessFilterLogger = get_logger(__name__)

USAGE_LINES: tuple[str, ...] = (
    "No filename supplied",
    "Syntax: lessfilter [--supports] <filename>",
)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Render FILE with colour for a pager, or report whether it can.",
)
@click.option(
    "--supports",
    "supports",
    is_flag=True,
    help="Only report, via the exit status, whether FILE can be rendered.",
)
@click.argument("path", metavar="FILE", required=False)
@click.pass_context
def cli(ctx: click.Context, supports: bool, path: str | None) -> None:
    """Entry point for the LessFilter CLI."""
    # Configure internal logging via env; records go to stderr only.
    setup_logging(level=resolve_env_log_level())

    if not path:
        for line in USAGE_LINES:
            click.echo(line, err=True)
        ctx.exit(ExitCode.SUCCESS)

    enable_ansi()
    config: Config = load_config()
    mode: Mode = Mode.CHECK_SUPPORT if supports else Mode.RENDER
    logger.debug("lessfilter %s %s", mode.value, path)

    try:
        code: ExitCode = run(
            mode,
            path,
            config,
            out=None if supports else sys.stdout.buffer,
        )
    except ScratchAreaError as e:
        raise LessFilterFatalError(str(e)) from e
    ctx.exit(code)


if __name__ == "__main__":
    cli()
