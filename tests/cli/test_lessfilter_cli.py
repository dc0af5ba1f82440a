# lessfilter:header:start
#
#   project      : LessFilter
#   file         : test_lessfilter_cli.py
#   file_relpath : tests/cli/test_lessfilter_cli.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""End-to-end tests of the `lessfilter` command.

These run the real transformer tables with ``PATH`` emptied, so only the
built-in Markdown renderer can apply.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from yachalk import chalk
from yachalk.types import ColorMode

from lessfilter.core.exit_codes import ExitCode
from lessfilter.rendering.ansi import strip_ansi
from tests.cli.conftest import assert_exit, run_cli

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result

    from tests.conftest import FakeTools

pytestmark = pytest.mark.cli


def _markdown_file(tmp_path: Path) -> Path:
    target: Path = tmp_path / "notes.md"
    target.write_text("Some *text*.\n", encoding="utf-8")
    return target


def test_help() -> None:
    """`--help` describes the command."""
    result: Result = run_cli(["--help"])

    assert_exit(result, ExitCode.SUCCESS)
    assert "--supports" in result.output


def test_missing_filename_prints_usage_and_succeeds() -> None:
    """A pager probing without a file name must not see a failure."""
    result: Result = run_cli([])

    assert_exit(result, ExitCode.SUCCESS)
    assert "No filename supplied" in result.output
    assert "Syntax: lessfilter [--supports] <filename>" in result.output


def test_nonexistent_file_is_unsupported(tmp_path: Path, fake_tools: FakeTools) -> None:
    """A path that does not exist cannot be rendered."""
    result: Result = run_cli([str(tmp_path / "absent.md")])

    assert_exit(result, ExitCode.UNSUPPORTED)
    assert result.stdout_bytes == b""


def test_supports_markdown(tmp_path: Path, fake_tools: FakeTools) -> None:
    """`--supports` answers through the exit status only."""
    result: Result = run_cli(["--supports", str(_markdown_file(tmp_path))])

    assert_exit(result, ExitCode.SUCCESS)
    assert result.stdout_bytes == b""


def test_supports_unknown_file(tmp_path: Path, fake_tools: FakeTools) -> None:
    """Without tools, an ordinary text file has no renderer."""
    target: Path = tmp_path / "data.txt"
    target.write_text("plain\n", encoding="utf-8")

    result: Result = run_cli(["--supports", str(target)])

    assert_exit(result, ExitCode.UNSUPPORTED)


def test_render_markdown(tmp_path: Path, fake_tools: FakeTools) -> None:
    """Rendering writes the reformatted file to standard output."""
    result: Result = run_cli([str(_markdown_file(tmp_path))])

    assert_exit(result, ExitCode.SUCCESS)
    assert strip_ansi(result.stdout_bytes.decode("utf-8")) == "Some *text*.\n"


def test_scratch_failure_is_fatal(
    tmp_path: Path, fake_tools: FakeTools, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An unusable scratch directory is the one hard error."""
    config_file: Path = tmp_path / "lessfilter.toml"
    config_file.write_text(
        f'[paths]\nscratch_dir = "{tmp_path / "missing" / "dir"}"\n', encoding="utf-8"
    )
    monkeypatch.setenv("LESSFILTER_CONFIG", str(config_file))

    result: Result = run_cli([str(_markdown_file(tmp_path))])

    assert_exit(result, ExitCode.RESOURCE_ERROR)
    assert "Cannot create temporary directory" in result.output


def test_tool_output_is_coloured_on_a_pipe(tmp_path: Path, fake_tools: FakeTools) -> None:
    """The pager reads a pipe; recoloured tool output must still carry ANSI codes."""
    # Start from yachalk's own choice for a non-TTY stdout.
    chalk.set_color_mode(ColorMode.AllOff)
    fake_tools.add_echo("openssl", "        Version: 3 (0x2)")
    certificate: Path = tmp_path / "site.crt"
    certificate.write_text("-----BEGIN CERTIFICATE-----\n", encoding="utf-8")

    result: Result = run_cli([str(certificate)])

    assert_exit(result, ExitCode.SUCCESS)
    assert b"\x1b[35mVersion\x1b[39m" in result.stdout_bytes
    assert strip_ansi(result.stdout_bytes.decode("utf-8")) == "        Version: 3 (0x2)\n"
