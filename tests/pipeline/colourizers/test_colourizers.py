# lessfilter:header:start
#
#   project      : LessFilter
#   file         : test_colourizers.py
#   file_relpath : tests/pipeline/colourizers/test_colourizers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Tests for the CSV, Graphviz and JSON colourizers."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from yachalk import chalk

from lessfilter.core.exit_codes import ExitCode
from lessfilter.pipeline.colourizers.tabular import colour_csv, colour_csv_line
from lessfilter.pipeline.context import Mode
from lessfilter.pipeline.engine import run
from tests.conftest import make_config, mark_integration

if TYPE_CHECKING:
    from pathlib import Path

    from lessfilter.config.model import Config
    from tests.conftest import FakeTools


def _render(path: Path, config: Config) -> tuple[ExitCode, bytes]:
    out = io.BytesIO()
    code: ExitCode = run(Mode.RENDER, str(path), config, out=out)
    return code, out.getvalue()


def test_csv_fields_are_coloured_by_type() -> None:
    """Numbers are yellow (even when quoted); text is cyan between blue quotes."""
    quote: str = chalk.blue.bold('"')

    coloured: str = colour_csv_line('"name"£42£"3.5"£')

    assert coloured == ",".join(
        [f"{quote}{chalk.cyan('name')}{quote}", chalk.yellow("42"), chalk.yellow("3.5"), ""]
    )


def test_csv_escaped_quotes_stay_in_field() -> None:
    """Doubled quotes do not end a quoted field, and delimiters inside quotes are data."""
    quote: str = chalk.blue.bold('"')
    field = 'say ""hi""£now'

    coloured: str = colour_csv_line(f'"{field}"£1')

    assert coloured == f"{quote}{chalk.cyan(field)}{quote},{chalk.yellow('1')}"


def test_csv_empty_lines_are_kept() -> None:
    """Blank lines pass through unchanged."""
    assert colour_csv("1\n\n2\n") == f"{chalk.yellow('1')}\n\n{chalk.yellow('2')}\n"


@mark_integration
def test_csv_uses_csvformat(tmp_path: Path, fake_tools: FakeTools) -> None:
    """The table is re-delimited by `csvformat`, after a delimiter probe."""
    fake_tools.add(
        "csvformat",
        'if [ "$#" -eq 1 ]; then cat >/dev/null; exit 0; fi\n'
        "printf '%s\\n' \"$@\" > \"$0.args\"\n"
        "printf '\"a\"£1\\n'",
    )
    table: Path = tmp_path / "data.csv"
    table.write_text("a,1\n", encoding="utf-8")

    code, output = _render(table, make_config(tmp_path))

    assert code is ExitCode.SUCCESS
    assert output.decode("utf-8") == colour_csv('"a"£1\n')
    args: str = (fake_tools.bin_dir / "csvformat.args").read_text(encoding="utf-8")
    assert args.splitlines() == ["-D£", "-U", "2", str(table)]


@mark_integration
def test_csv_old_csvformat_is_not_used(tmp_path: Path, fake_tools: FakeTools) -> None:
    """A `csvformat` that rejects the delimiter does not claim the file."""
    fake_tools.add("csvformat", "exit 2")
    table: Path = tmp_path / "data.csv"
    table.write_text("a,1\n", encoding="utf-8")

    assert run(Mode.CHECK_SUPPORT, str(table), make_config(tmp_path)) is ExitCode.UNSUPPORTED


@mark_integration
def test_graphviz_requires_grc_configuration(tmp_path: Path, fake_tools: FakeTools) -> None:
    """`grcat` is only used when its Graphviz configuration exists."""
    fake_tools.add("grcat", "printf '%s\\n' \"$@\" > \"$0.args\"\ncat")
    graph: Path = tmp_path / "g.dot"
    graph.write_text("digraph { a -> b }\n", encoding="utf-8")
    config: Config = make_config(tmp_path)

    assert run(Mode.CHECK_SUPPORT, str(graph), config) is ExitCode.UNSUPPORTED

    config.grc_graphviz_conf.write_text("regexp=->\n", encoding="utf-8")
    code, output = _render(graph, config)

    assert (code, output) == (ExitCode.SUCCESS, b"digraph { a -> b }\n")
    args: str = (fake_tools.bin_dir / "grcat.args").read_text(encoding="utf-8")
    assert args.splitlines() == [str(config.grc_graphviz_conf)]


@mark_integration
def test_json_uses_jq(tmp_path: Path, fake_tools: FakeTools) -> None:
    """JSON and JSON Lines are coloured by `jq`."""
    fake_tools.add_recorder("jq", "{}\n")
    document: Path = tmp_path / "events.jsonl"
    document.write_text("{}\n", encoding="utf-8")

    assert _render(document, make_config(tmp_path)) == (ExitCode.SUCCESS, b"{}\n")
    assert fake_tools.recorded_args("jq") == ["--color-output", ".", str(document)]
