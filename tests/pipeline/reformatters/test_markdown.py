# lessfilter:header:start
#
#   project      : LessFilter
#   file         : test_markdown.py
#   file_relpath : tests/pipeline/reformatters/test_markdown.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Tests for the Markdown re-wrapper and colouriser."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yachalk import chalk

from lessfilter.pipeline.contracts import Action
from lessfilter.pipeline.reformatters.markdown import (
    MarkdownReformatter,
    colourise,
    render_markdown,
    resolve_width,
    rewrap,
)
from lessfilter.pipeline.scratch import ScratchArea
from lessfilter.rendering.ansi import strip_ansi
from tests.conftest import make_config, make_context

if TYPE_CHECKING:
    from pathlib import Path


def test_rewrap_fills_lines_to_width() -> None:
    """Short prose lines are joined and re-broken before the width."""
    assert rewrap(["alpha beta", "gamma delta"], 20) == ["alpha beta gamma", "delta"]


def test_blank_line_separates_paragraphs() -> None:
    """An empty line ends the paragraph and is kept."""
    assert rewrap(["one", "", "two"], 40) == ["one", "", "two"]


def test_fenced_code_is_verbatim() -> None:
    """Fence delimiters and contents are copied unchanged, closing fence included."""
    lines: list[str] = ["text", "```", "  code   line", "```", "after"]

    assert rewrap(lines, 40) == lines


def test_table_is_verbatim() -> None:
    """Table rows are neither joined nor wrapped."""
    lines: list[str] = ["| a | b |", "|---|---|", "| 1 | 2 |", "", "para"]

    assert rewrap(lines, 8) == lines


def test_front_matter_is_verbatim() -> None:
    """Leading key/value front matter is copied unchanged."""
    lines: list[str] = ["title: Hello", "tags:", "  - a", "", "Body text"]

    assert rewrap(lines, 40) == lines


def test_bullets_start_new_lines() -> None:
    """List items are not joined with the paragraph before them."""
    assert rewrap(["Intro", "* one", "* two"], 40) == ["Intro", "* one", "* two"]


def test_footnote_continuation_is_indented() -> None:
    """Wrapped footnote definitions are indented by two spaces."""
    assert rewrap(["[^1]: aaaa bbbb cccc"], 14) == ["[^1]: aaaa", "  bbbb cccc"]


def test_colourise_heading_and_markers() -> None:
    """Headings are bold green; list markers are yellow."""
    coloured: list[str] = colourise(["# Title", "* item one"])

    assert coloured[0] == chalk.green.bold("# Title")
    assert coloured[1] == f"{chalk.yellow('*')} item one"
    assert colourise(["1. first"]) == [f"{chalk.yellow('1.')} first"]


def test_colourise_wrapped_bullet_text_is_aligned() -> None:
    """Text wrapped out of a bullet aligns under it; the next bullet gets a gap."""
    coloured: list[str] = colourise(["* alpha", "beta gamma", "* next"])

    assert coloured[1] == "  beta gamma"
    assert coloured[2] == f"\n{chalk.yellow('*')} next"


def test_colourise_fenced_code_replaces_colour() -> None:
    """Code inside fences is yellow, whatever colour it had."""
    coloured: list[str] = colourise(["```", f"{chalk.red('x')} = 1", "```"])

    assert coloured == ["```", chalk.yellow("x = 1"), "```"]


def test_fence_after_bullet_is_not_a_continuation() -> None:
    """A fence right after a list item ends the item; its lines stay unindented."""
    rendered: str = render_markdown("- item\n```\nx = 1\n```\n", 80)

    assert strip_ansi(rendered) == "- item\n```\nx = 1\n```\n"
    assert rendered.split("\n")[1:4] == ["```", chalk.yellow("x = 1"), "```"]


def test_colourise_table() -> None:
    """Header cells are cyan and every pipe is gray."""
    coloured: list[str] = colourise(["| a |", "|---|"])

    assert coloured[0] == f"{chalk.gray('|')} {chalk.cyan('a ')}{chalk.gray('|')}"
    assert coloured[1] == f"{chalk.gray('|')}---{chalk.gray('|')}"


def test_colourise_front_matter_and_footnotes() -> None:
    """Front-matter keys are yellow, values cyan; footnote markers magenta."""
    coloured: list[str] = colourise(["title: Hello", "tags:", "", "See [^1] here"])

    assert coloured[0] == f"{chalk.yellow('title')}: {chalk.cyan('Hello')}"
    assert coloured[1] == f"{chalk.yellow('tags')}:"
    assert coloured[3] == f"See {chalk.magenta('[^1]')} here"


def test_render_markdown_keeps_text() -> None:
    """Colouring never changes the visible text of plain prose."""
    text = "# Title\n\nSome text.\n"

    assert strip_ansi(render_markdown(text, 40)) == text


def test_resolve_width_precedence(tmp_path: Path) -> None:
    """Configured columns beat `COLUMNS`, which beats the terminal."""
    assert resolve_width(make_config(tmp_path, columns=50, env_columns=90)) == 50
    assert resolve_width(make_config(tmp_path, env_columns=90)) == 90


def test_markdown_reformatter_writes_artifact(tmp_path: Path) -> None:
    """The reformatter needs no tool and rewrites into a `.md` artifact."""
    target: Path = tmp_path / "README.md"
    target.write_text("one\ntwo\n", encoding="utf-8")
    config = make_config(tmp_path, columns=40)
    reformatter = MarkdownReformatter()

    with ScratchArea(config) as scratch:
        ctx = make_context(target, config, scratch)
        plan = reformatter.applies(ctx)
        assert plan is not None
        result = reformatter.apply(ctx, plan)
        assert result.action is Action.REWRITE
        assert result.subject is not None
        assert result.subject.path.name == "README.md:formatted:.md"
        assert result.subject.path.read_text(encoding="utf-8") == "one two\n"
