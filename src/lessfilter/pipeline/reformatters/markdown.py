# lessfilter:header:start
#
#   project      : LessFilter
#   file         : markdown.py
#   file_relpath : src/lessfilter/pipeline/reformatters/markdown.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Markdown reformatter: re-wrap prose to the terminal width, then colour it.

Pass 1 (``rewrap``) joins and re-flows paragraph text so lines fill the width.
Fenced code blocks, tables and a YAML-like front-matter block are copied
verbatim; headings, bullets, numbered items, indented lines and footnote
definitions start a new output line.

Pass 2 (``colourise``) colours:

- fenced code contents (yellow, any existing colour stripped);
- indented code blocks (yellow words);
- table header cells (cyan) and cell separators (gray);
- front-matter keys (yellow) and values (cyan);
- headings (bold green) and list markers (yellow);
- footnote markers (magenta).

It also re-indents wrapped bullet text so it aligns under the bullet's text,
and separates a bullet from the wrapped item before it with a blank line.

Blocks are recognised by line-prefix state machines, not a Markdown parser.
"""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from yachalk import chalk

from lessfilter.config.logging import get_logger
from lessfilter.constants import DEFAULT_COLUMNS
from lessfilter.pipeline.contracts import BaseTransformer, to_bytes, to_text
from lessfilter.rendering.ansi import strip_ansi

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.config.model import Config
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext

logger: LessFilterLogger = get_logger(__name__)

FENCE_RE: Final[re.Pattern[str]] = re.compile(r"^```")
TABLE_START_RE: Final[re.Pattern[str]] = re.compile(r"^\| .*\|\s*$")
NOT_TABLE_RE: Final[re.Pattern[str]] = re.compile(r"^[^|]")
FRONT_MATTER_KEY_RE: Final[re.Pattern[str]] = re.compile(r"^-?[a-z_0-9.\-]+:")
FRONT_MATTER_LINE_RE: Final[re.Pattern[str]] = re.compile(r"^ *-?[a-z_0-9.\-]+:|^ +-")
FRONT_MATTER_END_RE: Final[re.Pattern[str]] = re.compile(r"^(#|\*|!|---)|^\s*$")
RULER_RE: Final[re.Pattern[str]] = re.compile(r"^---+$")
BREAK_RE: Final[re.Pattern[str]] = re.compile(r"^ +|^[*-]|^#|^\[\^|^ *\d\. ")
FOOTNOTE_DEF_RE: Final[re.Pattern[str]] = re.compile(r"^\[\^")

HEADING_OR_RULER_RE: Final[re.Pattern[str]] = re.compile(r"^(#|---+)")
BULLET_RE: Final[re.Pattern[str]] = re.compile(r"^( *)([*\-]) ")
NUMBERED_RE: Final[re.Pattern[str]] = re.compile(r"^( *)\d\. ")
MARKER_RE: Final[re.Pattern[str]] = re.compile(r"^( *)([*\-]|\d\.)( )")
INDENTED_CODE_RE: Final[re.Pattern[str]] = re.compile(r"^    [^ ]")
WORD_RE: Final[re.Pattern[str]] = re.compile(r"([^ ]+)")
TABLE_CELL_RE: Final[re.Pattern[str]] = re.compile(r"(\| *)([^|]+)")
FRONT_MATTER_PAIR_RE: Final[re.Pattern[str]] = re.compile(
    r"^( *)(-?[a-z_0-9.\-]+):(?:( +)(.*))?"
)
FOOTNOTE_RE: Final[re.Pattern[str]] = re.compile(r"(\[\^[^\]]+\])")


def resolve_width(config: Config) -> int:
    """Return the wrap width.

    Precedence: ``[markdown] columns``, ``COLUMNS``, the controlling terminal
    (standard error, then standard input), then ``DEFAULT_COLUMNS``.
    """
    if config.columns:
        return config.columns
    if config.env_columns:
        return config.env_columns
    for stream in (sys.stderr, sys.stdin):
        try:
            return os.get_terminal_size(stream.fileno()).columns
        except (AttributeError, ValueError, OSError):
            continue
    return DEFAULT_COLUMNS


def _words(line: str) -> list[str]:
    # Split on single spaces; trailing empty fields are dropped, leading ones kept.
    words: list[str] = line.split(" ")
    while words and words[-1] == "":
        words.pop()
    return words


class _Rewrapper:
    """Pass 1 state machine."""

    def __init__(self, width: int) -> None:
        self.width = width
        self.out: list[str] = []
        self.acc: list[str] = []
        self.length = 0
        self.in_fence = False
        self.in_table = False
        self.in_front_matter = False
        self.maybe_front_matter = True

    def flush(self) -> None:
        if self.acc:
            self.out.append(" ".join(self.acc))
        self.acc = []
        self.length = 0

    def feed(self, line: str) -> None:
        if self.in_fence:
            if line == "```":
                self.in_fence = False
                self.flush()
            self.out.append(line)
        elif FENCE_RE.match(line):
            self.in_fence = True
            self.flush()
            self.out.append(line)
        elif self.in_table:
            if NOT_TABLE_RE.match(line):
                self.in_table = False
                self.regular(line)
            else:
                self.out.append(line)
        elif TABLE_START_RE.match(line):
            self.in_table = True
            self.flush()
            self.out.append(line)
        elif self.maybe_front_matter and FRONT_MATTER_KEY_RE.match(line):
            self.in_front_matter = True
            self.maybe_front_matter = False
            self.flush()
            self.front_matter(line)
        elif RULER_RE.match(line):
            self.maybe_front_matter = True
            self.in_front_matter = False
            self.flush()
            self.out.append(line)
        elif self.in_front_matter and FRONT_MATTER_LINE_RE.match(line):
            self.front_matter(line)
        else:
            self.regular(line)

    def front_matter(self, line: str) -> None:
        if FRONT_MATTER_END_RE.match(line):
            self.in_front_matter = False
            self.regular(line)
        else:
            self.out.append(line)

    def regular(self, line: str) -> None:
        indent = ""
        if line == "" or BREAK_RE.match(line):
            self.flush()
            if line == "":
                self.out.append("")
            if FOOTNOTE_DEF_RE.match(line):
                indent = "  "
        for word in _words(line):
            if self.length + 1 + len(word) >= self.width:
                self.flush()
                word = f"{indent}{word}"
            self.length += 1 + len(word)
            self.acc.append(word)
        self.maybe_front_matter = False


def rewrap(lines: Iterable[str], width: int) -> list[str]:
    """Pass 1: re-flow prose to ``width`` columns.

    Args:
        lines (Iterable[str]): Markdown lines without terminators.
        width (int): Target width.

    Returns:
        list[str]: Re-wrapped lines.
    """
    wrapper = _Rewrapper(width)
    for line in lines:
        wrapper.feed(line)
    wrapper.flush()
    return wrapper.out


def _paint_marker(line: str) -> str:
    return MARKER_RE.sub(lambda m: f"{m[1]}{chalk.yellow(m[2])}{m[3]}", line, count=1)


def _paint_words(line: str) -> str:
    return WORD_RE.sub(lambda m: chalk.yellow(m[1]), line)


@dataclass
class _Colouriser:
    """Pass 2 state machine."""

    star: str | None = None
    star_chars: str = ""
    star_indented: bool = False
    code: bool = False
    in_fence: bool = False
    in_table: bool = False
    in_front_matter: bool = False
    maybe_front_matter: bool = True

    def feed(self, line: str) -> str:
        bullet: re.Match[str] | None = BULLET_RE.match(line)
        numbered: re.Match[str] | None = NUMBERED_RE.match(line)
        if self.in_fence:
            if FENCE_RE.match(line):
                self.in_fence = False
            else:
                line = chalk.yellow(strip_ansi(line))
        elif FENCE_RE.match(line):
            # A fence closes any list item or indented block it follows.
            self.in_fence = True
            self.star = None
            self.code = False
        elif self.in_table:
            if NOT_TABLE_RE.match(line):
                self.in_table = False
            line = line.replace("|", chalk.gray("|"))
        elif TABLE_START_RE.match(line):
            line = TABLE_CELL_RE.sub(lambda m: f"{m[1]}{chalk.cyan(m[2])}", line)
            line = line.replace("|", chalk.gray("|"))
            self.in_table = True
        elif HEADING_OR_RULER_RE.match(line):
            self.star_indented = False
            self.star = None
            self.in_front_matter = False
            if line.startswith("---"):
                self.maybe_front_matter = True
            else:
                line = chalk.green.bold(line)
        elif self.maybe_front_matter and FRONT_MATTER_KEY_RE.match(line):
            self.in_front_matter = True
            self.maybe_front_matter = False
            line = self.front_matter(line)
        elif self.in_front_matter and FRONT_MATTER_LINE_RE.match(line):
            line = self.front_matter(line)
        elif self.star is not None and line != "" and self._continues_item(line):
            line = f"{self.star}  {line}"
            self.star_indented = True
        elif self.star is not None and self.star_indented and self._starts_item(line):
            line = "\n" + _paint_marker(f"{self.star}{line}")
            self.star_indented = False
        elif self.code and not line.startswith("    ") and line != "":
            line = "        " + _paint_words(line)
        elif bullet is not None:
            self.star, self.star_chars = bullet[1], re.escape(bullet[2])
            self.star_indented = False
            line = _paint_marker(line)
        elif numbered is not None:
            self.star, self.star_chars = numbered[1], "1-9"
            self.star_indented = False
            line = _paint_marker(line)
        elif INDENTED_CODE_RE.match(line):
            self.code = True
            line = "    " + _paint_words(line[4:])
        else:
            self.star = None
            self.code = False
        return FOOTNOTE_RE.sub(lambda m: chalk.magenta(m[1]), line)

    def _continues_item(self, line: str) -> bool:
        return re.match(f"^{re.escape(self.star or '')}[^{self.star_chars}]", line) is not None

    def _starts_item(self, line: str) -> bool:
        return re.match(f"^{re.escape(self.star or '')}[{self.star_chars}]", line) is not None

    def front_matter(self, line: str) -> str:
        if FRONT_MATTER_END_RE.match(line):
            self.in_front_matter = False
            return line
        return FRONT_MATTER_PAIR_RE.sub(
            lambda m: (
                f"{m[1]}{chalk.yellow(m[2])}:{m[3] or ''}"
                + (chalk.cyan(m[4]) if m[4] else "")
            ),
            line,
            count=1,
        )


def colourise(lines: Iterable[str]) -> list[str]:
    """Pass 2: colour re-wrapped Markdown lines.

    Args:
        lines (Iterable[str]): Output of ``rewrap``.

    Returns:
        list[str]: Coloured lines. A line may start with an inserted newline.
    """
    colouriser = _Colouriser()
    return [colouriser.feed(line) for line in lines]


def render_markdown(text: str, width: int) -> str:
    """Re-wrap and colour a Markdown document."""
    lines: list[str] = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    rendered: list[str] = colourise(rewrap(lines, width))
    return "".join(f"{line}\n" for line in rendered)


@dataclass(frozen=True)
class MarkdownReformatter(BaseTransformer):
    """Re-wrap Markdown to the terminal width; needs no external tool."""

    name: str = "markdown"
    patterns: tuple[str, ...] = ("*.md",)
    suffix: str = "md"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the re-wrapped document as an artifact."""
        width: int = resolve_width(ctx.config)
        logger.debug("markdown: wrapping %s at %d columns", ctx.subject.path, width)
        text: str = to_text(ctx.subject.path.read_bytes())
        return self.rewrite(ctx, to_bytes(render_markdown(text, width)))
