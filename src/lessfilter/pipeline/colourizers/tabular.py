# lessfilter:header:start
#
#   project      : LessFilter
#   file         : tabular.py
#   file_relpath : src/lessfilter/pipeline/colourizers/tabular.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""CSV colourizer built on csvkit's ``csvformat``.

``csvformat`` re-emits the table with a ``£`` delimiter and every non-numeric
field quoted, which makes the fields easy to tokenise: delimiters become ``,``,
bare fields (numbers) are yellow, and quoted text is cyan inside bold-blue quotes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from yachalk import chalk

from lessfilter.pipeline.contracts import BaseTransformer, to_bytes, to_text
from lessfilter.pipeline.tools import run_tool

if TYPE_CHECKING:
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext

DELIMITER: Final[str] = "£"
OUTPUT_DELIMITER: Final[str] = ","

FIELD_RE: Final[re.Pattern[str]] = re.compile(r'"((?:[^"]|"")*)"|([^£]*)')
NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"[0-9][0-9.]*")


def colour_field(quoted: str | None, bare: str) -> str:
    """Colour one field; quoted numbers lose their quotes."""
    if quoted is None:
        return chalk.yellow(bare) if bare else ""
    if NUMBER_RE.fullmatch(quoted):
        return chalk.yellow(quoted)
    quote: str = chalk.blue.bold('"')
    return f"{quote}{chalk.cyan(quoted)}{quote}"


def colour_csv_line(line: str) -> str:
    """Colour one ``£``-delimited line."""
    fields: list[str] = []
    pos = 0
    while True:
        match = FIELD_RE.match(line, pos)
        # The bare alternative matches the empty string, so a match always exists.
        assert match is not None
        fields.append(colour_field(match.group(1), match.group(2) or ""))
        pos = match.end()
        if pos >= len(line) or line[pos] != DELIMITER:
            break
        pos += 1
    if pos < len(line):
        # Unbalanced quoting (e.g. a field spanning lines): keep the rest as is.
        fields[-1] += line[pos:]
    return OUTPUT_DELIMITER.join(fields)


def colour_csv(text: str) -> str:
    """Colour every line of ``csvformat -D£`` output."""
    return "\n".join(colour_csv_line(line) if line else line for line in text.split("\n"))


@dataclass(frozen=True)
class CsvColourizer(BaseTransformer):
    """Colour CSV files, provided ``csvformat`` copes with a non-ASCII delimiter."""

    name: str = "csvkit"
    patterns: tuple[str, ...] = ("*.csv",)
    tools: tuple[str, ...] = ("csvformat",)

    def probe(self, ctx: TransformContext, plan: Plan) -> bool:
        """Dry-run the ``£`` delimiter on empty input; older csvkits reject it."""
        return run_tool([plan.tool, f"-D{DELIMITER}"], stdin=b"", probe=True).success

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Emit the coloured table."""
        result = run_tool([plan.tool, f"-D{DELIMITER}", "-U", "2", str(ctx.subject.path)])
        return self.emit(to_bytes(colour_csv(to_text(result.stdout))))
