# lessfilter:header:start
#
#   project      : LessFilter
#   file         : xml.py
#   file_relpath : src/lessfilter/pipeline/reformatters/xml.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""XML reformatters: JUnit-style test reports and generic XML/SVG pretty-printing."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import TYPE_CHECKING, Final

from lessfilter.config.logging import get_logger
from lessfilter.pipeline.contracts import BaseTransformer
from lessfilter.pipeline.tools import run_tool

if TYPE_CHECKING:
    from pathlib import Path

    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext

logger: LessFilterLogger = get_logger(__name__)

TEST_REPORT_MARKER: Final[bytes] = b"<testsuite"
TEST_REPORT_HEAD_LINES: Final[int] = 10


def looks_like_test_report(path: Path) -> bool:
    """Return True if one of the first lines of ``path`` opens a ``<testsuite``."""
    try:
        with path.open("rb") as handle:
            return any(
                TEST_REPORT_MARKER in line for line in islice(handle, TEST_REPORT_HEAD_LINES)
            )
    except OSError:
        return False


@dataclass(frozen=True)
class JunitXmlReformatter(BaseTransformer):
    """Summarise JUnit XML test reports with ``junitxml``."""

    name: str = "junitxml"
    patterns: tuple[str, ...] = ("*.xml",)
    tools: tuple[str, ...] = ("junitxml",)
    suffix: str = "junitxml"

    def probe(self, ctx: TransformContext, plan: Plan) -> bool:
        """Only test reports qualify."""
        return looks_like_test_report(ctx.subject.path)

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the report summary as an artifact."""
        result = run_tool([plan.tool, "--show", "--summarise", str(ctx.subject.path)])
        return self.rewrite(ctx, result.stdout)


@dataclass(frozen=True)
class XmlLintReformatter(BaseTransformer):
    """Pretty-print well-formed XML and SVG with ``xmllint``."""

    name: str = "xmllint"
    patterns: tuple[str, ...] = ("*.svg", "*.xml")
    tools: tuple[str, ...] = ("xmllint",)
    suffix: str = "xml"

    def probe(self, ctx: TransformContext, plan: Plan) -> bool:
        """Only files ``xmllint`` can parse (without network access) qualify."""
        return run_tool([plan.tool, "--nonet", str(ctx.subject.path)], probe=True).success

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the indented document as an artifact named after the matched type."""
        result = run_tool([plan.tool, "--nonet", "--format", str(ctx.subject.path)])
        return self.rewrite(ctx, result.stdout, suffix=plan.pattern.rpartition(".")[2])
