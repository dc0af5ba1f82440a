# lessfilter:header:start
#
#   project      : LessFilter
#   file         : archives.py
#   file_relpath : src/lessfilter/pipeline/reformatters/archives.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Reformatters for library archives.

Both produce a synthesised two-section report (archived files, then symbols)
from two separate tool invocations, then colour the section headings and, for
``ar`` archives, the object file names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from lessfilter.config.logging import get_logger
from lessfilter.pipeline.contracts import BaseTransformer, to_bytes, to_text
from lessfilter.pipeline.tools import find_tool, run_tool
from lessfilter.rendering.recolour import Rule, paint, recolour

if TYPE_CHECKING:
    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext

logger: LessFilterLogger = get_logger(__name__)

HEADING_RULE: Final[Rule] = paint(r"^([A-Z][A-Za-z ]*:)", {1: "magenta"})

AR_RULES: Final[tuple[Rule, ...]] = (
    HEADING_RULE,
    paint(r"(^| )([^. ]*\.o)/?(:| |$)", {2: "yellow"}),
)

RISCOS_LIBRARY_TITLE: Final[str] = "RISC OS library archive\n----------------\n"
AR_TITLE: Final[str] = "'ar' archive\n------------\n"


def build_report(title: str, files: bytes, symbols: bytes) -> str:
    """Assemble the two-section archive report.

    Args:
        title (str): Underlined title block.
        files (bytes): Output of the member listing.
        symbols (bytes): Output of the symbol listing.

    Returns:
        str: The uncoloured report.
    """
    return f"{title}\nArchived files:\n{to_text(files)}\n\nSymbols:\n{to_text(symbols)}"


@dataclass(frozen=True)
class LibFileReformatter(BaseTransformer):
    """List RISC OS ALF libraries with ``riscos-libfile``."""

    name: str = "libfile"
    patterns: tuple[str, ...] = ("*.alf",)
    tools: tuple[str, ...] = ("riscos-libfile",)
    suffix: str = "alf"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the coloured report as an artifact."""
        path = str(ctx.subject.path)
        report: str = build_report(
            RISCOS_LIBRARY_TITLE,
            run_tool([plan.tool, "-l", path]).stdout,
            run_tool([plan.tool, "-s", path]).stdout,
        )
        return self.rewrite(ctx, to_bytes(recolour(report, (HEADING_RULE,))))


@dataclass(frozen=True)
class ArReformatter(BaseTransformer):
    """List ``ar`` archives.

    ``riscos64-libfile`` is preferred. Otherwise ``ar`` and ``nm`` are used, with
    platform-specific flags; on platforms other than macOS and Linux the
    transformer declines.
    """

    name: str = "ar"
    patterns: tuple[str, ...] = ("*.a",)
    tools: tuple[str, ...] = ("riscos64-libfile", "ar")
    suffix: str = "a-text"

    def select_tool(self, ctx: TransformContext) -> str | None:
        """Pick ``riscos64-libfile``, or ``ar`` on macOS and Linux only."""
        tool: str | None = super().select_tool(ctx)
        if tool == "ar" and ctx.config.system not in ("Darwin", "Linux"):
            logger.debug("ar: unsupported platform %s", ctx.config.system)
            return None
        return tool

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the coloured report as an artifact."""
        path = str(ctx.subject.path)
        if plan.tool != "ar":
            files: bytes = run_tool([plan.tool, "-l", path]).stdout
            symbols: bytes = run_tool([plan.tool, "-s", path]).stdout
        elif ctx.config.system == "Darwin":
            files = run_tool(["ar", "-tLv", path]).stdout
            symbols = run_tool(["nm", "-gU", path]).stdout if find_tool("nm") else b""
        else:
            files = run_tool(["ar", "tOv", path]).stdout
            symbols = run_tool(["nm", "-g", path]).stdout if find_tool("nm") else b""
            # Undefined symbols are references, not exports.
            symbols = b"".join(
                line for line in symbols.splitlines(keepends=True) if b"  U " not in line
            )
        report: str = build_report(AR_TITLE, files, symbols)
        return self.rewrite(ctx, to_bytes(recolour(report, AR_RULES)))
