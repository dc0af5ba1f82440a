# lessfilter:header:start
#
#   project      : LessFilter
#   file         : disassembly.py
#   file_relpath : src/lessfilter/pipeline/reformatters/disassembly.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Disassembly reformatters for ELF (aarch64) and Mach-O binaries.

The tools' own output is recoloured with section-scoped rules:
    Title headings  : green
    Hex             : magenta
    Symbols         : cyan
    Section names   : yellow
    Registers       : red

macOS ``objdump`` differs from the GNU one (``;`` vs ``//`` comments, byte
layout of the raw instruction column); the rules accept both:

    macOS:      937c: 62 fc ff 97   bl      0x8504 <count_pad_digits>
    GNU/Linux:  937c:       97fffc62        bl      8504 <count_pad_digits>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from yachalk import chalk

from lessfilter.config.logging import get_logger
from lessfilter.pipeline.contracts import BaseTransformer, to_bytes, to_text
from lessfilter.pipeline.tools import find_tool, first_available, run_tool
from lessfilter.rendering.recolour import Rule, paint, recolour, rule, scope

if TYPE_CHECKING:
    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext

logger: LessFilterLogger = get_logger(__name__)

# Cross disassemblers, most preferred first.
AARCH64_OBJDUMPS: Final[tuple[str, ...]] = (
    "aarch64-unknown-linux-gnu-objdump",
    "riscos64-objdump",
)

_SYMBOLS = scope(r"^SYMBOL TABLE:", r"^$")
_DISASSEMBLY = scope(r"^Disassembly of section", r"^[A-Z]")

OBJDUMP_RULES: Final[tuple[Rule, ...]] = (
    rule(r"\r", lambda m: "", first=True),
    paint(
        r"(  F \.[a-zA-Z][a-zA-Z0-9_.\-]* +[0-9a-f]{16} )([A-Za-z_][A-Za-z_0-9]*)",
        {2: "cyan"},
        within=_SYMBOLS,
    ),
    paint(r"( \.[a-zA-Z][a-zA-Z0-9_.\-]*)", {1: "yellow"}, within=_SYMBOLS),
    rule(
        r"^([0-9a-f]{8,}) <([^>]*)>:",
        lambda m: f"{chalk.magenta(m[1])} <{chalk.cyan(m[2])}>:",
        within=_DISASSEMBLY,
        first=True,
    ),
    paint(
        r"^( *)([0-9a-f]+):( +)"
        r"([0-9a-f]{2} [0-9a-f ]{2} [0-9a-f ]{2} [0-9a-f ]{2}|[0-9a-f ]{8})"
        r"  ([^a-z.]+)([a-z.]+)",
        {2: "magenta", 4: "white", 6: "yellow"},
        within=_DISASSEMBLY,
        first=True,
    ),
    paint(
        r"^( *)([0-9a-f]+):( +)([0-9a-f]{8} [0-9a-f ]{8} [0-9a-f ]{8} [0-9a-f ]{8})",
        {2: "magenta", 4: "white"},
        within=_DISASSEMBLY,
        first=True,
    ),
    paint(
        r"([ ,\[{])([xw][1-3][0-9]|[xw][0-9]|[wx]?lr|pc|w?sp|[wx]zr)",
        {2: "red"},
        within=_DISASSEMBLY,
    ),
    paint(r"<([_a-zA-Z][_a-zA-Z0-9.]*)([+>])", {1: "cyan"}, within=_DISASSEMBLY),
    paint(r"(<unknown>)", {1: "red"}, within=_DISASSEMBLY),
    rule(r" (;|//) (.*)", lambda m: " " + chalk.green(f"{m[1]} {m[2]}"), within=_DISASSEMBLY),
    paint(r"(0x[A-Fa-f0-9]{2,16})([^)a-f0-9]|$)", {1: "magenta"}),
    paint(r"#(0x[A-Fa-f0-9]{1,16})", {1: "magenta"}),
    paint(r"^([A-Z][A-Za-z .]*:)$", {1: "green"}, first=True),
)

_TEXT_SECTION = scope(r"^\(__TEXT.* section", r"^$")

OTOOL_RULES: Final[tuple[Rule, ...]] = (
    rule(r"\r", lambda m: "", first=True),
    rule(
        r"^([0-9a-f]{8,})(\t)([a-z][a-z0-9]*)",
        lambda m: f"{chalk.cyan(m[1])}        {chalk.yellow(m[3])}",
        within=_TEXT_SECTION,
    ),
    paint(r"(%[rec][a-z0-9]*)", {1: "red"}, within=_TEXT_SECTION),
    paint(r"(\$(0x[0-9a-f]*|[0-9]+))", {1: "magenta"}, within=_TEXT_SECTION),
    paint(r"(## .*)", {1: "green"}, within=_TEXT_SECTION),
    paint(r"^([_A-Z][_A-Za-z .]*:)$", {1: "green"}, first=True),
)


def expand_tabs(text: str, tabsize: int = 8) -> str:
    """Expand tabs line by line, as ``expand(1)`` does."""
    return "\n".join(line.expandtabs(tabsize) for line in text.split("\n"))


@dataclass(frozen=True)
class ObjdumpReformatter(BaseTransformer):
    """Disassemble aarch64 ELF binaries.

    A cross ``objdump`` is preferred; the native one is only trusted with
    aarch64 on macOS.
    """

    name: str = "objdump"
    patterns: tuple[str, ...] = ("*.elf-arm64",)
    tools: tuple[str, ...] = (*AARCH64_OBJDUMPS, "objdump")
    suffix: str = "objdump"

    def select_tool(self, ctx: TransformContext) -> str | None:
        """Pick a cross objdump, else the native one on macOS."""
        tool: str | None = first_available(AARCH64_OBJDUMPS)
        if tool is None and ctx.config.system == "Darwin" and find_tool("objdump"):
            tool = "objdump"
        return tool

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Emit the recoloured disassembly directly."""
        result = run_tool([plan.tool, "-r", "-d", "-x", str(ctx.subject.path)])
        text: str = expand_tabs(to_text(result.stdout))
        return self.emit(to_bytes(recolour(text, OBJDUMP_RULES)))


@dataclass(frozen=True)
class OtoolReformatter(BaseTransformer):
    """Disassemble Mach-O binaries with ``otool``."""

    name: str = "otool"
    patterns: tuple[str, ...] = ("*.macho",)
    tools: tuple[str, ...] = ("otool",)
    suffix: str = "otool"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the recoloured disassembly as an artifact."""
        result = run_tool([plan.tool, "-htV", str(ctx.subject.path)])
        return self.rewrite(ctx, to_bytes(recolour(to_text(result.stdout), OTOOL_RULES)))
