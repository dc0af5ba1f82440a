# lessfilter:header:start
#
#   project      : LessFilter
#   file         : riscos.py
#   file_relpath : src/lessfilter/pipeline/reformatters/riscos.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Reformatters for RISC OS formats.

Covers tokenised BBC BASIC (``,ffb``), ARM code (``,ffa``/``,ff8``/``,ffc``/``,f95``
and AIF images), AOF object files and untyped data (``,ffd``).

The AOF decoder output is recoloured here:
    Title headings  : green
    Hex             : magenta
    Symbols         : cyan
    Area names      : yellow
    Registers       : red
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from yachalk import chalk

from lessfilter.config.logging import get_logger
from lessfilter.pipeline.contracts import BaseTransformer, to_bytes, to_text
from lessfilter.pipeline.tools import run_tool
from lessfilter.rendering.recolour import Rule, paint, recolour, rule, scope

if TYPE_CHECKING:
    from pathlib import Path

    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext

logger: LessFilterLogger = get_logger(__name__)

ARM_CODE_PATTERNS: Final[tuple[str, ...]] = ("*,ffa", "*,ff8", "*,ffc", "*,f95", "*.arm")

_CODE = scope(r"Attributes: Code", r"^\s*$")

DECAOF_RULES: Final[tuple[Rule, ...]] = (
    rule(r"\r", lambda m: "", first=True),
    paint(
        r"^([_!A-Za-z][^ ]*)",
        {1: "cyan"},
        within=scope(r"^\*\* Symbol Table", r"^\*\*"),
        first=True,
    ),
    rule(r"^\*\* (.*)$", lambda m: chalk.green(f"** {m[1]}"), first=True),
    paint(
        r" : (BL|BX|B)(  |[A-Z][A-Z])( +)([_a-zA-Z][_a-zA-Z0-9$]*)$",
        {4: "cyan"},
        within=_CODE,
    ),
    rule(
        r"^  0x([0-9a-f]{6}):  ([0-9a-f]{8})  (....) : (B|[A-Z]{2,})( +)",
        lambda m: (
            f"    {chalk.magenta(m[1])}:  {chalk.white(m[2])}  {m[3]} : {chalk.yellow(m[4])}{m[5]}"
        ),
        within=_CODE,
        first=True,
    ),
    rule(
        r"^  0x([0-9a-f]{6}):  ([0-9a-f]{8})  (....) : (Undefined instruction)",
        lambda m: f"    {chalk.magenta(m[1])}:  {chalk.white(m[2])}  {m[3]} : {chalk.red(m[4])}",
        within=_CODE,
        first=True,
    ),
    paint(r"( ; .*)", {1: "green"}, within=_CODE, first=True),
    paint(r"([ ,\[{])(r1[0-5]|r[0-9]|lr|pc|sp|[cs]psr_[a-z]*)", {2: "red"}, within=_CODE),
    paint(r"(,)(LSL|LSR|ASR|ROR)", {2: "yellow"}, within=_CODE),
    paint(r"(0x[A-Fa-f0-9]{2,8})([^)a-f0-9]|$)", {1: "magenta"}),
    paint(r"(^At |\[)([A-Fa-f0-9]{6,8})(:|\])", {2: "magenta"}),
    paint(r"(symbol )([_!A-Za-z][^ ]*)", {2: "cyan"}),
    paint(r'(area ")([_!A-Za-z][^ ]*)(")', {2: "yellow"}),
)


@dataclass(frozen=True)
class BasicDetokeniser(BaseTransformer):
    """Detokenise BBC BASIC; the artifact is tagged ``.bas`` for the highlighter."""

    name: str = "bastotxt"
    patterns: tuple[str, ...] = ("*,ffb",)
    tools: tuple[str, ...] = ("riscos-basicdetokenise", "bastotxt")
    suffix: str = "bbc"
    kind_hint: str | None = ".bas"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Let the tool write the artifact itself (``-i <in> -o <out>``)."""
        target: Path = self.artifact(ctx)
        run_tool([plan.tool, "-i", str(ctx.subject.path), "-o", str(target)])
        if not target.exists():
            # The final stream expects an artifact, even after a failed run.
            target.write_bytes(b"")
        return self.adopt(target)


@dataclass(frozen=True)
class DumpiReformatter(BaseTransformer):
    """Disassemble ARM code with ``riscos-dumpi``, which colours its own output."""

    name: str = "riscos-dumpi"
    patterns: tuple[str, ...] = ARM_CODE_PATTERNS
    tools: tuple[str, ...] = ("riscos-dumpi",)
    suffix: str = "arm"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Emit the coloured disassembly directly."""
        colour: str = "--colour-8bit" if ctx.config.is_256 else "--colour"
        return self.emit(run_tool([plan.tool, colour, str(ctx.subject.path)]).stdout)


@dataclass(frozen=True)
class ArmDissReformatter(BaseTransformer):
    """Disassemble ARM code with ``armdiss`` into an artifact."""

    name: str = "armdiss"
    patterns: tuple[str, ...] = ARM_CODE_PATTERNS
    tools: tuple[str, ...] = ("armdiss",)
    suffix: str = "arm"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the disassembly as an artifact."""
        return self.rewrite(ctx, run_tool([plan.tool, str(ctx.subject.path)]).stdout)


@dataclass(frozen=True)
class DecAofReformatter(BaseTransformer):
    """Decode AOF object files with ``riscos-decaof`` and recolour the listing."""

    name: str = "decaof"
    patterns: tuple[str, ...] = ("*.aof",)
    tools: tuple[str, ...] = ("riscos-decaof",)
    suffix: str = "data"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the recoloured decoding as an artifact."""
        result = run_tool([plan.tool, "-drmsc", str(ctx.subject.path)])
        return self.rewrite(ctx, to_bytes(recolour(to_text(result.stdout), DECAOF_RULES)))


@dataclass(frozen=True)
class RiscosDumpReformatter(BaseTransformer):
    """Hex-dump RISC OS data files with ``riscos-dump``."""

    name: str = "riscos-dump"
    patterns: tuple[str, ...] = ("*,ffd",)
    tools: tuple[str, ...] = ("riscos-dump",)
    suffix: str = "data"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the dump as an artifact."""
        return self.rewrite(ctx, run_tool([plan.tool, str(ctx.subject.path)]).stdout)
