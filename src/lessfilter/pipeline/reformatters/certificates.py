# lessfilter:header:start
#
#   project      : LessFilter
#   file         : certificates.py
#   file_relpath : src/lessfilter/pipeline/reformatters/certificates.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Certificate reformatter: decode CSRs and X.509 certificates with ``openssl``.

The highlighter colours every word of ``openssl -text`` output individually,
which is unreadable, so the output is recoloured here: field names magenta,
values cyan, PEM envelope delimiters yellow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from lessfilter.pipeline.contracts import BaseTransformer, to_bytes, to_text
from lessfilter.pipeline.tools import run_tool
from lessfilter.rendering.recolour import Rule, paint, recolour, rule, scope

if TYPE_CHECKING:
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext

# Matched pattern -> openssl subcommand.
SUBCOMMANDS: Final[dict[str, str]] = {
    "*.csr": "req",
    "*.crt": "x509",
}

_PEM = scope(r"^---*BEGIN.*", r"^---*END.*")

OPENSSL_RULES: Final[tuple[Rule, ...]] = (
    rule(r"^( *)(Validity)$", lambda m: f"{m[1]}{m[2]}:", first=True),
    paint(
        r"^( *)([A-Z][A-Z0-9a-z -]*)(: )([0-9A-Za-z(].*)$",
        {2: "magenta", 4: "cyan"},
        first=True,
    ),
    paint(r"^( *)([A-Z][A-Z0-9a-z -]*)(: ?)$", {2: "magenta"}, first=True),
    paint(r"^( *)(\(none\))$", {2: "cyan"}, first=True),
    paint(r"^([^-]+)$", {1: "cyan"}, within=_PEM, first=True),
    paint(r"^(---*.*)$", {1: "yellow"}, within=_PEM, first=True),
)


@dataclass(frozen=True)
class OpensslReformatter(BaseTransformer):
    """Decode certificate requests (``*.csr``) and certificates (``*.crt``)."""

    name: str = "openssl"
    patterns: tuple[str, ...] = tuple(SUBCOMMANDS)
    tools: tuple[str, ...] = ("openssl",)
    suffix: str = "crt"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Emit the recoloured decoding directly."""
        command: str = SUBCOMMANDS[plan.pattern]
        result = run_tool([plan.tool, command, "-in", str(ctx.subject.path), "-text"])
        return self.emit(to_bytes(recolour(to_text(result.stdout), OPENSSL_RULES)))
