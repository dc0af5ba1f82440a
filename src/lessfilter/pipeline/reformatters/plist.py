# lessfilter:header:start
#
#   project      : LessFilter
#   file         : plist.py
#   file_relpath : src/lessfilter/pipeline/reformatters/plist.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Property list reformatter (``plutil -p``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lessfilter.pipeline.contracts import BaseTransformer, to_bytes, to_text
from lessfilter.pipeline.tools import run_tool
from lessfilter.rendering.ansi import escape_control

if TYPE_CHECKING:
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext


@dataclass(frozen=True)
class PlutilReformatter(BaseTransformer):
    """Print property lists in human-readable form.

    Strings inside a plist may hold raw ESC characters; they are shown as
    ``<ESC>`` so they cannot drive the terminal.
    """

    name: str = "plutil"
    patterns: tuple[str, ...] = ("*.plist",)
    tools: tuple[str, ...] = ("plutil",)
    suffix: str = "plist"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the printed plist as an artifact."""
        result = run_tool([plan.tool, "-p", str(ctx.subject.path)])
        return self.rewrite(ctx, to_bytes(escape_control(to_text(result.stdout))))
