# lessfilter:header:start
#
#   project      : LessFilter
#   file         : structured.py
#   file_relpath : src/lessfilter/pipeline/colourizers/structured.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""JSON colourizer: pretty-print and colour with ``jq``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lessfilter.pipeline.contracts import BaseTransformer
from lessfilter.pipeline.tools import run_tool

if TYPE_CHECKING:
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext


@dataclass(frozen=True)
class JqColourizer(BaseTransformer):
    """Colour JSON and JSON Lines documents."""

    name: str = "jq"
    patterns: tuple[str, ...] = ("*.json", "*.jsonl")
    tools: tuple[str, ...] = ("jq",)

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Emit ``jq --color-output .``."""
        return self.emit(
            run_tool([plan.tool, "--color-output", ".", str(ctx.subject.path)]).stdout
        )
