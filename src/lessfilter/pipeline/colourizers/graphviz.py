# lessfilter:header:start
#
#   project      : LessFilter
#   file         : graphviz.py
#   file_relpath : src/lessfilter/pipeline/colourizers/graphviz.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Graphviz colourizer using grc's ``grcat`` with a user-supplied configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lessfilter.pipeline.contracts import BaseTransformer
from lessfilter.pipeline.tools import run_tool

if TYPE_CHECKING:
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext


@dataclass(frozen=True)
class GrcColourizer(BaseTransformer):
    """Colour Graphviz sources; only when the grc configuration file exists."""

    name: str = "grc"
    patterns: tuple[str, ...] = ("*.dot", "*.gv", "*.gv-dot")
    tools: tuple[str, ...] = ("grcat",)

    def probe(self, ctx: TransformContext, plan: Plan) -> bool:
        """Require the ``grcat`` configuration for Graphviz."""
        return ctx.config.grc_graphviz_conf.is_file()

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Emit ``grcat <conf> < file``."""
        result = run_tool(
            [plan.tool, str(ctx.config.grc_graphviz_conf)], stdin_path=ctx.subject.path
        )
        return self.emit(result.stdout)
