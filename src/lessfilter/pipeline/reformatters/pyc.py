# lessfilter:header:start
#
#   project      : LessFilter
#   file         : pyc.py
#   file_relpath : src/lessfilter/pipeline/reformatters/pyc.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Python bytecode reformatter.

The bundled ``pyc_view`` script is run by the ``python3`` (or ``python``) found
on ``PATH`` against the file's resolved real path. References to the
neighbouring source file are shortened to ``<pysource>``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.resources import as_file, files
from typing import TYPE_CHECKING, Final

from lessfilter.config.logging import get_logger
from lessfilter.core.errors import PathResolutionError
from lessfilter.pipeline.contracts import BaseTransformer, to_bytes, to_text
from lessfilter.pipeline.tools import run_tool
from lessfilter.utils.paths import realpath

if TYPE_CHECKING:
    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.pipeline.contracts import Plan, TransformResult
    from lessfilter.pipeline.context import TransformContext

logger: LessFilterLogger = get_logger(__name__)

VIEWER_PACKAGE: Final[str] = "lessfilter.pipeline.reformatters"
VIEWER_SCRIPT: Final[str] = "pyc_view.py"
SOURCE_PLACEHOLDER: Final[str] = "<pysource>"


def source_path_for(real_file: str) -> str:
    """Return the path of the source file a ``.pyc`` was compiled from, by name."""
    return real_file.removesuffix(".pyc") + ".py"


@dataclass(frozen=True)
class PycReformatter(BaseTransformer):
    """Disassemble Python bytecode."""

    name: str = "pyc"
    patterns: tuple[str, ...] = ("*.pyc",)
    tools: tuple[str, ...] = ("python3", "python")
    suffix: str = "pyc"

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Write the disassembly as an artifact."""
        try:
            real_file: str = realpath(ctx.subject.path)
        except PathResolutionError as e:
            logger.warning("%s; using the absolute path instead", e)
            real_file = os.path.abspath(ctx.subject.path)

        with as_file(files(VIEWER_PACKAGE).joinpath(VIEWER_SCRIPT)) as script:
            result = run_tool([plan.tool, str(script), real_file])
        text: str = to_text(result.stdout).replace(source_path_for(real_file), SOURCE_PLACEHOLDER)
        return self.rewrite(ctx, to_bytes(text))
