# lessfilter:header:start
#
#   project      : LessFilter
#   file         : highlighter.py
#   file_relpath : src/lessfilter/pipeline/colourizers/highlighter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Generic syntax highlighter (``pygmentize``): the catch-all colourizer.

Lexer resolution, first hit wins:

1. ``LEXER_OVERRIDES`` for the subject name, then for the inferred tag;
2. the memoised lexer table for the subject name, unless it ends in a version
   number (``wrapper-2.1.7`` would otherwise be taken for groff);
3. the memoised lexer table for the inferred tag.

Some lexers get a different output: the plain ``terminal`` formatter has next
to no colour for ``python``/``sh``/``ini``/``c``/``bbcbasic``, so they always use
``terminal256``; Markdown uses a dedicated style.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from lessfilter.config.logging import get_logger
from lessfilter.highlight.cache import LexerCache
from lessfilter.highlight.overrides import override_lexer
from lessfilter.pipeline.contracts import BaseTransformer, Plan
from lessfilter.pipeline.tools import find_tool, run_tool

if TYPE_CHECKING:
    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.pipeline.contracts import TransformResult
    from lessfilter.pipeline.context import TransformContext

logger: LessFilterLogger = get_logger(__name__)

VERSION_SUFFIX_RE: Final[re.Pattern[str]] = re.compile(r"[0-9]\.[0-9]$")
FORCE_256_LEXERS: Final[frozenset[str]] = frozenset({"python", "sh", "ini", "c", "bbcbasic"})
MARKDOWN_LEXERS: Final[frozenset[str]] = frozenset({"markdown", "md"})

# The last Pygments release for Python 2.7 only has 'material' if it was back-ported.
LEGACY_VERSION: Final[str] = "2.5.2"
LEGACY_MATERIAL_STYLE: Final[Path] = Path(
    "/usr/local/lib/python2.7/dist-packages/pygments/styles/material.py"
)


@dataclass(frozen=True)
class HighlightPlan(Plan):
    """Plan carrying the resolved highlighter options."""

    lexer: str = ""
    formatter: str = "terminal"
    style: str = ""


def resolve_lexer(ctx: TransformContext, cache: LexerCache) -> tuple[str, str] | None:
    """Return ``(lexer, candidate)`` for the current subject, or None."""
    for candidate in ctx.candidates():
        lexer: str | None = override_lexer((candidate,))
        if lexer is not None:
            return lexer, candidate

    name: str = ctx.subject.name
    if not VERSION_SUFFIX_RE.search(name):
        lexer = cache.lookup(name)
        if lexer is not None:
            return lexer, name
    else:
        logger.debug("Not guessing a lexer from versioned name %r", name)

    tag: str = ctx.inferred_tag
    lexer = cache.lookup(tag)
    if lexer is not None:
        return lexer, tag
    return None


def select_style(lexer: str, ctx: TransformContext, cache: LexerCache) -> str:
    """Pick the style for ``lexer``."""
    config = ctx.config
    if lexer not in MARKDOWN_LEXERS:
        return config.style
    if cache.version() == LEGACY_VERSION and not LEGACY_MATERIAL_STYLE.is_file():
        return config.markdown_legacy_style
    return config.markdown_style


@dataclass(frozen=True)
class HighlighterColourizer(BaseTransformer):
    """Colour any file ``pygmentize`` has a lexer for."""

    name: str = "pygments"
    patterns: tuple[str, ...] = ("*",)
    tools: tuple[str, ...] = ("pygmentize",)

    def applies(self, ctx: TransformContext) -> Plan | None:
        """Resolve a lexer; decline if there is none."""
        if find_tool("pygmentize") is None:
            return None
        cache = LexerCache(ctx.config.cache_dir)
        resolved = resolve_lexer(ctx, cache)
        if resolved is None:
            logger.debug("pygments: no lexer for %r", ctx.subject.name)
            return None
        lexer, candidate = resolved
        formatter: str = "terminal256" if lexer in FORCE_256_LEXERS else ctx.config.terminal_format
        plan = HighlightPlan(
            pattern=lexer,
            candidate=candidate,
            tool="pygmentize",
            lexer=lexer,
            formatter=formatter,
            style=select_style(lexer, ctx, cache),
        )
        logger.debug("pygments: %s", plan)
        return plan

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Emit the highlighted file."""
        assert isinstance(plan, HighlightPlan)
        result = run_tool(
            [
                plan.tool,
                "-f",
                plan.formatter,
                "-O",
                f"style={plan.style}",
                "-l",
                plan.lexer,
                str(ctx.subject.path),
            ]
        )
        return self.emit(result.stdout)
