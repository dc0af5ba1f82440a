# lessfilter:header:start
#
#   project      : LessFilter
#   file         : contracts.py
#   file_relpath : src/lessfilter/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Transformer contract shared by reformatters and colourizers.

A transformer is a capability record: filename patterns, the external tool(s)
it needs, the suffix of the artifact it produces, and whether its output is
final. Its lifecycle is split in two:

    plan = transformer.applies(ctx)        # cheap, side-effect free
    result = transformer.apply(ctx, plan)  # effectful; render mode only

``applies()`` decides by (1) matching ``patterns`` against the context's
candidate names, (2) selecting an installed tool, and (3) an optional
``probe()``. Support checks call ``applies()`` only, so supportability and
rendering can never disagree.

Subclasses override ``run()`` (and, where needed, ``select_tool()`` or
``probe()``). Two helpers build the result:

- ``self.rewrite(ctx, data)`` writes an artifact into the scratch area and
  hands the pipeline a new subject;
- ``self.emit(data)`` returns final output for standard output.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING

from lessfilter.config.logging import get_logger
from lessfilter.pipeline.context import SubjectFile
from lessfilter.pipeline.tools import first_available

if TYPE_CHECKING:
    from pathlib import Path

    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.pipeline.context import TransformContext

logger: LessFilterLogger = get_logger(__name__)


class Action(str, Enum):
    """What a transformer did.

    Attributes:
        REWRITE: Produced an artifact; the pipeline continues with it.
        EMIT: Produced final output; the pipeline stops.
    """

    REWRITE = "rewrite"
    EMIT = "emit"


@dataclass(frozen=True)
class Plan:
    """Outcome of a successful ``applies()``.

    Attributes:
        pattern (str): The pattern that matched.
        candidate (str): The candidate name it matched.
        tool (str): Selected tool name (empty when no tool is required).
    """

    pattern: str
    candidate: str
    tool: str = ""


@dataclass(frozen=True)
class TransformResult:
    """Result of ``apply()``.

    Attributes:
        action (Action): ``REWRITE`` or ``EMIT``.
        subject (SubjectFile | None): New subject for ``REWRITE``.
        output (bytes): Final output for ``EMIT``.
    """

    action: Action
    subject: SubjectFile | None = None
    output: bytes = b""


def to_text(data: bytes) -> str:
    """Decode tool output; undecodable bytes survive a round trip."""
    return data.decode("utf-8", errors="surrogateescape")


def to_bytes(text: str) -> bytes:
    """Encode text produced by ``to_text()`` back to bytes."""
    return text.encode("utf-8", errors="surrogateescape")


@dataclass(frozen=True)
class BaseTransformer:
    """Reusable foundation for transformers.

    Attributes:
        name (str): Stable identifier for logs and tests.
        patterns (tuple[str, ...]): Glob patterns (``fnmatch`` syntax, ``*`` also
            matches ``/``) tested against the candidate names.
        tools (tuple[str, ...]): Alternative tools, in order of preference. Empty
            means no external tool is required.
        suffix (str): Suffix of the produced artifact.
        kind_hint (str | None): Tag attached to the produced artifact.
    """

    name: str
    patterns: tuple[str, ...]
    tools: tuple[str, ...] = ()
    suffix: str = ""
    kind_hint: str | None = None

    def match(self, ctx: TransformContext) -> tuple[str, str] | None:
        """Return the first ``(pattern, candidate)`` pair that matches, or None."""
        for candidate in ctx.candidates():
            for pattern in self.patterns:
                if fnmatchcase(candidate, pattern):
                    return pattern, candidate
        return None

    def select_tool(self, ctx: TransformContext) -> str | None:
        """Return the tool to use, ``""`` if none is required, or None if unavailable."""
        if not self.tools:
            return ""
        return first_available(self.tools)

    def probe(self, ctx: TransformContext, plan: Plan) -> bool:
        """Extra applicability check run after a match and a tool were found."""
        return True

    def applies(self, ctx: TransformContext) -> Plan | None:
        """Decide whether this transformer applies to the current subject.

        Args:
            ctx (TransformContext): The current pipeline context.

        Returns:
            Plan | None: A plan for ``apply()``, or None to decline.
        """
        matched = self.match(ctx)
        if matched is None:
            return None
        tool: str | None = self.select_tool(ctx)
        if tool is None:
            logger.debug("%s: no tool among %s", self.name, self.tools)
            return None
        plan = Plan(pattern=matched[0], candidate=matched[1], tool=tool)
        if not self.probe(ctx, plan):
            logger.debug("%s: probe declined %s", self.name, ctx.subject.path)
            return None
        logger.debug("%s: applies to %r via %r (tool %r)", self.name, *matched, tool)
        return plan

    def apply(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Perform the transformation planned by ``applies()``."""
        logger.debug("%s: transforming %s", self.name, ctx.subject.path)
        return self.run(ctx, plan)

    def run(self, ctx: TransformContext, plan: Plan) -> TransformResult:
        """Do the work; subclasses must override."""
        raise NotImplementedError(self.name)

    def artifact(self, ctx: TransformContext, suffix: str | None = None) -> Path:
        """Path of the artifact produced for the current subject (default ``self.suffix``)."""
        return ctx.scratch.artifact_path(ctx.subject, suffix or self.suffix)

    def adopt(self, target: Path) -> TransformResult:
        """Return a ``REWRITE`` result for an artifact already written at ``target``."""
        return TransformResult(
            Action.REWRITE, subject=SubjectFile.artifact(target, kind_hint=self.kind_hint)
        )

    def rewrite(
        self, ctx: TransformContext, data: bytes, suffix: str | None = None
    ) -> TransformResult:
        """Write ``data`` as an artifact and return a ``REWRITE`` result."""
        target: Path = self.artifact(ctx, suffix)
        target.write_bytes(data)
        logger.debug("%s: wrote %d bytes to %s", self.name, len(data), target)
        return self.adopt(target)

    def emit(self, data: bytes) -> TransformResult:
        """Return ``data`` as final output."""
        return TransformResult(Action.EMIT, output=data)
