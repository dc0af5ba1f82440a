# lessfilter:header:start
#
#   project      : LessFilter
#   file         : engine.py
#   file_relpath : src/lessfilter/pipeline/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Dispatch Controller: identification, then first-match-wins transformation.

``run()`` is CLI-free: it never imports Click and never prints diagnostics.
Rendered bytes go to the binary sink supplied by the caller; everything else
is logged.

Flow:
    1. Reject anything that is not a readable regular file (unsupported).
    2. Acquire the scratch area; it is released on every exit path.
    3. Identify the file once.
    4. Walk ``TRANSFORMERS`` in order. In support-check mode the first
       transformer that applies answers "supported". In render mode an
       ``EMIT`` result is written out and ends the run; a ``REWRITE`` result
       replaces the subject and the walk continues with it.
    5. If some reformatter rewrote the subject, stream the final subject.
    6. Otherwise the file is unsupported.

Typical usage:

    code = run(Mode.RENDER, "README.md", load_config(), out=sys.stdout.buffer)
"""

from __future__ import annotations

import os
import shutil
from typing import TYPE_CHECKING, BinaryIO

from lessfilter.config.logging import get_logger
from lessfilter.core.exit_codes import ExitCode
from lessfilter.filetypes.identify import identify
from lessfilter.pipeline.context import Mode, SubjectFile, TransformContext
from lessfilter.pipeline.contracts import Action
from lessfilter.pipeline.pipelines import TRANSFORMERS
from lessfilter.pipeline.scratch import ScratchArea

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.config.model import Config
    from lessfilter.filetypes.kinds import Kind
    from lessfilter.pipeline.contracts import BaseTransformer, TransformResult

logger: LessFilterLogger = get_logger(__name__)


def is_readable_file(path: str) -> bool:
    """Return True if ``path`` is a regular file we may read."""
    return os.path.isfile(path) and os.access(path, os.R_OK)


def dispatch(
    ctx: TransformContext,
    out: BinaryIO | None,
    transformers: Sequence[BaseTransformer] = TRANSFORMERS,
) -> ExitCode:
    """Walk ``transformers`` over ``ctx`` (scratch area already acquired).

    Args:
        ctx (TransformContext): Initial context.
        out (BinaryIO | None): Sink for rendered bytes (unused in support-check mode).
        transformers (Sequence[BaseTransformer]): Ordered transformers.

    Returns:
        ExitCode: ``SUCCESS`` if supported/rendered, ``UNSUPPORTED`` otherwise.
    """
    reformatted = False
    for transformer in transformers:
        plan = transformer.applies(ctx)
        if plan is None:
            continue
        if ctx.mode is Mode.CHECK_SUPPORT:
            logger.info("Supported by %s", transformer.name)
            return ExitCode.SUCCESS

        try:
            result: TransformResult = transformer.apply(ctx, plan)
        except OSError as e:
            logger.warning("%s failed on %s: %s", transformer.name, ctx.subject.path, e)
            continue

        if result.action is Action.EMIT:
            logger.info("Rendered by %s (%d bytes)", transformer.name, len(result.output))
            if out is not None:
                out.write(result.output)
                out.flush()
            return ExitCode.SUCCESS

        assert result.subject is not None
        logger.info("Reformatted by %s into %s", transformer.name, result.subject.path)
        reformatted = True
        ctx = ctx.with_subject(result.subject)

    if reformatted:
        logger.info("Streaming %s", ctx.subject.path)
        if out is not None:
            with ctx.subject.path.open("rb") as handle:
                shutil.copyfileobj(handle, out)
            out.flush()
        return ExitCode.SUCCESS

    logger.info("No transformer for %s", ctx.original.name)
    return ExitCode.UNSUPPORTED


def run(
    mode: Mode,
    path: str,
    config: Config,
    out: BinaryIO | None = None,
    transformers: Sequence[BaseTransformer] = TRANSFORMERS,
) -> ExitCode:
    """Process one file.

    Args:
        mode (Mode): Support-check or render.
        path (str): The file as named by the caller.
        config (Config): Runtime configuration.
        out (BinaryIO | None): Sink for rendered bytes.
        transformers (Sequence[BaseTransformer]): Ordered transformers.

    Returns:
        ExitCode: ``SUCCESS`` or ``UNSUPPORTED``.

    Raises:
        ScratchAreaError: If the scratch area cannot be created.
    """
    if not is_readable_file(path):
        logger.info("Not a readable regular file: %s", path)
        return ExitCode.UNSUPPORTED

    with ScratchArea(config) as scratch:
        subject: SubjectFile = SubjectFile.from_user(path)
        kind: Kind = identify(subject.path, config, name=subject.name)
        ctx = TransformContext(
            subject=subject,
            original=subject,
            kind=kind,
            config=config,
            scratch=scratch,
            mode=mode,
        )
        return dispatch(ctx, out, transformers)
