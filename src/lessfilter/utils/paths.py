# lessfilter:header:start
#
#   project      : LessFilter
#   file         : paths.py
#   file_relpath : src/lessfilter/utils/paths.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Path normalisation helpers for LessFilter."""

from __future__ import annotations

import os
from pathlib import Path

from lessfilter.config.logging import get_logger
from lessfilter.constants import REALPATH_MAX_DEPTH
from lessfilter.core.errors import PathResolutionError

logger = get_logger(__name__)


def realpath(path: str | Path, *, max_depth: int = REALPATH_MAX_DEPTH) -> str:
    """Resolve ``.``, ``..`` and symbolic links in ``path``, one segment at a time.

    Relative paths are anchored at the physical working directory. Each symbolic
    link target is itself resolved recursively; the nesting depth is bounded so a
    link cycle fails fast instead of looping.

    Args:
        path (str | Path): Path to normalise.
        max_depth (int): Maximum number of nested resolutions.

    Returns:
        str: The normalised absolute path. A trailing ``/`` is kept only when the
        input carried one.

    Raises:
        PathResolutionError: If resolution nests deeper than ``max_depth``.
    """
    return _resolve(os.fspath(path), 1, max_depth)


def _resolve(path: str, depth: int, max_depth: int) -> str:
    if depth > max_depth:
        message = f"Too many iterations in realpath ({depth}) processing '{path}'"
        logger.error(message)
        raise PathResolutionError(message)

    if not path.startswith("/"):
        path = f"{Path.cwd().resolve()}/{path}"

    accumulated = ""
    for segment in path.split("/"):
        if segment == ".":
            continue
        if segment == "..":
            # Drop the last component; ``accumulated`` always ends with "/".
            accumulated = accumulated.rstrip("/").rpartition("/")[0]
        elif segment:
            leading = f"{accumulated}{segment}"
            try:
                link = os.readlink(leading)
            except OSError:
                link = ""
            if link.startswith("/"):
                accumulated = _resolve(link, depth + 1, max_depth)
            elif link:
                target = _resolve(f"{accumulated}{link}", depth + 1, max_depth)
                accumulated = target.rstrip("/") + "/"
            else:
                accumulated = leading
        elif not accumulated:
            accumulated = "/"

        if not accumulated.endswith("/"):
            accumulated += "/"

    if not path.endswith("/") and accumulated.endswith("/") and accumulated != "/":
        accumulated = accumulated[:-1]
    return accumulated
