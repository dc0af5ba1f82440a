# lessfilter:header:start
#
#   project      : LessFilter
#   file         : errors.py
#   file_relpath : src/lessfilter/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Exception hierarchy for LessFilter.

Only ``ScratchAreaError`` is fatal at the process level. Missing or failing
external tools are never raised; adapters decline instead.
"""

from __future__ import annotations


class LessFilterError(Exception):
    """Base class for all LessFilter errors."""


class ScratchAreaError(LessFilterError):
    """The private scratch directory could not be created."""


class PathResolutionError(LessFilterError):
    """Symbolic link resolution exceeded its iteration ceiling."""
