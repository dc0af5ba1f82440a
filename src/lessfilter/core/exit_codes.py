# lessfilter:header:start
#
#   project      : LessFilter
#   file         : exit_codes.py
#   file_relpath : src/lessfilter/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Exit codes for the LessFilter command.

The pager only distinguishes "supported" (0) from "not supported" (non-zero),
so the set is deliberately small. ``RESOURCE_ERROR`` is reserved for the one
hard failure: the scratch area cannot be created.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for LessFilter.

    Attributes:
        SUCCESS: The file is supported (``--supports``) or was rendered; also
            used when no filename was supplied.
        UNSUPPORTED: No transformer applies; the pager should fall back to its
            default handling.
        RESOURCE_ERROR: A fatal resource-acquisition failure (scratch area).
    """

    SUCCESS = 0
    UNSUPPORTED = 1
    RESOURCE_ERROR = 2
