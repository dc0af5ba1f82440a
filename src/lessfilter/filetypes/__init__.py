# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __init__.py
#   file_relpath : src/lessfilter/filetypes/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""File type identification for LessFilter.

Submodules:
    kinds: The ``Kind`` enum of inferred kinds.
    identify: Content sniffing (via the ``file`` tool) and filename refinement.
"""

from __future__ import annotations

from lessfilter.filetypes.identify import identify
from lessfilter.filetypes.kinds import Kind

__all__ = ["Kind", "identify"]
