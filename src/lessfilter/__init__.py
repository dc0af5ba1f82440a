# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __init__.py
#   file_relpath : src/lessfilter/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""LessFilter package.

LessFilter is an input preprocessor for terminal pagers. It identifies a file,
picks the external tools that can turn it into coloured, human-readable text,
and either prints that rendering or reports that the file is unsupported so
the pager falls back to its default handling.
"""

from __future__ import annotations
