# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __init__.py
#   file_relpath : src/lessfilter/pipeline/reformatters/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Reformatters: transformers that turn a file into readable (often coloured) text.

A reformatter either writes an artifact into the scratch area, which later
transformers may colour further, or emits final output directly.
"""
