# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __init__.py
#   file_relpath : src/lessfilter/pipeline/colourizers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Colourizers: final-stage transformers that always emit output or decline.

They are tried after every reformatter, from the most specific (CSV) to the
broadest catch-all (the generic syntax highlighter).
"""
