# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __init__.py
#   file_relpath : src/lessfilter/highlight/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Lexer selection for the generic syntax highlighter (``pygmentize``).

Submodules:
    overrides: Fixed filename patterns the highlighter misclassifies.
    cache: Memoised ``filename pattern -> lexer`` table keyed by highlighter version.
"""
