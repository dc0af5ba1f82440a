# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __init__.py
#   file_relpath : src/lessfilter/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Core, presentation-free building blocks shared across LessFilter."""
