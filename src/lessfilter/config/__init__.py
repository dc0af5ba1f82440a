# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __init__.py
#   file_relpath : src/lessfilter/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Configuration handling for LessFilter.

Exposes the immutable ``Config`` model and ``load_config()``, which layers the
runtime defaults, the optional user TOML file and the process environment.
"""

from __future__ import annotations

from lessfilter.config.model import Config, load_config

__all__ = ["Config", "load_config"]
