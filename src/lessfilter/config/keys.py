# lessfilter:header:start
#
#   project      : LessFilter
#   file         : keys.py
#   file_relpath : src/lessfilter/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Canonical TOML section and key names for LessFilter configuration.

Keys defined here represent the *external configuration API* as it appears in
``lessfilter.toml``. The ordering mirrors ``lessfilter-default.toml`` so that
defaults, parsing and docs stay aligned.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by LessFilter configuration.

    Notes:
        - Values must match user-facing TOML keys exactly.
        - Renaming or removing a key is a breaking change.
    """

    # [highlight]
    SECTION_HIGHLIGHT: Final[str] = "highlight"

    KEY_STYLE: Final[str] = "style"
    KEY_MARKDOWN_STYLE: Final[str] = "markdown_style"
    KEY_MARKDOWN_LEGACY_STYLE: Final[str] = "markdown_legacy_style"

    # [markdown]
    SECTION_MARKDOWN: Final[str] = "markdown"

    KEY_COLUMNS: Final[str] = "columns"

    # [identify]
    SECTION_IDENTIFY: Final[str] = "identify"

    KEY_SNIFF_BYTES: Final[str] = "sniff_bytes"

    # [paths]
    SECTION_PATHS: Final[str] = "paths"

    KEY_CACHE_DIR: Final[str] = "cache_dir"
    KEY_SCRATCH_DIR: Final[str] = "scratch_dir"
    KEY_GRC_GRAPHVIZ_CONF: Final[str] = "grc_graphviz_conf"


class Env:
    """Environment variables consumed by LessFilter."""

    CONFIG: Final[str] = "LESSFILTER_CONFIG"
    TERM: Final[str] = "TERM"
    COLUMNS: Final[str] = "COLUMNS"
    HOME: Final[str] = "HOME"
    XDG_CACHE_HOME: Final[str] = "XDG_CACHE_HOME"
    XDG_CONFIG_HOME: Final[str] = "XDG_CONFIG_HOME"
