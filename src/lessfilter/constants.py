# lessfilter:header:start
#
#   project      : LessFilter
#   file         : constants.py
#   file_relpath : src/lessfilter/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""LessFilter Constants."""

from __future__ import annotations

from typing import Final

# Name of the bundled default config inside the package `lessfilter.config`:
DEFAULT_TOML_CONFIG_PACKAGE: Final[str] = "lessfilter.config"
DEFAULT_TOML_CONFIG_NAME: Final[str] = "lessfilter-default.toml"

# User configuration file, relative to the XDG config root
USER_CONFIG_DIRNAME: Final[str] = "lessfilter"
USER_CONFIG_FILENAME: Final[str] = "lessfilter.toml"

# Cache directory name, relative to the XDG cache root
CACHE_DIRNAME: Final[str] = "lessfilter"

# Prefix for the per-invocation scratch directory
SCRATCH_PREFIX: Final[str] = "lessfilter."

# Marker inserted between the source basename and the artifact suffix
ARTIFACT_MARKER: Final[str] = ":formatted:"

# Only this many leading bytes are handed to the content sniffer
DEFAULT_SNIFF_BYTES: Final[int] = 20000

# Fallback width for re-wrapped prose when no terminal can be queried
DEFAULT_COLUMNS: Final[int] = 77

# Bump when the on-disk lexer table layout changes
LEXER_CACHE_EPOCH: Final[int] = 3

# Maximum nesting of symbolic link resolution in `realpath`
REALPATH_MAX_DEPTH: Final[int] = 20
