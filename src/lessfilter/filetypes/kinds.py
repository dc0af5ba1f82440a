# lessfilter:header:start
#
#   project      : LessFilter
#   file         : kinds.py
#   file_relpath : src/lessfilter/filetypes/kinds.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Inferred kinds.

An inferred kind is an extension-like tag derived from a file's content (and a
few filename conventions), independent of the file's real name. Transformers
match their filename patterns against it exactly as they match real names, so
each value looks like the extension the format would normally carry.
"""

from __future__ import annotations

from enum import Enum


class Kind(str, Enum):
    """Canonical inferred kinds.

    The ``.value`` of each member is the extension-like tag used for matching.
    ``NONE`` (empty tag) means the content was not recognised.
    """

    NONE = ""
    SHELL = ".sh"
    PERL = ".pl"
    PYTHON = ".py"
    XML = ".xml"
    ELF_ARM64 = ".elf-arm64"
    RISCOS_AOF = ".aof"
    RISCOS_AIF = ".arm"
    RISCOS_ALF = ".alf"
    MACHO = ".macho"
    PLIST = ".plist"
    SSH_KEY = ".pem"
    PEM_CSR = ".csr"
    PEM_CRT = ".crt"
    AR_ARCHIVE = ".a"
    PYTHON_BYTECODE = ".pyc"
    YAML = ".yaml"
    C_HEADER = ".h"
    LUA = ".lua"

    @property
    def tag(self) -> str:
        """The extension-like tag, empty for ``NONE``."""
        return self.value
