# lessfilter:header:start
#
#   project      : LessFilter
#   file         : identify.py
#   file_relpath : src/lessfilter/filetypes/identify.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Type Identifier: infer a file's kind from its content and name.

Identification runs in two passes:

1. **Content sniffing.** The first ``sniff_bytes`` bytes are piped through
   ``file -``; its description is matched against ``DESCRIPTION_RULES`` (first
   match wins). A plain "ASCII text" description falls back to a YAML check on
   the first line, since ``file`` cannot tell YAML from prose.
2. **Filename refinement.** ``NAME_RULES`` may override the content result for
   names whose type is encoded in a convention ``file`` does not know about.
   ``*.txt`` is exempt.

Identification runs once per invocation; the result is immutable.
"""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING, Final

from lessfilter.config.logging import get_logger
from lessfilter.filetypes.kinds import Kind
from lessfilter.pipeline.tools import find_tool, run_tool

if TYPE_CHECKING:
    from pathlib import Path

    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.config.model import Config

logger: LessFilterLogger = get_logger(__name__)

# Ordered: "PEM certificate request" must be tested before "PEM certificate".
DESCRIPTION_RULES: Final[tuple[tuple[re.Pattern[str], Kind], ...]] = (
    (re.compile(r"shell script"), Kind.SHELL),
    (re.compile(r"[Pp]erl script"), Kind.PERL),
    (re.compile(r"Python script"), Kind.PYTHON),
    (re.compile(r"XML document"), Kind.XML),
    (re.compile(r"ELF.*ARM aarch64"), Kind.ELF_ARM64),
    (re.compile(r"RISC OS.*AOF"), Kind.RISCOS_AOF),
    (re.compile(r"RISC OS AIF"), Kind.RISCOS_AIF),
    (re.compile(r"RISC OS.*ALF"), Kind.RISCOS_ALF),
    (re.compile(r"Mach-O"), Kind.MACHO),
    (re.compile(r"Apple binary property list"), Kind.PLIST),
    (re.compile(r"OpenSSH private key"), Kind.SSH_KEY),
    (re.compile(r"PEM certificate request"), Kind.PEM_CSR),
    (re.compile(r"PEM certificate"), Kind.PEM_CRT),
    (re.compile(r"\bar archive"), Kind.AR_ARCHIVE),
    (re.compile(r"python.*byte-compiled"), Kind.PYTHON_BYTECODE),
)

ASCII_TEXT_RE: Final[re.Pattern[str]] = re.compile(r"ASCII text")

# Glob patterns over the path as given by the caller; ``None`` leaves the kind as is.
NAME_RULES: Final[tuple[tuple[tuple[str, ...], Kind | None], ...]] = (
    (("*.txt",), None),
    (("*.key",), Kind.SSH_KEY),
    (("*/VersionNum", "VersionNum"), Kind.C_HEADER),
    (("*,18c", "*,18d"), Kind.LUA),
)


def classify_description(description: str, first_line: str | None = None) -> Kind:
    """Map a ``file`` description to a ``Kind``.

    Args:
        description (str): Output of ``file -``.
        first_line (str | None): First line of the file, consulted only for
            "ASCII text" descriptions.

    Returns:
        Kind: The matched kind, or ``Kind.NONE``.
    """
    for pattern, kind in DESCRIPTION_RULES:
        if pattern.search(description):
            return kind
    if ASCII_TEXT_RE.search(description) and first_line is not None:
        if first_line.startswith("%YAML") or first_line == "---":
            return Kind.YAML
    return Kind.NONE


def refine_by_name(name: str, kind: Kind) -> Kind:
    """Apply filename refinement rules to a content-derived kind.

    Args:
        name (str): The file name or path as supplied by the caller.
        kind (Kind): Kind inferred from content.

    Returns:
        Kind: The refined kind.
    """
    for patterns, override in NAME_RULES:
        if any(fnmatchcase(name, pattern) for pattern in patterns):
            return kind if override is None else override
    return kind


def sniff(path: Path, limit: int) -> str:
    """Describe the leading ``limit`` bytes of ``path`` with the ``file`` tool.

    Returns an empty string when ``file`` is not installed or the file is unreadable.
    """
    if find_tool("file") is None:
        logger.debug("'file' is not installed; skipping content sniffing")
        return ""
    try:
        with path.open("rb") as handle:
            head: bytes = handle.read(limit)
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return ""
    return run_tool(["file", "-"], stdin=head).text.strip()


def read_first_line(path: Path) -> str | None:
    """Return the first line of ``path`` without its terminator, or None if unreadable."""
    try:
        with path.open("rb") as handle:
            raw: bytes = handle.readline()
    except OSError:
        return None
    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


def identify(path: Path, config: Config, name: str | None = None) -> Kind:
    """Infer the kind of ``path``.

    Args:
        path (Path): File to inspect.
        config (Config): Runtime configuration (``sniff_bytes``).
        name (str | None): Name used for filename refinement; defaults to ``str(path)``.

    Returns:
        Kind: The inferred kind (``Kind.NONE`` if unrecognised).
    """
    description: str = sniff(path, config.sniff_bytes)
    logger.debug("file(1) says: %r", description)
    first_line: str | None = None
    if ASCII_TEXT_RE.search(description):
        first_line = read_first_line(path)
    kind: Kind = classify_description(description, first_line)
    kind = refine_by_name(name if name is not None else str(path), kind)
    logger.debug("Inferred kind of %s: %s", path, kind.name)
    return kind
