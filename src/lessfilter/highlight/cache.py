# lessfilter:header:start
#
#   project      : LessFilter
#   file         : cache.py
#   file_relpath : src/lessfilter/highlight/cache.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Memoised lexer lookup for ``pygmentize``.

Asking ``pygmentize`` for its lexer list is slow, so the list is turned into a
``filename pattern -> lexer`` table once per highlighter version and stored in
the cache directory:

- ``pygmentize-stat``: modification time of the ``pygmentize`` executable;
- ``pygmentize-version``: version reported by ``pygmentize -V``, re-queried
  only when the stat memo changes;
- ``pygmentize-lexer-<epoch>-<version>.json``: the lexer table.

Concurrency:
    Two pagers may regenerate the same file at once. Every file is written to a
    temporary name and moved into place with ``os.replace``, so readers see
    either the old or the new complete content; the last writer wins. Both
    writers derive the same content, so no locking is needed.

The cache is only an optimisation: deleting the directory is always safe.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from lessfilter.config.logging import get_logger
from lessfilter.constants import LEXER_CACHE_EPOCH
from lessfilter.pipeline.tools import find_tool, run_tool

if TYPE_CHECKING:
    from lessfilter.config.logging import LessFilterLogger

logger: LessFilterLogger = get_logger(__name__)

HIGHLIGHTER: Final[str] = "pygmentize"
STAT_FILENAME: Final[str] = "pygmentize-stat"
VERSION_FILENAME: Final[str] = "pygmentize-version"

VERSION_RE: Final[re.Pattern[str]] = re.compile(r"[0-9][0-9]*(?:\.[0-9]*)+")
LEXER_NAME_RE: Final[re.Pattern[str]] = re.compile(r"^\* ([a-z0-9+-]+)(, [a-z0-9+-]+)*:$")
FILENAMES_RE: Final[re.Pattern[str]] = re.compile(r"^ *(.*) \(filenames ([^)]+)\)")
DESCRIPTION_RE: Final[re.Pattern[str]] = re.compile(r"^ +([^(*]*?) *$")
VARIANT_RE: Final[re.Pattern[str]] = re.compile(r"^(.*?)\+[A-Za-z]")

IGNORED_PATTERNS: Final[frozenset[str]] = frozenset({"*.txt"})

# Lexers from pygments-git that declare no filenames.
SPECIAL_PATTERNS: Final[dict[str, tuple[str, ...]]] = {
    "git-ignore": (".gitignore", "*/.gitignore"),
    "git-attributes": (".gitattributes", "*/.gitattributes"),
    "git-commit-edit-msg": ("COMMIT_EDITMSG", "*/COMMIT_EDITMSG"),
    "git-blame-ignore-revs": (".git-blame-ignore-revs", "*/.git-blame-ignore-revs"),
}


@dataclass(frozen=True)
class LexerCacheKey:
    """Identity of a lexer table: schema epoch and highlighter version."""

    epoch: int
    version: str

    @property
    def filename(self) -> str:
        """File name of the table in the cache directory."""
        return f"pygmentize-lexer-{self.epoch}-{self.version}.json"


@dataclass(frozen=True)
class LexerEntry:
    """One row of the lexer table.

    Attributes:
        name (str): Lexer name (first alias).
        patterns (tuple[str, ...]): Filename patterns selecting the lexer.
        comment (str): Human-readable description.
    """

    name: str
    patterns: tuple[str, ...]
    comment: str = ""


def parse_lexer_listing(text: str) -> list[LexerEntry]:
    """Build the lexer table from ``pygmentize -L lexers`` output.

    The listing alternates alias lines (``* python, py, python3:``) with
    description lines, which may end in ``(filenames *.py, *.pyw)``.

    Rules:
        - the first alias is the lexer name;
        - ``*.txt`` is never claimed by a lexer;
        - a ``base+variant`` lexer does not claim the base's ``*.base`` pattern;
        - git lexers without filenames get fixed patterns.

    Args:
        text (str): Output of ``pygmentize -L lexers``.

    Returns:
        list[LexerEntry]: Entries in listing order (first match wins).
    """
    entries: list[LexerEntry] = []
    name: str | None = None
    for line in text.splitlines():
        alias = LEXER_NAME_RE.match(line)
        if alias is not None:
            name = alias.group(1)
        if name is None:
            continue

        patterns: tuple[str, ...] = ()
        comment: str = name
        with_files = FILENAMES_RE.match(line)
        description = DESCRIPTION_RE.match(line)
        if with_files is not None:
            comment = with_files.group(1)
            found: list[str] = with_files.group(2).split(", ")
            variant = VARIANT_RE.match(name)
            if variant is not None:
                found = [p for p in found if p != f"*.{variant.group(1)}"]
            patterns = tuple(p for p in found if p not in IGNORED_PATTERNS)
        elif description is not None:
            comment = description.group(1)
            patterns = SPECIAL_PATTERNS.get(name, ())

        if patterns:
            entries.append(LexerEntry(name=name, patterns=patterns, comment=comment))
    return entries


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        return None


def _write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` atomically; failures are logged."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except OSError as e:
        logger.warning("Cannot write cache file %s: %s", path, e)


class LexerCache:
    """Lexer lookup backed by the on-disk cache.

    Args:
        cache_dir (Path): Cache directory (``<cache root>/lessfilter``).
        epoch (int): Schema epoch; bump it when the table format changes.
    """

    def __init__(self, cache_dir: Path, epoch: int = LEXER_CACHE_EPOCH) -> None:
        self.cache_dir: Path = cache_dir
        self.epoch: int = epoch
        self._version: str | None = None
        self._entries: list[LexerEntry] | None = None

    def version(self) -> str | None:
        """Return the highlighter version, or None if unknown.

        The version is memoised against the executable's modification time.
        """
        if self._version is not None:
            return self._version or None
        executable: str | None = find_tool(HIGHLIGHTER)
        if executable is None:
            return None
        try:
            stat = str(os.stat(executable).st_mtime_ns)
        except OSError:
            stat = ""

        stat_file: Path = self.cache_dir / STAT_FILENAME
        version_file: Path = self.cache_dir / VERSION_FILENAME
        cached_version: str | None = _read_text(version_file)
        if stat and _read_text(stat_file) == stat and cached_version is not None:
            version: str = cached_version
        else:
            output: str = run_tool([HIGHLIGHTER, "-V"]).text
            found = VERSION_RE.search(output)
            version = found.group(0) if found else ""
            logger.debug("%s version: %r", HIGHLIGHTER, version)
            _write_atomic(version_file, version)
            _write_atomic(stat_file, stat)
        self._version = version
        return version or None

    def key(self) -> LexerCacheKey | None:
        """Return the cache key for the installed highlighter, or None."""
        version: str | None = self.version()
        if version is None:
            return None
        return LexerCacheKey(self.epoch, version)

    def entries(self) -> list[LexerEntry]:
        """Return the lexer table, generating and storing it if needed."""
        if self._entries is not None:
            return self._entries
        key: LexerCacheKey | None = self.key()
        if key is None:
            return []
        table_file: Path = self.cache_dir / key.filename
        entries: list[LexerEntry] | None = self._load(table_file)
        if entries is None:
            entries = parse_lexer_listing(run_tool([HIGHLIGHTER, "-L", "lexers"]).text)
            logger.debug("Generated %d lexer entries into %s", len(entries), table_file)
            _write_atomic(table_file, self._dump(entries))
        self._entries = entries
        return entries

    def lookup(self, name: str) -> str | None:
        """Return the lexer for ``name`` (first matching entry), or None.

        Args:
            name (str): File name or path, or an extension-like tag such as ``.py``.

        Returns:
            str | None: The lexer name, or None if the version is unknown or no
            entry matches.
        """
        if not name:
            return None
        for entry in self.entries():
            if any(fnmatchcase(name, pattern) for pattern in entry.patterns):
                logger.debug("Lexer for %r: %s", name, entry.name)
                return entry.name
        return None

    @staticmethod
    def _dump(entries: list[LexerEntry]) -> str:
        data: list[dict[str, Any]] = [
            {"name": e.name, "patterns": list(e.patterns), "comment": e.comment}
            for e in entries
        ]
        return json.dumps(data, indent=1)

    @staticmethod
    def _load(path: Path) -> list[LexerEntry] | None:
        text: str | None = _read_text(path)
        if text is None:
            return None
        try:
            data: Any = json.loads(text)
            return [
                LexerEntry(
                    name=str(row["name"]),
                    patterns=tuple(str(p) for p in row["patterns"]),
                    comment=str(row.get("comment", "")),
                )
                for row in data
            ]
        except (ValueError, TypeError, KeyError) as e:
            logger.warning("Ignoring corrupt lexer cache %s: %s", path, e)
            return None
