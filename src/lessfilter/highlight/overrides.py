# lessfilter:header:start
#
#   project      : LessFilter
#   file         : overrides.py
#   file_relpath : src/lessfilter/highlight/overrides.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Lexer overrides for names the highlighter gets wrong or does not know.

Patterns use ``fnmatch`` syntax where ``*`` also matches ``/``, so ``*/c/*``
selects sources kept in RISC OS style ``c`` directories.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

LEXER_OVERRIDES: Final[tuple[tuple[tuple[str, ...], str], ...]] = (
    ((".bashrc", ".bash_aliases", ".bash_environment"), "sh"),
    (("*.svg",), "xml"),
    (("*.gitconfig",), "ini"),
    (("*.tfvars",), "ini"),
    (("Jenkinsfile", "*/Jenkinsfile", "*.jenkinsfile"), "groovy"),
    (("Dockerfile", "*/Dockerfile", "*.dockerfile", "*.Dockerfile"), "docker"),
    # Otherwise .pl is recognised as 'cplint'.
    (("*.pl",), "perl"),
    (("*.kts",), "kotlin"),
    (("c/*", "*/c/*", "h/*", "*/h/*"), "c"),
    (("s/*", "*/s/*", "hdr/*", "*/hdr/*"), "arm"),
    (("p/*", "*/p/*", "pas/*", "*/pas/*", "imp/*", "*/imp/*"), "pascal"),
    (("f/*", "*/f/*", "for/*", "*/for/*", "f77/*", "*/f77/*"), "fortranfixed"),
    (("f90/*", "*/f90/*"), "fortran"),
    (("*,fe1",), "make"),
    (("*,fd1",), "bbcbasic"),
)


def override_lexer(names: Iterable[str]) -> str | None:
    """Return the override lexer for the first name that has one.

    Args:
        names (Iterable[str]): Candidate names, in priority order.

    Returns:
        str | None: Lexer name, or None.
    """
    for name in names:
        for patterns, lexer in LEXER_OVERRIDES:
            if any(fnmatchcase(name, pattern) for pattern in patterns):
                return lexer
    return None
