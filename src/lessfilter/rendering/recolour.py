# lessfilter:header:start
#
#   project      : LessFilter
#   file         : recolour.py
#   file_relpath : src/lessfilter/rendering/recolour.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Line-oriented regex recolouring, modelled on a sed script.

A recolouring table is an ordered tuple of ``Rule`` objects. Every line passes
through every rule in order, and each rule sees the line as already rewritten
by the rules before it. A rule may be confined to an address range
(``Scope``): the range opens on a line matching ``start`` and closes, inclusively,
on a later line matching ``end``.

Example:
    ```python
    rules = (
        paint(r"^(\\*\\* .*)$", {1: "green"}),
        paint(r"(0x[0-9a-f]+)", {1: "magenta"}),
    )
    print(recolour(text, rules))
    ```

Notes:
    - Range state is held per rule, as sed does, and is reset for every call
      to ``recolour``.
    - When the line closing a range also matches ``start``, the range stays open.
      Tool output often chains sections with identical headings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from lessfilter.rendering.ansi import style

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

Replacement = Callable[["re.Match[str]"], str]


@dataclass(frozen=True)
class Scope:
    """Inclusive line range delimited by two patterns."""

    start: re.Pattern[str]
    end: re.Pattern[str]


@dataclass(frozen=True)
class Rule:
    """A single substitution.

    Attributes:
        pattern (re.Pattern[str]): Pattern searched in each line.
        replace (Replacement): Callable building the replacement for one match.
        scope (Scope | None): Optional address range the rule is confined to.
        count (int): Maximum substitutions per line; ``0`` replaces every match.
    """

    pattern: re.Pattern[str]
    replace: Replacement
    scope: Scope | None = None
    count: int = 0


def scope(start: str, end: str) -> Scope:
    """Build a ``Scope`` from two regular expressions."""
    return Scope(re.compile(start), re.compile(end))


def rule(
    pattern: str,
    replace: Replacement,
    *,
    within: Scope | None = None,
    first: bool = False,
) -> Rule:
    """Build a ``Rule`` with a free-form replacement callable.

    Args:
        pattern (str): Regular expression searched in each line.
        replace (Replacement): Callable receiving the match, returning the new text.
        within (Scope | None): Optional address range.
        first (bool): Replace only the first match on a line.

    Returns:
        Rule: The compiled rule.
    """
    return Rule(re.compile(pattern), replace, within, 1 if first else 0)


def paint(
    pattern: str,
    styles: Mapping[int, str],
    *,
    within: Scope | None = None,
    first: bool = False,
) -> Rule:
    """Build a ``Rule`` that colours selected groups and keeps the rest of the match.

    Args:
        pattern (str): Regular expression with capturing groups.
        styles (Mapping[int, str]): yachalk style name per group number (see
            ``style``). Styled groups must not overlap.
        within (Scope | None): Optional address range.
        first (bool): Replace only the first match on a line.

    Returns:
        Rule: The compiled rule.
    """
    ordered: list[tuple[int, str]] = sorted(styles.items())

    def _replace(match: re.Match[str]) -> str:
        text: str = match.group(0)
        base: int = match.start()
        pieces: list[str] = []
        cursor = 0
        for group, name in ordered:
            start, end = match.span(group)
            if start < 0 or start == end:
                continue
            pieces.append(text[cursor : start - base])
            pieces.append(style(name)(text[start - base : end - base]))
            cursor = end - base
        pieces.append(text[cursor:])
        return "".join(pieces)

    return rule(pattern, _replace, within=within, first=first)


def recolour_lines(lines: Iterable[str], rules: tuple[Rule, ...]) -> list[str]:
    """Apply ``rules`` to each line (without line terminators).

    Args:
        lines (Iterable[str]): Input lines.
        rules (tuple[Rule, ...]): Ordered recolouring table.

    Returns:
        list[str]: The rewritten lines.
    """
    active: list[bool] = [False] * len(rules)
    output: list[str] = []
    for line in lines:
        for index, item in enumerate(rules):
            if item.scope is not None:
                if active[index]:
                    if item.scope.end.search(line) and not item.scope.start.search(line):
                        active[index] = False
                elif item.scope.start.search(line):
                    active[index] = True
                else:
                    continue
            line = item.pattern.sub(item.replace, line, count=item.count)
        output.append(line)
    return output


def recolour(text: str, rules: tuple[Rule, ...]) -> str:
    """Apply ``rules`` to every line of ``text``.

    Args:
        text (str): Input text.
        rules (tuple[Rule, ...]): Ordered recolouring table.

    Returns:
        str: The rewritten text. Line terminators are preserved.
    """
    lines: list[str] = text.split("\n")
    return "\n".join(recolour_lines(lines, rules))
