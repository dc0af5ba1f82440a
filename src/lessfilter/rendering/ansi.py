# lessfilter:header:start
#
#   project      : LessFilter
#   file         : ansi.py
#   file_relpath : src/lessfilter/rendering/ansi.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""ANSI colour primitives built on yachalk.

LessFilter always writes to a pipe (the pager reads our standard output), so
yachalk's TTY auto-detection would switch colours off. ``enable_ansi()`` forces
a 16-colour palette; the pager is expected to be running with raw control
characters enabled.
"""

from __future__ import annotations

import re
from typing import Any, Final, Protocol, cast

from yachalk import chalk
from yachalk.types import ColorMode

ANSI_SGR_RE: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*m")


class Colorizer(Protocol):
    """Callable that decorates a string for display.

    Compatible with `yachalk.ChalkBuilder.__call__`; LessFilter always calls
    colorizers with a single string.
    """

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Colorize and concatenate provided arguments into a display string."""
        ...


def enable_ansi() -> None:
    """Force yachalk to emit ANSI sequences even when stdout is not a TTY."""
    chalk.set_color_mode(ColorMode.Basic16)


def style(name: str) -> Colorizer:
    """Return the yachalk style called ``name`` (dotted for chains, e.g. ``"green.bold"``).

    Builders snapshot the colour mode when they are created, so styles are
    looked up at the moment they are applied, after ``enable_ansi()``.

    Args:
        name (str): Style name, such as ``"magenta"``.

    Returns:
        Colorizer: A builder honouring the current colour mode.

    Raises:
        AttributeError: If ``name`` is not a yachalk style.
    """
    builder: Any = chalk
    for part in name.split("."):
        builder = getattr(builder, part)
    return cast("Colorizer", builder)


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from ``text``."""
    return ANSI_SGR_RE.sub("", text)


def escape_control(text: str, replacement: str = "<ESC>") -> str:
    """Make raw ESC characters visible, so tool output cannot drive the terminal."""
    return text.replace("\x1b", replacement)
