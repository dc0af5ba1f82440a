# lessfilter:header:start
#
#   project      : LessFilter
#   file         : tools.py
#   file_relpath : src/lessfilter/pipeline/tools.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""External tool discovery and execution.

Every transformer delegates the real work to an external program. This module
gives them one contract for it:

- ``find_tool(name)``: ``PATH`` lookup, repeated on every call so that a tool
  installed or removed between two invocations is noticed;
- ``first_available(names)``: pick the first tool of a preference list;
- ``run_tool(argv, ...)``: run to completion and capture both streams.

Failures are lenient. A program that cannot be started yields return code
``127`` and empty output; a non-zero exit status is logged as a warning and the
(possibly partial) output is still handed back to the caller.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from lessfilter.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from lessfilter.config.logging import LessFilterLogger

logger: LessFilterLogger = get_logger(__name__)

EXEC_FAILURE_RC: Final[int] = 127


@dataclass(frozen=True)
class CommandResult:
    """Result of a command execution.

    Attributes:
        argv (tuple[str, ...]): Command that was executed.
        returncode (int): Exit status (``127`` when the program could not start).
        stdout (bytes): Captured standard output.
        stderr (bytes): Captured standard error.
        duration_sec (float): Wall-clock execution time.
    """

    argv: tuple[str, ...]
    returncode: int
    stdout: bytes
    stderr: bytes
    duration_sec: float = 0.0

    @property
    def success(self) -> bool:
        """True if the command exited with status 0."""
        return self.returncode == 0

    @property
    def text(self) -> str:
        """Standard output decoded as UTF-8; undecodable bytes round-trip."""
        return self.stdout.decode("utf-8", errors="surrogateescape")

    def truncated_stderr(self, max_chars: int = 200) -> str:
        """Return truncated stderr for safe logging."""
        err: str = self.stderr.decode("utf-8", errors="replace").strip()
        if len(err) <= max_chars:
            return err
        return err[:max_chars] + f"... ({len(err)} total chars)"


def find_tool(name: str) -> str | None:
    """Return the full path of ``name`` on ``PATH``, or None."""
    path: str | None = shutil.which(name)
    logger.trace("find_tool(%s) -> %s", name, path)
    return path


def first_available(names: Iterable[str]) -> str | None:
    """Return the first of ``names`` that is installed, or None.

    Args:
        names (Iterable[str]): Tool names in order of preference.

    Returns:
        str | None: The chosen tool *name* (not its path), or None.
    """
    for name in names:
        if find_tool(name) is not None:
            return name
    return None


def run_tool(
    argv: Sequence[str],
    *,
    stdin: bytes | None = None,
    stdin_path: Path | None = None,
    cwd: Path | None = None,
    probe: bool = False,
) -> CommandResult:
    """Run a command to completion with consistent logging.

    Args:
        argv (Sequence[str]): Command and arguments.
        stdin (bytes | None): Bytes fed to standard input.
        stdin_path (Path | None): File connected to standard input (ignored when
            ``stdin`` is given). Without either, standard input is ``/dev/null``.
        cwd (Path | None): Working directory.
        probe (bool): The command only tests a capability; a non-zero exit is
            an expected answer and is logged at debug level.

    Returns:
        CommandResult: Execution details. Never raises for tool failures.
    """
    command: tuple[str, ...] = tuple(argv)
    logger.debug("Executing: %s", " ".join(command))
    start: float = time.monotonic()
    try:
        if stdin is not None:
            proc = subprocess.run(command, input=stdin, capture_output=True, cwd=cwd, check=False)
        elif stdin_path is not None:
            with stdin_path.open("rb") as handle:
                proc = subprocess.run(
                    command, stdin=handle, capture_output=True, cwd=cwd, check=False
                )
        else:
            proc = subprocess.run(
                command, stdin=subprocess.DEVNULL, capture_output=True, cwd=cwd, check=False
            )
    except OSError as e:
        logger.warning("Cannot execute %s: %s", command[0] if command else "<empty>", e)
        return CommandResult(command, EXEC_FAILURE_RC, b"", b"", time.monotonic() - start)

    result = CommandResult(
        argv=command,
        returncode=proc.returncode,
        stdout=proc.stdout or b"",
        stderr=proc.stderr or b"",
        duration_sec=round(time.monotonic() - start, 3),
    )
    logger.debug(
        "Command completed: rc=%d, %d bytes, duration=%.3fs",
        result.returncode,
        len(result.stdout),
        result.duration_sec,
    )
    if not result.success:
        logger.log(
            logging.DEBUG if probe else logging.WARNING,
            "%s exited with status %d: %s",
            command[0],
            result.returncode,
            result.truncated_stderr(),
        )
    return result
