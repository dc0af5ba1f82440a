# lessfilter:header:start
#
#   project      : LessFilter
#   file         : scratch.py
#   file_relpath : src/lessfilter/pipeline/scratch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Scratch Area: the private temporary directory of one invocation.

``ScratchArea`` is a context manager. The directory is created on entry and
removed on exit, whatever the exit path: normal return, an exception, or a
termination signal. ``SIGTERM`` and ``SIGHUP`` are turned into ``SystemExit``
while the area is live, so ``finally`` blocks run; ``SIGINT`` already raises
``KeyboardInterrupt``.

Example:
    ```python
    with ScratchArea(config) as scratch:
        target = scratch.artifact_path(subject, "xml")
    ```
"""

from __future__ import annotations

import shutil
import signal
import tempfile
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from lessfilter.config.logging import get_logger
from lessfilter.constants import ARTIFACT_MARKER, SCRATCH_PREFIX
from lessfilter.core.errors import ScratchAreaError

if TYPE_CHECKING:
    from types import FrameType, TracebackType

    from lessfilter.config.logging import LessFilterLogger
    from lessfilter.config.model import Config
    from lessfilter.pipeline.context import SubjectFile

logger: LessFilterLogger = get_logger(__name__)

CLEANUP_SIGNALS: Final[tuple[signal.Signals, ...]] = tuple(
    sig
    for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None))
    if sig is not None
)


def _exit_on_signal(signum: int, frame: FrameType | None) -> None:
    logger.debug("Received signal %d; cleaning up", signum)
    raise SystemExit(128 + signum)


class ScratchArea:
    """Private, self-cleaning temporary directory.

    Args:
        config (Config): Runtime configuration (``scratch_dir`` selects the parent
            directory; ``None`` uses the system default).
    """

    def __init__(self, config: Config) -> None:
        self._parent: Path | None = config.scratch_dir
        self._path: Path | None = None
        self._previous_handlers: dict[signal.Signals, Any] = {}

    @property
    def path(self) -> Path:
        """Directory of the scratch area.

        Raises:
            ScratchAreaError: If the area has not been created.
        """
        if self._path is None:
            raise ScratchAreaError("Scratch area is not active")
        return self._path

    def __enter__(self) -> ScratchArea:
        """Create the directory and install the signal handlers."""
        try:
            created = tempfile.mkdtemp(
                prefix=SCRATCH_PREFIX,
                dir=str(self._parent) if self._parent is not None else None,
            )
        except OSError as e:
            raise ScratchAreaError(f"Cannot create temporary directory: {e}") from e
        self._path = Path(created)
        logger.debug("Scratch area created at %s", self._path)
        self._install_handlers()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Remove the directory and restore the previous signal handlers."""
        try:
            self.cleanup()
        finally:
            self._restore_handlers()

    def cleanup(self) -> None:
        """Remove the scratch directory and everything in it (idempotent)."""
        if self._path is None:
            return
        try:
            shutil.rmtree(self._path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Cannot remove scratch area %s: %s", self._path, e)
        else:
            logger.debug("Scratch area %s removed", self._path)
        self._path = None

    def artifact_path(self, subject: SubjectFile, suffix: str) -> Path:
        """Return the path of a new artifact derived from ``subject``.

        Args:
            subject (SubjectFile): The file being transformed.
            suffix (str): Artifact suffix describing its content (e.g. ``"xml"``).

        Returns:
            Path: ``<scratch>/<basename>:formatted:.<suffix>``.
        """
        return self.path / f"{subject.path.name}{ARTIFACT_MARKER}.{suffix.lstrip('.')}"

    def _install_handlers(self) -> None:
        # Python only allows signal handlers in the main thread.
        if threading.current_thread() is not threading.main_thread():
            return
        for sig in CLEANUP_SIGNALS:
            self._previous_handlers[sig] = signal.signal(sig, _exit_on_signal)

    def _restore_handlers(self) -> None:
        for sig, handler in self._previous_handlers.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()
