# lessfilter:header:start
#
#   project      : LessFilter
#   file         : context.py
#   file_relpath : src/lessfilter/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Immutable values threaded through the LessFilter pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lessfilter.config.model import Config
    from lessfilter.filetypes.kinds import Kind
    from lessfilter.pipeline.scratch import ScratchArea


class Mode(str, Enum):
    """Invocation mode.

    Attributes:
        CHECK_SUPPORT: Report applicability only (``--supports``); no output.
        RENDER: Produce the rendering on standard output.
    """

    CHECK_SUPPORT = "check-support"
    RENDER = "render"


@dataclass(frozen=True)
class SubjectFile:
    """The file currently flowing through the pipeline.

    Attributes:
        path (Path): Location of the bytes to read.
        name (str): Name used for pattern matching. For the user's file this is the
            path exactly as given; for artifacts it is the artifact's full path.
        is_temporary (bool): Whether the file is an artifact inside the scratch area.
        kind_hint (str | None): Extension-like tag set by a reformatter that knows the
            language of its artifact. It supersedes the inferred kind when matching.
    """

    path: Path
    name: str
    is_temporary: bool = False
    kind_hint: str | None = None

    @classmethod
    def from_user(cls, raw: str) -> SubjectFile:
        """Create the initial subject from the path given on the command line."""
        return cls(path=Path(raw), name=raw)

    @classmethod
    def artifact(cls, path: Path, kind_hint: str | None = None) -> SubjectFile:
        """Create a subject for a reformatter's artifact."""
        return cls(path=path, name=str(path), is_temporary=True, kind_hint=kind_hint)


@dataclass(frozen=True)
class TransformContext:
    """Everything a transformer may consult.

    Attributes:
        subject (SubjectFile): The current subject file.
        original (SubjectFile): The file named on the command line.
        kind (Kind): Inferred kind, computed once.
        config (Config): Runtime configuration.
        scratch (ScratchArea): Where artifacts are written.
        mode (Mode): Invocation mode.
    """

    subject: SubjectFile
    original: SubjectFile
    kind: Kind
    config: Config
    scratch: ScratchArea
    mode: Mode = Mode.RENDER

    @property
    def inferred_tag(self) -> str:
        """The kind hint of the subject if any, else the inferred kind's tag."""
        return self.subject.kind_hint or self.kind.tag

    def candidates(self) -> tuple[str, ...]:
        """Names a transformer's patterns are matched against, in order."""
        return tuple(name for name in (self.subject.name, self.inferred_tag) if name)

    def with_subject(self, subject: SubjectFile) -> TransformContext:
        """Return a copy of this context pointing at ``subject``."""
        return replace(self, subject=subject)
