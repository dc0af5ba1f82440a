# lessfilter:header:start
#
#   project      : LessFilter
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Pytest configuration for the LessFilter test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs.

Notes:
    LessFilter is a thin orchestrator around external programs. Tests never
    depend on what happens to be installed: `fake_tools` points ``PATH`` at a
    private directory of small ``/bin/sh`` scripts standing in for the real
    programs, so a test states exactly which tools "exist" and what they print.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from lessfilter.config import logging
from lessfilter.config.model import Config
from lessfilter.filetypes.kinds import Kind
from lessfilter.pipeline.context import Mode, SubjectFile, TransformContext
from lessfilter.rendering.ansi import enable_ansi

if TYPE_CHECKING:
    from lessfilter.pipeline.scratch import ScratchArea

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell environment out of the tests.

    Unsets ``LESSFILTER_LOG_LEVEL`` and ``LESSFILTER_CONFIG``, points ``HOME``
    and the XDG roots at the test's temporary directory, and forces ANSI
    output so coloured expectations are deterministic.

    Args:
        tmp_path (Path): The pytest-provided temporary directory.
        monkeypatch (pytest.MonkeyPatch): Fixture used to manipulate environment variables.
    """
    monkeypatch.delenv("LESSFILTER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LESSFILTER_CONFIG", raising=False)
    monkeypatch.delenv("COLUMNS", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "home" / ".config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "home" / ".cache"))
    monkeypatch.setenv("TERM", "xterm")
    enable_ansi()


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so failing tests show the full story.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


class FakeTools:
    """A private ``bin`` directory of shell scripts standing in for external tools.

    Args:
        bin_dir (Path): Directory placed on ``PATH``.
    """

    # Scripts run with a sane PATH of their own; the test process only sees bin_dir.
    PREAMBLE = "#!/bin/sh\nPATH=/usr/local/bin:/usr/bin:/bin\nexport PATH\n"

    def __init__(self, bin_dir: Path) -> None:
        self.bin_dir = bin_dir

    def add(self, name: str, body: str) -> Path:
        """Install a tool named ``name`` whose script is ``body``.

        Args:
            name (str): Program name.
            body (str): Shell script body (after the ``#!/bin/sh`` line).

        Returns:
            Path: The script location.
        """
        script: Path = self.bin_dir / name
        script.write_text(self.PREAMBLE + body + "\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    def add_echo(self, name: str, text: str) -> Path:
        """Install a tool that drains standard input and prints ``text``."""
        return self.add(name, f"cat >/dev/null 2>&1\nprintf '%s\\n' '{text}'")

    def log_path(self, name: str) -> Path:
        """File where a tool installed with `add_recorder` logs its arguments."""
        return self.bin_dir / f"{name}.args"

    def add_recorder(self, name: str, output: str = "") -> Path:
        """Install a tool that records its arguments (one per line) and prints ``output``."""
        log: Path = self.log_path(name)
        return self.add(
            name,
            f"for a in \"$@\"; do printf '%s\\n' \"$a\"; done >> '{log}'\n"
            f"printf '%s' '{output}'",
        )

    def recorded_args(self, name: str) -> list[str]:
        """Return the arguments recorded by a tool installed with `add_recorder`."""
        log: Path = self.log_path(name)
        if not log.exists():
            return []
        return log.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def fake_tools(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    """Replace ``PATH`` with an empty private ``bin`` directory.

    Args:
        tmp_path (Path): The pytest-provided temporary directory.
        monkeypatch (pytest.MonkeyPatch): Fixture used to manipulate environment variables.

    Returns:
        FakeTools: Helper used to install fake programs.
    """
    bin_dir: Path = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return FakeTools(bin_dir)


def make_config(tmp_path: Path, **overrides: Any) -> Config:
    """Return a `Config` rooted in ``tmp_path``, with overrides applied.

    Args:
        tmp_path (Path): The pytest-provided temporary directory.
        **overrides (Any): Field values replacing the defaults.

    Returns:
        Config: The configuration.
    """
    scratch_parent: Path = tmp_path / "scratch"
    scratch_parent.mkdir(exist_ok=True)
    values: dict[str, Any] = {
        "cache_dir": tmp_path / "cache",
        "scratch_dir": scratch_parent,
        "grc_graphviz_conf": tmp_path / "conf.graphviz",
        "system": "Linux",
    }
    values.update(overrides)
    return Config(**values)


def make_context(
    path: Path,
    config: Config,
    scratch: ScratchArea,
    kind: Kind | None = None,
    mode: Mode = Mode.RENDER,
) -> TransformContext:
    """Build the initial `TransformContext` for ``path``."""
    subject: SubjectFile = SubjectFile.from_user(os.fspath(path))
    return TransformContext(
        subject=subject,
        original=subject,
        kind=kind if kind is not None else Kind.NONE,
        config=config,
        scratch=scratch,
        mode=mode,
    )
