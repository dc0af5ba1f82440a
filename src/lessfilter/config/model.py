# lessfilter:header:start
#
#   project      : LessFilter
#   file         : model.py
#   file_relpath : src/lessfilter/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Resolved, immutable runtime configuration for LessFilter.

``load_config()`` layers three sources, lowest precedence first:

1. runtime defaults (``lessfilter.config.io.load_defaults_dict``);
2. the user TOML file (``$LESSFILTER_CONFIG`` or
   ``${XDG_CONFIG_HOME:-~/.config}/lessfilter/lessfilter.toml``);
3. environment-derived values (``TERM``, ``COLUMNS``, ``XDG_CACHE_HOME``, ``HOME``).

The resulting ``Config`` is frozen and passed explicitly to every component.
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from lessfilter.config.io import (
    get_int_value,
    get_string_value,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    merge_tables,
)
from lessfilter.config.keys import Env, Toml
from lessfilter.config.logging import get_logger
from lessfilter.constants import (
    CACHE_DIRNAME,
    DEFAULT_SNIFF_BYTES,
    USER_CONFIG_DIRNAME,
    USER_CONFIG_FILENAME,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from lessfilter.config.io import TomlTable
    from lessfilter.config.logging import LessFilterLogger

logger: LessFilterLogger = get_logger(__name__)


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        style (str): Default pygments style.
        markdown_style (str): Pygments style for markdown sources.
        markdown_legacy_style (str): Fallback markdown style for old pygments releases.
        columns (int | None): Explicit markdown wrap width; ``None`` means auto-detect.
        sniff_bytes (int): Number of leading bytes passed to ``file`` for identification.
        cache_dir (Path): Directory holding the lexer cache.
        scratch_dir (Path | None): Parent of the per-invocation scratch area
            (``None`` uses the system temporary directory).
        grc_graphviz_conf (Path): grcat configuration used for Graphviz sources.
        term (str): Terminal name from ``TERM``.
        env_columns (int | None): Width from ``COLUMNS``, if set and valid.
        system (str): Host operating system name (``platform.system()``).
    """

    style: str = "rrt"
    markdown_style: str = "material"
    markdown_legacy_style: str = "monokai"
    columns: int | None = None
    sniff_bytes: int = DEFAULT_SNIFF_BYTES
    cache_dir: Path = Path(".cache") / CACHE_DIRNAME
    scratch_dir: Path | None = None
    grc_graphviz_conf: Path = Path(".grc") / "conf.graphviz"
    term: str = ""
    env_columns: int | None = None
    system: str = "Linux"

    @property
    def is_256(self) -> bool:
        """Whether the terminal advertises 256-colour support."""
        return "256" in self.term

    @property
    def terminal_format(self) -> str:
        """Default pygments formatter name for this terminal."""
        return "terminal256" if self.is_256 else "terminal"


def _parse_positive_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    raw = raw.strip()
    if not raw.isdigit():
        return None
    value = int(raw)
    return value if value > 0 else None


def user_config_path(env: Mapping[str, str]) -> Path:
    """Return the location of the user configuration file.

    Args:
        env (Mapping[str, str]): Environment mapping.

    Returns:
        Path: ``$LESSFILTER_CONFIG`` if set, otherwise the XDG location.
    """
    explicit: str = env.get(Env.CONFIG, "")
    if explicit:
        return Path(explicit).expanduser()
    home = Path(env.get(Env.HOME) or Path.home())
    config_home: str = env.get(Env.XDG_CONFIG_HOME, "")
    base: Path = Path(config_home) if config_home else home / ".config"
    return base / USER_CONFIG_DIRNAME / USER_CONFIG_FILENAME


def _default_cache_dir(env: Mapping[str, str]) -> Path:
    cache_home: str = env.get(Env.XDG_CACHE_HOME, "")
    if cache_home:
        return Path(cache_home) / CACHE_DIRNAME
    home = Path(env.get(Env.HOME) or Path.home())
    return home / ".cache" / CACHE_DIRNAME


def load_config(env: Mapping[str, str] | None = None) -> Config:
    """Build the runtime ``Config`` from defaults, the user file and the environment.

    Args:
        env (Mapping[str, str] | None): Environment mapping; defaults to ``os.environ``.

    Returns:
        Config: The resolved configuration.
    """
    if env is None:
        env = os.environ

    data: TomlTable = load_defaults_dict()
    user_path: Path = user_config_path(env)
    if user_path.is_file():
        logger.debug("Loading user configuration from %s", user_path)
        data = merge_tables(data, load_toml_dict(user_path))
    else:
        logger.trace("No user configuration at %s", user_path)

    highlight: TomlTable = get_table_value(data, Toml.SECTION_HIGHLIGHT)
    markdown: TomlTable = get_table_value(data, Toml.SECTION_MARKDOWN)
    identify: TomlTable = get_table_value(data, Toml.SECTION_IDENTIFY)
    paths: TomlTable = get_table_value(data, Toml.SECTION_PATHS)

    home = Path(env.get(Env.HOME) or Path.home())

    columns: int = get_int_value(markdown, Toml.KEY_COLUMNS, 0)
    sniff_bytes: int = get_int_value(identify, Toml.KEY_SNIFF_BYTES, DEFAULT_SNIFF_BYTES)
    if sniff_bytes <= 0:
        logger.warning("Ignoring non-positive sniff_bytes=%d", sniff_bytes)
        sniff_bytes = DEFAULT_SNIFF_BYTES

    cache_dir_raw: str = get_string_value(paths, Toml.KEY_CACHE_DIR)
    scratch_dir_raw: str = get_string_value(paths, Toml.KEY_SCRATCH_DIR)
    grc_conf_raw: str = get_string_value(paths, Toml.KEY_GRC_GRAPHVIZ_CONF)

    config = Config(
        style=get_string_value(highlight, Toml.KEY_STYLE, "rrt"),
        markdown_style=get_string_value(highlight, Toml.KEY_MARKDOWN_STYLE, "material"),
        markdown_legacy_style=get_string_value(
            highlight, Toml.KEY_MARKDOWN_LEGACY_STYLE, "monokai"
        ),
        columns=columns if columns > 0 else None,
        sniff_bytes=sniff_bytes,
        cache_dir=(
            Path(cache_dir_raw).expanduser() if cache_dir_raw else _default_cache_dir(env)
        ),
        scratch_dir=Path(scratch_dir_raw).expanduser() if scratch_dir_raw else None,
        grc_graphviz_conf=(
            Path(grc_conf_raw).expanduser() if grc_conf_raw else home / ".grc" / "conf.graphviz"
        ),
        term=env.get(Env.TERM, ""),
        env_columns=_parse_positive_int(env.get(Env.COLUMNS)),
        system=platform.system(),
    )
    logger.trace("Resolved configuration: %s", config)
    return config
