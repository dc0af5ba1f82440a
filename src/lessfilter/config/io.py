# lessfilter:header:start
#
#   project      : LessFilter
#   file         : io.py
#   file_relpath : src/lessfilter/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Lightweight TOML I/O helpers for LessFilter configuration.

Typical flow:
    1. Start from the runtime defaults (``load_defaults_dict``).
    2. Load the user TOML file, if any (``load_toml_dict``).
    3. Merge the two (``merge_tables``) and read typed values with the
       ``get_*`` helpers.

Notes:
    - Parsing is done with `tomlkit`; documents are unwrapped into plain dicts.
    - Errors are logged and yield an empty table; a broken user file must never
      stop the pager from showing a file.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from lessfilter.config.keys import Toml
from lessfilter.config.logging import get_logger
from lessfilter.constants import (
    DEFAULT_SNIFF_BYTES,
    DEFAULT_TOML_CONFIG_NAME,
    DEFAULT_TOML_CONFIG_PACKAGE,
)

if TYPE_CHECKING:
    from pathlib import Path

    from lessfilter.config.logging import LessFilterLogger

logger: LessFilterLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        val (Any): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``val`` is a ``dict[str, Any]``.
    """
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table, or an empty dict if missing or not a mapping."""
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value(table: TomlTable, key: str, default: str = "") -> str:
    """Extract a string value, coercing scalars and falling back to ``default``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (str): Default value if the key is not found or not coercible.

    Returns:
        str: The extracted or coerced string value, or ``default``.
    """
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return default


def get_int_value(table: TomlTable, key: str, default: int = 0) -> int:
    """Extract an integer value; strings of digits are accepted.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (int): Default value if the key is missing or not an integer.

    Returns:
        int: The extracted value, or ``default``.
    """
    value: Any | None = table.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return default


def merge_tables(base: TomlTable, overlay: TomlTable) -> TomlTable:
    """Return a new table where ``overlay`` values win over ``base`` (one level of sections).

    Args:
        base (TomlTable): Lower-precedence table.
        overlay (TomlTable): Higher-precedence table.

    Returns:
        TomlTable: The merged table. Neither input is mutated.
    """
    merged: TomlTable = {
        key: dict(value) if is_toml_table(value) else value for key, value in base.items()
    }
    for key, value in overlay.items():
        current = merged.get(key)
        if is_toml_table(current) and is_toml_table(value):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def load_defaults_dict() -> TomlTable:
    """Return LessFilter's **runtime defaults** as a Python dict.

    This function intentionally performs **no I/O**: the bundled
    ``lessfilter-default.toml`` is an annotated template for humans, while the
    runtime defaults live in code so the filter works even if the template is
    missing.

    Returns:
        TomlTable: A fresh dict containing the runtime defaults.
    """
    return {
        Toml.SECTION_HIGHLIGHT: {
            Toml.KEY_STYLE: "rrt",
            Toml.KEY_MARKDOWN_STYLE: "material",
            Toml.KEY_MARKDOWN_LEGACY_STYLE: "monokai",
        },
        Toml.SECTION_MARKDOWN: {
            Toml.KEY_COLUMNS: 0,
        },
        Toml.SECTION_IDENTIFY: {
            Toml.KEY_SNIFF_BYTES: DEFAULT_SNIFF_BYTES,
        },
        Toml.SECTION_PATHS: {
            Toml.KEY_CACHE_DIR: "",
            Toml.KEY_SCRATCH_DIR: "",
            Toml.KEY_GRC_GRAPHVIZ_CONF: "",
        },
    }


def load_default_config_template_toml_text() -> str:
    """Return the bundled, annotated default configuration template as text."""
    return files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME).read_text(
        encoding="utf-8"
    )


def parse_toml_text(text: str) -> TomlTable:
    """Parse TOML text into a plain dict.

    Raises:
        TomlkitParseError: If the text is not valid TOML.
    """
    doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (e.g., ``lessfilter.toml``).

    Returns:
        TomlTable: The parsed TOML content, or an empty dict on failure.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        return parse_toml_text(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}
    except (TypeError, ValueError) as e:
        logger.error("Unknown error while reading TOML from %s: %s", path, e)
        return {}
