# topmark:header:start
#
#   project      : LicenseMark
#   file         : io.py
#   file_relpath : src/licensemark/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O and typed value extraction for LicenseMark configuration.

Parsing is done with `tomlkit` and returned as plain `dict` structures. The
``get_*`` helpers extract typed values from a table; the ``*_checked``
variants raise [`ConfigError`][licensemark.core.errors.ConfigError] when a key
is present with the wrong type, the others fall back silently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from licensemark.config.logging import LicensemarkLogger, get_logger
from licensemark.constants import DEFAULT_REQUIRED_KEYWORDS
from licensemark.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

TomlTable = dict[str, Any]

logger: LicensemarkLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return LicenseMark's runtime defaults as a TOML-shaped dict.

    Returns:
        TomlTable: A new dict (callers may mutate it).
    """
    return {
        "keywords": {
            "use_required_keywords": True,
            "required_keywords": list(DEFAULT_REQUIRED_KEYWORDS),
        },
        "definitions": {
            "encoding": "",
            "project_name": "",
        },
        "files": {
            "exclude_patterns": [],
        },
        "languages": [],
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``licensemark.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        raise ConfigError(f"Error loading TOML from {path}: {e}") from e
    except TomlkitParseError as e:
        raise ConfigError(f"Error decoding TOML from {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def to_toml(data: TomlTable) -> str:
    """Render a TOML-shaped dict as TOML text (``None`` values are dropped)."""

    def _prune(value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: _prune(v)
                for k, v in cast("dict[str, Any]", value).items()
                if v is not None
            }
        if isinstance(value, list):
            return [_prune(v) for v in cast("list[Any]", value)]
        return value

    return tomlkit.dumps(_prune(data))


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table ``key`` of ``table`` (empty dict when missing).

    Raises:
        ConfigError: If ``key`` is present but not a table.
    """
    value: Any | None = table.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"[{key}] must be a table, got {type(value).__name__}")
    return cast("TomlTable", value)


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    If the value is of type ``int``, ``float``, or ``bool``, it is coerced with
    ``str(...)``. Missing keys and non-coercible values give ``None``.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    logger.debug("Cannot coerce %r to string, returning None", value)
    return None


def get_bool_value_or_none_checked(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value, rejecting other types.

    Raises:
        ConfigError: If the key is present and not a boolean.
    """
    value: Any | None = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise ConfigError(f"'{key}' must be a boolean, got {value!r}")


def get_string_list_value_checked(table: TomlTable, key: str) -> list[str] | None:
    """Extract an optional list of strings.

    Returns:
        list[str] | None: The list, or ``None`` when the key is missing.

    Raises:
        ConfigError: If the value is not a list of strings.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, list) and all(isinstance(v, str) for v in cast("list[Any]", value)):
        return list(cast("list[str]", value))
    raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")


def get_table_list_value_checked(table: TomlTable, key: str) -> list[TomlTable]:
    """Extract an array of tables (``[[key]]``); empty when missing.

    Raises:
        ConfigError: If the value is not an array of tables.
    """
    value: Any | None = table.get(key)
    if value is None:
        return []
    if isinstance(value, list) and all(isinstance(v, dict) for v in cast("list[Any]", value)):
        return [dict(v) for v in cast("list[TomlTable]", value)]
    raise ConfigError(f"[[{key}]] must be an array of tables")
