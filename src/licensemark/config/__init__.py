# topmark:header:start
#
#   project      : LicenseMark
#   file         : __init__.py
#   file_relpath : src/licensemark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for LicenseMark.

TOML configuration (``licensemark.toml`` or ``[tool.licensemark]`` in
``pyproject.toml``) is parsed with tomlkit into a `MutableConfig` draft,
merged layer by layer and frozen into an immutable `Config`.

Logging setup lives in `licensemark.config.logging`.
"""

from __future__ import annotations

from licensemark.config.model import ArgsLike, Config, MutableConfig

__all__ = [
    "ArgsLike",
    "Config",
    "MutableConfig",
]
