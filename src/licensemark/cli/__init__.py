# topmark:header:start
#
#   project      : LicenseMark
#   file         : __init__.py
#   file_relpath : src/licensemark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line host for LicenseMark.

The console script entry point is defined in ``pyproject.toml`` as::

    [project.scripts]
    licensemark = "licensemark.cli.main:cli"

Subcommands live in `licensemark.cli.commands`.
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main or commands at module import time
