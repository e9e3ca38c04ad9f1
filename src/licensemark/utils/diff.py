# topmark:header:start
#
#   project      : LicenseMark
#   file         : diff.py
#   file_relpath : src/licensemark/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diffs of header changes.

`unified_patch` builds the diff between a file's original and updated text;
`render_patch` formats it with colors for the CLI.
"""

from __future__ import annotations

import difflib
from typing import Sequence

from yachalk import chalk

from licensemark.config.logging import get_logger

logger = get_logger(__name__)


def unified_patch(original: str, updated: str, path: str) -> list[str]:
    """Return the unified diff lines turning ``original`` into ``updated``.

    Line endings are kept on the diff lines so CRLF changes stay visible.
    """
    patch: list[str] = list(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{path} (original)",
            tofile=f"{path} (updated)",
        )
    )
    logger.trace("Patch for %s has %d line(s)", path, len(patch))
    return patch


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch: A unified diff as either a sequence of lines or one multiline string.
        show_line_numbers: Whether to prefix output with line numbers.

    Returns:
        The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=True)
    else:
        lines = list(patch)

    # Show control characters explicitly
    def process_line(line: str) -> str:
        content = line.replace("\r", "\\r").replace("\n", "\\n")
        if line.startswith(("---", "+++")):
            return chalk.bold.white(content)
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.gray(content)

    if show_line_numbers:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
