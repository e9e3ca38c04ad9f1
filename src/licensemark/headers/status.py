# topmark:header:start
#
#   project      : LicenseMark
#   file         : status.py
#   file_relpath : src/licensemark/headers/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Result codes reported by the header replacement engine.

Conventions:
  * All enums are `ColoredStrEnum` members (from
    `licensemark.rendering.colored_enum`) so the CLI can print colored labels.
  * Values are human-readable strings; compare members with ``==``.
"""

from __future__ import annotations

from yachalk import chalk

from licensemark.rendering.colored_enum import ColoredStrEnum


class ReplaceResult(ColoredStrEnum):
    """Outcome of one header replacement attempt.

    The set is exhaustive: every file visited by the replacer ends up with
    exactly one of these codes.
    """

    # Value format: (description: str, color_renderer: ChalkBuilder)
    HEADER_APPLIED = ("header applied", chalk.yellow)
    NO_OPERATION_NEEDED = ("up-to-date", chalk.green)
    HEADER_REMOVED = ("header removed", chalk.yellow)
    NOT_A_PHYSICAL_FILE = ("not a regular file", chalk.gray)
    IS_HEADER_DEFINITION_FILE_ITSELF = ("header definition file", chalk.gray)
    NO_TEXT_REPRESENTATION = ("no text representation", chalk.red)
    LANGUAGE_NOT_RECOGNIZED = ("language not recognized", chalk.gray)
    NO_APPLICABLE_HEADER_TEMPLATE = ("no applicable header template", chalk.gray)

    @property
    def is_change(self) -> bool:
        """True when the result means the document content was (or would be) modified."""
        return self in (ReplaceResult.HEADER_APPLIED, ReplaceResult.HEADER_REMOVED)


class HeaderAction(ColoredStrEnum):
    """Decision taken by `HeaderDocument` for one document."""

    NONE = ("no action", chalk.green)
    INSERT = ("insert", chalk.yellow)
    REPLACE = ("replace", chalk.yellow)
    REMOVE = ("remove", chalk.yellow)


class InvalidHeaderPolicy(ColoredStrEnum):
    """What to do with a document whose header fails validation."""

    SKIP = ("skip", chalk.yellow)
    REPLACE = ("replace", chalk.red)
    PROMPT = ("prompt", chalk.blue)
