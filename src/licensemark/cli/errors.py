# topmark:header:start
#
#   project      : LicenseMark
#   file         : errors.py
#   file_relpath : src/licensemark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the LicenseMark CLI.

Raise these from commands to stop with a message and a specific exit code.
When the Click context carries a project console, errors are printed through
it; otherwise Click's default display is used.
"""

from __future__ import annotations

from typing import IO, Any

import click

from licensemark.cli.exit_codes import ExitCode


class LicensemarkCliError(click.ClickException):
    """Base class for all LicenseMark CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colors are added by `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class LicensemarkUsageError(LicensemarkCliError):
    """Error for invalid command-line invocations."""

    exit_code = ExitCode.USAGE_ERROR


class LicensemarkConfigError(LicensemarkCliError):
    """Error for malformed configuration or language definitions."""

    exit_code = ExitCode.CONFIG_ERROR


class LicensemarkFileNotFoundError(LicensemarkCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND
