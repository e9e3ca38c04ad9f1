# topmark:header:start
#
#   project      : LicenseMark
#   file         : exit_codes.py
#   file_relpath : src/licensemark/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the LicenseMark CLI.

LicenseMark follows the BSD `sysexits` convention where practical. The one
divergence is `WOULD_CHANGE=2`, returned by a dry run that found files to
change. Click also exits with 2 on usage errors, so tests assert
`result.exception is None` to tell the two apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the LicenseMark CLI.

    Attributes:
        SUCCESS: Nothing to change, or all changes were written.
        FAILURE: Generic failure.
        WOULD_CHANGE: Dry run: files would change with ``--apply``.
        USAGE_ERROR: Invalid invocation. BSD ``EX_USAGE (64)``.
        FILE_NOT_FOUND: An input path does not exist. BSD ``EX_NOINPUT (66)``.
        IO_ERROR: A file could not be read or written. BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Invalid configuration or language table. BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Last resort.
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2

    USAGE_ERROR = 64  # EX_USAGE
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
