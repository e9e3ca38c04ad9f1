# topmark:header:start
#
#   project      : LicenseMark
#   file         : errors.py
#   file_relpath : src/licensemark/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception hierarchy of the LicenseMark core.

The core only raises the exceptions below; translating them into exit codes
and user-facing messages is the job of the CLI layer (see
`licensemark.cli.errors`).

Taxonomy:
    * `CommentSyntaxError`: a comment grammar is malformed. Raised while the
      language table is built, before any file is touched.
    * `ConfigError`: a configuration file or value is malformed.
    * `DefinitionFileError`: a header definition file cannot be read or
      decoded. Batch operations catch it per scope.
    * `BufferOffsetError`: a document buffer received offsets it cannot honor.
    * `HeaderMutationError`: a header mutation failed for one document; the
      document was restored before the error was raised.

Unbalanced headers are *not* errors: they are reported as advisory booleans.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class LicensemarkError(Exception):
    """Base class for all LicenseMark core errors."""


class CommentSyntaxError(LicensemarkError, ValueError):
    """Raised when a comment syntax table violates its invariants."""


class ConfigError(LicensemarkError):
    """Raised for malformed configuration files or values."""


class DefinitionFileError(LicensemarkError):
    """Raised when a header definition file cannot be loaded.

    Attributes:
        path (Path | None): The definition file, when known.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(f"{path}: {message}" if path is not None else message)
        self.path = path


class BufferOffsetError(LicensemarkError, IndexError):
    """Raised when a document buffer is addressed with invalid or stale offsets."""


class HeaderMutationError(LicensemarkError):
    """Raised when replacing or removing a header failed for one document.

    The document has been restored to its state before the mutation started.
    """
