# topmark:header:start
#
#   project      : LicenseMark
#   file         : definitions.py
#   file_relpath : src/licensemark/headers/definitions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Header definition files (``*.licenseheader``).

File format:
    A line starting with ``extensions:`` introduces a space-separated list of
    file extensions (a leading dot is added where missing). Every following
    line, up to the next marker or the end of the file, is a verbatim template
    line for all of those extensions. Blank lines are kept; there is no
    escaping. Lines before the first marker are ignored.

    ```text
    extensions: .cs .js
    // Copyright (c) %CurrentYear% Example Corp.
    // Licensed under the MIT license.
    extensions: designer.cs
    ```

    A later marker listing an extension again overrides the earlier template.
    A marker with an empty template (like ``designer.cs`` above) maps the
    extension to a blank template, which disables headers for it. A marker
    listing no extension at all assigns its lines to nothing.

Lookup:
    Definition files are found per directory (*scope*). Resolving from a file
    walks from its directory up to the project root; the nearest scope that
    has a definition file wins entirely. Sets from farther scopes are never
    merged in.
"""

from __future__ import annotations

import locale
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Final

from licensemark.config.logging import LicensemarkLogger, get_logger
from licensemark.constants import DEFINITION_FILE_EXTENSION, DEFINITION_KEYWORD
from licensemark.core.errors import DefinitionFileError
from licensemark.languages.base import normalize_extension

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

logger: LicensemarkLogger = get_logger(__name__)

HeaderTemplate = tuple[str, ...]

_LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|\n|\r")


@dataclass(frozen=True)
class HeaderDefinitionSet:
    """Mapping of file extension to header template, from one definition file.

    Attributes:
        templates (Mapping[str, HeaderTemplate]): Extension (with leading dot) to
            template lines. All extensions of one marker share one tuple.
        source (Path | None): The definition file, when loaded from disk.
    """

    templates: Mapping[str, HeaderTemplate] = field(default_factory=dict)
    source: Path | None = None

    def lookup(self, file_name: str) -> HeaderTemplate | None:
        """Return the template for ``file_name``.

        The longest registered extension that is a case-insensitive suffix of
        ``file_name`` wins (``.designer.cs`` before ``.cs``).

        Args:
            file_name (str): File name or path.

        Returns:
            HeaderTemplate | None: The template, or None when no extension matches.
        """
        ext: str | None = self.match_extension(file_name)
        return self.templates[ext] if ext is not None else None

    def match_extension(self, file_name: str) -> str | None:
        """Return the registered extension used for ``file_name`` (see `lookup`)."""
        lowered: str = file_name.lower()
        for ext in sorted(self.templates, key=len, reverse=True):
            if lowered.endswith(ext.lower()):
                return ext
        return None

    def extensions(self) -> list[str]:
        """Registered extensions, in definition order."""
        return list(self.templates)

    def __len__(self) -> int:
        return len(self.templates)

    def __iter__(self) -> Iterator[str]:
        return iter(self.templates)


def _split_lines(text: str) -> list[str]:
    lines: list[str] = _LINE_BREAK_RE.split(text)
    # A final line break does not start another line
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_definition_text(text: str, source: Path | None = None) -> HeaderDefinitionSet:
    """Parse the content of a header definition file.

    Args:
        text (str): File content.
        source (Path | None): Where ``text`` came from (used in log messages and kept on the result).

    Returns:
        HeaderDefinitionSet: The parsed set; empty when there is no marker.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    templates: dict[str, HeaderTemplate] = {}
    extensions: list[str] | None = None
    body: list[str] = []

    def flush() -> None:
        if extensions is None:
            return
        template: HeaderTemplate = tuple(body)
        for ext in extensions:
            if ext in templates:
                logger.debug("%s: template for %s overridden", source or "<text>", ext)
            templates[ext] = template

    for lineno, line in enumerate(_split_lines(text), start=1):
        if line.startswith(DEFINITION_KEYWORD):
            flush()
            names: list[str] = line[len(DEFINITION_KEYWORD) :].split()
            if not names:
                logger.debug("%s:%d: marker lists no extension", source or "<text>", lineno)
            extensions = [normalize_extension(n) for n in names]
            body = []
        elif extensions is not None:
            body.append(line)
    flush()

    logger.debug(
        "Parsed %d template(s) from %s: %s",
        len(templates),
        source or "<text>",
        ", ".join(templates),
    )
    return HeaderDefinitionSet(templates=templates, source=source)


def load_definition_file(path: Path, encoding: str | None = None) -> HeaderDefinitionSet:
    """Read and parse a header definition file.

    Args:
        path (Path): The definition file.
        encoding (str | None): Text encoding; the locale's preferred encoding when None.

    Returns:
        HeaderDefinitionSet: The parsed set.

    Raises:
        DefinitionFileError: If the file cannot be read or decoded.
    """
    enc: str = encoding or locale.getpreferredencoding(False)
    try:
        text: str = path.read_text(encoding=enc)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise DefinitionFileError(f"cannot read definition file: {exc}", path=path) from exc
    logger.trace("Loaded definition file %s (%s)", path, enc)
    return parse_definition_text(text, source=path)


def find_definition_file(directory: Path) -> Path | None:
    """Return the header definition file directly inside ``directory``.

    Args:
        directory (Path): Directory to look in.

    Returns:
        Path | None: The ``*.licenseheader`` file (extension compared
        case-insensitively), the first in sorted order when there are several,
        or None.
    """
    try:
        candidates: list[Path] = sorted(
            p
            for p in directory.iterdir()
            if p.suffix.lower() == DEFINITION_FILE_EXTENSION and p.is_file()
        )
    except OSError as exc:
        logger.warning("Cannot list %s: %s", directory, exc)
        return None
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            "Several definition files in %s; using %s",
            directory,
            candidates[0].name,
        )
    return candidates[0]


def scope_chain(path: Path, root: Path | None = None) -> list[Path]:
    """Return the directory scopes for ``path``, nearest first.

    Args:
        path (Path): A file or directory.
        root (Path | None): Project root; the walk stops after it. Without a
            root, the walk goes up to the file system root.

    Returns:
        list[Path]: Directories from ``path``'s folder up to and including ``root``.
    """
    start: Path = path.resolve()
    if not start.is_dir():
        start = start.parent
    stop: Path | None = root.resolve() if root is not None else None

    chain: list[Path] = []
    current: Path = start
    while True:
        chain.append(current)
        if stop is not None and current == stop:
            break
        if current.parent == current:
            if stop is not None:
                logger.debug("%s is not below root %s", path, stop)
            break
        current = current.parent
    return chain


def resolve(
    scopes: Iterable[Path],
    *,
    encoding: str | None = None,
) -> HeaderDefinitionSet | None:
    """Return the definition set of the nearest scope that has one.

    Args:
        scopes (Iterable[Path]): Directories, nearest first (see `scope_chain`).
        encoding (str | None): Encoding for reading definition files.

    Returns:
        HeaderDefinitionSet | None: The first set found, or None when no scope
        has a definition file.

    Raises:
        DefinitionFileError: If the nearest definition file cannot be loaded.
    """
    for scope in scopes:
        found: Path | None = find_definition_file(scope)
        if found is not None:
            logger.debug("Using definition file %s", found)
            return load_definition_file(found, encoding)
    return None


def is_definition_file(path: Path | str) -> bool:
    """True when ``path`` names a header definition file."""
    return str(path).lower().endswith(DEFINITION_FILE_EXTENSION)
