# topmark:header:start
#
#   project      : LicenseMark
#   file         : registry.py
#   file_relpath : src/licensemark/languages/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Language table lookup.

The registry is an ordered collection of [`Language`][licensemark.languages.base.Language]
objects. Lookup by file name picks the language with the longest matching
extension; when two languages match with the same extension length the one
registered first wins.

The table is built once per run from the built-ins plus the ``[[languages]]``
entries of the configuration. A configured language whose name matches a
built-in replaces it in place; new names are appended.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from licensemark.config.logging import LicensemarkLogger, get_logger
from licensemark.core.errors import CommentSyntaxError
from licensemark.languages.base import Language, make_language

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

logger: LicensemarkLogger = get_logger(__name__)

_SYNTAX_KEYS: tuple[str, ...] = (
    "line_comment",
    "block_start",
    "block_end",
    "region_start",
    "region_end",
    "skip_expression",
)


class LanguageRegistry:
    """Ordered, name-unique collection of languages."""

    def __init__(self, languages: Iterable[Language] = ()) -> None:
        self._languages: dict[str, Language] = {}
        for language in languages:
            self.register(language)

    def register(self, language: Language) -> None:
        """Add ``language``, replacing (in place) a language with the same name."""
        if language.name in self._languages:
            logger.debug("Overriding language %s", language.name)
        else:
            logger.trace("Registering language %s", language.name)
        self._languages[language.name] = language

    def get(self, name: str) -> Language | None:
        """Return the language registered as ``name``, or None."""
        return self._languages.get(name)

    def lookup(self, file_name: str) -> Language | None:
        """Return the language for ``file_name``.

        Args:
            file_name (str): A file name or path; only its suffix matters.

        Returns:
            Language | None: The language with the longest case-insensitive
            extension match, or None when no language matches.
        """
        best: Language | None = None
        best_len: int = 0
        for language in self._languages.values():
            n: int = language.match_length(file_name)
            if n > best_len:
                best, best_len = language, n
        return best

    def __iter__(self) -> Iterator[Language]:
        return iter(self._languages.values())

    def __len__(self) -> int:
        return len(self._languages)

    def __contains__(self, name: object) -> bool:
        return name in self._languages


def language_from_mapping(entry: Mapping[str, Any]) -> Language:
    """Build a `Language` from one ``[[languages]]`` configuration entry.

    Args:
        entry (Mapping[str, Any]): Table with ``name``, ``extensions`` and the
            comment syntax keys.

    Returns:
        Language: The validated language.

    Raises:
        CommentSyntaxError: If the entry is malformed.
    """
    name: Any = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CommentSyntaxError(f"language entry without a valid name: {dict(entry)!r}")
    extensions: Any = entry.get("extensions")
    if isinstance(extensions, str):
        extensions = extensions.split()
    if not isinstance(extensions, (list, tuple)) or not all(
        isinstance(e, str) for e in extensions  # pyright: ignore[reportUnknownVariableType]
    ):
        raise CommentSyntaxError(f"language {name!r}: 'extensions' must be a list of strings")

    syntax: dict[str, str | None] = {}
    for key in _SYNTAX_KEYS:
        value: Any = entry.get(key)
        if value is not None and not isinstance(value, str):
            raise CommentSyntaxError(f"language {name!r}: '{key}' must be a string")
        syntax[key] = value

    unknown: list[str] = sorted(set(entry) - {"name", "extensions", "description", *_SYNTAX_KEYS})
    if unknown:
        logger.warning("Language %s: ignoring unknown keys %s", name, ", ".join(unknown))

    try:
        return make_language(
            name.strip(),
            extensions,  # pyright: ignore[reportUnknownArgumentType]
            description=str(entry.get("description", "")),
            **syntax,
        )
    except CommentSyntaxError as exc:
        raise CommentSyntaxError(f"language {name!r}: {exc}") from exc


def build_language_registry(
    extra: Iterable[Mapping[str, Any]] = (),
    *,
    include_builtins: bool = True,
) -> LanguageRegistry:
    """Build the effective language table.

    Args:
        extra (Iterable[Mapping[str, Any]]): Configured ``[[languages]]`` entries.
        include_builtins (bool): Start from the built-in table.

    Returns:
        LanguageRegistry: Built-ins (if requested) overlaid with ``extra``.

    Raises:
        CommentSyntaxError: If any entry is invalid.
    """
    registry = LanguageRegistry()
    if include_builtins:
        from licensemark.languages.builtins import LANGUAGES

        for language in LANGUAGES:
            registry.register(language)
    for entry in extra:
        registry.register(language_from_mapping(entry))
    logger.debug("Language table has %d entries", len(registry))
    return registry
