# topmark:header:start
#
#   project      : LicenseMark
#   file         : model.py
#   file_relpath : src/licensemark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used by the replacer and the CLI.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      is frozen into `Config` once all layers are applied.

Layers, lowest to highest precedence:
    1. Built-in defaults (`licensemark.config.io.load_defaults_dict`).
    2. ``pyproject.toml`` (``[tool.licensemark]``) and ``licensemark.toml``
       files discovered upward from the working path, root-most first. Within
       one directory ``pyproject.toml`` is merged before ``licensemark.toml``.
       A file with ``root = true`` stops the upward walk.
    3. Files passed explicitly with ``--config``, in the given order.
    4. CLI overrides (`MutableConfig.apply_cli_args`).

Scalar values merge last-wins; ``None`` means "not set here". Language
entries accumulate across layers (a later entry with the same name replaces
an earlier one when the language table is built).
"""

from __future__ import annotations

# For runtime type checks, prefer collections.abc
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from licensemark.config.io import (
    get_bool_value_or_none_checked,
    get_string_list_value_checked,
    get_string_value_or_none,
    get_table_list_value_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from licensemark.config.logging import get_logger
from licensemark.constants import (
    CONFIG_FILE_NAME,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
)
from licensemark.core.errors import ConfigError

if TYPE_CHECKING:
    from licensemark.config.io import TomlTable
    from licensemark.config.logging import LicensemarkLogger

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: LicensemarkLogger = get_logger(__name__)

CLI_OVERRIDE_STR = "<CLI overrides>"


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration for LicenseMark.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the config was created.
        config_files (tuple[Path | str, ...]): Config sources that were merged, in order.
        use_required_keywords (bool): Whether an existing header must contain a
            required keyword to be recognized.
        required_keywords (tuple[str, ...]): The keywords (case-insensitive substrings).
        definition_encoding (str | None): Encoding of header definition files;
            None means the locale's preferred encoding.
        project_name (str | None): Value of ``%Project%``; None means the name of
            the project root directory.
        exclude_patterns (tuple[str, ...]): Gitignore-style patterns of paths to skip.
        languages (tuple[Mapping[str, Any], ...]): Extra ``[[languages]]`` entries.
    """

    timestamp: str
    config_files: tuple[Path | str, ...]

    use_required_keywords: bool
    required_keywords: tuple[str, ...]

    definition_encoding: str | None
    project_name: str | None

    exclude_patterns: tuple[str, ...]

    languages: tuple[Mapping[str, Any], ...]

    @property
    def effective_keywords(self) -> tuple[str, ...] | None:
        """Keywords to enforce, or None when the filter is disabled or empty."""
        if not self.use_required_keywords or not self.required_keywords:
            return None
        return self.required_keywords

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict (the ``licensemark.toml`` shape)."""
        return {
            "keywords": {
                "use_required_keywords": self.use_required_keywords,
                "required_keywords": list(self.required_keywords),
            },
            "definitions": {
                "encoding": self.definition_encoding or "",
                "project_name": self.project_name or "",
            },
            "files": {
                "exclude_patterns": list(self.exclude_patterns),
            },
            "languages": [dict(entry) for entry in self.languages],
        }


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Fields mirror `Config`; ``None`` marks a value this layer does not set.
    """

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    config_files: list[Path | str] = field(default_factory=lambda: [])

    use_required_keywords: bool | None = None
    required_keywords: list[str] | None = None

    definition_encoding: str | None = None
    project_name: str | None = None

    exclude_patterns: list[str] = field(default_factory=lambda: [])

    languages: list[dict[str, Any]] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this mutable builder into an immutable Config."""
        keywords: list[str] = [k.strip() for k in (self.required_keywords or []) if k.strip()]
        return Config(
            timestamp=self.timestamp,
            config_files=tuple(self.config_files),
            use_required_keywords=(
                self.use_required_keywords if self.use_required_keywords is not None else True
            ),
            required_keywords=tuple(keywords),
            definition_encoding=self.definition_encoding or None,
            project_name=self.project_name or None,
            exclude_patterns=tuple(self.exclude_patterns),
            languages=tuple(self.languages),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft populated with the built-in defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``licensemark.toml`` and ``pyproject.toml`` (the
        ``[tool.licensemark]`` section).

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft, or None for a ``pyproject.toml``
            without a ``[tool.licensemark]`` section.

        Raises:
            ConfigError: If the file cannot be read or has invalid values.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_FILE_NAME:
            tool_section: Any = toml_data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
            if not isinstance(tool_section, dict):
                logger.debug("No [tool.%s] section in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = tool_section
        try:
            draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path)
        except ConfigError as exc:
            raise ConfigError(f"{path}: {exc}") from exc
        draft.config_files = [path]
        logger.trace("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML data.
            config_file (Path | None): Source file, if any (used for messages only).

        Returns:
            MutableConfig: The resulting draft.

        Raises:
            ConfigError: If a known key has a value of the wrong type.
        """
        keywords_tbl: TomlTable = get_table_value(data, "keywords")
        logger.trace("TOML [keywords]: %s", keywords_tbl)
        definitions_tbl: TomlTable = get_table_value(data, "definitions")
        logger.trace("TOML [definitions]: %s", definitions_tbl)
        files_tbl: TomlTable = get_table_value(data, "files")
        logger.trace("TOML [files]: %s", files_tbl)

        draft: MutableConfig = cls()
        draft.use_required_keywords = get_bool_value_or_none_checked(
            keywords_tbl, "use_required_keywords"
        )
        draft.required_keywords = get_string_list_value_checked(keywords_tbl, "required_keywords")
        draft.definition_encoding = get_string_value_or_none(definitions_tbl, "encoding")
        draft.project_name = get_string_value_or_none(definitions_tbl, "project_name")
        draft.exclude_patterns = get_string_list_value_checked(files_tbl, "exclude_patterns") or []

        languages: list[TomlTable] = get_table_list_value_checked(data, "languages")
        if config_file is not None and languages:
            logger.debug("%d language entr(ies) in %s", len(languages), config_file)
        draft.languages = languages
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned root-most first; within one directory
        ``pyproject.toml`` comes before ``licensemark.toml``. A file that sets
        ``root = true`` stops the walk after its directory.

        Args:
            start (Path): Where discovery starts (a file's directory is used for files).

        Returns:
            list[Path]: Discovered config file paths in merge order.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []
            for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                try:
                    data: TomlTable = load_toml_dict(p)
                except ConfigError as e:
                    # Reported when the file is actually loaded
                    logger.debug("Ignoring parse error in %s during discovery: %s", p, e)
                    dir_entries.append(p)
                    continue
                if name == PYPROJECT_FILE_NAME:
                    tbl: Any = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
                    if not isinstance(tbl, dict):
                        continue
                    data = tbl
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if bool(data.get("root", False)):
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):  # root-most first
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        input_paths: Iterable[Path] | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Args:
            input_paths (Iterable[Path] | None): Discovery anchor(s); the first path
                (or CWD if none) is where upward discovery starts.
            extra_config_files (Iterable[Path] | None): Files merged after discovery.
            no_config (bool): Skip discovery (defaults and explicit files only).

        Returns:
            MutableConfig: The merged draft.

        Raises:
            ConfigError: If a config file is malformed.
        """
        draft: MutableConfig = cls.from_defaults()

        paths: list[Path] = list(input_paths or [])
        anchor: Path = paths[0] if paths else Path.cwd()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        return MutableConfig(
            timestamp=self.timestamp,
            config_files=self.config_files + other.config_files,
            use_required_keywords=other.use_required_keywords
            if other.use_required_keywords is not None
            else self.use_required_keywords,
            required_keywords=other.required_keywords
            if other.required_keywords is not None
            else self.required_keywords,
            definition_encoding=other.definition_encoding
            if other.definition_encoding is not None
            else self.definition_encoding,
            project_name=other.project_name
            if other.project_name is not None
            else self.project_name,
            exclude_patterns=other.exclude_patterns or self.exclude_patterns,
            languages=self.languages + other.languages,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Update fields from an arguments mapping (CLI or API).

        Recognized keys: ``use_required_keywords`` (bool | None),
        ``required_keywords`` (list of str; replaces the configured list when
        non-empty), ``project_name``, ``definition_encoding`` and
        ``exclude_patterns`` (appended).

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This draft, updated.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("use_required_keywords") is not None:
            self.use_required_keywords = bool(args["use_required_keywords"])
        keywords: Any = args.get("required_keywords")
        if keywords:
            self.required_keywords = [str(k) for k in keywords]
            if self.use_required_keywords is None:
                self.use_required_keywords = True
        if args.get("project_name"):
            self.project_name = str(args["project_name"])
        if args.get("definition_encoding"):
            self.definition_encoding = str(args["definition_encoding"])
        patterns: Any = args.get("exclude_patterns")
        if patterns:
            self.exclude_patterns = self.exclude_patterns + [str(p) for p in patterns]
        return self
