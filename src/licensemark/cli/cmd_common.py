# topmark:header:start
#
#   project      : LicenseMark
#   file         : cmd_common.py
#   file_relpath : src/licensemark/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

Plumbing shared by the commands: building the configuration and
the language table, resolving inputs, running the replacer over them, and
rendering outcomes. Exit code policy stays in the commands.
"""

from __future__ import annotations

import signal
import threading
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import click

from licensemark.cli.errors import LicensemarkConfigError, LicensemarkFileNotFoundError
from licensemark.config.logging import get_logger
from licensemark.config.model import MutableConfig
from licensemark.core.errors import CommentSyntaxError, ConfigError, DefinitionFileError
from licensemark.headers.definitions import resolve, scope_chain
from licensemark.headers.replacer import EMPTY_DEFINITIONS
from licensemark.headers.status import InvalidHeaderPolicy, ReplaceResult
from licensemark.languages.registry import build_language_registry
from licensemark.utils.diff import render_patch, unified_patch
from licensemark.utils.file import common_root, compute_relpath

if TYPE_CHECKING:
    from types import FrameType

    from licensemark.cli.console import ConsoleLike
    from licensemark.config.model import Config
    from licensemark.headers.definitions import HeaderDefinitionSet
    from licensemark.headers.replacer import BatchContext, FileOutcome, LicenseHeaderReplacer
    from licensemark.languages.registry import LanguageRegistry

logger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the context by the group."""
    console: ConsoleLike = ctx.obj["console"]
    return console


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (0 when the group did not set one)."""
    return int(ctx.obj.get("verbosity_level", 0))


def keyword_overrides(no_keywords: bool, keywords: tuple[str, ...]) -> dict[str, Any]:
    """Map the keyword options onto `MutableConfig.apply_cli_args` keys."""
    overrides: dict[str, Any] = {}
    if no_keywords:
        overrides["use_required_keywords"] = False
    elif keywords:
        overrides["required_keywords"] = list(keywords)
    return overrides


def build_config(
    *,
    paths: list[Path],
    no_config: bool,
    config_paths: list[str],
    overrides: dict[str, Any] | None = None,
) -> Config:
    """Discover, merge and freeze the configuration.

    Raises:
        LicensemarkConfigError: If a config file is malformed.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            input_paths=paths,
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
    except ConfigError as exc:
        raise LicensemarkConfigError(str(exc)) from exc
    if overrides:
        draft = draft.apply_cli_args(overrides)
    config: Config = draft.freeze()
    logger.trace("Effective config: %s", config)
    return config


def build_languages(config: Config) -> LanguageRegistry:
    """Build the language table (built-ins plus configured entries).

    Raises:
        LicensemarkConfigError: If a configured language is invalid.
    """
    try:
        return build_language_registry(config.languages)
    except CommentSyntaxError as exc:
        raise LicensemarkConfigError(f"Invalid language definition: {exc}") from exc


def resolve_input_paths(paths: tuple[str, ...]) -> list[Path]:
    """Return PATHS as `Path` objects (the current directory when none were given).

    Raises:
        LicensemarkFileNotFoundError: If a path does not exist.
    """
    if not paths:
        return [Path.cwd()]
    resolved: list[Path] = []
    for p in paths:
        path = Path(p)
        if not path.exists():
            raise LicensemarkFileNotFoundError(f"No such file or directory: {p}")
        resolved.append(path)
    return resolved


def resolve_root(root: str | None, paths: list[Path]) -> Path:
    """Return the project root.

    ``--root`` when given; else the current directory when every path lies
    below it; else the common parent of ``paths``.
    """
    if root is not None:
        return Path(root).resolve()
    cwd: Path = Path.cwd().resolve()
    if all(p.resolve().is_relative_to(cwd) for p in paths):
        return cwd
    return common_root(paths)


def make_invalid_decider(policy: InvalidHeaderPolicy | None) -> Callable[[str], bool]:
    """Return the batch callback answering "replace an invalid header anyway?"."""
    if policy == InvalidHeaderPolicy.REPLACE:
        return lambda _ext: True
    if policy == InvalidHeaderPolicy.PROMPT:

        def ask(extension: str) -> bool:
            return click.confirm(
                f"The header for '{extension}' files is not valid for their language. "
                "Apply it anyway?",
                default=False,
            )

        return ask
    return lambda _ext: False


class CancelOnInterrupt:
    """Context manager turning the first Ctrl-C into a batch cancellation request.

    The instance is the ``cancelled`` callback of a `BatchContext`; a second
    Ctrl-C interrupts immediately. Only installed on the main thread.
    """

    def __init__(self) -> None:
        self.requested: bool = False
        self._installed: bool = False
        self._previous: Any = None

    def __enter__(self) -> CancelOnInterrupt:
        if threading.current_thread() is threading.main_thread():
            self._previous = signal.signal(signal.SIGINT, self._handle)
            self._installed = True
        return self

    def __exit__(self, *_exc: object) -> None:
        if self._installed:
            signal.signal(signal.SIGINT, self._previous)
            self._installed = False

    def _handle(self, _signum: int, _frame: FrameType | None) -> None:
        if self.requested:
            raise KeyboardInterrupt
        logger.warning("Interrupt received; finishing the current file")
        self.requested = True

    def __call__(self) -> bool:
        return self.requested


def _inherited_definitions(
    path: Path, replacer: LicenseHeaderReplacer, console: ConsoleLike
) -> HeaderDefinitionSet:
    scopes: list[Path] = scope_chain(path, replacer.root)
    if path.is_dir():
        # The walk looks at the directory's own definition file itself
        scopes = scopes[1:]
    try:
        found: HeaderDefinitionSet | None = resolve(
            scopes, encoding=replacer.config.definition_encoding
        )
    except DefinitionFileError as exc:
        console.warn(f"Ignoring definition file: {exc}")
        return EMPTY_DEFINITIONS
    return found if found is not None else EMPTY_DEFINITIONS


def process_paths(
    replacer: LicenseHeaderReplacer,
    paths: list[Path],
    batch: BatchContext,
    *,
    console: ConsoleLike,
    remove_only: bool = False,
    explicit: HeaderDefinitionSet | None = None,
) -> int:
    """Run the replacer over files and directory trees.

    Args:
        replacer (LicenseHeaderReplacer): The replacer.
        paths (list[Path]): Files and directories from the command line.
        batch (BatchContext): Batch state.
        console (ConsoleLike): For warnings about unusable definition files.
        remove_only (bool): Strip headers instead of applying templates.
        explicit (HeaderDefinitionSet | None): One definition set for all files;
            disables the hierarchical lookup.

    Returns:
        int: Number of definition files found while walking directories.
    """
    found: int = 0
    for path in paths:
        if batch.cancelled():
            break
        if replacer.is_excluded(path):
            logger.info("Excluded: %s", path)
            continue

        headers: HeaderDefinitionSet | None
        search: bool = False
        if remove_only:
            headers = None
        elif explicit is not None:
            headers = explicit
        else:
            headers = _inherited_definitions(path, replacer, console)
            search = True

        if path.is_dir():
            found += replacer.remove_or_replace_header_recursive(path, headers, batch, search)
        else:
            replacer.process_file(path, headers, batch)
    return found


def _describe(outcome: FileOutcome, apply_changes: bool) -> str:
    if outcome.error is not None:
        return click.style(f"error: {outcome.error}", fg="bright_red")
    if outcome.skipped_invalid:
        return click.style("skipped (header not valid for its language)", fg="yellow")
    result: ReplaceResult = outcome.result
    if outcome.would_change and not apply_changes:
        return result.color(f"{outcome.action.value} needed")
    return result.color(result.value)


def render_outcomes(
    ctx: click.Context,
    batch: BatchContext,
    *,
    diff: bool,
) -> None:
    """Print per-file lines, diffs and a summary, gated by verbosity.

    ``-v`` lists every visited file; the default lists changed, skipped and
    failed files; ``-q`` keeps only the summary; ``-qq`` prints nothing.
    """
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    if vlevel >= 0:
        for outcome in batch.outcomes:
            notable: bool = (
                outcome.would_change or outcome.skipped_invalid or outcome.error is not None
            )
            if not notable and vlevel < 1:
                continue
            rel: Path = compute_relpath(outcome.path, None)
            console.print(f"{rel}: {_describe(outcome, batch.apply)}")
            if diff and outcome.would_change and outcome.original is not None:
                patch: list[str] = unified_patch(
                    outcome.original, outcome.updated or "", rel.as_posix()
                )
                console.print(render_patch(patch), nl=False)

    if vlevel >= -1:
        counts: Counter[ReplaceResult] = Counter(o.result for o in batch.outcomes)
        parts: list[str] = [
            f"{counts[r]} {r.value}" for r in ReplaceResult if counts[r] and r.is_change
        ]
        unchanged: int = sum(counts[r] for r in ReplaceResult if not r.is_change)
        parts.append(f"{unchanged} unchanged")
        if batch.errors:
            parts.append(f"{len(batch.errors)} failed")
        verb: str = "" if batch.apply else " (dry run)"
        console.print(
            console.styled(
                f"{len(batch.outcomes)} file(s) processed{verb}: " + ", ".join(parts), bold=True
            )
        )
