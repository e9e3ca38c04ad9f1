# topmark:header:start
#
#   project      : LicenseMark
#   file         : check.py
#   file_relpath : src/licensemark/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseMark ``check`` command (check/apply).

Adds or replaces license headers using header definition files. Performs a
dry run by default and writes changes when ``--apply`` is given.

Definition lookup:
  * **Hierarchical (default)**: each file uses the nearest ``*.licenseheader``
    file found walking up from its directory, bounded by ``--root``. A
    definition file inside a directory tree applies to its whole subtree
    until a deeper one replaces it.
  * **Explicit**: ``--definition FILE`` applies one definition file to all inputs.

Examples:
  Preview which files would change:

    $ licensemark check src

  Apply and show diffs:

    $ licensemark check --apply --diff .
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from licensemark.cli.cmd_common import (
    CancelOnInterrupt,
    build_config,
    build_languages,
    get_console,
    keyword_overrides,
    make_invalid_decider,
    process_paths,
    render_outcomes,
    resolve_input_paths,
    resolve_root,
)
from licensemark.cli.errors import LicensemarkConfigError
from licensemark.cli.exit_codes import ExitCode
from licensemark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_keyword_options,
    common_run_options,
)
from licensemark.config.logging import get_logger
from licensemark.core.errors import DefinitionFileError
from licensemark.headers.definitions import load_definition_file
from licensemark.headers.replacer import BatchContext, LicenseHeaderReplacer

if TYPE_CHECKING:
    from licensemark.cli.console import ConsoleLike
    from licensemark.config.model import Config
    from licensemark.headers.definitions import HeaderDefinitionSet
    from licensemark.headers.status import InvalidHeaderPolicy

logger = get_logger(__name__)


@click.command(
    name="check",
    help="Check license headers (dry run). Use --apply to add or replace them.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Preview which files would change (dry run)
  licensemark check src

  # Apply one definition file to a tree
  licensemark check --apply --definition LICENSE.licenseheader .
""",
)
@click.argument("paths", nargs=-1, type=click.Path())
@common_config_options
@common_run_options
@common_keyword_options
@click.option(
    "--definition",
    "definition",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    default=None,
    metavar="FILE",
    help="Use this header definition file for all inputs (no hierarchical lookup).",
)
@click.option(
    "--project-name",
    "project_name",
    default=None,
    help="Value of the %Project% token (default: name of the project root).",
)
def check_command(
    *,
    paths: tuple[str, ...],
    no_config: bool,
    config_paths: tuple[str, ...],
    apply_changes: bool,
    diff: bool,
    root: str | None,
    exclude_patterns: tuple[str, ...],
    on_invalid: InvalidHeaderPolicy | None,
    keywords: tuple[str, ...],
    no_keywords: bool,
    definition: str | None,
    project_name: str | None,
) -> None:
    """Add or replace license headers in PATHS (files or directories).

    Raises:
        LicensemarkConfigError: If the configuration, a configured language or
            the ``--definition`` file is invalid.
        LicensemarkFileNotFoundError: If a path does not exist.

    Exit Status:
        SUCCESS (0): No changes required or all changes were written.
        WOULD_CHANGE (2): Dry run found files that would change with ``--apply``.
        FILE_NOT_FOUND (66): An input path does not exist.
        IO_ERROR (74): A file could not be written or its header edit failed.
        CONFIG_ERROR (78): Invalid configuration or definition file.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)

    inputs: list[Path] = resolve_input_paths(paths)
    overrides: dict[str, Any] = keyword_overrides(no_keywords, keywords)
    overrides["exclude_patterns"] = list(exclude_patterns)
    overrides["project_name"] = project_name
    config: Config = build_config(
        paths=inputs,
        no_config=no_config,
        config_paths=list(config_paths),
        overrides=overrides,
    )

    explicit: HeaderDefinitionSet | None = None
    if definition is not None:
        try:
            explicit = load_definition_file(Path(definition), config.definition_encoding)
        except DefinitionFileError as exc:
            raise LicensemarkConfigError(str(exc)) from exc

    replacer = LicenseHeaderReplacer(
        build_languages(config), config, root=resolve_root(root, inputs)
    )
    logger.debug("Project root: %s", replacer.root)

    with CancelOnInterrupt() as cancel:
        batch = BatchContext(
            apply=apply_changes,
            decide_invalid=make_invalid_decider(on_invalid),
            cancelled=cancel,
        )
        found: int = process_paths(replacer, inputs, batch, console=console, explicit=explicit)
    logger.info("%d definition file(s) found while walking", found)

    render_outcomes(ctx, batch, diff=diff)

    if cancel.requested:
        console.warn("Interrupted: not all files were processed.")
    if not apply_changes and batch.changed:
        ctx.exit(ExitCode.WOULD_CHANGE)
    if batch.errors:
        ctx.exit(ExitCode.IO_ERROR)
