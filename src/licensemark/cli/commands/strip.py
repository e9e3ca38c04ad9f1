# topmark:header:start
#
#   project      : LicenseMark
#   file         : strip.py
#   file_relpath : src/licensemark/cli/commands/strip.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseMark ``strip`` command.

Removes the recognized license header from files. No definition files are
needed: with required keywords enabled, only a leading comment that mentions
one of them is removed. Dry run by default; ``--apply`` writes.

Examples:

    $ licensemark strip --diff src
    $ licensemark strip --apply --no-keywords legacy/
"""

from __future__ import annotations

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
from licensemark.cli.exit_codes import ExitCode
from licensemark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_keyword_options,
    common_run_options,
)
from licensemark.headers.replacer import BatchContext, LicenseHeaderReplacer

if TYPE_CHECKING:
    from pathlib import Path

    from licensemark.cli.console import ConsoleLike
    from licensemark.config.model import Config
    from licensemark.headers.status import InvalidHeaderPolicy


@click.command(
    name="strip",
    help="Remove license headers (dry run). Use --apply to write the changes.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, type=click.Path())
@common_config_options
@common_run_options
@common_keyword_options
def strip_command(
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
) -> None:
    """Remove license headers from PATHS (files or directories).

    Exit Status:
        SUCCESS (0): Nothing to remove, or all removals were written.
        WOULD_CHANGE (2): Dry run found headers to remove.
        FILE_NOT_FOUND (66): An input path does not exist.
        IO_ERROR (74): A file could not be written or its header edit failed.
        CONFIG_ERROR (78): Invalid configuration.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)

    inputs: list[Path] = resolve_input_paths(paths)
    overrides: dict[str, Any] = keyword_overrides(no_keywords, keywords)
    overrides["exclude_patterns"] = list(exclude_patterns)
    config: Config = build_config(
        paths=inputs,
        no_config=no_config,
        config_paths=list(config_paths),
        overrides=overrides,
    )
    replacer = LicenseHeaderReplacer(
        build_languages(config), config, root=resolve_root(root, inputs)
    )

    with CancelOnInterrupt() as cancel:
        batch = BatchContext(
            apply=apply_changes,
            decide_invalid=make_invalid_decider(on_invalid),
            cancelled=cancel,
        )
        process_paths(replacer, inputs, batch, console=console, remove_only=True)

    render_outcomes(ctx, batch, diff=diff)

    if cancel.requested:
        console.warn("Interrupted: not all files were processed.")
    if not apply_changes and batch.changed:
        ctx.exit(ExitCode.WOULD_CHANGE)
    if batch.errors:
        ctx.exit(ExitCode.IO_ERROR)
