# topmark:header:start
#
#   project      : LicenseMark
#   file         : languages.py
#   file_relpath : src/licensemark/cli/commands/languages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseMark ``languages`` command.

Lists the effective language table: built-in languages overlaid with the
``[[languages]]`` entries of the merged configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from licensemark.cli.cmd_common import (
    build_config,
    build_languages,
    get_console,
    get_effective_verbosity,
)
from licensemark.cli.options import CONTEXT_SETTINGS, common_config_options

if TYPE_CHECKING:
    from licensemark.cli.console import ConsoleLike
    from licensemark.languages.base import CommentSyntax
    from licensemark.languages.registry import LanguageRegistry


def _markers(syntax: CommentSyntax) -> str:
    parts: list[str] = []
    if syntax.line_comment:
        parts.append(syntax.line_comment)
    if syntax.has_blocks:
        parts.append(f"{syntax.block_start} {syntax.block_end}")
    if syntax.has_regions:
        parts.append(f"{syntax.region_start} / {syntax.region_end}")
    return ", ".join(parts)


@click.command(
    name="languages",
    help="List the supported languages and their comment syntax.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
def languages_command(*, no_config: bool, config_paths: tuple[str, ...]) -> None:
    """List the effective language table.

    With ``-v``, descriptions and skip expressions are shown as well.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    config = build_config(paths=[Path.cwd()], no_config=no_config, config_paths=list(config_paths))
    registry: LanguageRegistry = build_languages(config)

    width: int = max((len(lang.name) for lang in registry), default=0)
    for language in registry:
        console.print(
            f"{console.styled(language.name.ljust(width), bold=True)}  "
            f"{' '.join(language.extensions)}  [{_markers(language.syntax)}]"
        )
        if vlevel > 0:
            if language.description:
                console.print(f"{' ' * width}  {language.description}")
            if language.syntax.skip_expression:
                console.print(f"{' ' * width}  skip: {language.syntax.skip_expression}")
