"""Subcommand modules for locus.

Provides register_commands() which uses deferred imports to keep
``locus --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``tags`` and ``config`` groups and the task commands."""
    # --- Groups ---
    from locus.commands.config_cmd import config
    from locus.commands.tags import tags

    cli.add_command(tags)
    cli.add_command(config)

    # --- Standalone commands ---
    from locus.commands.add import add
    from locus.commands.edit import edit
    from locus.commands.get import get
    from locus.commands.list_cmd import list_cmd
    from locus.commands.path import path
    from locus.commands.read import read
    from locus.commands.set_cmd import set_cmd

    cli.add_command(add)
    cli.add_command(list_cmd)
    cli.add_command(read)
    cli.add_command(edit)
    cli.add_command(get)
    cli.add_command(set_cmd)
    cli.add_command(path)
