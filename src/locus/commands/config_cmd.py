"""Command group: config — show and initialize locus.toml."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusGroup

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.group(
    cls=LocusGroup,
    examples="""\
  locus config show
  locus --json config show
  locus config path
  locus config init --force""",
)
def config() -> None:
    """Inspect and create the locus configuration."""


@config.command("show", examples="  locus config show")
@click.pass_obj
def show_cmd(app: AppContext) -> None:
    """Print the effective settings and where they came from."""
    app.emit(app.config.show())


@config.command("path", examples="  locus config path")
@click.pass_obj
def path_cmd(app: AppContext) -> None:
    """Print the config file in use."""
    app.emit(app.config.path())


@config.command("init", examples="  locus config init\n  locus config init --force")
@click.option("-f", "--force", is_flag=True, help="Replace an existing config file.")
@click.pass_obj
def init_cmd(app: AppContext, force: bool) -> None:
    """Write a config file with every default to the per-user location."""
    app.emit(app.config.init(force=force))
