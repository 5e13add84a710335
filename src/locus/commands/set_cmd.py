"""Command: set one or more properties with key=value tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    "set",
    cls=LocusCommand,
    examples="""\
  locus set login-bug status=done
  locus set login-bug priority=high points=3 blocked=false
  locus set login-bug tags=backend,auth due=+3d
  locus set login-bug formula=x=y+z""",
)
@click.argument("file_name")
@click.argument("properties", nargs=-1, required=True, metavar="KEY=VALUE...")
@click.pass_obj
def set_cmd(app: AppContext, file_name: str, properties: tuple[str, ...]) -> None:
    """Set properties on FILE_NAME.

    Values are typed automatically: true/false become booleans, numbers
    become numbers, comma-separated values become lists, and today,
    tomorrow, yesterday, or +Nd/-Nw/+Nm/-Ny become timestamps.
    The file is written once, only if every assignment is valid.
    """
    app.emit(app.tags.set_tags(file_name, list(properties), repo_info=app.repo_info))
