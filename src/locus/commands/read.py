"""Command: show one task."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus read login-bug
  locus read login-bug --raw > copy.md
  locus --json read login-bug""",
)
@click.argument("file_name")
@click.option("--raw", is_flag=True, help="Print the file exactly as stored.")
@click.pass_obj
def read(app: AppContext, file_name: str, raw: bool) -> None:
    """Show the title, properties, and body of FILE_NAME."""
    app.emit(app.tasks.read_task(file_name, raw=raw, repo_info=app.repo_info))
