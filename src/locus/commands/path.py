"""Command: print the absolute path a task name resolves to."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus path login-bug
  $EDITOR "$(locus path login-bug)" """,
)
@click.argument("file_name")
@click.pass_obj
def path(app: AppContext, file_name: str) -> None:
    """Print the absolute path of the task matching FILE_NAME."""
    app.emit(app.tags.resolve_path(file_name, repo_info=app.repo_info))
