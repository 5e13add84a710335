"""Command: append to or replace a task's body."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus edit login-bug --body "Repro: log in twice"
  locus edit release-notes --body "# Release notes"
  locus edit login-bug --overwrite --body "# Fix login bug"
  git log -1 --format=%B | locus edit login-bug""",
)
@click.argument("file_name")
@click.option("-b", "--body", default=None, help="Text to add (default: read stdin).")
@click.option("--overwrite", is_flag=True, help="Replace the body instead of appending.")
@click.pass_obj
def edit(app: AppContext, file_name: str, body: str | None, overwrite: bool) -> None:
    """Append text to the body of FILE_NAME; frontmatter is kept.

    Creates the task when FILE_NAME matches nothing.
    """
    if body is None:
        body = click.get_text_stream("stdin").read()
    app.emit(
        app.tasks.edit_task(file_name, body, overwrite=overwrite, repo_info=app.repo_info)
    )
