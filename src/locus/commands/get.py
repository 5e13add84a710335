"""Command: read one property, or all of them."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus get login-bug
  locus get login-bug status
  locus -q get login-bug tags""",
)
@click.argument("file_name")
@click.argument("prop", metavar="[PROPERTY]", required=False)
@click.pass_obj
def get(app: AppContext, file_name: str, prop: str | None) -> None:
    """Print PROPERTY of FILE_NAME, or every property when omitted."""
    if prop is None:
        app.emit(app.tags.list_tags(file_name, repo_info=app.repo_info))
    else:
        app.emit(app.tags.get_tag(file_name, prop, repo_info=app.repo_info))
