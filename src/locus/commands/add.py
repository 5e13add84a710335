"""Command: create a new task file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus add "Fix login bug"
  locus add "Fix login bug" --tag backend --tag auth --priority high
  locus add "Write release notes" --body "Cover the 0.2 changes" due=+1w""",
)
@click.argument("title")
@click.argument("properties", nargs=-1, metavar="[KEY=VALUE]...")
@click.option("--body", default=None, help="Body text (default: '# TITLE').")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.option("--priority", default=None, help="Priority (default from config).")
@click.option("--status", default=None, help="Status (default from config).")
@click.pass_obj
def add(
    app: AppContext,
    title: str,
    properties: tuple[str, ...],
    body: str | None,
    tags: tuple[str, ...],
    priority: str | None,
    status: str | None,
) -> None:
    """Create a task file titled TITLE."""
    app.emit(
        app.create.create_task(
            title,
            body=body,
            tags=list(tags) or None,
            priority=priority,
            status=status,
            properties=list(properties),
            repo_info=app.repo_info,
        )
    )
