"""Command: list tasks with filters and sorting."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand
from locus.services.tasks import SORT_FIELDS

if TYPE_CHECKING:
    from locus.commands._context import AppContext


def _split_tags(
    _ctx: click.Context, _param: click.Parameter, value: tuple[str, ...]
) -> list[str]:
    """Accept ``-t a,b`` as well as ``-t a -t b``."""
    return [tag.strip() for raw in value for tag in raw.split(",") if tag.strip()]


@click.command(
    "list",
    cls=LocusCommand,
    examples="""\
  locus list
  locus list --status todo --priority high
  locus list -t backend,urgent --sort priority
  locus list --all --group-by-repo
  locus ls -d""",
)
@click.option("-s", "--status", default=None, help="Only tasks with this status.")
@click.option("-p", "--priority", default=None, help="Only tasks with this priority.")
@click.option(
    "-t",
    "--tags",
    multiple=True,
    callback=_split_tags,
    help="Only tasks carrying any of these tags (comma-separated).",
)
@click.option(
    "--sort",
    type=click.Choice(SORT_FIELDS),
    default="created",
    show_default=True,
    help="Sort order.",
)
@click.option("-a", "--all", "all_repos", is_flag=True, help="Tasks of every repository.")
@click.option("-g", "--group-by-repo", is_flag=True, help="Group tasks by repository.")
@click.option("-d", "--detail", is_flag=True, help="One block per task instead of a table.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    status: str | None,
    priority: str | None,
    tags: list[str],
    sort: str,
    all_repos: bool,
    group_by_repo: bool,
    detail: bool,
) -> None:
    """List tasks in the current repository scope, newest first."""
    app.emit(
        app.tasks.list_tasks(
            status=status,
            priority=priority,
            tags=tags,
            sort=sort,
            all_repos=all_repos,
            group_by_repo=group_by_repo,
            detail=detail,
            repo_info=None if all_repos else app.repo_info,
        )
    )
