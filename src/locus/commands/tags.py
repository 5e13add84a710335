"""Command group: tags — inspect and edit frontmatter properties."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from locus.commands._base import LocusGroup

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.group(
    cls=LocusGroup,
    aliases={"add": "set", "remove": "rm"},
    examples="""\
  locus tags list
  locus tags list login-bug
  locus tags get login-bug status
  locus tags set login-bug status done
  locus tags set login-bug estimate '{"hours": 3}'
  locus tags rm login-bug assignee
  locus tags clear login-bug""",
)
def tags() -> None:
    """Inspect and edit task file properties."""


@tags.command(
    "list",
    examples="""\
  locus tags list
  locus --json tags list login-bug""",
)
@click.argument("file_name", required=False)
@click.pass_obj
def list_cmd(app: AppContext, file_name: str | None) -> None:
    """List all task files, or the properties of FILE_NAME."""
    app.emit(app.tags.list_tags(file_name, repo_info=app.repo_info))


@tags.command(
    "get",
    examples="""\
  locus tags get login-bug status
  locus -q tags get login-bug tags""",
)
@click.argument("file_name")
@click.argument("prop", metavar="PROPERTY")
@click.pass_obj
def get_cmd(app: AppContext, file_name: str, prop: str) -> None:
    """Print the value of PROPERTY in FILE_NAME."""
    app.emit(app.tags.get_tag(file_name, prop, repo_info=app.repo_info))


def _decode_json_value(raw: str) -> Any:
    """Use VALUE as JSON when it parses, else keep it as a string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@tags.command(
    "set",
    examples="""\
  locus tags set login-bug status done
  locus tags set login-bug points 3
  locus tags set login-bug labels '["ui", "auth"]'""",
)
@click.argument("file_name")
@click.argument("prop", metavar="PROPERTY")
@click.argument("value")
@click.pass_obj
def set_cmd(app: AppContext, file_name: str, prop: str, value: str) -> None:
    """Set PROPERTY to VALUE (parsed as JSON when valid)."""
    app.emit(
        app.tags.set_tag(file_name, prop, _decode_json_value(value), repo_info=app.repo_info)
    )


@tags.command("rm", examples="  locus tags rm login-bug assignee")
@click.argument("file_name")
@click.argument("prop", metavar="PROPERTY")
@click.pass_obj
def rm_cmd(app: AppContext, file_name: str, prop: str) -> None:
    """Remove PROPERTY from FILE_NAME (date and created are protected)."""
    app.emit(app.tags.remove_tag(file_name, prop, repo_info=app.repo_info))


@tags.command("clear", examples="  locus tags clear login-bug")
@click.argument("file_name")
@click.pass_obj
def clear_cmd(app: AppContext, file_name: str) -> None:
    """Remove every property except date and created."""
    app.emit(app.tags.clear_tags(file_name, repo_info=app.repo_info))
