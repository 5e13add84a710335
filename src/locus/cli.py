"""Root CLI group for locus with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click

from locus import __version__
from locus.commands import register_commands
from locus.commands._base import LocusGroup
from locus.commands._context import AppContext
from locus.config.settings import LocusSettings

_EXAMPLES = """\
  locus add "Fix login redirect" --tag auth --tag bug
  locus set login status=in_progress priority=high
  locus ls --status todo --sort priority
  locus get login status
  locus -q path login
  locus --task-dir ./tasks --no-git tags list"""


@click.group(
    cls=LocusGroup,
    invoke_without_command=True,
    examples=_EXAMPLES,
    aliases={"ls": "list", "show": "read"},
)
@click.version_option(version=__version__, prog_name="locus")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-git", is_flag=True, help="Ignore the current git repository scope.")
@click.option(
    "--task-dir",
    "task_directory",
    default=None,
    type=click.Path(file_okay=False),
    help="Task directory (overrides LOCUS_TASK_DIRECTORY and the config file).",
)
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_git: bool,
    task_directory: str | None,
    config_path: str | None,
) -> None:
    """locus — manage Markdown task files and their frontmatter."""
    overrides: dict[str, Any] = {}
    # Only an explicit flag may shadow the env var and the TOML value.
    if task_directory is not None:
        overrides["task_directory"] = task_directory
    settings = LocusSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_git=no_git,
        **overrides,
    )
    ctx.obj = AppContext(settings, command=ctx.invoked_subcommand)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
