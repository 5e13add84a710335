"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Builds services with explicit collaborators and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from locus.config.logging import bind_log_context, configure_logging
from locus.infrastructure.filesystem import LocalFileSystem
from locus.infrastructure.resolver import TaskFileResolver
from locus.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from locus.config.settings import LocusSettings
    from locus.domain.types import RepoInfo
    from locus.services.config import ConfigService
    from locus.services.create import CreateService
    from locus.services.result import ServiceResult
    from locus.services.tags import TagsService
    from locus.services.tasks import TaskService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. Git detection and service
    construction are lazy so ``--help`` and ``--version`` never touch git
    or the task directory.
    """

    def __init__(self, settings: LocusSettings, *, command: str | None = None) -> None:
        self.settings = settings
        self.fs = LocalFileSystem()

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )
        bind_log_context(command=command, task_root=str(settings.task_root))

    @cached_property
    def repo_info(self) -> RepoInfo | None:
        """Repository scope for this invocation, or None with ``--no-git``."""
        if self.settings.no_git or not self.settings.git.repo_scoping:
            return None
        from locus.infrastructure.git import detect_repo_info

        info = detect_repo_info()
        if info is not None:
            bind_log_context(repo=info.slug)
        return info

    @cached_property
    def resolver(self) -> TaskFileResolver:
        return TaskFileResolver(
            self.fs,
            self.settings.task_root,
            repo_scoping=self.settings.git.repo_scoping,
        )

    @cached_property
    def tags(self) -> TagsService:
        from locus.services.tags import TagsService

        return TagsService(self.fs, self.resolver)

    @cached_property
    def create(self) -> CreateService:
        from locus.services.create import CreateService

        return CreateService(
            self.fs,
            self.resolver,
            naming=self.settings.file_naming,
            defaults=self.settings.defaults,
        )

    @cached_property
    def tasks(self) -> TaskService:
        from locus.services.tasks import TaskService

        return TaskService(self.fs, self.resolver, creator=self.create)

    @cached_property
    def config(self) -> ConfigService:
        from locus.services.config import ConfigService

        return ConfigService(self.fs, self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
