"""ConfigService — inspect the effective settings and write a starter file."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

import tomli_w

from locus.config.discovery import user_config_path
from locus.config.models import DefaultsConfig, FileNamingConfig, GitConfig
from locus.domain.errors import ConfigExistsError, LocusError
from locus.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from locus.config.settings import LocusSettings
    from locus.infrastructure.filesystem import FileSystem

logger = logging.getLogger(__name__)

# Settings that belong in a config file; CLI-only flags are left out.
_FILE_FIELDS = {"task_directory", "git", "file_naming", "defaults"}


def default_config() -> dict[str, Any]:
    """Config document holding every code default, by section."""
    return {
        "task_directory": "~/locus",
        "git": GitConfig().model_dump(),
        "file_naming": FileNamingConfig().model_dump(),
        "defaults": DefaultsConfig().model_dump(),
    }


class ConfigService:
    """Show where settings come from and create a per-user config file."""

    def __init__(self, fs: FileSystem, settings: LocusSettings) -> None:
        self._fs = fs
        self._settings = settings

    def show(self) -> ServiceResult:
        """Effective file settings, the file they came from, and env overrides."""
        env = {key: value for key, value in sorted(os.environ.items()) if key.startswith("LOCUS_")}
        path = self._settings.config_path
        return ServiceResult(
            ok=True,
            op="config_show",
            data={
                "settings": self._settings.model_dump(mode="json", include=_FILE_FIELDS),
                "config_path": str(path) if path else None,
                "env": env,
            },
        )

    def path(self) -> ServiceResult:
        path = self._settings.config_path
        return ServiceResult(
            ok=True,
            op="config_path",
            data={
                "path": str(path) if path else None,
                "default_path": str(user_config_path()),
            },
        )

    def init(self, *, force: bool = False, target: Path | None = None) -> ServiceResult:
        """Write :func:`default_config` to the per-user config location.

        Refuses to replace an existing file unless *force* is set.
        """
        op = "config_init"
        path = target or user_config_path()
        try:
            existed = self._fs.exists(path)
            if existed and not force:
                raise ConfigExistsError(str(path))
            self._fs.write_text(path, tomli_w.dumps(default_config()))
        except (LocusError, OSError) as exc:
            return ServiceResult.failure(op, exc)

        logger.debug("Wrote default config to %s", path)
        return ServiceResult(ok=True, op=op, data={"path": str(path), "overwritten": existed})
