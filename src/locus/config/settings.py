"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``LOCUS_*`` prefix (``LOCUS_GIT__EXTRACT_USERNAME``)
  3. TOML file    — ``locus.toml`` discovered via :func:`find_config`
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from locus.config.discovery import find_config
from locus.config.models import DefaultsConfig, FileNamingConfig, GitConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``locus.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class LocusSettings(BaseSettings):
    """Unified settings for the locus CLI.

    Stored on the :class:`~locus.commands._context.AppContext` created by
    the root CLI group.

    Attributes:
        task_directory: Root directory holding task files (``~`` allowed).
        config_path: TOML file the settings were loaded from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LOCUS_",
        "env_nested_delimiter": "__",
    }

    task_directory: str = "~/locus"
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_git: bool = False

    # --- TOML sections ---
    git: GitConfig = Field(default_factory=GitConfig)
    file_naming: FileNamingConfig = Field(default_factory=FileNamingConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    @property
    def task_root(self) -> Path:
        """:attr:`task_directory` with ``~`` expanded."""
        return Path(self.task_directory).expanduser()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> LocusSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, otherwise discovers ``locus.toml``
        starting from *start* (default: cwd). CLI flags override everything.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path).expanduser()
            if not p.is_file():
                msg = f"Config file not found: {p}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
