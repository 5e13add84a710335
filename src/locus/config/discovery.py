"""Config file discovery.

Lookup order:
  1. ``LOCUS_CONFIG`` env var (must point at an existing file)
  2. Walk-up from the working directory for ``locus.toml``, similar to how
     git finds .git/
  3. ``$XDG_CONFIG_HOME/locus/locus.toml`` (default ``~/.config``)
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "locus.toml"
CONFIG_ENV_VAR = "LOCUS_CONFIG"


def user_config_path() -> Path:
    """Per-user config location under the XDG config directory."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / "locus" / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Locate locus.toml, or return None if there is none.

    Walks up from *start* (default: cwd) before falling back to the
    per-user config file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    user_path = user_config_path()
    if user_path.is_file():
        return user_path
    return None
