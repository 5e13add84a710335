"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, locus.toml only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- locus.toml sections ---


class GitConfig(BaseModel):
    """[git] section.

    Repo scoping applies only when both flags are enabled.
    """

    model_config = {"frozen": True}

    extract_username: bool = True
    username_from_remote: bool = True

    @property
    def repo_scoping(self) -> bool:
        return self.extract_username and self.username_from_remote


class FileNamingConfig(BaseModel):
    """[file_naming] section."""

    model_config = {"frozen": True}

    pattern: str = Field(default="{date}-{slug}-{hash}.md", pattern=r"\{date\}|\{slug\}|\{hash\}")
    date_format: str = "%Y-%m-%d"
    hash_length: int = Field(default=8, ge=4, le=32)


class DefaultsConfig(BaseModel):
    """[defaults] section — initial frontmatter for new tasks."""

    model_config = {"frozen": True}

    status: str = "todo"
    priority: str = "normal"
    tags: list[str] = Field(default_factory=list)
