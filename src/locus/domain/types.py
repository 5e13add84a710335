"""Shared domain types: error codes and repository scope."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class ErrorCode(StrEnum):
    """Error kinds reported to the presentation layer."""

    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"
    AMBIGUOUS_MATCH = "AMBIGUOUS_MATCH"
    INVALID_FORMAT = "INVALID_FORMAT"
    EMPTY_KEY = "EMPTY_KEY"
    PROTECTED_KEY = "PROTECTED_KEY"
    IO_ERROR = "IO_ERROR"
    FILE_EXISTS = "FILE_EXISTS"


class RepoInfo(BaseModel):
    """Git repository a task directory is scoped to.

    ``owner`` may contain ``/`` for nested groups (GitLab subgroups).
    """

    model_config = {"frozen": True}

    host: str
    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


# Known task states, in workflow order.
TASK_STATUSES: tuple[str, ...] = ("todo", "in_progress", "done", "cancelled")

# Priority labels by sort rank. Anything else ranks 0.
PRIORITY_RANK: dict[str, int] = {"high": 3, "normal": 2, "low": 1}


def priority_rank(priority: object) -> int:
    return PRIORITY_RANK.get(priority, 0) if isinstance(priority, str) else 0
