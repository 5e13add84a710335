"""Rich console for locus output, with task status and priority colors.

Consoles render into a StringIO buffer so renderers can return plain
strings. Rich drops color codes on its own when there is no terminal, which
is the case for tests and pipes.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from locus.domain.types import PRIORITY_RANK, TASK_STATUSES

LOCUS_THEME = Theme(
    {
        "locus.ok": "bold green",
        "locus.error": "bold red",
        "locus.warning": "bold yellow",
        "locus.op": "bold cyan",
        "locus.key": "dim",
        "locus.path": "dim",
        "locus.title": "bold",
        "locus.tag": "cyan",
        "locus.status.todo": "yellow",
        "locus.status.in_progress": "blue",
        "locus.status.done": "green",
        "locus.status.cancelled": "dim strike",
        "locus.priority.high": "bold red",
        "locus.priority.normal": "none",
        "locus.priority.low": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=LOCUS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: Any) -> str:
    """Theme style for a task status; unknown states are unstyled."""
    if isinstance(status, str) and status in TASK_STATUSES:
        return f"locus.status.{status}"
    return ""


def style_for_priority(priority: Any) -> str:
    if isinstance(priority, str) and priority in PRIORITY_RANK:
        return f"locus.priority.{priority}"
    return ""


def status_text(status: Any) -> Text:
    """Status label styled by state, ``in_progress`` shown as ``in progress``."""
    label = "" if status is None else str(status)
    return Text(label.replace("_", " "), style=style_for_status(status))


def priority_text(priority: Any) -> Text:
    return Text("" if priority is None else str(priority), style=style_for_priority(priority))
