"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.

All user data goes through :class:`rich.text.Text` so values such as
``[a, b]`` are never parsed as console markup.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from locus.output.console import create_console, get_output, priority_text, status_text

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from locus.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "tags_get":
        return format_scalar_or_json(result.data.get("value"))
    if result.op in ("path", "add", "edit", "config_init"):
        return str(result.data.get("path", ""))
    if result.op == "config_path":
        return str(result.data.get("path") or "")
    if result.op == "read":
        return str(result.data.get("body", ""))
    if result.op == "read_raw":
        return str(result.data.get("content", ""))
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("path", "")) for item in items)
    return f"OK: {result.op}"


def format_value(value: Any) -> str:
    """Single-line display form of a frontmatter value."""
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    if isinstance(value, list):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, separators=(", ", ": "))
    return str(value)


def format_scalar_or_json(value: Any) -> str:
    """Scalars print bare; lists and mappings print as indented JSON."""
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, indent=2)
    return format_value(value)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="locus.ok")
    op = Text(f"  {result.op}", style="locus.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any, *, indent: int = 2) -> None:
    """Print a single indented key-value field."""
    k = Text(f"{' ' * indent}{key}: ", style="locus.key")
    if key == "path":
        v = Text(str(value), style="locus.path")
    elif key == "title":
        v = Text(str(value), style="locus.title")
    else:
        v = Text(format_value(value))
    console.print(k, v, sep="", end="", soft_wrap=True)
    console.print()


def _properties(console: Console, frontmatter: dict[str, Any]) -> None:
    """Print frontmatter properties; multi-line strings as indented blocks."""
    for key, value in frontmatter.items():
        if isinstance(value, str) and "\n" in value:
            console.print(Text(f"    {key}: |", style="locus.key"))
            for line in value.split("\n"):
                console.print(Text(f"      {line}"))
        else:
            _field(console, key, value, indent=4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="locus.error")
    op = Text(f"  {result.op}", style="locus.op")
    console.print(label, op, Text(" — "), Text(msg))

    if err is None:
        return
    candidates = err.detail.get("candidates")
    if candidates:
        console.print(Text("  candidates:", style="dim"))
        for candidate in candidates:
            console.print(Text(f"    {candidate}", style="locus.path"), soft_wrap=True)
    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {format_value(v)}"))


# ── Query renderers ───────────────────────────────────────────────────


def _render_file_properties(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render tags_list for a single file."""
    d = result.data
    _status_line(console, result)
    _field(console, "path", d.get("path", ""))
    frontmatter = d.get("frontmatter") or {}
    if not frontmatter:
        console.print(Text("  (no properties)", style="dim"))
        return
    console.print(Text("  properties:", style="locus.key"))
    _properties(console, frontmatter)


def _render_file_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render tags_list_all as a table of task files."""
    items: list[dict[str, Any]] = result.data.get("items", [])
    if not items:
        console.print(Text("No task files found.", style="dim"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("File", style="locus.path", no_wrap=True)
    table.add_column("Title", style="locus.title")
    table.add_column("Status")
    table.add_column("Priority")
    if verbose:
        table.add_column("Properties", justify="right")

    for item in items:
        fm = item.get("frontmatter", {})
        row = [
            Text(str(item.get("relative_path", item.get("path", "")))),
            Text(str(item.get("title") or "")),
            status_text(fm.get("status")),
            priority_text(fm.get("priority")),
        ]
        if verbose:
            row.append(Text(str(len(fm))))
        table.add_row(*row)

    console.print(table)
    console.print(Text(f"{len(items)} task file(s)", style="dim"))


def _render_value(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render tags_get as the bare value so it can be piped."""
    console.print(Text(format_scalar_or_json(result.data.get("value"))), soft_wrap=True)


def _render_path(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Text(str(result.data.get("path", ""))), soft_wrap=True)


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render set/tags_set/tags_remove/tags_clear/add results."""
    d = result.data
    _status_line(console, result)
    for key in ("path", "title", "action", "property", "value", "removed", "overwritten"):
        if key in d:
            _field(console, key, d[key])
    if "updated" in d:
        console.print(Text("  updated:", style="locus.key"))
        _properties(console, d["updated"])
    if verbose and "frontmatter" in d:
        console.print(Text("  frontmatter:", style="locus.key"))
        _properties(console, d["frontmatter"])


# ── Task renderers ────────────────────────────────────────────────────


def _tags_text(tags: list[str]) -> Text:
    return Text(", ".join(tags), style="locus.tag")


def _styled_field(console: Console, key: str, value: Text) -> None:
    console.print(Text(f"  {key}: ", style="locus.key"), value, sep="", soft_wrap=True)


def _task_table(console: Console, items: list[dict[str, Any]]) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Title", style="locus.title", max_width=40)
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Tags")
    table.add_column("Created", no_wrap=True)
    for item in items:
        table.add_row(
            Text(str(item.get("title", ""))),
            status_text(item.get("status")),
            priority_text(item.get("priority")),
            _tags_text(item.get("tags", [])),
            Text(str(item.get("created", ""))[:10]),
        )
    console.print(table)


def _task_blocks(console: Console, items: list[dict[str, Any]]) -> None:
    for item in items:
        console.print(Text(str(item.get("title", "")), style="locus.title"))
        _field(console, "file", item.get("relative_path", item.get("file_name", "")))
        _styled_field(console, "status", status_text(item.get("status")))
        _styled_field(console, "priority", priority_text(item.get("priority")))
        if item.get("tags"):
            _styled_field(console, "tags", _tags_text(item["tags"]))
        _field(console, "created", item.get("created", ""))
        console.print()


def _render_task_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list as a table (or ``--detail`` blocks), optionally per repository."""
    d = result.data
    items: list[dict[str, Any]] = d.get("items", [])
    show = _task_blocks if d.get("detail") else _task_table
    scope = d.get("scope")

    console.print(Text(f"Repository: {scope}" if scope else "All tasks", style="locus.op"))
    if not items:
        console.print(Text("No tasks found.", style="dim"))
        return
    console.print(Text(f"{len(items)} task(s)", style="dim"))

    groups = d.get("groups")
    if groups is None:
        console.print()
        show(console, items)
        return
    for group in groups:
        files = set(group.get("files", []))
        console.print()
        console.print(Text(f"━━━ {group.get('repository')} ━━━", style="locus.op"))
        console.print(Text(f"{group.get('count', len(files))} task(s)", style="dim"))
        show(console, [item for item in items if item.get("relative_path") in files])


def _render_task(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render read: headline fields, remaining properties, then the body."""
    d = result.data
    console.print(Text(str(d.get("title", "")), style="locus.title"))
    _field(console, "file", d.get("relative_path", d.get("file_name", "")))
    _styled_field(console, "status", status_text(d.get("status")))
    _styled_field(console, "priority", priority_text(d.get("priority")))
    if d.get("tags"):
        _styled_field(console, "tags", _tags_text(d["tags"]))
    for key in ("created", "repository"):
        if d.get(key):
            _field(console, key, d[key])

    shown = {"title", "status", "priority", "tags", "created", "date"}
    extra = {k: v for k, v in (d.get("frontmatter") or {}).items() if k not in shown}
    if extra:
        console.print(Text("  properties:", style="locus.key"))
        _properties(console, extra)
    if verbose:
        _field(console, "path", d.get("path", ""))

    body = str(d.get("body", "")).strip("\n")
    if body:
        console.print()
        console.print(Text(body), soft_wrap=True)


def _render_raw(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Text(str(result.data.get("content", ""))), end="", soft_wrap=True)


def _render_config(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render config_show: settings by section, their source, env overrides."""
    d = result.data
    _status_line(console, result)
    for key, value in (d.get("settings") or {}).items():
        if isinstance(value, dict):
            console.print(Text(f"  [{key}]", style="locus.key"))
            _properties(console, value)
        else:
            _field(console, key, value)
    source = d.get("config_path") or "(none, using defaults)"
    _field(console, "config file", source)
    env = d.get("env") or {}
    if env:
        console.print(Text("  environment overrides:", style="locus.key"))
        for name, value in env.items():
            console.print(Text(f"    {name}={value}"), soft_wrap=True)


def _render_config_path(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    path = result.data.get("path")
    if path:
        console.print(Text(str(path)), soft_wrap=True)
        return
    console.print(Text("No config file found.", style="dim"))
    _field(console, "default location", result.data.get("default_path", ""), indent=0)
    console.print(Text("Run 'locus config init' to create one.", style="dim"))



def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "tags_list": _render_file_properties,
    "tags_list_all": _render_file_table,
    "tags_get": _render_value,
    "path": _render_path,
    "set": _render_mutation,
    "tags_set": _render_mutation,
    "tags_remove": _render_mutation,
    "tags_clear": _render_mutation,
    "add": _render_mutation,
    "list": _render_task_list,
    "read": _render_task,
    "read_raw": _render_raw,
    "edit": _render_mutation,
    "config_show": _render_config,
    "config_path": _render_config_path,
    "config_init": _render_mutation,
}
