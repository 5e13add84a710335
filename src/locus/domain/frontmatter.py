"""Frontmatter codec — split a task file into metadata + body and back.

Layout of a task file::

    ---
    date: '2025-01-15'
    created: '2025-01-15T09:30:00.000Z'
    status: todo
    tags: [backend, urgent]
    ---
    # Task title

    Body text...

Decoding keeps key order and returns plain Python values (``dict``,
``list``, ``str``, ``int``, ``float``, ``bool``, ``None``). Unquoted YAML
timestamps stay strings, so ``date`` and ``created`` always decode as
``str``.

Encoding never reorders keys. Lists and nested mappings are emitted in flow
style, multi-line strings as ``|`` block literals, and strings that would
read back as another type (``'true'``, ``'42'``, ``'2025-01-15'``) are
quoted, which makes ``decode(encode(fm, body)) == (fm, body)`` hold for any
frontmatter locus writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.constructor import RoundTripConstructor
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarbool import ScalarBoolean
from ruamel.yaml.scalarstring import LiteralScalarString, SingleQuotedScalarString

from locus.domain.errors import FrontmatterFormatError

FRONTMATTER_DELIMITER = "---"

# System-managed keys: never removed by ``remove``/``clear``.
PROTECTED_KEYS: tuple[str, ...] = ("date", "created")

# YAML 1.1 booleans. ruamel resolves with YAML 1.2 rules and would leave
# these unquoted, but many frontmatter readers still treat them as bools.
_YAML11_BOOLEANS = frozenset({"yes", "no", "on", "off", "y", "n"})


class _FrontmatterConstructor(RoundTripConstructor):
    """Round-trip constructor that keeps YAML timestamps as plain strings."""


_FrontmatterConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp",
    _FrontmatterConstructor.construct_yaml_str,
)


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML instance.

    ruamel.yaml's YAML object is stateful; a failed dump can leave a shared
    instance broken, so every call gets its own.
    """
    y = YAML()
    y.Constructor = _FrontmatterConstructor
    y.default_flow_style = False
    y.width = 4096
    y.allow_unicode = True
    return y


@dataclass(frozen=True)
class FrontmatterDocument:
    """A decoded task file: ordered metadata mapping plus raw body text."""

    frontmatter: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def has_frontmatter(self) -> bool:
        return bool(self.frontmatter)

    @property
    def title(self) -> str | None:
        return extract_title(self.frontmatter, self.body)


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def _to_plain(node: Any) -> Any:
    """Strip ruamel round-trip wrappers down to builtin Python types."""
    if isinstance(node, dict):
        return {str(key): _to_plain(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_to_plain(item) for item in node]
    if isinstance(node, ScalarBoolean):
        return bool(node)
    if isinstance(node, bool) or node is None:
        return node
    if isinstance(node, str):
        return str(node)
    if isinstance(node, int):
        return int(node)
    if isinstance(node, float):
        return float(node)
    return node


def decode(content: str) -> FrontmatterDocument:
    """Parse frontmatter and body from markdown *content*.

    The first line must be ``---``; the next ``---`` line closes the YAML
    block and everything after it is the body, verbatim. Content without
    both delimiters decodes to empty frontmatter with *content* as body.

    Raises:
        FrontmatterFormatError: If the delimited block is not valid YAML or
            is not a mapping.
    """
    lines = content.split("\n")
    if lines[0].strip() != FRONTMATTER_DELIMITER:
        return FrontmatterDocument({}, content)

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return FrontmatterDocument({}, content)

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    try:
        loaded = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        msg = f"Invalid frontmatter: {exc}"
        raise FrontmatterFormatError(msg) from exc

    if loaded is None:
        return FrontmatterDocument({}, body)
    if not isinstance(loaded, dict):
        msg = f"Frontmatter must be a mapping, got {type(loaded).__name__}"
        raise FrontmatterFormatError(msg)
    return FrontmatterDocument(_to_plain(loaded), body)


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def _fits_block_literal(value: str) -> bool:
    return all(ch in "\n\t" or ch.isprintable() for ch in value)


def _to_yaml(value: Any, *, nested: bool = False) -> Any:
    """Wrap *value* in the ruamel node types that select its output style."""
    if isinstance(value, str):
        # Block literals are illegal inside flow collections and cannot
        # carry \r or other control characters; ruamel falls back to an
        # escaped double-quoted scalar for those.
        if "\n" in value and not nested and _fits_block_literal(value):
            return LiteralScalarString(value)
        if value.lower() in _YAML11_BOOLEANS:
            return SingleQuotedScalarString(value)
        return value
    if isinstance(value, dict):
        mapping = CommentedMap()
        for key, item in value.items():
            mapping[str(key)] = _to_yaml(item, nested=True)
        mapping.fa.set_flow_style()
        return mapping
    if isinstance(value, (list, tuple)):
        seq = CommentedSeq(_to_yaml(item, nested=True) for item in value)
        seq.fa.set_flow_style()
        return seq
    return value


def encode(frontmatter: dict[str, Any], body: str) -> str:
    """Render *frontmatter* and *body* into task file text.

    Keys are emitted in mapping order. Empty frontmatter renders the body
    alone, unless the body itself opens with a delimiter line: then an
    explicit empty block (``{}``) keeps the next decode from reading the
    body as frontmatter.
    """
    if not frontmatter:
        if body.split("\n", 1)[0].strip() != FRONTMATTER_DELIMITER:
            return body
        return f"{FRONTMATTER_DELIMITER}\n{{}}\n{FRONTMATTER_DELIMITER}\n{body}"

    document = CommentedMap()
    for key, value in frontmatter.items():
        document[str(key)] = _to_yaml(value)

    buf = StringIO()
    _new_yaml().dump(document, buf)
    return f"{FRONTMATTER_DELIMITER}\n{buf.getvalue()}{FRONTMATTER_DELIMITER}\n{body}"


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------


def extract_title(frontmatter: dict[str, Any], body: str) -> str | None:
    """Return the task title.

    A non-empty ``title`` field wins; otherwise the first ``# `` heading
    in the body. Returns None when neither exists.
    """
    title = frontmatter.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()

    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip()
    return None
