"""Task file name generation.

File names come from a configurable pattern with three placeholders:

- ``{date}``: creation date formatted with ``date_format`` (strftime).
- ``{slug}``: lower-cased title, punctuation stripped, spaces -> ``-``.
- ``{hash}``: first ``hash_length`` hex chars of SHA-256(title + timestamp).

INVARIANT: Generated names always end in ``.md``.
"""

from __future__ import annotations

import hashlib
import re
import unicodedata
from datetime import datetime

_SLUG_STRIP = re.compile(r"[^\w\s-]")
_SLUG_DASHES = re.compile(r"[\s_-]+")


def generate_slug(title: str) -> str:
    """Slugify *title*, keeping Unicode letters and digits.

    Examples:
        >>> generate_slug("Fix the  Login bug!")
        'fix-the-login-bug'
        >>> generate_slug("日本語 タスク")
        '日本語-タスク'
    """
    text = unicodedata.normalize("NFKC", title).lower()
    text = _SLUG_STRIP.sub("", text)
    text = _SLUG_DASHES.sub("-", text)
    return text.strip("-")


def generate_hash(title: str, moment: datetime, length: int = 8) -> str:
    """Short hex digest disambiguating tasks created with the same title."""
    seed = f"{title}\0{moment.isoformat()}"
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:length]


def render_file_name(
    pattern: str,
    title: str,
    moment: datetime,
    *,
    date_format: str = "%Y-%m-%d",
    hash_length: int = 8,
) -> str:
    """Fill *pattern* placeholders for a task titled *title* created at *moment*."""
    name = (
        pattern.replace("{date}", moment.strftime(date_format))
        .replace("{slug}", generate_slug(title) or "task")
        .replace("{hash}", generate_hash(title, moment, hash_length))
    )
    if not name.endswith(".md"):
        name += ".md"
    return name
