"""Typed property values parsed from ``key=value`` command tokens.

Resolution order for :func:`parse_value` (first match wins):

1. empty string          -> ``StringValue("")``
2. ``true`` / ``false``  -> ``BoolValue`` (any case)
3. numeric literal       -> ``NumberValue`` (``"001"`` becomes ``1``)
4. contains a comma      -> ``ArrayValue`` (even for prose: ``"Hello, World"``)
5. relative date         -> ``DateValue`` (``today``, ``tomorrow``, ``yesterday``,
                            ``+3d``, ``-2w``, ``+1m``, ``-1y``)
6. anything else         -> ``StringValue`` verbatim

Numbers that do not fit (over the interpreter's int digit limit,
or floats that overflow) and date offsets past the datetime range fall
through to ``StringValue``.

Parsing never fails. Only the assignment split (:func:`parse_assignment`)
can reject a token.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from dateutil.relativedelta import relativedelta

from locus.domain.errors import EmptyKeyError, InvalidFormatError

_NUMBER_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_OFFSET_PATTERN = re.compile(r"([+-])([0-9]+)([dwmy])")

_OFFSET_UNITS: dict[str, str] = {
    "d": "days",
    "w": "weeks",
    "m": "months",
    "y": "years",
}

_DAY_KEYWORDS: dict[str, int] = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
}


# ---------------------------------------------------------------------------
# TypedValue variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class NumberValue:
    value: int | float


@dataclass(frozen=True)
class ArrayValue:
    value: tuple[str, ...]


@dataclass(frozen=True)
class DateValue:
    """An ISO-8601 timestamp resolved from a relative date keyword."""

    value: str


@dataclass(frozen=True)
class StringValue:
    value: str


TypedValue = BoolValue | NumberValue | ArrayValue | DateValue | StringValue


@dataclass(frozen=True)
class PropertyAssignment:
    """One ``key=value`` token split into its parts."""

    key: str
    raw_value: str

    def parsed(self, *, now: datetime | None = None) -> TypedValue:
        return parse_value(self.raw_value, now=now)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def iso_timestamp(moment: datetime) -> str:
    """Format *moment* as a UTC ISO-8601 timestamp with millisecond precision."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_date_keyword(raw: str, *, now: datetime | None = None) -> str | None:
    """Resolve a relative date keyword or offset to an ISO timestamp.

    Returns None when *raw* is not a recognized date pattern.
    """
    moment = now or datetime.now(UTC)
    lowered = raw.lower()

    if lowered in _DAY_KEYWORDS:
        return iso_timestamp(moment + relativedelta(days=_DAY_KEYWORDS[lowered]))

    match = _OFFSET_PATTERN.fullmatch(raw)
    if match is None:
        return None
    sign, amount, unit = match.groups()
    try:
        count = int(amount) if sign == "+" else -int(amount)
        return iso_timestamp(moment + relativedelta(**{_OFFSET_UNITS[unit]: count}))
    except (ValueError, OverflowError):
        # Offsets past the datetime range are not dates.
        return None


def _to_number(raw: str, *, decimal: bool) -> int | float | None:
    """Convert a numeric literal, or None when it does not fit.

    ``int()`` refuses literals past the interpreter's digit limit and
    ``float()`` overflows to ``inf``.
    """
    if decimal:
        value = float(raw)
        return value if math.isfinite(value) else None
    try:
        return int(raw)
    except ValueError:
        return None


def parse_value(raw: str, *, now: datetime | None = None) -> TypedValue:
    """Parse a raw command-line value into a :data:`TypedValue`.

    Examples:
        >>> parse_value("TRUE")
        BoolValue(value=True)
        >>> parse_value("001")
        NumberValue(value=1)
        >>> parse_value("a, b,c")
        ArrayValue(value=('a', 'b', 'c'))
    """
    if raw == "":
        return StringValue("")

    lowered = raw.lower()
    if lowered == "true":
        return BoolValue(True)
    if lowered == "false":
        return BoolValue(False)

    match = _NUMBER_PATTERN.fullmatch(raw)
    if match is not None:
        number = _to_number(raw, decimal=match.group(1) is not None)
        return StringValue(raw) if number is None else NumberValue(number)

    if "," in raw:
        items = (item.strip() for item in raw.split(","))
        return ArrayValue(tuple(item for item in items if item))

    timestamp = parse_date_keyword(raw, now=now)
    if timestamp is not None:
        return DateValue(timestamp)

    return StringValue(raw)


def parse_assignment(token: str) -> PropertyAssignment:
    """Split a ``key=value`` token on its first ``=``.

    Everything after the first ``=`` is the raw value, so
    ``formula=x=y+z`` yields key ``formula`` and value ``x=y+z``.

    Raises:
        InvalidFormatError: If *token* contains no ``=``.
        EmptyKeyError: If the key before the first ``=`` is empty.
    """
    key, sep, raw_value = token.partition("=")
    if not sep:
        msg = f"Invalid property format {token!r} (expected key=value)"
        raise InvalidFormatError(msg, token=token)
    if not key:
        raise EmptyKeyError(token)
    return PropertyAssignment(key=key, raw_value=raw_value)


def to_frontmatter_value(typed: TypedValue) -> Any:
    """Convert a :data:`TypedValue` into the plain value stored in frontmatter."""
    if isinstance(typed, ArrayValue):
        return list(typed.value)
    if isinstance(typed, (BoolValue, NumberValue, DateValue, StringValue)):
        return typed.value
    msg = f"Unhandled value type: {type(typed).__name__}"
    raise TypeError(msg)
