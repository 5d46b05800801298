"""core/live_api/identifiers.py — Identifier normalization.

The host constructor accepts a single string: either a canonical path
(``"live_set tracks 0"``) or an object id in ``"id N"`` form. Callers hold
identifiers in several shapes, all funnelled through here:

    42            → "id 42"
    "42"          → "id 42"
    ("id", 42)    → "id 42"
    "id 42"       → "id 42"
    "live_set tracks 0"  → "live_set tracks 0"   (path, unchanged)

Anything else raises :class:`InvalidIdentifierKind` before the host is ever
asked to construct an accessor.
"""

from __future__ import annotations

import re
from typing import Any

from core.live_api.errors import InvalidIdentifierKind
from core.live_api.paths import is_canonical_path

ID_TAG = "id"
"""Literal tag the host uses in front of numeric object ids."""

NO_OBJECT_ID = "id 0"
"""Id the host reports for a handle that resolves to nothing."""

_NUMERIC_RE = re.compile(r"[0-9]+")
_ID_STRING_RE = re.compile(r"id ([0-9]+)")


def _numeric(value: Any) -> int | None:
    """Return ``value`` as a non-negative int if it is a bare numeric id."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and _NUMERIC_RE.fullmatch(value):
        return int(value)
    return None


def format_id(value: Any) -> str:
    """Return the canonical ``"id N"`` form of an object id.

    Args:
        value: Non-negative int, numeric string, ``"id N"`` string, or a
               two-element ``("id", N)`` sequence.

    Returns:
        Canonical ``"id N"`` string.

    Raises:
        InvalidIdentifierKind: If ``value`` is not an id in any accepted shape.
    """
    number = _numeric(value)
    if number is not None:
        return f"{ID_TAG} {number}"
    if isinstance(value, str):
        match = _ID_STRING_RE.fullmatch(value)
        if match:
            return f"{ID_TAG} {int(match.group(1))}"
        raise InvalidIdentifierKind(value, "not a numeric id")
    if isinstance(value, (tuple, list)):
        if len(value) != 2 or value[0] != ID_TAG:
            raise InvalidIdentifierKind(value, f"expected a ({ID_TAG!r}, N) pair")
        number = _numeric(value[1])
        if number is None:
            raise InvalidIdentifierKind(value, "id pair value is not a non-negative integer")
        return f"{ID_TAG} {number}"
    raise InvalidIdentifierKind(value, f"unsupported type {type(value).__name__}")


def normalize_identifier(value: Any) -> str:
    """Canonicalize an identifier into the host's construction argument.

    Numeric ids (int, numeric string, ``("id", N)`` pair, ``"id N"``) become
    ``"id N"``. Canonical path strings pass through unchanged. A string led
    by the ``id`` tag is always treated as an id, never as a path.

    Raises:
        InvalidIdentifierKind: If ``value`` is neither an id nor a path.
    """
    if isinstance(value, str) and not _NUMERIC_RE.fullmatch(value):
        tokens = value.strip().strip('"').split(maxsplit=1)
        if tokens and tokens[0] != ID_TAG:
            if is_canonical_path(value):
                return value
            raise InvalidIdentifierKind(value, "neither a numeric id nor a canonical path")
    return format_id(value)


def is_no_object(raw_id: Any) -> bool:
    """True when a host id denotes "no object" (``0``, ``"0"``, ``"id 0"``, empty)."""
    if raw_id is None or raw_id == "":
        return True
    try:
        return format_id(raw_id) == NO_OBJECT_ID
    except InvalidIdentifierKind:
        return False
