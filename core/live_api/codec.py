"""core/live_api/codec.py — Property value codecs.

The host accessor answers every ``get`` with a sequence and expects some
properties in string-encoded form on ``set``. This module reconciles that
representation with plain Python values. Which rule applies is decided by
the :class:`~core.config.CodecConfig` classification table, never by
inspecting the value's shape.

Read side (host → caller)
─────────────────────────
    scalar          []  → None,  [v] → v,  [v, …] → v
    array           [a, b, c] → [a, b, c]
    routing         ['{"output_routing_type": {...}}'] → {...}
    routing_array   ['{"available_…": [{...}, …]}'] → [{...}, …]
    id              ["id", 7] → "id 7",  ["id", 0] → None

Write side (caller → host)
──────────────────────────
    routing         {...} → '{"output_routing_type": {...}}'
    id              7 / "7" / ("id", 7) → "id 7"
    everything else passes through unchanged

Colors travel as 24-bit RGB integers on the host and ``#RRGGBB`` strings on
the caller side; see :func:`color_to_css` / :func:`css_to_color`.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from core.config import DEFAULT_CONFIG, CodecConfig, PropertyKind
from core.live_api.errors import InvalidIdentifierKind, MalformedEncodedValue
from core.live_api.identifiers import ID_TAG, NO_OBJECT_ID, format_id

MAX_COLOR = 0xFFFFFF
_CSS_COLOR_RE = re.compile(r"#([0-9A-Fa-f]{6})")


# ---------------------------------------------------------------------------
# Routing value model
# ---------------------------------------------------------------------------


class RoutingValue(BaseModel):
    """A routing option as reported by the host.

    Unknown fields are kept so a decode/encode round trip is lossless.
    """

    model_config = ConfigDict(extra="allow")

    display_name: str
    identifier: int | str


_ROUTING_PAYLOAD = TypeAdapter(dict[str, Any])
_ROUTING_LIST = TypeAdapter(list[RoutingValue])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_sequence(raw: Any) -> bool:
    return isinstance(raw, (list, tuple))


def unwrap(raw: Any) -> Any:
    """Unwrap a host sequence to a single value.

    ``[]`` → ``None``; ``[v, …]`` → ``v``. A non-sequence is returned as-is.
    """
    if not _is_sequence(raw):
        return raw
    if len(raw) == 0:
        return None
    return raw[0]


def _decode_routing_payload(name: str, raw: Any) -> tuple[bool, Any]:
    """Return ``(present, inner_value)`` from a host routing reply."""
    text = unwrap(raw)
    if text is None:
        return False, None
    if not isinstance(text, (str, bytes)):
        raise MalformedEncodedValue(name, raw, "expected JSON text")
    try:
        payload = _ROUTING_PAYLOAD.validate_json(text)
    except ValidationError as exc:
        raise MalformedEncodedValue(name, raw, "invalid JSON object") from exc
    if name not in payload:
        raise MalformedEncodedValue(name, raw, f"payload has no {name!r} key")
    return True, payload[name]


def _validate_routing(name: str, value: Any) -> dict[str, Any]:
    """Return ``value`` as a plain dict after checking it is a routing object."""
    if isinstance(value, RoutingValue):
        return value.model_dump()
    try:
        RoutingValue.model_validate(value)
    except ValidationError as exc:
        raise MalformedEncodedValue(name, value, "not a routing object") from exc
    return dict(value)


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------


def decode_property(name: str, raw: Any, config: CodecConfig = DEFAULT_CONFIG) -> Any:
    """Decode a raw host reply for ``name`` into a caller-facing value.

    Args:
        name:   Property name, used for the classification lookup.
        raw:    Value returned by the host's ``get``.
        config: Classification table.

    Returns:
        Decoded value; ``None`` when the host reported nothing.

    Raises:
        MalformedEncodedValue: If a routing or id reply cannot be decoded.
    """
    kind = config.kind_of(name)

    if kind is PropertyKind.ARRAY:
        if raw is None:
            return []
        return list(raw) if _is_sequence(raw) else [raw]

    if kind is PropertyKind.ROUTING:
        present, value = _decode_routing_payload(name, raw)
        if not present or value is None:
            return None
        _validate_routing(name, value)
        return value

    if kind is PropertyKind.ROUTING_ARRAY:
        present, value = _decode_routing_payload(name, raw)
        if not present or value is None:
            return None
        try:
            _ROUTING_LIST.validate_python(value)
        except ValidationError as exc:
            raise MalformedEncodedValue(name, raw, "not a list of routing objects") from exc
        return list(value)

    if kind is PropertyKind.ID:
        if raw is None or (_is_sequence(raw) and len(raw) == 0):
            return None
        candidate = raw if _is_sequence(raw) and len(raw) == 2 else unwrap(raw)
        try:
            canonical = format_id(list(candidate) if _is_sequence(candidate) else candidate)
        except InvalidIdentifierKind as exc:
            raise MalformedEncodedValue(name, raw, "not an object id") from exc
        return None if canonical == NO_OBJECT_ID else canonical

    return unwrap(raw)


def decode_id_list(name: str, raw: Any) -> list[str]:
    """Decode a flat child-id reply (``["id", 3, "id", 9]``) into ``["id 3", "id 9"]``.

    Raises:
        MalformedEncodedValue: If the reply is not a sequence of
            ``"id", N`` pairs.
    """
    if raw is None:
        return []
    if not _is_sequence(raw):
        raise MalformedEncodedValue(name, raw, "expected a sequence of id pairs")
    if len(raw) % 2 != 0:
        raise MalformedEncodedValue(name, raw, "odd number of elements in id list")
    ids: list[str] = []
    for pos in range(0, len(raw), 2):
        tag, value = raw[pos], raw[pos + 1]
        if tag != ID_TAG:
            raise MalformedEncodedValue(name, raw, f"expected {ID_TAG!r} tag at position {pos}")
        try:
            ids.append(format_id(value))
        except InvalidIdentifierKind as exc:
            raise MalformedEncodedValue(name, raw, f"bad id at position {pos + 1}") from exc
    return ids


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------


def encode_property(name: str, value: Any, config: CodecConfig = DEFAULT_CONFIG) -> Any:
    """Encode ``value`` for the host's ``set`` primitive.

    Raises:
        MalformedEncodedValue: If a routing value is not a routing object.
        InvalidIdentifierKind: If an id property is given something that is
            not an object id.
        ValueError: If ``name`` is a read-only routing list.
    """
    kind = config.kind_of(name)

    if kind is PropertyKind.ROUTING:
        inner = None if value is None else _validate_routing(name, value)
        return _ROUTING_PAYLOAD.dump_json({name: inner}).decode("utf-8")

    if kind is PropertyKind.ROUTING_ARRAY:
        raise ValueError(f"Property {name!r} is read-only")

    if kind is PropertyKind.ID:
        return format_id(value)

    return value


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------


def color_to_css(value: Any, name: str = "color") -> str:
    """Convert a 24-bit RGB integer to an upper-case ``#RRGGBB`` string.

    Raises:
        MalformedEncodedValue: If ``value`` is not an int in ``0..0xFFFFFF``.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedEncodedValue(name, value, "color must be an integer")
    if not 0 <= value <= MAX_COLOR:
        raise MalformedEncodedValue(name, value, "color outside 24-bit range")
    return f"#{value:06X}"


def css_to_color(css: Any, name: str = "color") -> int:
    """Convert a ``#RRGGBB`` string (any case) to a 24-bit RGB integer.

    Case is not preserved: :func:`color_to_css` always answers upper-case, so
    ``color_to_css(css_to_color(css)) == css`` only for upper-case input.

    Raises:
        MalformedEncodedValue: If ``css`` is not exactly ``#`` plus six hex digits.
    """
    match = _CSS_COLOR_RE.fullmatch(css) if isinstance(css, str) else None
    if match is None:
        raise MalformedEncodedValue(name, css, "expected #RRGGBB")
    return int(match.group(1), 16)

