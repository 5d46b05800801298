"""core/live_api/errors.py — Exception taxonomy for the object-model layer.

Parsing and codec errors are raised where malformed data is first observed.
A vanished host object is not an error: it is reported by
``LiveObject.exists()`` returning ``False``.
"""

from __future__ import annotations

from typing import Any


class LiveApiError(Exception):
    """Base class for every error raised by this layer."""


class InvalidIdentifierKind(LiveApiError, ValueError):
    """Raised when an identifier matches none of the accepted shapes.

    Accepted shapes are a non-negative integer, a numeric string, an
    ``"id N"`` string, a canonical path string, or a two-element
    ``("id", N)`` pair.

    Args:
        value: The rejected input.
        reason: Short explanation appended to the message.
    """

    def __init__(self, value: Any, reason: str = "") -> None:
        """Initialize with the rejected value."""
        self.value = value
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Cannot interpret {value!r} as an object identifier{detail}")


class MalformedEncodedValue(LiveApiError, ValueError):
    """Raised when an encoded value (color, routing JSON, id list) fails to decode.

    Args:
        property: Property name being decoded or encoded.
        raw: The offending raw value.
        reason: Short explanation appended to the message.
    """

    def __init__(self, property: str, raw: Any, reason: str = "") -> None:
        """Initialize with property name and offending value."""
        self.property = property
        self.raw = raw
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed value for {property!r}: {raw!r}{detail}")
