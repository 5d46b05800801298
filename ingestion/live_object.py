"""ingestion/live_object.py — Ergonomic facade over the host object-model accessor.

This module is the boundary between the pure core/live_api helpers and the
host's raw accessor. The raw accessor only knows four primitives::

    get(name) -> sequence     set(name, value)
    call(method, *args)       goto(path)

:class:`LiveObject` composes identifier normalization, the property codec and
path index extraction on top of them.

Consistency model
─────────────────
Every call is a synchronous round trip and reflects host state at that
moment. Nothing is buffered or cached: the scene graph is mutated by the
host UI at any time, so ``exists()`` and every read go back to the host.
Writes are issued one by one in call order; only ``set_all`` groups them.

Usage
─────
::

    track = LiveObject.from_identifier(LiveAPI, "live_set tracks 0")
    track.get_property("name")            # "Bass"
    track.set_all({"name": "Sub", "mute": None})   # mute skipped
    track.set_color("#FF8800")
    devices = track.get_children("devices")
    devices[0].device_index               # 0
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from core.config import DEFAULT_CONFIG, CodecConfig
from core.live_api.codec import (
    color_to_css,
    css_to_color,
    decode_id_list,
    decode_property,
    encode_property,
)
from core.live_api.errors import MalformedEncodedValue
from core.live_api.identifiers import format_id, is_no_object, normalize_identifier
from core.live_api.paths import LomPath, TrackCategory, parse_path
from core.types import LiveAPIFactory, RawLiveAPI

logger = logging.getLogger(__name__)


def _as_count(value: Any) -> Any:
    """Render whole-number floats (``4.0``) as ints."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class LiveObject:
    """Handle onto one host scene-graph object (track, clip, device, scene …).

    Args:
        raw:     Host accessor this facade drives.
        factory: Host constructor used to open child objects. Defaults to
                 ``type(raw)``, which matches hosts whose accessor class
                 takes a path or ``"id N"`` string.
        config:  Property classification table.
    """

    def __init__(
        self,
        raw: RawLiveAPI,
        *,
        factory: LiveAPIFactory | None = None,
        config: CodecConfig = DEFAULT_CONFIG,
    ) -> None:
        self._raw = raw
        self._factory: LiveAPIFactory = factory or type(raw)
        self._config = config

    @classmethod
    def from_identifier(
        cls,
        factory: LiveAPIFactory,
        id_or_path: Any,
        *,
        config: CodecConfig = DEFAULT_CONFIG,
    ) -> LiveObject:
        """Open an object from an id (``42``, ``"42"``, ``("id", 42)``) or a path.

        Raises:
            InvalidIdentifierKind: Before the host is contacted, if
                ``id_or_path`` has none of the accepted shapes.
        """
        target = normalize_identifier(id_or_path)
        return cls(factory(target), factory=factory, config=config)

    # ------------------------------------------------------------------
    # Raw attributes
    # ------------------------------------------------------------------

    @property
    def raw(self) -> RawLiveAPI:
        """Underlying host accessor."""
        return self._raw

    @property
    def id(self) -> str:
        """Canonical ``"id N"`` form of the host id (``"id 0"`` when absent)."""
        raw_id = self._raw.id
        if is_no_object(raw_id):
            return "id 0"
        return format_id(raw_id)

    @property
    def path(self) -> str:
        return str(self._raw.path or "").strip().strip('"')

    @property
    def type(self) -> str:
        return self._raw.type

    @property
    def info(self) -> str:
        """Host diagnostic text, returned verbatim."""
        return self._raw.info

    def exists(self) -> bool:
        """True if the handle currently resolves to a live host object.

        Re-queried on every call; the host may delete the object at any time.
        """
        return not is_no_object(self._raw.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LiveObject):
            return NotImplemented
        if self is other:
            return True
        return self.exists() and other.exists() and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"LiveObject({self.id!r}, path={self.path!r})"

    # ------------------------------------------------------------------
    # Raw primitives (pass-through)
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """Raw host read, still wrapped in a sequence."""
        return self._raw.get(name)

    def set(self, name: str, value: Any) -> None:
        """Raw host write, no encoding applied."""
        logger.debug("set %s on %r", name, self._raw)
        self._raw.set(name, value)

    def call(self, method: str, *args: Any) -> Any:
        logger.debug("call %s%r on %r", method, args, self._raw)
        return self._raw.call(method, *args)

    def goto(self, path: str) -> None:
        """Point this handle at another object. Path-derived values follow."""
        logger.debug("goto %s", path)
        self._raw.goto(path)

    # ------------------------------------------------------------------
    # Typed property access
    # ------------------------------------------------------------------

    def get_property(self, name: str) -> Any:
        """Read ``name`` and decode it per the classification table.

        Scalars are unwrapped (empty → ``None``), array properties come back
        as lists, routing properties as dicts, id properties as ``"id N"``.

        Raises:
            MalformedEncodedValue: If the host reply cannot be decoded.
        """
        raw = self._raw.get(name)
        try:
            return decode_property(name, raw, self._config)
        except MalformedEncodedValue:
            logger.warning("Malformed value for %r on %s: %r", name, self.path, raw)
            raise

    def set_property(self, name: str, value: Any) -> None:
        """Encode ``value`` per the classification table and write it.

        Raises:
            MalformedEncodedValue: If a routing value is not a routing object.
            InvalidIdentifierKind: If an id property is given a non-id.
        """
        self.set(name, encode_property(name, value, self._config))

    def set_all(self, properties: Mapping[str, Any]) -> None:
        """Write every entry whose value is not ``None``, in mapping order.

        ``None`` entries are skipped; this is a partial update, not an error.
        """
        for name, value in properties.items():
            if value is None:
                continue
            self.set_property(name, value)

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    def get_child_ids(self, name: str) -> list[str]:
        """Return ``"id N"`` strings for the child collection ``name``."""
        return decode_id_list(name, self._raw.get(name))

    def get_children(self, name: str) -> list[LiveObject]:
        """Open a facade per child of the collection ``name``."""
        return [
            LiveObject(self._factory(child_id), factory=self._factory, config=self._config)
            for child_id in self.get_child_ids(name)
        ]

    # ------------------------------------------------------------------
    # Color
    # ------------------------------------------------------------------

    def get_color(self) -> str | None:
        """Return the color as ``#RRGGBB``, or ``None`` when the object has none.

        Raises:
            MalformedEncodedValue: If the stored value is outside 24-bit RGB.
        """
        name = self._config.color_property
        value = self.get_property(name)
        if value is None:
            return None
        try:
            return color_to_css(value, name)
        except MalformedEncodedValue:
            logger.warning("Malformed color on %s: %r", self.path, value)
            raise

    def set_color(self, css_color: str) -> None:
        """Set the color from ``#RRGGBB``.

        Raises:
            MalformedEncodedValue: If ``css_color`` is not ``#`` plus six hex digits.
        """
        name = self._config.color_property
        self.set_property(name, css_to_color(css_color, name))

    # ------------------------------------------------------------------
    # Path-derived indices
    # ------------------------------------------------------------------

    @property
    def lom_path(self) -> LomPath:
        """Parsed form of the current path."""
        return parse_path(self.path)

    @property
    def track_index(self) -> int | None:
        return self.lom_path.track_index

    @property
    def return_track_index(self) -> int | None:
        return self.lom_path.return_track_index

    @property
    def category(self) -> TrackCategory | None:
        return self.lom_path.category

    @property
    def scene_index(self) -> int | None:
        return self.lom_path.scene_index

    @property
    def clip_slot_index(self) -> int | None:
        return self.lom_path.clip_slot_index

    @property
    def device_index(self) -> int | None:
        """Innermost device index (last ``devices`` token, for nested racks)."""
        return self.lom_path.device_index

    @property
    def time_signature(self) -> str | None:
        """``"N/D"`` from the numerator/denominator properties, else ``None``."""
        numerator = self.get_property(self._config.signature_numerator_property)
        denominator = self.get_property(self._config.signature_denominator_property)
        if numerator is None or denominator is None:
            return None
        return f"{_as_count(numerator)}/{_as_count(denominator)}"
