"""
Configuration dataclasses for the property codec.

These immutable config objects hold the per-property classification table
consulted by :mod:`core.live_api.codec`, so the unwrap/no-unwrap decision is
a static lookup instead of shape-sniffing at call time.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class PropertyKind(str, Enum):
    """How a property's value is exchanged with the host accessor."""

    SCALAR = "scalar"
    ARRAY = "array"
    ROUTING = "routing"
    ROUTING_ARRAY = "routing_array"
    ID = "id"


ARRAY_PROPERTIES: frozenset[str] = frozenset(
    {
        "scale_intervals",
        "available_warp_modes",
    }
)

ROUTING_PROPERTIES: frozenset[str] = frozenset(
    {
        "input_routing_type",
        "input_routing_channel",
        "output_routing_type",
        "output_routing_channel",
    }
)

ROUTING_ARRAY_PROPERTIES: frozenset[str] = frozenset(
    {
        "available_input_routing_types",
        "available_input_routing_channels",
        "available_output_routing_types",
        "available_output_routing_channels",
    }
)

ID_PROPERTIES: frozenset[str] = frozenset(
    {
        "selected_track",
        "selected_scene",
        "selected_device",
        "selected_parameter",
        "detail_clip",
        "highlighted_clip_slot",
    }
)


@dataclass(frozen=True)
class CodecConfig:
    """
    Property classification table for the codec.

    Immutable configuration object shared by every facade instance. Any
    property not listed in one of the sets is treated as
    :attr:`PropertyKind.SCALAR`.

    Attributes:
        array_properties: Properties returned verbatim as lists.
        routing_properties: Properties exchanged as JSON-encoded objects.
        routing_array_properties: Read-only JSON-encoded lists of routing
            objects (the ``available_*`` routing options).
        id_properties: Properties that reference another object and are
            written in ``"id N"`` form.
        color_property: Name of the 24-bit RGB color property.
        signature_numerator_property: Property holding the time-signature
            numerator.
        signature_denominator_property: Property holding the time-signature
            denominator.

    Example:
        >>> config = CodecConfig(array_properties=frozenset({"scale_intervals", "notes"}))
        >>> config.kind_of("notes")
        <PropertyKind.ARRAY: 'array'>
    """

    array_properties: frozenset[str] = ARRAY_PROPERTIES
    routing_properties: frozenset[str] = ROUTING_PROPERTIES
    routing_array_properties: frozenset[str] = ROUTING_ARRAY_PROPERTIES
    id_properties: frozenset[str] = ID_PROPERTIES
    color_property: str = "color"
    signature_numerator_property: str = "signature_numerator"
    signature_denominator_property: str = "signature_denominator"
    _table: Mapping[str, PropertyKind] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        """Validate configuration and build the lookup table."""
        groups = {
            PropertyKind.ARRAY: self.array_properties,
            PropertyKind.ROUTING: self.routing_properties,
            PropertyKind.ROUTING_ARRAY: self.routing_array_properties,
            PropertyKind.ID: self.id_properties,
        }
        table: dict[str, PropertyKind] = {}
        for kind, names in groups.items():
            if not isinstance(names, frozenset):
                raise ValueError(
                    f"{kind.value} properties must be a frozenset, got {type(names).__name__}"
                )
            for name in names:
                if not name or not name.strip():
                    raise ValueError(f"{kind.value} properties contain an empty name")
                if name in table:
                    raise ValueError(
                        f"Property {name!r} registered as both "
                        f"{table[name].value!r} and {kind.value!r}"
                    )
                table[name] = kind
        if not self.color_property:
            raise ValueError("color_property must be a non-empty string")
        object.__setattr__(self, "_table", MappingProxyType(table))

    def kind_of(self, name: str) -> PropertyKind:
        """Return the classification of ``name`` (scalar when unlisted)."""
        return self._table.get(name, PropertyKind.SCALAR)


# Pre-defined configurations

DEFAULT_CONFIG = CodecConfig()
"""Classification matching the host's own extension layer."""
