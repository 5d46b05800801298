"""
Shared type definitions for the Live object-model layer.

This module defines protocols and type aliases that establish contracts
between the pure core/ layer and the host-bound ingestion/ layer.

Naming conventions:
- RawLiveAPI: the host's four-primitive accessor (get/set/call/goto)
- HostBrowserItem: a node of the host's browser database
- LiveObject: the ergonomic facade built on top (ingestion/live_object.py)
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RawLiveAPI(Protocol):
    """
    Protocol for the host-provided object-model accessor.

    The host exposes only four primitives plus a few read-only attributes.
    ``get`` always answers with a sequence, even for scalar properties.
    """

    @property
    def id(self) -> Any: ...

    @property
    def path(self) -> str: ...

    @property
    def type(self) -> str: ...

    @property
    def info(self) -> str: ...

    def get(self, name: str) -> Sequence[Any]: ...

    def set(self, name: str, value: Any) -> None: ...

    def call(self, method: str, *args: Any) -> Any: ...

    def goto(self, path: str) -> None: ...


LiveAPIFactory = Callable[[str], RawLiveAPI]
"""Host constructor: canonical path or ``"id N"`` string → raw accessor."""


@runtime_checkable
class HostBrowserIterator(Protocol):
    """Forward-only cursor over a host browser item's children."""

    def next(self) -> "HostBrowserItem | None": ...


@runtime_checkable
class HostBrowserItem(Protocol):
    """
    Protocol for a node of the host browser database.

    Children are only reachable through ``iter_children`` so that large
    libraries never have to be materialized at once.
    """

    @property
    def name(self) -> str: ...

    @property
    def uri(self) -> str: ...

    @property
    def source(self) -> str: ...

    @property
    def is_folder(self) -> bool: ...

    @property
    def is_device(self) -> bool: ...

    @property
    def is_loadable(self) -> bool: ...

    @property
    def is_selected(self) -> bool: ...

    def iter_children(self) -> HostBrowserIterator: ...


@runtime_checkable
class HostBrowser(Protocol):
    """
    Protocol for the host browser root.

    Category roots (``instruments``, ``samples`` …) are plain attributes and
    are looked up by name, so they are not listed here.
    """

    @property
    def hotswap_target(self) -> HostBrowserItem | None: ...

    @property
    def filter_type(self) -> int: ...

    def load_item(self, item: Any) -> None: ...

    def preview_item(self, item: Any) -> None: ...

    def stop_preview(self) -> None: ...
