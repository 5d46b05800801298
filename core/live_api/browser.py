"""core/live_api/browser.py — Read-only browser tree model.

Each browser category (``instruments``, ``samples`` …) is an independent
root :class:`BrowserNode`. Children are produced lazily through a
single-pass cursor, so a full plugin or sample library is never
materialized just to look one level down::

    cursor = node.iter_children()
    child = cursor.next()
    while child is not None:
        ...
        child = cursor.next()

Nodes are immutable value objects. Two nodes are equal when their ``uri``
and metadata match; the child loader does not take part in comparison.

Pure module. Host items are adapted through :meth:`BrowserNode.from_host`,
which only wraps; nothing is fetched until a cursor is advanced.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from core.types import HostBrowserItem

ChildLoader = Callable[[], Iterable["BrowserNode"]]


def _no_children() -> Iterable[BrowserNode]:
    return ()


class BrowserItemIterator:
    """Forward-only cursor over a node's children.

    ``next()`` returns the following child or ``None`` once exhausted, and
    keeps returning ``None`` afterwards. The cursor cannot be rewound; call
    :meth:`BrowserNode.iter_children` again for a fresh traversal. The
    child source is not touched until the first ``next()``.
    """

    def __init__(self, loader: ChildLoader) -> None:
        self._loader: ChildLoader | None = loader
        self._it: Iterator[BrowserNode] | None = None

    def next(self) -> BrowserNode | None:
        if self._it is None:
            if self._loader is None:
                return None
            self._it = iter(self._loader())
            self._loader = None
        child = next(self._it, None)
        if child is None:
            self._it = iter(())
        return child

    def __iter__(self) -> BrowserItemIterator:
        return self

    def __next__(self) -> BrowserNode:
        child = self.next()
        if child is None:
            raise StopIteration
        return child


@dataclass(frozen=True)
class BrowserNode:
    """A browser item: folder, device, preset, sample …

    ``uri`` identifies a node uniquely across the whole browser forest.
    ``host_item`` is the host object this node was adapted from (``None`` for
    nodes built directly); it is what host actions such as ``load_item``
    receive.
    """

    name: str
    uri: str
    source: str = ""
    is_folder: bool = False
    is_device: bool = False
    is_loadable: bool = False
    is_selected: bool = False
    _loader: ChildLoader = field(default=_no_children, repr=False, compare=False)
    host_item: Any = field(default=None, repr=False, compare=False)

    def iter_children(self) -> BrowserItemIterator:
        """Return a fresh single-pass cursor over the direct children."""
        return BrowserItemIterator(self._loader)

    @property
    def children(self) -> tuple[BrowserNode, ...]:
        """Direct children, materialized. Only this level is fetched."""
        return tuple(self.iter_children())

    @classmethod
    def leaf(cls, name: str, uri: str, **flags: Any) -> BrowserNode:
        """Build a childless node."""
        return cls(name=name, uri=uri, **flags)

    @classmethod
    def folder(
        cls,
        name: str,
        uri: str,
        children: Iterable[BrowserNode] | ChildLoader = (),
        **flags: Any,
    ) -> BrowserNode:
        """Build a folder node from children or a zero-argument child loader."""
        if callable(children):
            loader = children
        else:
            items = tuple(children)

            def loader() -> Iterable[BrowserNode]:
                return items

        flags.setdefault("is_folder", True)
        return cls(name=name, uri=uri, _loader=loader, **flags)

    @classmethod
    def from_host(cls, item: HostBrowserItem) -> BrowserNode:
        """Wrap a host browser item; its children are adapted on demand."""

        def loader() -> Iterator[BrowserNode]:
            cursor = item.iter_children()
            child = cursor.next()
            while child is not None:
                yield cls.from_host(child)
                child = cursor.next()

        return cls(
            name=str(item.name),
            uri=str(item.uri),
            source=str(getattr(item, "source", "") or ""),
            is_folder=bool(item.is_folder),
            is_device=bool(item.is_device),
            is_loadable=bool(item.is_loadable),
            is_selected=bool(item.is_selected),
            _loader=loader,
            host_item=item,
        )
