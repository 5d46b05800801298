"""
Shared fixtures for the test suite.

Centralizes the in-memory host fakes so individual test files don't need
to rebuild a scene graph or a browser tree.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Fake host accessor
# ---------------------------------------------------------------------------


class FakeLiveGraph:
    """Dict-backed stand-in for the host scene graph.

    Every ``set`` and ``call`` issued by any accessor is appended to
    ``writes`` / ``calls`` in issue order.
    """

    def __init__(self) -> None:
        self.objects: dict[int, dict[str, Any]] = {}
        self.by_path: dict[str, int] = {}
        self.writes: list[tuple[int, str, Any]] = []
        self.calls: list[tuple[int, str, tuple[Any, ...]]] = []
        self.opened: list[str] = []

    def add(self, obj_id: int, path: str, obj_type: str, **props: list[Any]) -> None:
        self.objects[obj_id] = {"path": path, "type": obj_type, "props": dict(props)}
        self.by_path[path] = obj_id

    def delete(self, obj_id: int) -> None:
        obj = self.objects.pop(obj_id)
        self.by_path.pop(obj["path"], None)

    def resolve(self, target: str) -> int:
        if target.startswith("id "):
            obj_id = int(target[3:])
            return obj_id if obj_id in self.objects else 0
        return self.by_path.get(target, 0)

    def factory(self, target: str) -> FakeLiveAPI:
        self.opened.append(target)
        return FakeLiveAPI(self, target)


class FakeLiveAPI:
    """Four-primitive accessor over a :class:`FakeLiveGraph`.

    Mirrors host quirks: ids are bare number strings, paths are quoted,
    and every ``get`` answers with a list.
    """

    def __init__(self, graph: FakeLiveGraph, target: str) -> None:
        self._graph = graph
        self._id = graph.resolve(target)

    @property
    def _obj(self) -> dict[str, Any] | None:
        return self._graph.objects.get(self._id)

    @property
    def id(self) -> str:
        return str(self._id) if self._obj is not None else "0"

    @property
    def path(self) -> str:
        obj = self._obj
        return f'"{obj["path"]}"' if obj is not None else ""

    @property
    def type(self) -> str:
        obj = self._obj
        return obj["type"] if obj is not None else ""

    @property
    def info(self) -> str:
        return f"id {self.id}\ntype {self.type}\ndone"

    def get(self, name: str) -> list[Any]:
        obj = self._obj
        if obj is None:
            return []
        return list(obj["props"].get(name, []))

    def set(self, name: str, value: Any) -> None:
        self._graph.writes.append((self._id, name, value))
        obj = self._obj
        if obj is not None:
            obj["props"][name] = [value]

    def call(self, method: str, *args: Any) -> Any:
        self._graph.calls.append((self._id, method, args))
        return None

    def goto(self, path: str) -> None:
        self._id = self._graph.resolve(path)


@pytest.fixture()
def live_graph() -> FakeLiveGraph:
    """A small set: two tracks, one return, master, a rack with a nested device."""
    graph = FakeLiveGraph()
    graph.add(
        1,
        "live_set",
        "Song",
        tracks=["id", 2, "id", 3],
        return_tracks=["id", 4],
        scenes=["id", 9],
        signature_numerator=[6],
        signature_denominator=[8],
        scale_intervals=[0, 2, 4, 5, 7, 9, 11],
    )
    graph.add(
        2,
        "live_set tracks 0",
        "Track",
        name=["Bass"],
        color=[0xFF8800],
        devices=["id", 6, "id", 7],
        output_routing_type=[
            json.dumps({"output_routing_type": {"display_name": "Master", "identifier": 1}})
        ],
    )
    graph.add(3, "live_set tracks 1", "Track", name=["Keys"], color=[], devices=[])
    graph.add(4, "live_set return_tracks 0", "Track", name=["A-Reverb"])
    graph.add(5, "live_set master_track", "Track", name=["Main"])
    graph.add(6, "live_set tracks 0 devices 0", "Device", name=["Operator"])
    graph.add(7, "live_set tracks 0 devices 1", "RackDevice", name=["Bass Rack"])
    graph.add(8, "live_set tracks 0 devices 1 chains 0 devices 2", "Device", name=["Saturator"])
    graph.add(9, "live_set scenes 0", "Scene", name=["Intro"])
    graph.add(10, "live_set tracks 0 clip_slots 3", "ClipSlot", has_clip=[1])
    graph.add(11, "live_set view", "Song.View", selected_track=["id", 2])
    return graph


# ---------------------------------------------------------------------------
# Fake host browser
# ---------------------------------------------------------------------------


class FakeHostIterator:
    def __init__(self, item: FakeHostItem) -> None:
        self._item = item
        self._pos = 0

    def next(self) -> FakeHostItem | None:
        if self._pos >= len(self._item.kids):
            return None
        child = self._item.kids[self._pos]
        self._pos += 1
        self._item.fetched += 1
        return child


class FakeHostItem:
    """Host browser item; ``fetched`` counts children handed out so far."""

    def __init__(
        self, name: str, uri: str, kids: list[FakeHostItem] | None = None, **flags: Any
    ) -> None:
        self.name = name
        self.uri = uri
        self.source = flags.pop("source", "Live Library")
        self.is_folder = flags.pop("is_folder", bool(kids))
        self.is_device = flags.pop("is_device", False)
        self.is_loadable = flags.pop("is_loadable", not kids)
        self.is_selected = flags.pop("is_selected", False)
        self.kids = list(kids or [])
        self.fetched = 0

    def iter_children(self) -> FakeHostIterator:
        return FakeHostIterator(self)


class FakeHostBrowser:
    """Host browser root with recorded actions."""

    def __init__(self, **categories: Any) -> None:
        for name, item in categories.items():
            setattr(self, name, item)
        self.hotswap_target: FakeHostItem | None = None
        self.filter_type = 0
        self.actions: list[tuple[str, Any]] = []

    def load_item(self, item: Any) -> None:
        self.actions.append(("load", item))

    def preview_item(self, item: Any) -> None:
        self.actions.append(("preview", item))

    def stop_preview(self) -> None:
        self.actions.append(("stop", None))


@pytest.fixture()
def host_browser() -> FakeHostBrowser:
    """Drums and instruments trees plus empty roots for every other category."""
    kit = FakeHostItem(
        "Kit-Core 909",
        "query:Drums#Kit-Core%20909",
        [FakeHostItem("909 Kick", "query:Drums#Kit-Core%20909:Kick")],
    )
    drums = FakeHostItem(
        "Drums",
        "query:Drums",
        [
            FakeHostItem(
                "Drum Hits", "query:Drums#Drum%20Hits", [FakeHostItem("Clap", "query:Drums#Clap")]
            ),
            kit,
        ],
    )
    instruments = FakeHostItem(
        "Instruments",
        "query:Synths",
        [FakeHostItem("Operator", "query:Synths#Operator", is_device=True)],
    )
    empty = {
        name: FakeHostItem(name, f"query:{name}")
        for name in (
            "audio_effects",
            "clips",
            "current_project",
            "midi_effects",
            "packs",
            "plugins",
            "samples",
            "sounds",
            "user_library",
        )
    }
    browser = FakeHostBrowser(drums=drums, instruments=instruments, **empty)
    browser.legacy_libraries = [FakeHostItem("Legacy", "userfolder:legacy")]
    browser.user_folders = []
    return browser
