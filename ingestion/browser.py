"""ingestion/browser.py — Read-only adapter over the host browser.

Wraps the host browser root: category trees, the hotswap target, and the
three host actions (load, preview, stop preview). Trees are adapted lazily
through :meth:`BrowserNode.from_host`; nothing below a category root is
fetched until a caller walks it.

The hotswap target is owned by the host UI and can change between any two
calls, so it is re-read on every access.

Usage
─────
::

    browser = Browser(host_browser)
    drums = browser.category("drums")
    browser.relation_to_hotswap_target(drums)     # BrowserRelation.ANCESTOR
    browser.load_item(drums.children[0])
"""

from __future__ import annotations

import logging
from typing import Any

from core.live_api.browser import BrowserNode
from core.live_api.relations import BrowserRelation, relation_to_target
from core.types import HostBrowser

logger = logging.getLogger(__name__)

BROWSER_CATEGORIES: tuple[str, ...] = (
    "audio_effects",
    "clips",
    "current_project",
    "drums",
    "instruments",
    "midi_effects",
    "packs",
    "plugins",
    "samples",
    "sounds",
    "user_library",
)
"""Single-root categories, in host display order."""


class Browser:
    """Facade over the host browser root.

    Args:
        host: Host browser object (see :class:`core.types.HostBrowser`).
    """

    def __init__(self, host: HostBrowser) -> None:
        self._host = host

    def category(self, name: str) -> BrowserNode:
        """Return the root node of a single-root category.

        Raises:
            ValueError: If ``name`` is not a known category.
        """
        if name not in BROWSER_CATEGORIES:
            raise ValueError(
                f"Unknown browser category {name!r}.  Available: {list(BROWSER_CATEGORIES)}"
            )
        return BrowserNode.from_host(getattr(self._host, name))

    def categories(self) -> dict[str, BrowserNode]:
        """All single-root categories, keyed by name."""
        return {name: self.category(name) for name in BROWSER_CATEGORIES}

    def _roots(self, name: str) -> tuple[BrowserNode, ...]:
        items = getattr(self._host, name, None) or ()
        return tuple(BrowserNode.from_host(item) for item in items)

    @property
    def legacy_libraries(self) -> tuple[BrowserNode, ...]:
        return self._roots("legacy_libraries")

    @property
    def user_folders(self) -> tuple[BrowserNode, ...]:
        return self._roots("user_folders")

    @property
    def filter_type(self) -> int:
        """Current hotswap filter type as reported by the host."""
        return int(self._host.filter_type)

    @property
    def hotswap_target(self) -> BrowserNode | None:
        """Current hotswap target, or ``None`` when nothing is targeted."""
        item = self._host.hotswap_target
        return None if item is None else BrowserNode.from_host(item)

    def relation_to_hotswap_target(self, item: BrowserNode) -> BrowserRelation:
        """Relation of ``item`` to the current hotswap target.

        Returns ``BrowserRelation.NONE`` when there is no target; never raises
        for a missing target.
        """
        relation = relation_to_target(item, self.hotswap_target)
        logger.debug("relation of %s to hotswap target: %s", item.uri, relation.value)
        return relation

    # ------------------------------------------------------------------
    # Host actions (best effort, no return value)
    # ------------------------------------------------------------------

    @staticmethod
    def _host_item(item: BrowserNode) -> Any:
        return item.host_item if item.host_item is not None else item

    def load_item(self, item: BrowserNode) -> None:
        """Load ``item`` into the set (onto the selected track or hotswap target)."""
        logger.info("Loading browser item %s", item.uri)
        self._host.load_item(self._host_item(item))

    def preview_item(self, item: BrowserNode) -> None:
        logger.debug("Previewing browser item %s", item.uri)
        self._host.preview_item(self._host_item(item))

    def stop_preview(self) -> None:
        self._host.stop_preview()
