"""core/live_api/relations.py — Relation of a browser node to the hotswap target.

Pure query helpers over :class:`~core.live_api.browser.BrowserNode`. The
walk is iterative and keeps one child cursor per open level, so memory is
proportional to tree depth and very deep trees cannot hit the recursion
limit. Neither node is mutated.

Usage
─────
::

    target = browser.hotswap_target                 # may be None
    relation_to_target(browser.category("drums"), target)
    # → BrowserRelation.ANCESTOR when the target lives under Drums
"""

from __future__ import annotations

from enum import Enum

from core.live_api.browser import BrowserItemIterator, BrowserNode


class BrowserRelation(str, Enum):
    """Position of a node relative to the hotswap target."""

    ANCESTOR = "ancestor"
    DESCENDANT = "descendant"
    EQUAL = "equal"
    NONE = "none"


def contains_uri(root: BrowserNode, uri: str) -> bool:
    """True if a node with ``uri`` is reachable by child-descent from ``root``.

    ``root`` itself is not considered. Depth-first, stops at the first match.
    """
    stack: list[BrowserItemIterator] = [root.iter_children()]
    while stack:
        child = stack[-1].next()
        if child is None:
            stack.pop()
            continue
        if child.uri == uri:
            return True
        stack.append(child.iter_children())
    return False


def relation_to_target(item: BrowserNode | None, target: BrowserNode | None) -> BrowserRelation:
    """Return how ``item`` relates to ``target`` in the browser forest.

    Returns:
        ``EQUAL`` when both share a ``uri``; ``ANCESTOR`` when ``target`` lies
        below ``item``; ``DESCENDANT`` when ``item`` lies below ``target``;
        ``NONE`` otherwise, including when either side is missing or the two
        sit under different category roots.
    """
    if item is None or target is None:
        return BrowserRelation.NONE
    if item.uri == target.uri:
        return BrowserRelation.EQUAL
    if contains_uri(item, target.uri):
        return BrowserRelation.ANCESTOR
    if contains_uri(target, item.uri):
        return BrowserRelation.DESCENDANT
    return BrowserRelation.NONE
