"""core/live_api/paths.py — Canonical path parser and index extraction.

A canonical path is a space-separated token sequence. Category tokens are
followed by an integer index and nest left-to-right, outer to inner::

    live_set tracks 0 devices 2 devices 1
    └─root─┘└─track 0─┘└device 2┘└device 1┘   (a device inside a rack)

    live_set return_tracks 1 devices 0
    live_set master_track
    live_set tracks 3 clip_slots 4 clip
    live_set scenes 7

The path is parsed once into a :class:`LomPath`; every index getter is a pure
projection of its segment tuple. A dimension with no matching token yields
``None``. Zero is a valid index and stays distinguishable from "absent".

Grammar
───────
::

    path     := root segment*
    root     := NAME
    segment  := NAME index?
    index    := DIGITS

Hosts sometimes report paths wrapped in double quotes; those are stripped
before parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from core.live_api.errors import MalformedEncodedValue

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

TRACKS = "tracks"
RETURN_TRACKS = "return_tracks"
MASTER_TRACK = "master_track"
SCENES = "scenes"
CLIP_SLOTS = "clip_slots"
DEVICES = "devices"
CLIPS = "clips"

PATH_VOCABULARY: frozenset[str] = frozenset(
    {TRACKS, RETURN_TRACKS, MASTER_TRACK, SCENES, CLIP_SLOTS, DEVICES, CLIPS}
)
"""Category tokens the index getters project on."""

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_INDEX_RE = re.compile(r"[0-9]+")


class TrackCategory(str, Enum):
    """Track category derived from a path."""

    REGULAR = "regular"
    RETURN = "return"
    MASTER = "master"


# ---------------------------------------------------------------------------
# Parsed path
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PathSegment:
    """One ``(token, index)`` step of a canonical path.

    ``index`` is ``None`` for tokens that address a single child
    (``master_track``, ``clip``, ``mixer_device``) or a whole collection.
    """

    token: str
    index: int | None = None

    def __str__(self) -> str:
        return self.token if self.index is None else f"{self.token} {self.index}"


@dataclass(frozen=True)
class LomPath:
    """A parsed canonical path."""

    root: str | None
    segments: tuple[PathSegment, ...]

    def __str__(self) -> str:
        parts = [self.root] if self.root else []
        parts.extend(str(s) for s in self.segments)
        return " ".join(parts)

    def contains(self, token: str) -> bool:
        """True if any segment uses ``token``."""
        return any(s.token == token for s in self.segments)

    def first_index(self, token: str) -> int | None:
        """Index following the first ``token`` segment, else ``None``."""
        for segment in self.segments:
            if segment.token == token:
                return segment.index
        return None

    def last_index(self, token: str) -> int | None:
        """Index following the last ``token`` segment, else ``None``."""
        for segment in reversed(self.segments):
            if segment.token == token:
                return segment.index
        return None

    @property
    def track_index(self) -> int | None:
        return self.first_index(TRACKS)

    @property
    def return_track_index(self) -> int | None:
        return self.first_index(RETURN_TRACKS)

    @property
    def scene_index(self) -> int | None:
        return self.first_index(SCENES)

    @property
    def clip_slot_index(self) -> int | None:
        return self.first_index(CLIP_SLOTS)

    @property
    def device_index(self) -> int | None:
        """Innermost device: the index after the *last* ``devices`` token."""
        return self.last_index(DEVICES)

    @property
    def category(self) -> TrackCategory | None:
        if self.contains(MASTER_TRACK):
            return TrackCategory.MASTER
        if self.contains(RETURN_TRACKS):
            return TrackCategory.RETURN
        if self.contains(TRACKS):
            return TrackCategory.REGULAR
        return None


EMPTY_PATH = LomPath(root=None, segments=())
"""Parse result for an empty path (an accessor pointing at nothing)."""


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class _PathParser:
    """Recursive-descent parser over a pre-split token list."""

    def __init__(self, text: str, tokens: list[str]) -> None:
        self._text = text
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _advance(self) -> str:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _fail(self, reason: str) -> MalformedEncodedValue:
        return MalformedEncodedValue("path", self._text, reason)

    def parse_path(self) -> LomPath:
        root = self._parse_name()
        segments: list[PathSegment] = []
        while self._peek() is not None:
            segments.append(self._parse_segment())
        return LomPath(root=root, segments=tuple(segments))

    def _parse_segment(self) -> PathSegment:
        token = self._parse_name()
        return PathSegment(token=token, index=self._parse_index())

    def _parse_name(self) -> str:
        token = self._peek()
        if token is None:
            raise self._fail("unexpected end of path")
        if not _NAME_RE.fullmatch(token):
            raise self._fail(f"expected a name at position {self._pos}, got {token!r}")
        return self._advance()

    def _parse_index(self) -> int | None:
        token = self._peek()
        if token is None or not _INDEX_RE.fullmatch(token):
            return None
        return int(self._advance())


@lru_cache(maxsize=1024)
def parse_path(path: str) -> LomPath:
    """Parse a canonical path string into a :class:`LomPath`.

    An empty (or whitespace/quote-only) path parses to :data:`EMPTY_PATH`.
    Results are memoized per path string.

    Raises:
        MalformedEncodedValue: If the path does not follow the grammar
            (e.g. a bare index where a name is expected).
    """
    text = path.strip().strip('"').strip()
    if not text:
        return EMPTY_PATH
    return _PathParser(path, text.split()).parse_path()


def is_canonical_path(value: str) -> bool:
    """True if ``value`` is a non-empty string that parses as a canonical path."""
    if not isinstance(value, str) or not value.strip().strip('"').strip():
        return False
    try:
        parse_path(value)
    except MalformedEncodedValue:
        return False
    return True
