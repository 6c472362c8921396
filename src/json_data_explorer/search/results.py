"""SearchMatch, SearchState and text splitting for search results.

This module provides the immutable result types produced by the search
engine and consumed by the store and by highlight-painting collaborators.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum, auto

from json_data_explorer.tree.nodes import Node

__all__ = ["MatchLocation", "SearchMatch", "SearchState", "text_spans"]


class MatchLocation(StrEnum):
    """Which text of a node a match was found in."""

    KEY = auto()
    VALUE = auto()


@dataclass(frozen=True, slots=True)
class SearchMatch:
    """One located occurrence of a search term.

    Attributes:
        node:     The node whose text matched (compared by identity).
        location: KEY for ``node.key``; VALUE for ``node.display_value``.
        start:    Start offset of the match in the searched text.
        end:      End offset (exclusive).
    """

    node: Node
    location: MatchLocation
    start: int
    end: int

    @property
    def source_text(self) -> str:
        """The full text this match was found in."""
        if self.location == MatchLocation.KEY:
            return self.node.key
        return self.node.display_value

    @property
    def text(self) -> str:
        """The matched substring."""
        return self.source_text[self.start : self.end]


@dataclass(frozen=True, slots=True)
class SearchState:
    """Snapshot of the current search.

    Attributes:
        term:          The raw search term ("" when no search is active).
        matches:       Matches in tree pre-order, key before value per node.
        focused_index: Index into ``matches`` of the focused match, or None.
    """

    term: str = ""
    matches: tuple[SearchMatch, ...] = ()
    focused_index: int | None = None

    @property
    def focused_match(self) -> SearchMatch | None:
        if self.focused_index is None:
            return None
        return self.matches[self.focused_index]


def text_spans(text: str, spans: Iterable[tuple[int, int]]) -> list[tuple[str, bool]]:
    """Split ``text`` into ``(segment, is_match)`` pairs.

    ``spans`` must be non-overlapping and sorted by start offset, as produced
    by ``SearchMatcher.find_spans``.  Empty segments are omitted.

    Example::

        text_spans("firstField", [(5, 10)])
        # [("first", False), ("Field", True)]
    """
    segments: list[tuple[str, bool]] = []
    cursor = 0
    for start, end in spans:
        if start > cursor:
            segments.append((text[cursor:start], False))
        if end > start:
            segments.append((text[start:end], True))
        cursor = max(cursor, end)
    if cursor < len(text):
        segments.append((text[cursor:], False))
    return segments
