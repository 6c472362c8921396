"""ExplorerConfig and SearchMode for data explorer configuration.

ExplorerConfig is a frozen (immutable) dataclass holding the store and
search parameters.  SearchMode selects how a search term is interpreted:
as a literal substring or as a regular expression.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["ExplorerConfig", "SearchMode"]


class SearchMode(StrEnum):
    """How a search term is matched against node keys and values.

    - LITERAL: Case-insensitive substring match.
    - REGEXP:  Case-insensitive regular-expression search.
    """

    LITERAL = auto()
    REGEXP = auto()


@dataclass(frozen=True, slots=True)
class ExplorerConfig:
    """Immutable configuration for a ``DataExplorerStore``.

    Attributes:
        root_key: Synthetic key used to wrap a top-level document that is not
            a mapping (a bare array or scalar).  Defaults to ``"data"``.
        search_mode: How search terms are interpreted.
        highlight_only_groups: When True (REGEXP mode only), each regex match
            contributes the spans of its capture groups instead of the whole
            match.  Patterns without groups fall back to whole-match spans.
        expand_to_focused: When True, focusing a search match whose node is
            hidden under collapsed ancestors expands those ancestors first.
        pattern_cache_size: Capacity of the LRU cache of compiled patterns.
        search_chunk_size: Number of nodes scanned between event-loop yields
            by ``DataExplorerStore.search_async``.
    """

    root_key: str = "data"
    search_mode: SearchMode = SearchMode.LITERAL
    highlight_only_groups: bool = False
    expand_to_focused: bool = True
    pattern_cache_size: int = 128
    search_chunk_size: int = 500

    def __post_init__(self) -> None:
        if not self.root_key:
            msg = "root_key must be a non-empty string"
            raise ValueError(msg)
        if self.pattern_cache_size < 1:
            msg = f"pattern_cache_size must be >= 1, got {self.pattern_cache_size}"
            raise ValueError(msg)
        if self.search_chunk_size < 1:
            msg = f"search_chunk_size must be >= 1, got {self.search_chunk_size}"
            raise ValueError(msg)
        if self.highlight_only_groups and self.search_mode != SearchMode.REGEXP:
            msg = "highlight_only_groups requires search_mode=SearchMode.REGEXP"
            raise ValueError(msg)
