"""Search subpackage: pattern compilation, node matching and result types."""

from json_data_explorer.search.matcher import SearchMatcher
from json_data_explorer.search.results import (
    MatchLocation,
    SearchMatch,
    SearchState,
    text_spans,
)

__all__ = ["MatchLocation", "SearchMatch", "SearchMatcher", "SearchState", "text_spans"]
