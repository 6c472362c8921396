"""SearchMatcher: compiles search terms and locates matches in a Node tree.

Every term, literal or regular expression, is compiled to a case-insensitive
``re.Pattern``.  Literal terms are escaped first, so both modes share one
matching path: ``finditer`` yields non-overlapping occurrences left to right.

Zero-width matches (for example ``a*`` against ``"xyz"``) carry no text to
highlight and are dropped.

Compiled patterns are kept in a per-instance ``LRUCache`` so incremental
search (one keystroke at a time, often revisiting earlier prefixes) does not
recompile the same term repeatedly.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from cachetools import LRUCache

from json_data_explorer.config import ExplorerConfig, SearchMode
from json_data_explorer.errors import InvalidPatternError
from json_data_explorer.search.results import MatchLocation, SearchMatch
from json_data_explorer.tree.nodes import Node

__all__ = ["SearchMatcher"]

logger = logging.getLogger(__name__)


class SearchMatcher:
    """Locates search-term occurrences in node keys and values.

    Each instance maintains its own ``LRUCache`` of compiled patterns keyed
    by ``(term, mode)``; two instances never share cache state.

    Example::

        matcher = SearchMatcher()
        matches = matcher.find_all("name", walk(roots))
        for m in matches:
            print(m.node.key, m.location, m.text)
    """

    def __init__(self, config: ExplorerConfig | None = None) -> None:
        self._config: ExplorerConfig = (
            config if config is not None else ExplorerConfig()
        )
        self._cache: LRUCache[tuple[str, SearchMode], re.Pattern[str]] = LRUCache(
            maxsize=self._config.pattern_cache_size
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> ExplorerConfig:
        return self._config

    @property
    def cache_size(self) -> int:
        """The current number of compiled patterns held in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(self, term: str) -> re.Pattern[str]:
        """Return the compiled, case-insensitive pattern for ``term``.

        Raises:
            InvalidPatternError: If REGEXP mode is active and ``term`` is not
                a valid regular expression.
        """
        mode = self._config.search_mode
        cache_key = (term, mode)
        pattern = self._cache.get(cache_key)
        if pattern is not None:
            return pattern

        source = term if mode == SearchMode.REGEXP else re.escape(term)
        try:
            pattern = re.compile(source, re.IGNORECASE)
        except re.error as exc:
            raise InvalidPatternError(term, exc) from exc

        self._cache[cache_key] = pattern
        return pattern

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def find_spans(self, pattern: re.Pattern[str], text: str) -> list[tuple[int, int]]:
        """Return the non-empty, non-overlapping match spans of ``pattern`` in ``text``.

        With ``highlight_only_groups`` enabled and a pattern that defines
        capture groups, each match contributes the spans of its participating
        groups instead of the whole match.  Nested groups are reduced to the
        outermost span so the result stays non-overlapping.
        """
        use_groups = self._config.highlight_only_groups and pattern.groups > 0
        spans: list[tuple[int, int]] = []

        for match in pattern.finditer(text):
            if not use_groups:
                if match.end() > match.start():
                    spans.append(match.span())
                continue

            group_spans = sorted(
                (
                    match.span(g)
                    for g in range(1, pattern.groups + 1)
                    if match.start(g) != -1 and match.end(g) > match.start(g)
                ),
                key=lambda span: (span[0], -span[1]),
            )
            for start, end in group_spans:
                if spans and start < spans[-1][1]:
                    continue
                spans.append((start, end))

        return spans

    def match_node(self, pattern: re.Pattern[str], node: Node) -> list[SearchMatch]:
        """Return the matches for a single node: key matches, then value matches.

        Root nodes (CLASS/ARRAY) are matched on their key only.
        """
        matches = [
            SearchMatch(node, MatchLocation.KEY, start, end)
            for start, end in self.find_spans(pattern, node.key)
        ]
        if not node.is_root:
            matches.extend(
                SearchMatch(node, MatchLocation.VALUE, start, end)
                for start, end in self.find_spans(pattern, node.display_value)
            )
        return matches

    def match_nodes(
        self, pattern: re.Pattern[str], nodes: Iterable[Node]
    ) -> list[SearchMatch]:
        """Return the matches for ``nodes`` in iteration order."""
        matches: list[SearchMatch] = []
        for node in nodes:
            matches.extend(self.match_node(pattern, node))
        return matches

    def find_all(self, term: str, nodes: Iterable[Node]) -> list[SearchMatch]:
        """Compile ``term`` and match it against every node in ``nodes``.

        An empty term matches nothing.

        Raises:
            InvalidPatternError: If ``term`` does not compile.
        """
        if not term:
            return []
        pattern = self.compile(term)
        matches = self.match_nodes(pattern, nodes)
        logger.debug("Search %r produced %d matches", term, len(matches))
        return matches
