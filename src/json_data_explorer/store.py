"""DataExplorerStore: owner of the node tree, the display list and the search state.

This is the central wiring layer between the tree primitives and a
rendering collaborator.  It converts a decoded document into a Node tree,
keeps the display list (the visible, linearised part of the tree) in sync
with collapse/expand operations, and runs searches over the whole tree.

Architecture:
- build_nodes() replaces the tree wholesale and flattens it once.
- collapse_node()/expand_node() splice the display list locally: collapse
  removes exactly ``visible_descendant_count(node) - 1`` entries after the
  node; expand inserts ``flatten(node.children)`` after it.  Descendants keep
  their own ``is_collapsed`` flags across an ancestor's collapse/expand.
- collapse_all()/expand_all() flip every root flag in place and re-flatten.
- search() scans ``all_nodes`` (full pre-order, visibility ignored).  Focus is
  tracked by match index and resolved to a display index by node identity at
  the moment of scrolling, so display-list splices never stale it.
- Every public mutator produces at most one listener notification.  Internal
  sub-steps run inside ``batch_notifications()``.
- ``display_nodes`` is a tuple snapshot; the store never mutates a sequence
  it has handed out.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from json_data_explorer.config import ExplorerConfig
from json_data_explorer.errors import InvalidPatternError
from json_data_explorer.notifier import ChangeNotifier
from json_data_explorer.search.matcher import SearchMatcher
from json_data_explorer.search.results import SearchMatch, SearchState
from json_data_explorer.tree.builder import TreeBuilder
from json_data_explorer.tree.flatten import flatten, visible_descendant_count, walk

if TYPE_CHECKING:
    from json_data_explorer.protocols import Listener, ScrollController
    from json_data_explorer.tree.nodes import Node

__all__ = ["DataExplorerStore"]

logger = logging.getLogger(__name__)


class DataExplorerStore(ChangeNotifier):
    """View-model store for an expandable JSON tree with incremental search.

    Example::

        from json_data_explorer import DataExplorerStore

        store = DataExplorerStore()
        store.add_listener(lambda: print(len(store.display_nodes)))
        store.build_nodes({"user": {"name": "Alice"}})   # prints 2
        store.collapse_node(store.display_nodes[0])      # prints 1
        store.search("alice")
        print(store.focused_search_result.node.key)      # "name"
    """

    def __init__(
        self,
        config: ExplorerConfig | None = None,
        scroll_controller: ScrollController | None = None,
    ) -> None:
        """Initialise an empty store.

        Args:
            config: Store and search parameters.  Defaults to ``ExplorerConfig()``.
            scroll_controller: Collaborator asked to scroll to a display index
                whenever search focus moves.  Optional.
        """
        self._config: ExplorerConfig = (
            config if config is not None else ExplorerConfig()
        )
        self._builder = TreeBuilder(root_key=self._config.root_key)
        self._matcher = SearchMatcher(self._config)
        self.scroll_controller = scroll_controller

        self._listeners: list[Listener] = []
        self._batch_depth = 0
        self._pending_notification = False

        self._roots: list[Node] = []
        self._all_nodes: tuple[Node, ...] = ()
        self._display_nodes: list[Node] = []
        self._display_snapshot: tuple[Node, ...] | None = None

        self._search = SearchState()
        self._search_error: InvalidPatternError | None = None
        self._search_generation = 0

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def config(self) -> ExplorerConfig:
        return self._config

    @property
    def roots(self) -> tuple[Node, ...]:
        """Top-level nodes of the current tree."""
        return tuple(self._roots)

    @property
    def all_nodes(self) -> tuple[Node, ...]:
        """Every node of the current tree in pre-order, visible or not."""
        return self._all_nodes

    @property
    def display_nodes(self) -> tuple[Node, ...]:
        """Snapshot of the display list.  Index ``i`` is on-screen row ``i``."""
        if self._display_snapshot is None:
            self._display_snapshot = tuple(self._display_nodes)
        return self._display_snapshot

    @property
    def search_term(self) -> str:
        return self._search.term

    @property
    def search_results(self) -> tuple[SearchMatch, ...]:
        return self._search.matches

    @property
    def search_node_focus_index(self) -> int | None:
        """Index into ``search_results`` of the focused match, or None."""
        return self._search.focused_index

    @property
    def focused_search_result(self) -> SearchMatch | None:
        return self._search.focused_match

    @property
    def search_error(self) -> InvalidPatternError | None:
        """The error from the last search if its pattern was invalid, else None."""
        return self._search_error

    def get_node_index(self, node: Node) -> int | None:
        """Return ``node``'s position in the display list, or None if hidden."""
        try:
            return self._display_nodes.index(node)
        except ValueError:
            return None

    def are_all_expanded(self) -> bool:
        """True when no CLASS/ARRAY node in the tree is collapsed."""
        return all(not node.is_collapsed for node in self._all_nodes if node.is_root)

    def are_all_collapsed(self) -> bool:
        """True when every CLASS/ARRAY node in the tree is collapsed."""
        return all(node.is_collapsed for node in self._all_nodes if node.is_root)

    # ------------------------------------------------------------------
    # Notification batching
    # ------------------------------------------------------------------

    @contextmanager
    def batch_notifications(self) -> Iterator[None]:
        """Coalesce notifications raised inside the block into at most one.

        Batches nest; listeners are called when the outermost block exits,
        and only if something inside it requested a notification.
        """
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._pending_notification:
                self._pending_notification = False
                self.notify_listeners()

    def _changed(self) -> None:
        if self._batch_depth:
            self._pending_notification = True
        else:
            self.notify_listeners()

    def _set_display_nodes(self, nodes: list[Node]) -> None:
        self._display_nodes = nodes
        self._display_snapshot = None

    # ------------------------------------------------------------------
    # Tree operations
    # ------------------------------------------------------------------

    def build_nodes(self, document: Any, *, is_all_collapsed: bool = False) -> None:
        """Replace the tree with one built from ``document`` and notify once.

        The previous tree, display list and search state are discarded, and
        any in-flight ``search_async`` is cancelled.

        Args:
            document:         A decoded JSON value.
            is_all_collapsed: When True, every CLASS/ARRAY node starts
                collapsed and only the top-level nodes are displayed.
        """
        roots = self._builder.build(document, is_all_collapsed=is_all_collapsed)

        self._search_generation += 1
        self._roots = roots
        self._all_nodes = tuple(walk(roots))
        self._set_display_nodes(flatten(roots))
        self._search = SearchState()
        self._search_error = None

        logger.debug(
            "Built %d nodes (%d displayed)",
            len(self._all_nodes),
            len(self._display_nodes),
        )
        self._changed()

    def collapse_node(self, node: Node) -> None:
        """Hide ``node``'s descendants from the display list.

        No-op (and no notification) unless ``node`` is an expanded CLASS/ARRAY
        node currently present in the display list.
        """
        if not node.is_root or node.is_collapsed:
            return
        index = self.get_node_index(node)
        if index is None:
            logger.debug("collapse_node(%r) ignored: node is not displayed", node.key)
            return

        span = visible_descendant_count(node)
        del self._display_nodes[index + 1 : index + span]
        self._display_snapshot = None

        logger.debug("Collapsed %r: removed %d nodes", node.key, span - 1)
        node.collapse()
        self._changed()

    def expand_node(self, node: Node) -> None:
        """Show ``node``'s children, honouring each descendant's own collapse flag.

        No-op (and no notification) unless ``node`` is a collapsed CLASS/ARRAY
        node currently present in the display list.
        """
        if not node.is_root or not node.is_collapsed:
            return
        index = self.get_node_index(node)
        if index is None:
            logger.debug("expand_node(%r) ignored: node is not displayed", node.key)
            return

        subtree = flatten(node.children)
        self._display_nodes[index + 1 : index + 1] = subtree
        self._display_snapshot = None

        logger.debug("Expanded %r: inserted %d nodes", node.key, len(subtree))
        node.expand()
        self._changed()

    def collapse_all(self) -> None:
        """Collapse every CLASS/ARRAY node; only top-level nodes stay displayed."""
        self._set_all_collapsed(True)

    def expand_all(self) -> None:
        """Expand every CLASS/ARRAY node; the whole tree is displayed."""
        self._set_all_collapsed(False)

    def _set_all_collapsed(self, is_collapsed: bool) -> None:
        # Only flipped nodes notify their own listeners.
        for node in self._all_nodes:
            if not node.is_root or node.is_collapsed == is_collapsed:
                continue
            if is_collapsed:
                node.collapse()
            else:
                node.expand()
        self._set_display_nodes(flatten(self._roots))
        self._changed()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, term: str) -> None:
        """Search every node's key and value for ``term`` and notify once.

        An empty term clears the results.  An invalid regular expression is
        not raised: results are cleared, the error is exposed through
        ``search_error`` and a warning is logged.  When the search finds
        anything, the first match is focused and scrolled to.  With
        ``config.expand_to_focused`` set (the default), focusing a hidden
        match expands its collapsed ancestors, so a search can change the
        display list.
        """
        self._search_generation += 1
        try:
            matches = self._matcher.find_all(term, self._all_nodes)
        except InvalidPatternError as exc:
            self._install_search(term, [], exc)
            return
        self._install_search(term, matches, None)

    async def search_async(self, term: str) -> None:
        """Cooperative variant of ``search`` for large trees.

        Scans ``config.search_chunk_size`` nodes between yields to the event
        loop.  A later ``search``, ``search_async`` or ``build_nodes`` call
        supersedes this one; superseded results are discarded, never applied.
        """
        self._search_generation += 1
        generation = self._search_generation

        if not term:
            self._install_search(term, [], None)
            return
        try:
            pattern = self._matcher.compile(term)
        except InvalidPatternError as exc:
            self._install_search(term, [], exc)
            return

        nodes = self._all_nodes
        chunk_size = self._config.search_chunk_size
        matches: list[SearchMatch] = []
        for start in range(0, len(nodes), chunk_size):
            await asyncio.sleep(0)
            if generation != self._search_generation:
                logger.debug("Discarding superseded search for %r", term)
                return
            matches.extend(
                self._matcher.match_nodes(pattern, nodes[start : start + chunk_size])
            )

        await asyncio.sleep(0)
        if generation != self._search_generation:
            logger.debug("Discarding superseded search for %r", term)
            return
        self._install_search(term, matches, None)

    def _install_search(
        self,
        term: str,
        matches: list[SearchMatch],
        error: InvalidPatternError | None,
    ) -> None:
        if error is not None:
            logger.warning("%s", error)

        with self.batch_notifications():
            previous = self._search.focused_match
            if previous is not None:
                previous.node.focus(False)

            self._search = SearchState(term=term, matches=tuple(matches))
            self._search_error = error
            if matches:
                self._focus(0)
            self._changed()

    def focus_next_search_result(self) -> None:
        """Move focus to the next match, wrapping to the first after the last."""
        self._move_focus(1)

    def focus_previous_search_result(self) -> None:
        """Move focus to the previous match, wrapping to the last before the first."""
        self._move_focus(-1)

    def _move_focus(self, step: int) -> None:
        count = len(self._search.matches)
        if count == 0:
            return

        current = self._search.focused_index
        if current is None:
            index = 0 if step > 0 else count - 1
        else:
            index = (current + step) % count

        with self.batch_notifications():
            previous = self._search.focused_match
            if previous is not None:
                previous.node.focus(False)
            self._focus(index)
            self._changed()

    def _focus(self, index: int) -> None:
        self._search = replace(self._search, focused_index=index)
        node = self._search.matches[index].node
        node.focus(True)

        if self._config.expand_to_focused:
            self._reveal(node)

        display_index = self.get_node_index(node)
        if display_index is not None and self.scroll_controller is not None:
            self.scroll_controller.scroll_to(display_index)

    def _reveal(self, node: Node) -> None:
        """Expand every collapsed ancestor of ``node``, outermost first."""
        ancestors: list[Node] = []
        parent = node.parent
        while parent is not None:
            ancestors.append(parent)
            parent = parent.parent
        for ancestor in reversed(ancestors):
            self.expand_node(ancestor)
