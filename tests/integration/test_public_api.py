"""Integration tests for the public API surface.

All imports are from the top-level ``json_data_explorer`` package, never from
internal submodules.  Covers a full browse-and-search session over a mixed
document: building, collapsing, searching hidden values and navigating focus.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import json_data_explorer
from json_data_explorer import (
    DataExplorerStore,
    ExplorerConfig,
    MatchLocation,
    NodeType,
    SearchMode,
    flatten,
)


def _keys(store: DataExplorerStore) -> list[str]:
    return [n.key for n in store.display_nodes]


def test_version() -> None:
    assert json_data_explorer.__version__ == "0.1.0"


class TestBrowseSession:
    def test_full_document_is_displayed(self, mixed_document: dict[str, Any]) -> None:
        store = DataExplorerStore()
        store.build_nodes(mixed_document)
        assert len(store.display_nodes) == 21
        assert store.display_nodes == tuple(flatten(store.roots))

    def test_node_types(self, mixed_document: dict[str, Any]) -> None:
        store = DataExplorerStore()
        store.build_nodes(mixed_document)
        types = {n.key: n.node_type for n in store.roots}
        assert types["name"] == NodeType.PROPERTY
        assert types["address"] == NodeType.CLASS
        assert types["tags"] == NodeType.ARRAY

    def test_scalar_text(self, mixed_document: dict[str, Any]) -> None:
        store = DataExplorerStore()
        store.build_nodes(mixed_document)
        values = {n.key: n.display_value for n in store.roots}
        assert values["age"] == "30"
        assert values["active"] == "true"
        assert values["nickname"] == "null"
        assert values["address"] == ""

    def test_collapsed_document_shows_top_level_only(
        self, mixed_document: dict[str, Any]
    ) -> None:
        store = DataExplorerStore()
        store.build_nodes(mixed_document, is_all_collapsed=True)
        assert _keys(store) == list(mixed_document)
        assert store.are_all_collapsed()

    def test_expand_nested_array(self, mixed_document: dict[str, Any]) -> None:
        store = DataExplorerStore()
        store.build_nodes(mixed_document, is_all_collapsed=True)
        matrix = store.roots[6]

        store.expand_node(matrix)

        assert _keys(store)[6:9] == ["matrix", "0", "1"]
        assert store.display_nodes[7].is_collapsed is True
        assert not store.are_all_collapsed()
        assert not store.are_all_expanded()


class TestSearchSession:
    def test_search_covers_keys_in_preorder(
        self, mixed_document: dict[str, Any]
    ) -> None:
        store = DataExplorerStore()
        store.build_nodes(mixed_document)
        store.search("name")

        assert [m.node.path for m in store.search_results] == [
            ("name",),
            ("nickname",),
            ("friends", "0", "name"),
            ("friends", "1", "name"),
        ]
        assert all(m.location == MatchLocation.KEY for m in store.search_results)

    def test_search_hidden_value_reveals_it(
        self, mixed_document: dict[str, Any]
    ) -> None:
        scroller = MagicMock(spec=["scroll_to"])
        store = DataExplorerStore(scroll_controller=scroller)
        store.build_nodes(mixed_document, is_all_collapsed=True)

        store.search("carol")

        match = store.focused_search_result
        assert match is not None
        assert match.location == MatchLocation.VALUE
        assert match.text == "Carol"
        assert _keys(store)[-4:] == ["friends", "0", "1", "name"]
        scroller.scroll_to.assert_called_once_with(10)

    def test_json_spelling_is_searchable(self, mixed_document: dict[str, Any]) -> None:
        store = DataExplorerStore()
        store.build_nodes(mixed_document)

        store.search("null")
        assert [m.node.key for m in store.search_results] == ["nickname"]

        store.search("TRUE")
        assert [m.node.key for m in store.search_results] == ["active"]

    def test_regexp_groups(self, mixed_document: dict[str, Any]) -> None:
        store = DataExplorerStore(
            config=ExplorerConfig(
                search_mode=SearchMode.REGEXP, highlight_only_groups=True
            )
        )
        store.build_nodes(mixed_document)

        store.search(r"(\d)500")

        texts = [(m.node.key, m.text) for m in store.search_results]
        assert texts == [("zip", "7")]

    def test_navigation_cycles(self, mixed_document: dict[str, Any]) -> None:
        store = DataExplorerStore()
        store.build_nodes(mixed_document)
        store.search("name")

        seen = []
        for _ in range(len(store.search_results)):
            seen.append(store.search_node_focus_index)
            store.focus_next_search_result()

        assert seen == [0, 1, 2, 3]
        assert store.search_node_focus_index == 0
