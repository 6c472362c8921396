"""Tests for flatten, walk and visible_descendant_count.

Verifies:
- A fully expanded tree flattens to every node in pre-order
- Collapsed roots contribute only themselves
- flatten accepts a node, a CLASS value mapping, or an iterable of nodes
- visible_descendant_count matches the flattened block size for every root
- walk ignores collapse state
"""

from __future__ import annotations

from typing import Any

import pytest

from json_data_explorer.tree.builder import TreeBuilder
from json_data_explorer.tree.flatten import flatten, visible_descendant_count, walk
from json_data_explorer.tree.nodes import Node


@pytest.fixture
def roots(two_class_document: dict[str, Any]) -> list[Node]:
    return TreeBuilder().build(two_class_document)


def _find(nodes: list[Node], key: str) -> Node:
    return next(n for n in walk(nodes) if n.key == key)


class TestFlatten:
    def test_expanded_tree_flattens_to_every_node(self, roots: list[Node]) -> None:
        flat = flatten(roots)
        assert len(flat) == 48
        assert flat == list(walk(roots))

    def test_preorder_keys(self, roots: list[Node]) -> None:
        keys = [n.key for n in flatten(roots)]
        assert keys[0] == "firstClass"
        assert keys[1] == "firstClass.firstField"
        assert keys[4] == "firstClass.firstClassField"
        assert keys[8] == "firstClassField.innerClassField"
        assert keys[20] == "firstClass.array"
        assert keys[21:24] == ["0", "1", "2"]
        assert keys[24] == "secondClass"

    def test_collapsed_root_contributes_only_itself(self, roots: list[Node]) -> None:
        roots[0].is_collapsed = True
        flat = flatten(roots)
        assert len(flat) == 25
        assert flat[0] is roots[0]
        assert flat[1] is roots[1]

    def test_collapsed_descendants_keep_their_subtrees_hidden(
        self, roots: list[Node]
    ) -> None:
        _find(roots, "firstClass.firstClassField").is_collapsed = True
        assert len(flatten(roots)) == 41

    def test_accepts_single_node(self, roots: list[Node]) -> None:
        assert len(flatten(roots[0])) == 24

    def test_accepts_class_value_mapping(self, roots: list[Node]) -> None:
        assert len(flatten(roots[0].value)) == 23

    def test_accepts_array_value(self, roots: list[Node]) -> None:
        array = _find(roots, "firstClass.array")
        assert [n.key for n in flatten(array.value)] == ["0", "1", "2"]

    def test_is_restartable(self, roots: list[Node]) -> None:
        assert flatten(roots) == flatten(roots)

    def test_empty_input(self) -> None:
        assert flatten([]) == []


class TestVisibleDescendantCount:
    def test_property_counts_one(self, roots: list[Node]) -> None:
        assert visible_descendant_count(_find(roots, "firstClass.firstField")) == 1

    def test_expanded_root(self, roots: list[Node]) -> None:
        assert visible_descendant_count(roots[0]) == 24

    def test_collapsed_child_counts_one(self, roots: list[Node]) -> None:
        _find(roots, "firstClass.firstClassField").is_collapsed = True
        assert visible_descendant_count(roots[0]) == 17

    @pytest.mark.parametrize(
        "collapsed_key",
        [None, "firstClassField.innerClassField", "firstClass.array"],
    )
    def test_matches_flatten_for_every_root(
        self, roots: list[Node], collapsed_key: str | None
    ) -> None:
        if collapsed_key is not None:
            _find(roots, collapsed_key).is_collapsed = True
        for node in walk(roots):
            if node.is_root:
                expected = 1 + len(flatten(node.children))
                assert visible_descendant_count(node) == expected


class TestWalk:
    def test_ignores_collapse_state(self, roots: list[Node]) -> None:
        for node in walk(roots):
            if node.is_root:
                node.is_collapsed = True
        assert len(list(walk(roots))) == 48
        assert len(flatten(roots)) == 2
