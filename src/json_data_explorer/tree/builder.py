"""TreeBuilder: converts a decoded JSON document into a tree of Nodes.

Uses recursive dispatch to convert mappings, sequences and scalar values
into CLASS, ARRAY and PROPERTY nodes.  Every child sits one level deeper
than its parent and holds a weak back-reference to it.

Top-level policy:
    A mapping document yields one top-level node per entry, at depth 0.
    Any other document (a bare array or scalar) is wrapped in a one-entry
    mapping under ``root_key`` so the top level is always keyed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from json_data_explorer.tree.nodes import Node

__all__ = ["JsonValue", "TreeBuilder"]

# Type alias for decoded JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

# Sequence types treated as JSON arrays.  str/bytes are Sequences too and
# must stay scalars, so the set is closed rather than ``collections.abc``.
_ARRAY_TYPES = (list, tuple)


@dataclass
class TreeBuilder:
    """Converts any decoded JSON document into an ordered list of top-level nodes.

    The builder is total: values that are neither mappings nor arrays
    (including types JSON never produces, such as ``Decimal`` or ``datetime``)
    become opaque PROPERTY nodes.  Mapping keys that are not strings are
    stringified.

    Example::

        builder = TreeBuilder()
        roots = builder.build({"user": {"name": "John"}, "tags": ["a", "b"]})
        # roots: [CLASS("user", depth 0) -> PROPERTY("name", depth 1),
        #         ARRAY("tags", depth 0) -> PROPERTY("0"), PROPERTY("1")]
    """

    root_key: str = "data"

    def build(self, document: Any, *, is_all_collapsed: bool = False) -> list[Node]:
        """Convert a decoded document into its top-level nodes.

        Args:
            document:         A decoded JSON value.
            is_all_collapsed: Initial ``is_collapsed`` for every CLASS/ARRAY node.

        Returns:
            Top-level nodes in document order, each with ``parent`` None.
        """
        if not isinstance(document, Mapping):
            document = {self.root_key: document}

        return [
            self._build_node(str(key), value, 0, None, is_all_collapsed)
            for key, value in document.items()
        ]

    def _build_node(
        self,
        key: str,
        value: Any,
        tree_depth: int,
        parent: Node | None,
        is_all_collapsed: bool,
    ) -> Node:
        if isinstance(value, Mapping):
            node = Node.from_class(
                tree_depth=tree_depth,
                key=key,
                is_collapsed=is_all_collapsed,
                parent=parent,
            )
            node.set_children(
                {
                    str(k): self._build_node(
                        str(k), v, tree_depth + 1, node, is_all_collapsed
                    )
                    for k, v in value.items()
                }
            )
            return node

        if isinstance(value, _ARRAY_TYPES):
            node = Node.from_array(
                tree_depth=tree_depth,
                key=key,
                is_collapsed=is_all_collapsed,
                parent=parent,
            )
            node.set_children(
                [
                    self._build_node(
                        str(idx), item, tree_depth + 1, node, is_all_collapsed
                    )
                    for idx, item in enumerate(value)
                ]
            )
            return node

        return Node.from_property(
            tree_depth=tree_depth, key=key, value=value, parent=parent
        )
