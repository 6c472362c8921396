"""Node dataclass and NodeType StrEnum for the explorer view-model tree.

A decoded JSON document is converted (by ``TreeBuilder``) into a tree of
``Node`` objects.  Each node is one key/value pair of an object or one
element of an array.

Ownership:
    A CLASS or ARRAY node exclusively owns its children through ``value``.
    Each child keeps a *weak* back-reference to its parent, so the parent
    link never keeps a discarded tree alive.
"""

from __future__ import annotations

import weakref
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from json_data_explorer.notifier import ChangeNotifier

if TYPE_CHECKING:
    from json_data_explorer.protocols import Listener

__all__ = ["Node", "NodeType", "stringify_scalar"]


class NodeType(StrEnum):
    """Enumeration of the three node variants.

    - PROPERTY -> "property" : A scalar value (number, string, bool, null).
    - CLASS    -> "class"    : A JSON object; ``value`` maps keys to child nodes.
    - ARRAY    -> "array"    : A JSON array; ``value`` is a list of child nodes.
    """

    PROPERTY = auto()
    CLASS = auto()
    ARRAY = auto()


def stringify_scalar(value: Any) -> str:
    """Return the canonical text of a scalar value.

    JSON spelling is used for the singletons: ``None`` -> ``"null"``,
    ``True``/``False`` -> ``"true"``/``"false"``.  Everything else goes
    through ``str()``.
    """
    # bool MUST be checked before the generic path: str(True) == "True"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(slots=True, eq=False, weakref_slot=True)
class Node(ChangeNotifier):
    """A node in the explorer view-model tree.

    Nodes compare by identity (``eq=False``): two nodes with the same key and
    value at different positions are different nodes.

    Attributes:
        key:            The JSON key; the stringified index for array elements.
        tree_depth:     Depth in the document.  Top-level entries are 0 and
                        every child is one deeper than its parent.
        node_type:      Which variant this node is (see NodeType).
        value:          Scalar for PROPERTY, ``dict[str, Node]`` for CLASS,
                        ``list[Node]`` for ARRAY.
        is_collapsed:   Whether this root hides its descendants.
        is_highlighted: Transient UI flag.
        is_focused:     Transient UI flag, set on the focused search match.
    """

    key: str
    tree_depth: int
    node_type: NodeType = NodeType.PROPERTY
    value: Any = field(default=None, repr=False)
    is_collapsed: bool = False
    is_highlighted: bool = False
    is_focused: bool = False
    _parent_ref: weakref.ReferenceType[Node] | None = field(
        default=None, init=False, repr=False
    )
    _listeners: list[Listener] = field(default_factory=list, init=False, repr=False)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_property(
        cls,
        *,
        tree_depth: int,
        key: str,
        value: Any,
        parent: Node | None = None,
    ) -> Node:
        """Build a PROPERTY node.  Properties are never collapsed at build time."""
        node = cls(key=key, tree_depth=tree_depth, value=value)
        node.set_parent(parent)
        return node

    @classmethod
    def from_class(
        cls,
        *,
        tree_depth: int,
        key: str,
        value: Mapping[str, Node] | None = None,
        is_collapsed: bool = False,
        parent: Node | None = None,
    ) -> Node:
        """Build a CLASS node, optionally adopting ``value`` as its children."""
        node = cls(
            key=key,
            tree_depth=tree_depth,
            node_type=NodeType.CLASS,
            value={},
            is_collapsed=is_collapsed,
        )
        node.set_parent(parent)
        if value is not None:
            node.set_children(value)
        return node

    @classmethod
    def from_array(
        cls,
        *,
        tree_depth: int,
        key: str,
        value: Sequence[Node] | None = None,
        is_collapsed: bool = False,
        parent: Node | None = None,
    ) -> Node:
        """Build an ARRAY node, optionally adopting ``value`` as its children."""
        node = cls(
            key=key,
            tree_depth=tree_depth,
            node_type=NodeType.ARRAY,
            value=[],
            is_collapsed=is_collapsed,
        )
        node.set_parent(parent)
        if value is not None:
            node.set_children(value)
        return node

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------

    @property
    def parent(self) -> Node | None:
        """The owning node, or None for a top-level root (or a discarded tree)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def set_parent(self, parent: Node | None) -> None:
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    def set_children(self, children: Mapping[str, Node] | Sequence[Node]) -> None:
        """Replace this root's children and point each child back at this node.

        Raises:
            TypeError: If this is a PROPERTY node, or if a CLASS node is given
                a sequence instead of a mapping.
        """
        if self.node_type == NodeType.PROPERTY:
            msg = f"Property node {self.key!r} cannot own children"
            raise TypeError(msg)

        if self.node_type == NodeType.CLASS:
            if not isinstance(children, Mapping):
                msg = f"Class node {self.key!r} requires a mapping of children"
                raise TypeError(msg)
            self.value = dict(children)
        else:
            if isinstance(children, Mapping):
                children = list(children.values())
            self.value = list(children)

        for child in self.children:
            child.set_parent(self)

    @property
    def children(self) -> tuple[Node, ...]:
        """Direct children in document order; empty for properties."""
        if self.node_type == NodeType.CLASS:
            return tuple(self.value.values())
        if self.node_type == NodeType.ARRAY:
            return tuple(self.value)
        return ()

    @property
    def children_count(self) -> int:
        if self.node_type == NodeType.PROPERTY:
            return 0
        return len(self.value)

    @property
    def path(self) -> tuple[str, ...]:
        """Keys from the top-level root down to (and including) this node."""
        keys: list[str] = []
        node: Node | None = self
        while node is not None:
            keys.append(node.key)
            node = node.parent
        return tuple(reversed(keys))

    # ------------------------------------------------------------------
    # Variant queries
    # ------------------------------------------------------------------

    @property
    def is_class(self) -> bool:
        return self.node_type == NodeType.CLASS

    @property
    def is_array(self) -> bool:
        return self.node_type == NodeType.ARRAY

    @property
    def is_root(self) -> bool:
        """True for nodes that can have children (CLASS or ARRAY)."""
        return self.node_type != NodeType.PROPERTY

    @property
    def display_value(self) -> str:
        """Canonical text of a property value; empty string for roots."""
        if self.is_root:
            return ""
        return stringify_scalar(self.value)

    # ------------------------------------------------------------------
    # Mutators (each notifies this node's listeners)
    # ------------------------------------------------------------------

    def highlight(self, is_highlighted: bool = True) -> None:
        """Set ``is_highlighted`` on this node and its entire subtree."""
        self.is_highlighted = is_highlighted
        for child in self.children:
            child.highlight(is_highlighted)
        self.notify_listeners()

    def focus(self, is_focused: bool = True) -> None:
        self.is_focused = is_focused
        self.notify_listeners()

    def collapse(self) -> None:
        self.is_collapsed = True
        self.notify_listeners()

    def expand(self) -> None:
        self.is_collapsed = False
        self.notify_listeners()
