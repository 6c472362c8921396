"""Flattening and traversal over a Node tree.

- ``flatten``: the visible pre-order sequence, honouring each node's own
  ``is_collapsed`` flag.  Pure and restartable.
- ``walk``: the full pre-order sequence, ignoring collapse state.
- ``visible_descendant_count``: the size of a root's visible block without
  allocating it.

The critical invariant: for any expanded root ``n``,
``visible_descendant_count(n) == len(flatten(n))``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from json_data_explorer.tree.nodes import Node

__all__ = ["NodeCollection", "flatten", "visible_descendant_count", "walk"]

# A single node, a CLASS value (key -> node), or any ordered run of nodes.
NodeCollection = Node | Mapping[str, Node] | Iterable[Node]


def _members(nodes: NodeCollection) -> Iterable[Node]:
    if isinstance(nodes, Node):
        return (nodes,)
    if isinstance(nodes, Mapping):
        return nodes.values()
    return nodes


def flatten(nodes: NodeCollection) -> list[Node]:
    """Return the visible nodes of ``nodes`` in pre-order.

    Each node is emitted, followed by the flattening of its children when it
    is an expanded root.  A collapsed root contributes only itself.

    Args:
        nodes: A node, a CLASS value mapping, or an iterable of nodes
            (for example the list of top-level roots or an ARRAY value).

    Returns:
        A new list; calling again on an unchanged tree returns an equal list.
    """
    flat: list[Node] = []
    _flatten_into(_members(nodes), flat)
    return flat


def _flatten_into(nodes: Iterable[Node], out: list[Node]) -> None:
    for node in nodes:
        out.append(node)
        if node.is_root and not node.is_collapsed:
            _flatten_into(node.children, out)


def visible_descendant_count(node: Node) -> int:
    """Count ``node`` plus every descendant visible beneath it.

    A collapsed child counts as 1; an expanded child contributes its own
    visible count.  ``node``'s own collapse flag is not consulted, so the
    result is the block size ``node`` occupies while expanded.
    """
    count = 1
    for child in node.children:
        count += 1 if child.is_collapsed else visible_descendant_count(child)
    return count


def walk(nodes: NodeCollection) -> Iterator[Node]:
    """Yield every node of ``nodes`` in pre-order, regardless of collapse state."""
    for node in _members(nodes):
        yield node
        yield from walk(node.children)
