"""Tree subpackage for document-to-view-model conversion primitives.

Re-exports the public API for the tree module:
- Node: dataclass representing one key/value pair or array element
- NodeType: StrEnum of the three node variants (PROPERTY, CLASS, ARRAY)
- TreeBuilder: converts a decoded JSON document into top-level Nodes
- flatten / walk / visible_descendant_count: traversal helpers
"""

from json_data_explorer.tree.builder import TreeBuilder
from json_data_explorer.tree.flatten import flatten, visible_descendant_count, walk
from json_data_explorer.tree.nodes import Node, NodeType

__all__ = [
    "Node",
    "NodeType",
    "TreeBuilder",
    "flatten",
    "visible_descendant_count",
    "walk",
]
