"""JSON data explorer - expandable tree view-model with incremental search."""

from __future__ import annotations

from json_data_explorer.config import ExplorerConfig, SearchMode
from json_data_explorer.errors import (
    DataExplorerError,
    InvalidDocumentError,
    InvalidPatternError,
    PreconditionViolation,
)
from json_data_explorer.search import MatchLocation, SearchMatch, SearchState
from json_data_explorer.store import DataExplorerStore
from json_data_explorer.tree import Node, NodeType, TreeBuilder, flatten

__version__: str = "0.1.0"
__all__: list[str] = [
    "DataExplorerError",
    "DataExplorerStore",
    "ExplorerConfig",
    "InvalidDocumentError",
    "InvalidPatternError",
    "MatchLocation",
    "Node",
    "NodeType",
    "PreconditionViolation",
    "SearchMatch",
    "SearchMode",
    "SearchState",
    "TreeBuilder",
    "flatten",
]
