"""Exception taxonomy for json-data-explorer.

Only ``InvalidPatternError`` is raised in practice: the tree builder is total
(unknown values become opaque scalar properties) and the store's mutating
operations treat wrong-state calls as silent no-ops.
"""

from __future__ import annotations

import re

__all__ = [
    "DataExplorerError",
    "InvalidDocumentError",
    "InvalidPatternError",
    "PreconditionViolation",
]


class DataExplorerError(Exception):
    """Base class for every error raised by json-data-explorer."""


class InvalidDocumentError(DataExplorerError, TypeError):
    """A document value could not be classified as a property, class or array."""


class InvalidPatternError(DataExplorerError, ValueError):
    """A search term could not be compiled into a regular expression.

    Attributes:
        pattern: The raw search term that failed to compile.
        error:   The underlying ``re.error`` raised by the regex engine.
    """

    def __init__(self, pattern: str, error: re.error) -> None:
        super().__init__(f"Invalid search pattern {pattern!r}: {error}")
        self.pattern = pattern
        self.error = error


class PreconditionViolation(DataExplorerError):
    """A collapse/expand call targeted a node in the wrong state or of the wrong kind.

    Store operations never raise this; it names the condition under which
    they return without changing anything.
    """
