"""Collaborator protocols for json-data-explorer.

The store never renders anything itself.  It talks to the outside world
through two seams:

- ``Listener``: a zero-argument callable registered via ``add_listener``,
  invoked once per externally visible change.
- ``ScrollController``: any object with a ``scroll_to(index)`` method,
  asked to bring a display-list index into view when search focus moves.

Example::

    from json_data_explorer.protocols import ScrollController

    class PrintingScroller:
        def scroll_to(self, index: int) -> None:
            print(f"scroll to row {index}")

    assert isinstance(PrintingScroller(), ScrollController)  # structural
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

__all__ = ["Listener", "ScrollController"]

Listener = Callable[[], None]


@runtime_checkable
class ScrollController(Protocol):
    """Structural protocol for the scroll-to-index collaborator.

    ``index`` is a position in ``DataExplorerStore.display_nodes`` at the
    moment of the call.
    """

    def scroll_to(self, index: int) -> None: ...
