"""ChangeNotifier: minimal synchronous observer mixin.

Shared by ``Node`` (per-node changes) and ``DataExplorerStore`` (display
list and search changes).  The mixin declares no slots of its own; the
concrete class provides a ``_listeners`` list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from json_data_explorer.protocols import Listener

__all__ = ["ChangeNotifier"]


class ChangeNotifier:
    """Mixin providing listener registration and synchronous notification."""

    __slots__ = ()

    _listeners: list[Listener]

    @property
    def has_listeners(self) -> bool:
        """True when at least one listener is registered."""
        return bool(self._listeners)

    def add_listener(self, listener: Listener) -> None:
        """Register ``listener``; it is called once per notification."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister ``listener``.  Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify_listeners(self) -> None:
        """Call every registered listener in registration order."""
        # Iterate over a copy so listeners may unregister themselves.
        for listener in list(self._listeners):
            listener()
