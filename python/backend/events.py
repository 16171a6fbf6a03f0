"""Minimal synchronous observer used for change notifications."""

from __future__ import annotations

from collections.abc import Callable

Callback = Callable[[], None]


class Signal:
    """A list of zero-argument callbacks fired synchronously on ``emit``.

    Notifications carry no payload; subscribers query the object that owns
    the signal for the new value.  Dispatch walks a snapshot of the
    subscriber list, so callbacks may subscribe or unsubscribe while a
    notification is in flight.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._callbacks: list[Callback] = []

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, subscribers={len(self._callbacks)})"

    def __len__(self) -> int:
        return len(self._callbacks)

    def subscribe(self, callback: Callback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unsubscribe(self, callback: Callback) -> None:
        """Remove *callback*; unknown callbacks are ignored."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def clear(self) -> None:
        self._callbacks.clear()

    def emit(self) -> None:
        for callback in tuple(self._callbacks):
            callback()
