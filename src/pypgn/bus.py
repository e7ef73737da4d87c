"""In-process message bus.

Host adapters expose analyzer output as named channels; listeners are
plain callables that receive each emitted payload.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

Listener = Callable[[Any], None]


class MessageBus(Protocol):
    """Structural bus interface the plugin subscribes to."""

    def on(self, channel: str, listener: Listener) -> None:
        ...

    def remove_listener(self, channel: str, listener: Listener) -> None:
        ...


class LocalBus:
    """Synchronous bus delivering payloads to listeners in registration order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, channel: str, listener: Listener) -> None:
        self._listeners.setdefault(channel, []).append(listener)

    def remove_listener(self, channel: str, listener: Listener) -> None:
        listeners = self._listeners.get(channel)
        if not listeners or listener not in listeners:
            return
        listeners.remove(listener)
        if not listeners:
            del self._listeners[channel]

    def listener_count(self, channel: str) -> int:
        return len(self._listeners.get(channel, ()))

    def emit(self, channel: str, payload: Any) -> None:
        # Copy so listeners may unsubscribe while being called.
        for listener in list(self._listeners.get(channel, ())):
            listener(payload)
