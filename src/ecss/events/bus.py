"""Synchronous event bus connecting the host scene to the style pipeline."""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[[Any], None]


class EventBus:
    """Synchronous publish-subscribe bus.

    The host publishes scene changes (capabilities attached or removed,
    entities despawned) and the pipeline publishes its own progress.
    Listeners subscribe to one event type or to everything and are called
    in registration order, on the emitting thread, before ``emit`` returns.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Listener]] = {}
        self._global_listeners: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> None:
        """Call *callback* for every event of exactly *event_type*."""
        self._listeners.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: type, callback: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def on_all(self, callback: Listener) -> None:
        """Call *callback* for every event regardless of type."""
        self._global_listeners.append(callback)

    def emit(self, event: Any) -> None:
        for cb in list(self._global_listeners):
            cb(event)
        for cb in list(self._listeners.get(type(event), [])):
            cb(event)
