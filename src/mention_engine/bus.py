"""Synchronous event bus shared by a buffer and its observers."""

from __future__ import annotations

from typing import Callable, Dict

BUFFER_CHANGED = "buffer.changed"
MATCHING_KEYWORD = "matching.keyword"
MATCHING_FINISHED = "matching.finished"
EMBEDDING_INSERTED = "embedding.inserted"

Listener = Callable[[object], None]


class EditorBus:
    """Minimal observer registry; callbacks run on the emitting thread, in order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        listeners = self._subscribers.setdefault(event, [])
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, ())):
            callback(payload)


__all__ = [
    "EditorBus",
    "Listener",
    "BUFFER_CHANGED",
    "MATCHING_KEYWORD",
    "MATCHING_FINISHED",
    "EMBEDDING_INSERTED",
]
