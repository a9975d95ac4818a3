"""Placeholder -> embedding mapping."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from .models import Embedding


class EmbeddingStore:
    """Owns every embedding inserted into one buffer, keyed by placeholder.

    Entries are kept after their placeholder leaves the text so that a host
    undo can bring it back; the store only shrinks on ``clear``. A buffer
    that is never cleared grows with every insertion.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Embedding] = {}

    def put(self, placeholder: str, embedding: Embedding) -> None:
        self._entries[placeholder] = embedding

    def get(self, placeholder: str) -> Optional[Embedding]:
        return self._entries.get(placeholder)

    def __contains__(self, placeholder: object) -> bool:
        return placeholder in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["EmbeddingStore"]
