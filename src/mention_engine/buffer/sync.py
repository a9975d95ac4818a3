"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .state import EMPTY_RANGE, Selection, TextRange


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of the buffer (raw text keeps its placeholders)."""

    text: str
    selection: Selection = EMPTY_RANGE
    composing: TextRange = EMPTY_RANGE
    plain_text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How adapters exchange state with the buffer layer."""

    def mirror(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...

    def push_host_edit(self, mirror: BufferMirror) -> None:
        """Submit an external edit (IME commit, paste, host undo) to the buffer."""
        ...


__all__ = ["BufferMirror", "BufferSync"]
