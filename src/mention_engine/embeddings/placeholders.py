"""Placeholder code point allocation."""

from __future__ import annotations

from mention_engine.config import PRIVATE_USE_BASE, PRIVATE_USE_LIMIT
from mention_engine.runtime import telemetry


class PlaceholderExhaustedError(RuntimeError):
    """Raised when every code point of the private-use range has been issued."""

    def __init__(self, base: int, limit: int) -> None:
        super().__init__(
            f"Placeholder range U+{base:04X}..U+{limit:04X} exhausted; clear the buffer"
        )
        self.base = base
        self.limit = limit


def is_placeholder(char: str) -> bool:
    """Return ``True`` if ``char`` is a single code point from the placeholder range."""

    return len(char) == 1 and PRIVATE_USE_BASE <= ord(char) <= PRIVATE_USE_LIMIT


class PlaceholderAllocator:
    """Hands out unique placeholder characters, one buffer lifetime at a time.

    Identifiers increase strictly in allocation order until ``reset`` puts the
    counter back at ``base``. Allocators are owned by a single buffer and are
    never shared.
    """

    def __init__(self, base: int = PRIVATE_USE_BASE, limit: int = PRIVATE_USE_LIMIT) -> None:
        if not PRIVATE_USE_BASE <= base <= limit <= PRIVATE_USE_LIMIT:
            raise ValueError("allocator bounds must lie inside the private-use range")
        self.base = base
        self.limit = limit
        self._counter = base

    @property
    def issued(self) -> int:
        return self._counter - self.base

    def peek(self) -> str:
        return chr(self._counter)

    def next(self) -> str:
        if self._counter > self.limit:
            raise PlaceholderExhaustedError(self.base, self.limit)
        current = self._counter
        self._counter += 1
        return chr(current)

    def reset(self) -> None:
        issued = self.issued
        self._counter = self.base
        telemetry.record_event(
            "placeholder.reset", level="debug", data={"issued": issued}
        )


__all__ = ["PlaceholderAllocator", "PlaceholderExhaustedError", "is_placeholder"]
