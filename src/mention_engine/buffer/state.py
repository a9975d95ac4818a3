"""Selection, composing range and change tracking for buffers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open ``[start, end)`` offsets into the buffer text.

    ``(-1, -1)`` is the "no range" sentinel: no active selection (caret
    logically at the end of the text) or no composing region.
    """

    start: int
    end: int

    @classmethod
    def collapsed(cls, offset: int) -> "TextRange":
        return cls(offset, offset)

    @property
    def is_valid(self) -> bool:
        return self.start >= 0 and self.end >= 0

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end

    def normalized(self) -> "TextRange":
        if self.start <= self.end:
            return self
        return TextRange(self.end, self.start)

    def text_inside(self, text: str) -> str:
        bounds = self.normalized()
        return text[bounds.start : bounds.end]


EMPTY_RANGE = TextRange(-1, -1)

Selection = TextRange


@dataclass(slots=True)
class BufferState:
    """Mutable selection/composing info tied to a text version."""

    selection: Selection = EMPTY_RANGE
    composing: TextRange = EMPTY_RANGE
    version: int = 0

    def set_selection(self, selection: Selection) -> None:
        self.selection = selection

    def collapse_to(self, offset: int) -> None:
        self.selection = TextRange.collapsed(offset)

    def clear_composing(self) -> None:
        self.composing = EMPTY_RANGE


__all__ = ["TextRange", "Selection", "BufferState", "EMPTY_RANGE"]
