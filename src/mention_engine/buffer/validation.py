"""Clamping helpers that keep host-provided offsets inside the text."""

from __future__ import annotations

from .state import EMPTY_RANGE, TextRange


def clamp_offset(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def clamp_range(text: str, start: int, end: int) -> TextRange:
    """Return ``[start, end)`` ordered and clamped to the text.

    Two negative offsets are the no-selection sentinel and resolve to a
    collapsed range at the end of the text.
    """

    if start < 0 and end < 0:
        return TextRange.collapsed(len(text))
    start = clamp_offset(text, start)
    end = clamp_offset(text, end)
    if start > end:
        start, end = end, start
    return TextRange(start, end)


def clamp_selection(text: str, selection: TextRange) -> TextRange:
    """Clamp a selection but keep the sentinel intact."""

    if not selection.is_valid:
        return EMPTY_RANGE
    return TextRange(
        clamp_offset(text, selection.start), clamp_offset(text, selection.end)
    )


__all__ = ["clamp_offset", "clamp_range", "clamp_selection"]
