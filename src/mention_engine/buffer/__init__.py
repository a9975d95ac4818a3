"""Text buffer model, selection state and text projections."""

from .buffer import BufferDelta, TextBuffer
from .projection import (
    EmbeddingSegment,
    Segment,
    TextSegment,
    build_segments,
    to_markup_text,
    to_plain_text,
)
from .state import EMPTY_RANGE, BufferState, Selection, TextRange
from .sync import BufferMirror, BufferSync
from .validation import clamp_offset, clamp_range, clamp_selection

__all__ = [
    "BufferDelta",
    "BufferMirror",
    "BufferState",
    "BufferSync",
    "EMPTY_RANGE",
    "EmbeddingSegment",
    "Segment",
    "Selection",
    "TextBuffer",
    "TextRange",
    "TextSegment",
    "build_segments",
    "clamp_offset",
    "clamp_range",
    "clamp_selection",
    "to_markup_text",
    "to_plain_text",
]
