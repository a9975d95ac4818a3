"""Copy and cut the selection as plain text."""

from __future__ import annotations

from typing import Callable, Optional

from mention_engine.buffer import TextBuffer

ClipboardSink = Callable[[str], None]


def copy_selection(
    buffer: TextBuffer, clipboard: Optional[ClipboardSink] = None
) -> Optional[str]:
    """Return the selected text with embeddings swapped for their display strings.

    A collapsed or missing selection copies nothing and returns ``None``.
    """

    selection = buffer.selection
    if not selection.is_valid or selection.is_collapsed:
        return None
    plain = buffer.to_plain_text(buffer.selected_text)
    if clipboard is not None:
        clipboard(plain)
    return plain


def cut_selection(
    buffer: TextBuffer, clipboard: Optional[ClipboardSink] = None
) -> Optional[str]:
    plain = copy_selection(buffer, clipboard)
    if plain is None:
        return None
    bounds = buffer.selection.normalized()
    buffer.replace_range(bounds.start, bounds.end, "", label="cut_selection")
    return plain


__all__ = ["ClipboardSink", "copy_selection", "cut_selection"]
