"""High-level editing verbs built on the buffer."""

from .clipboard import ClipboardSink, copy_selection, cut_selection

__all__ = ["ClipboardSink", "copy_selection", "cut_selection"]
