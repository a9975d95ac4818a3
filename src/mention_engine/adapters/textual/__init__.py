"""Textual host adapter for the mention engine."""

from .controller import TextualMentionAdapter, TextualUIHooks

__all__ = ["TextualMentionAdapter", "TextualUIHooks"]
