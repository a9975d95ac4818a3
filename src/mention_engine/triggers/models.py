"""Dataclasses describing triggers and active keyword matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from mention_engine.embeddings.models import Renderer

KeywordCallback = Callable[[str], None]
MarkupFunction = Callable[[Any], str]


@dataclass(frozen=True, slots=True)
class Trigger:
    """Callbacks attached to one trigger character.

    ``on_keyword_change`` receives the keyword typed after the trigger,
    ``builder`` renders values inserted through the trigger and ``markup``
    serializes them for ``TextBuffer.markup_text``.
    """

    on_keyword_change: KeywordCallback
    builder: Renderer
    markup: Optional[MarkupFunction] = None

    def __post_init__(self) -> None:
        if not callable(self.on_keyword_change):
            raise TypeError("on_keyword_change must be callable")
        if not callable(self.builder):
            raise TypeError("builder must be callable")
        if self.markup is not None and not callable(self.markup):
            raise TypeError("markup must be callable")


@dataclass(frozen=True, slots=True)
class TriggerMatch:
    """An accepted trigger match.

    ``start`` is the index of the trigger character and ``end`` the caret
    offset, so ``text[start + 1:end] == keyword``.
    """

    trigger_char: str
    keyword: str
    start: int
    end: int


__all__ = ["Trigger", "TriggerMatch", "KeywordCallback", "MarkupFunction"]
