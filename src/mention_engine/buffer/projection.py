"""Projections of buffer text: plain text, markup text and render segments.

Placeholders with a live embedding are replaced by a string (plain/markup)
or become their own segment (render). Dangling placeholders, whose entry
is gone from the store, vanish from every projection.

Substituted strings are padded with a single space on each side unless the
neighbouring character is already whitespace, so ``"hi" + @user + "bye"``
projects to ``"hi @user bye"``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional, Union

from mention_engine.embeddings import Embedding, EmbeddingStore, RenderContext, is_placeholder
from mention_engine.triggers import TriggerRegistry

Substitute = Callable[[Embedding], Optional[str]]


@dataclass(frozen=True, slots=True)
class TextSegment:
    text: str
    style: Any = None

    kind: Literal["text"] = field(default="text", init=False, repr=False)


@dataclass(frozen=True, slots=True)
class EmbeddingSegment:
    placeholder: str
    offset: int
    embedding: Embedding
    style: Any = None

    kind: Literal["embedding"] = field(default="embedding", init=False, repr=False)

    def render(self, *, with_composing: bool = False, host: Any = None) -> Any:
        context = RenderContext(style=self.style, with_composing=with_composing, host=host)
        return self.embedding.render(context)


Segment = Union[TextSegment, EmbeddingSegment]


def _display(embedding: Embedding) -> Optional[str]:
    return embedding.display


def project(text: str, store: EmbeddingStore, substitute: Substitute) -> str:
    out: list[str] = []
    pad_next = False
    for char in text:
        if is_placeholder(char):
            embedding = store.get(char)
            piece = substitute(embedding) if embedding is not None else None
            if not piece:
                continue
            if out and not out[-1][-1].isspace():
                out.append(" ")
            out.append(piece)
            pad_next = True
            continue
        if pad_next and not char.isspace():
            out.append(" ")
        pad_next = False
        out.append(char)
    return "".join(out)


def to_plain_text(text: str, store: EmbeddingStore) -> str:
    return project(text, store, _display)


def to_markup_text(text: str, store: EmbeddingStore, registry: TriggerRegistry) -> str:
    """Like ``to_plain_text`` but trigger-originated embeddings use the trigger's markup."""

    def substitute(embedding: Embedding) -> Optional[str]:
        if embedding.origin_trigger is not None:
            trigger = registry.get(embedding.origin_trigger)
            if trigger is not None and trigger.markup is not None:
                return trigger.markup(embedding.value)
        return embedding.display

    return project(text, store, substitute)


def build_segments(text: str, store: EmbeddingStore, *, style: Any = None) -> list[Segment]:
    segments: list[Segment] = []
    run_start = 0
    for index, char in enumerate(text):
        if not is_placeholder(char):
            continue
        if run_start < index:
            segments.append(TextSegment(text[run_start:index], style))
        run_start = index + 1
        embedding = store.get(char)
        if embedding is not None:
            segments.append(EmbeddingSegment(char, index, embedding, style))
    if run_start < len(text):
        segments.append(TextSegment(text[run_start:], style))
    return segments


__all__ = [
    "EmbeddingSegment",
    "Segment",
    "TextSegment",
    "build_segments",
    "project",
    "to_markup_text",
    "to_plain_text",
]
