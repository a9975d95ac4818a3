"""Text buffer with placeholder-embedded rich values and trigger matching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Optional, Union

from mention_engine.bus import BUFFER_CHANGED, EMBEDDING_INSERTED, EditorBus
from mention_engine.config import EngineConfig
from mention_engine.embeddings import (
    BoundEmbedding,
    DirectEmbedding,
    Embedding,
    EmbeddingStore,
    PlaceholderAllocator,
    is_placeholder,
)
from mention_engine.runtime import telemetry
from mention_engine.triggers import Trigger, TriggerMatcher, TriggerRegistry, is_word_char

from .projection import Segment, build_segments, to_markup_text, to_plain_text
from .state import BufferState, Selection, TextRange
from .sync import BufferMirror
from .validation import clamp_range, clamp_selection


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selection: Selection
    composing: TextRange
    label: str


class TextBuffer:
    """Mutable text whose placeholder characters stand in for embeddings.

    Every text change goes through ``replace_range``; after each change the
    buffer emits ``buffer.changed`` on its bus and the trigger matcher
    re-scans from the caret. All work happens synchronously on the calling
    thread; a buffer must be owned by one thread at a time.
    """

    def __init__(
        self,
        triggers: Union[TriggerRegistry, Mapping[str, Trigger], None] = None,
        *,
        name: str = "default",
        config: Optional[EngineConfig] = None,
        bus: Optional[EditorBus] = None,
        on_finish_matching: Optional[Callable[[], None]] = None,
    ) -> None:
        self.name = name
        self.config = config or EngineConfig()
        if isinstance(triggers, TriggerRegistry):
            self.registry = triggers
        else:
            self.registry = TriggerRegistry(triggers or {}, logger_name="mention_engine.triggers")
        self.allocator = PlaceholderAllocator(self.config.placeholder_base)
        self.store = EmbeddingStore()
        self.state = BufferState()
        self.bus = bus or EditorBus()
        self.matcher = TriggerMatcher(
            self.registry,
            bus=self.bus,
            on_finish_matching=on_finish_matching,
            max_match_length=self.config.max_match_length,
        )
        self._text = ""
        self.bus.subscribe(BUFFER_CHANGED, self._rescan)

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> Selection:
        return self.state.selection

    @property
    def composing(self) -> TextRange:
        return self.state.composing

    @property
    def version(self) -> int:
        return self.state.version

    def replace_range(
        self,
        start: int,
        end: int,
        replacement: str,
        *,
        label: str = "replace_range",
        selection: Optional[Selection] = None,
        composing: Optional[TextRange] = None,
    ) -> BufferDelta:
        """Splice ``replacement`` into ``[start, end)``.

        Offsets are clamped to the text; a pair of negative offsets means the
        end of the text. The caret collapses right after the inserted text
        unless an explicit ``selection`` is supplied (host edits).
        Placeholder characters in ``replacement`` without a live store entry
        are dropped, so only allocator-issued placeholders reach the text.
        """

        replacement = self._strip_unknown_placeholders(replacement)
        with telemetry.span(
            f"buffer::{label}",
            logger_name="mention_engine.buffer",
            component="buffer",
            metadata={"buffer": self.name},
        ):
            bounds = clamp_range(self._text, start, end)
            self._text = self._text[: bounds.start] + replacement + self._text[bounds.end :]
            if selection is None:
                self.state.collapse_to(bounds.start + len(replacement))
            else:
                self.state.set_selection(clamp_selection(self._text, selection))
            if composing is None:
                self.state.clear_composing()
            else:
                self.state.composing = clamp_selection(self._text, composing)
            self.state.version += 1
            delta = self._delta(label)
        self.bus.emit(BUFFER_CHANGED, delta)
        return delta

    def replace_selection(self, replacement: str, *, label: str = "replace_selection") -> BufferDelta:
        bounds = self._selection_bounds()
        return self.replace_range(bounds.start, bounds.end, replacement, label=label)

    def delete_range(self, start: int, end: int) -> BufferDelta:
        return self.replace_range(start, end, "", label="delete_range")

    def set_selection(self, start: int, end: Optional[int] = None) -> BufferDelta:
        """Move the caret (``end`` omitted) or select ``[start, end)``; re-scans."""

        target = TextRange(start, start if end is None else end)
        self.state.set_selection(clamp_selection(self._text, target))
        delta = self._delta("set_selection")
        self.bus.emit(BUFFER_CHANGED, delta)
        return delta

    def insert_embedding(self, embedding: Embedding) -> str:
        """Insert ``embedding`` at the selection and return its placeholder."""

        placeholder = self.allocator.next()
        self.store.put(placeholder, embedding)
        delta = self.replace_selection(placeholder, label="insert_embedding")
        self._announce(placeholder, embedding, delta)
        return placeholder

    def insert_renderable(
        self, value: Any, renderable: Any, *, display: Optional[str] = None
    ) -> str:
        return self.insert_embedding(
            DirectEmbedding(renderable=renderable, value=value, display=display)
        )

    def insert_triggered_value(
        self,
        trigger_char: str,
        value: Any,
        *,
        remove_prefix_match: Optional[bool] = None,
        suffix_space: Optional[bool] = None,
        display: Optional[str] = None,
    ) -> Optional[str]:
        """Insert ``value`` rendered by the trigger registered for ``trigger_char``.

        Unknown triggers are ignored and ``None`` is returned. With
        ``remove_prefix_match`` and a collapsed caret, the text from the last
        ``trigger_char`` before the caret is replaced as well, removing the
        typed trigger and keyword. ``suffix_space`` appends a space so the
        next character starts a new word.
        """

        trigger = self.registry.get(trigger_char)
        if trigger is None:
            telemetry.record_event(
                "trigger.ignored", level="debug", data={"trigger": trigger_char}
            )
            return None
        if remove_prefix_match is None:
            remove_prefix_match = self.config.remove_prefix_match
        if suffix_space is None:
            suffix_space = self.config.suffix_space

        placeholder = self.allocator.next()
        embedding = BoundEmbedding(
            value=value,
            renderer=trigger.builder,
            display=display,
            origin_trigger=trigger_char,
        )
        self.store.put(placeholder, embedding)

        target = self._selection_bounds()
        if remove_prefix_match and target.is_collapsed:
            index = self._text.rfind(trigger_char, 0, target.start)
            if index != -1:
                target = TextRange(index, target.start)

        replacement = placeholder + (" " if suffix_space else "")
        delta = self.replace_range(
            target.start, target.end, replacement, label="insert_triggered_value"
        )
        self._announce(placeholder, embedding, delta)
        return placeholder

    def insert_trigger_char(self, char: str) -> BufferDelta:
        """Type ``char`` at the caret, prefixing a space when it would land mid-word."""

        bounds = self._selection_bounds()
        prefix = ""
        if bounds.start > 0 and is_word_char(self._text[bounds.start - 1]):
            prefix = " "
        return self.replace_range(
            bounds.start, bounds.end, prefix + char, label="insert_trigger_char"
        )

    def clear(self) -> BufferDelta:
        """Empty the text, restart placeholder numbering and drop all embeddings."""

        self.allocator.reset()
        self.store.clear()
        return self.replace_range(0, len(self._text), "", label="clear")

    @property
    def plain_text(self) -> str:
        return to_plain_text(self._text, self.store)

    @property
    def markup_text(self) -> str:
        return to_markup_text(self._text, self.store, self.registry)

    @property
    def selected_text(self) -> str:
        if not self.selection.is_valid:
            return ""
        return self.selection.text_inside(self._text)

    def to_plain_text(self, text: Optional[str] = None) -> str:
        return to_plain_text(self._text if text is None else text, self.store)

    def to_markup_text(self, text: Optional[str] = None) -> str:
        return to_markup_text(self._text if text is None else text, self.store, self.registry)

    def segments(self, *, style: Any = None) -> list[Segment]:
        return build_segments(self._text, self.store, style=style)

    def embedding_for(self, placeholder: str) -> Optional[Embedding]:
        return self.store.get(placeholder)

    def iter_embeddings(self) -> Iterator[tuple[int, str, Embedding]]:
        """Yield ``(offset, placeholder, embedding)`` for live placeholders in text order."""

        for offset, char in enumerate(self._text):
            if not is_placeholder(char):
                continue
            embedding = self.store.get(char)
            if embedding is not None:
                yield offset, char, embedding

    def values_for_trigger(self, trigger_char: str) -> list[Any]:
        return [
            embedding.value
            for _, _, embedding in self.iter_embeddings()
            if embedding.origin_trigger == trigger_char
        ]

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self._text,
            selection=self.selection,
            composing=self.composing,
            plain_text=self.plain_text,
            attributes={"buffer": self.name, "version": str(self.version), **(attributes or {})},
        )

    def push_host_edit(self, mirror: BufferMirror) -> Optional[BufferDelta]:
        """Apply a host widget's value as one minimal ``replace_range``."""

        if mirror.text == self._text:
            if mirror.selection == self.selection and mirror.composing == self.composing:
                return None
            self.state.composing = clamp_selection(self._text, mirror.composing)
            return self.set_selection(mirror.selection.start, mirror.selection.end)

        old, new = self._text, mirror.text
        prefix = 0
        limit = min(len(old), len(new))
        while prefix < limit and old[prefix] == new[prefix]:
            prefix += 1
        suffix = 0
        while (
            suffix < limit - prefix
            and old[len(old) - 1 - suffix] == new[len(new) - 1 - suffix]
        ):
            suffix += 1
        return self.replace_range(
            prefix,
            len(old) - suffix,
            new[prefix : len(new) - suffix],
            label="host_edit",
            selection=mirror.selection,
            composing=mirror.composing,
        )

    def _strip_unknown_placeholders(self, replacement: str) -> str:
        kept = "".join(
            char for char in replacement if not is_placeholder(char) or char in self.store
        )
        if len(kept) != len(replacement):
            telemetry.record_event(
                "placeholder.dropped",
                level="debug",
                data={"buffer": self.name, "count": len(replacement) - len(kept)},
            )
        return kept

    def _selection_bounds(self) -> TextRange:
        selection = self.selection
        if not selection.is_valid:
            return TextRange.collapsed(len(self._text))
        return clamp_range(self._text, selection.start, selection.end)

    def _delta(self, label: str) -> BufferDelta:
        return BufferDelta(
            version=self.state.version,
            text=self._text,
            selection=self.state.selection,
            composing=self.state.composing,
            label=label,
        )

    def _announce(self, placeholder: str, embedding: Embedding, delta: BufferDelta) -> None:
        telemetry.record_event(
            "embedding.insert",
            level="debug",
            data={
                "buffer": self.name,
                "placeholder": f"U+{ord(placeholder):04X}",
                "kind": embedding.kind,
                "offset": delta.selection.start,
            },
        )
        self.bus.emit(
            EMBEDDING_INSERTED,
            {"placeholder": placeholder, "offset": delta.selection.start},
        )

    def _rescan(self, payload: object) -> None:
        if isinstance(payload, BufferDelta):
            self.matcher.evaluate(payload.text, payload.selection.start)


__all__ = ["TextBuffer", "BufferDelta"]
