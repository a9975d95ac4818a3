"""Minimal Textual adapter that wires a TextBuffer into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from mention_engine.buffer import BufferMirror, TextBuffer
from mention_engine.bus import (
    BUFFER_CHANGED,
    EMBEDDING_INSERTED,
    MATCHING_FINISHED,
    MATCHING_KEYWORD,
)
from mention_engine.triggers import TriggerMatch


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    show_suggestions: Callable[[str, str], None] = _noop
    hide_suggestions: Callable[[], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualMentionAdapter:
    """Translates Textual key names into buffer edits and relays notifications."""

    def __init__(self, buffer: TextBuffer, hooks: TextualUIHooks) -> None:
        self.buffer = buffer
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Apply one key press; returns ``False`` for keys the adapter ignores."""

        self._log_state("key ->", key=key, text=text)
        buffer = self.buffer
        if text is not None and len(text) == 1 and text.isprintable():
            if text in buffer.registry:
                buffer.insert_trigger_char(text)
            else:
                buffer.replace_selection(text, label="type")
            return True

        caret = self._caret()
        selection = buffer.selection
        has_range = selection.is_valid and not selection.is_collapsed
        if key == "backspace":
            if has_range:
                bounds = selection.normalized()
                buffer.delete_range(bounds.start, bounds.end)
            elif caret > 0:
                buffer.delete_range(caret - 1, caret)
        elif key == "delete":
            if has_range:
                bounds = selection.normalized()
                buffer.delete_range(bounds.start, bounds.end)
            elif caret < len(buffer.text):
                buffer.delete_range(caret, caret + 1)
        elif key == "left":
            buffer.set_selection(max(0, caret - 1))
        elif key == "right":
            buffer.set_selection(min(len(buffer.text), caret + 1))
        elif key == "home":
            buffer.set_selection(0)
        elif key == "end":
            buffer.set_selection(len(buffer.text))
        elif key in {"enter", "return"}:
            buffer.replace_selection("\n", label="newline")
        else:
            return False
        return True

    def choose_suggestion(
        self, trigger_char: str, value: Any, *, display: Optional[str] = None
    ) -> Optional[str]:
        """Replace the typed trigger + keyword with ``value``."""

        return self.buffer.insert_triggered_value(
            trigger_char, value, remove_prefix_match=True, display=display
        )

    def _caret(self) -> int:
        selection = self.buffer.selection
        if not selection.is_valid:
            return len(self.buffer.text)
        return selection.end

    def _subscribe_events(self) -> None:
        bus = self.buffer.bus
        bus.subscribe(BUFFER_CHANGED, lambda _payload: self._refresh_buffer())
        bus.subscribe(MATCHING_KEYWORD, self._on_keyword)
        bus.subscribe(MATCHING_FINISHED, lambda _payload: self._on_finished())
        bus.subscribe(EMBEDDING_INSERTED, self._on_inserted)

    def _on_keyword(self, payload: object) -> None:
        if isinstance(payload, TriggerMatch):
            self._log_state("match ->", trigger=payload.trigger_char, keyword=payload.keyword)
            self.hooks.show_suggestions(payload.trigger_char, payload.keyword)

    def _on_finished(self) -> None:
        self._log_state("match <-")
        self.hooks.hide_suggestions()

    def _on_inserted(self, payload: object) -> None:
        if isinstance(payload, dict):
            self.hooks.update_status(f"inserted @ {payload.get('offset')}")

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.buffer
        return {
            "buffer": buffer.name,
            "version": buffer.version,
            "selection": (buffer.selection.start, buffer.selection.end),
            "matching": buffer.matcher.state,
        }


__all__ = ["TextualMentionAdapter", "TextualUIHooks"]
