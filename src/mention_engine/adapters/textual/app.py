"""Executable Textual app that hosts the mention engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, OptionList, Static
    from textual.widgets.option_list import Option
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use mention_engine.adapters.textual.app"
    ) from exc

from mention_engine.actions import copy_selection
from mention_engine.buffer import BufferMirror, EmbeddingSegment, TextBuffer
from mention_engine.config import EngineConfig
from mention_engine.embeddings import RenderContext
from mention_engine.runtime import telemetry
from mention_engine.triggers import Trigger

from .controller import TextualMentionAdapter, TextualUIHooks

MENTIONS = (("alice", "101"), ("bob", "102"), ("carol", "103"))
TAGS = (("release", "001"), ("bug", "002"), ("design", "003"))
ICONS = {"ctrl+e": ("sparkles", "✨"), "ctrl+h": ("heart", "❤")}


def _styled(prefix: str, color: str) -> Any:
    def build(context: RenderContext, value: tuple[str, str]) -> Text:
        del context
        return Text(f"{prefix}{value[0]}", style=f"bold {color}")

    return build


@dataclass
class UIState:
    candidates: list[tuple[str, str]] = field(default_factory=list)
    trigger_char: str = ""


class MentionEngineApp(App[None]):
    """Single-field chat composer with @mentions, #tags and inline icons."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
	}

	#suggestions {
		height: auto;
		max-height: 8;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self._state = UIState()
        self.logger = telemetry.get_logger("mention_engine.adapters.textual")
        self.buffer = TextBuffer(
            {
                "@": Trigger(
                    on_keyword_change=lambda keyword: self._filter("@", MENTIONS, keyword),
                    builder=_styled("@", "blue"),
                    markup=lambda value: f"<@{value[1]}>",
                ),
                "#": Trigger(
                    on_keyword_change=lambda keyword: self._filter("#", TAGS, keyword),
                    builder=_styled("#", "green"),
                    markup=lambda value: f"<#{value[1]}>",
                ),
            },
            name="composer",
            config=config or EngineConfig.from_env(),
        )
        self.adapter: TextualMentionAdapter | None = None
        self._buffer_widget: Static | None = None
        self._suggestions: OptionList | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._buffer_widget = Static("", id="buffer-view")
        self._suggestions = OptionList(id="suggestions")
        self._suggestions.can_focus = False
        self._status_widget = Static("", id="status-line")
        yield self._buffer_widget
        yield self._suggestions
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            show_suggestions=self._show_suggestions,
            hide_suggestions=self._hide_suggestions,
            update_status=self._update_status,
            log=self.logger.debug,
        )
        self.adapter = TextualMentionAdapter(self.buffer, hooks)

    def on_key(self, event: events.Key) -> None:
        if self.adapter is None or event.key in {"ctrl+c", "ctrl+q"}:
            return
        if event.key == "tab" and self._state.candidates:
            self._choose(0)
        elif event.key in ICONS:
            name, glyph = ICONS[event.key]
            self.buffer.insert_renderable(name, Text(glyph), display=f":{name}:")
        elif event.key == "ctrl+p":
            self._update_status(self.buffer.markup_text)
        elif event.key == "ctrl+y":
            copied = copy_selection(self.buffer, self.copy_to_clipboard)
            self._update_status(f"copied {copied!r}")
        elif not self.adapter.handle_textual_key(event.key, text=event.character):
            return
        event.stop()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self._choose(event.option_index)

    def _choose(self, index: int) -> None:
        if self.adapter is None:
            return
        value = self._state.candidates[index]
        trigger_char = self._state.trigger_char
        self.adapter.choose_suggestion(
            trigger_char, value, display=f"{trigger_char}{value[0]}"
        )

    def _filter(self, trigger_char: str, source: Sequence[tuple[str, str]], keyword: str) -> None:
        self._state.trigger_char = trigger_char
        self._state.candidates = [item for item in source if keyword in item[0]]

    def _render(self) -> Text:
        rendered = Text()
        for segment in self.buffer.segments():
            if isinstance(segment, EmbeddingSegment):
                node = segment.render(host=self)
                rendered.append_text(node if isinstance(node, Text) else Text(str(node)))
            else:
                rendered.append(segment.text)
        return rendered

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(self._render())
        self._update_status(f"caret {mirror.selection.start} | {mirror.plain_text!r}")

    def _show_suggestions(self, trigger_char: str, keyword: str) -> None:
        del keyword
        if not self._suggestions:
            return
        self._suggestions.clear_options()
        self._suggestions.add_options(
            [Option(f"{trigger_char}{name}  ({ident})") for name, ident in self._state.candidates]
        )

    def _hide_suggestions(self) -> None:
        self._state.candidates = []
        if self._suggestions:
            self._suggestions.clear_options()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the mention engine Textual demo.")
    parser.add_argument(
        "--max-match-length",
        type=int,
        default=None,
        help="Keyword scan window (default: MENTION_ENGINE_MAX_MATCH_LENGTH or 50)",
    )
    parser.add_argument(
        "--telemetry-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="telelog preset to activate before the app starts",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.telemetry_preset:
        telemetry.configure(preset=args.telemetry_preset)
    config = EngineConfig.from_env()
    if args.max_match_length is not None:
        config = replace(config, max_match_length=args.max_match_length)
    MentionEngineApp(config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
