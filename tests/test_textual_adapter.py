from __future__ import annotations

from typing import List, Tuple

from mention_engine.adapters.textual import TextualMentionAdapter, TextualUIHooks
from mention_engine.buffer import BufferMirror, TextBuffer, TextRange
from mention_engine.triggers import Trigger

BASE = chr(0xE000)


def make_buffer(keywords: List[str] | None = None) -> TextBuffer:
    sink = keywords if keywords is not None else []
    return TextBuffer(
        {
            "@": Trigger(
                on_keyword_change=sink.append,
                builder=lambda context, value: f"@{value}",
            )
        }
    )


def type_keys(adapter: TextualMentionAdapter, text: str) -> None:
    for char in text:
        adapter.handle_textual_key("space" if char == " " else char, text=char)


def test_adapter_updates_buffer_snapshots() -> None:
    mirrors: List[BufferMirror] = []
    adapter = TextualMentionAdapter(
        make_buffer(), TextualUIHooks(update_buffer=mirrors.append)
    )

    type_keys(adapter, "hi")

    assert mirrors[0].text == ""
    assert mirrors[-1].text == "hi"
    assert mirrors[-1].selection == TextRange.collapsed(2)


def test_adapter_shows_and_hides_suggestions() -> None:
    shown: List[Tuple[str, str]] = []
    hidden: List[bool] = []
    keywords: List[str] = []
    adapter = TextualMentionAdapter(
        make_buffer(keywords),
        TextualUIHooks(
            update_buffer=lambda mirror: None,
            show_suggestions=lambda char, keyword: shown.append((char, keyword)),
            hide_suggestions=lambda: hidden.append(True),
        ),
    )

    type_keys(adapter, "hi @b")

    assert shown == [("@", ""), ("@", "b")]
    assert keywords == ["", "b"]
    assert hidden == [True]

    adapter.handle_textual_key("backspace")
    adapter.handle_textual_key("backspace")

    assert shown[-1] == ("@", "")
    assert hidden == [True, True]


def test_trigger_key_mid_word_inserts_boundary_space() -> None:
    buffer = make_buffer()
    adapter = TextualMentionAdapter(buffer, TextualUIHooks(update_buffer=lambda m: None))

    type_keys(adapter, "x@")

    assert buffer.text == "x @"
    assert buffer.matcher.state == "matching"


def test_choose_suggestion_replaces_keyword() -> None:
    statuses: List[str] = []
    hidden: List[bool] = []
    buffer = make_buffer()
    adapter = TextualMentionAdapter(
        buffer,
        TextualUIHooks(
            update_buffer=lambda mirror: None,
            hide_suggestions=lambda: hidden.append(True),
            update_status=statuses.append,
        ),
    )
    type_keys(adapter, "hi @bo")
    hidden.clear()

    placeholder = adapter.choose_suggestion("@", "bob", display="@bob")

    assert placeholder == BASE
    assert buffer.text == f"hi {BASE} "
    assert buffer.plain_text == "hi @bob "
    assert hidden == [True]
    assert statuses[-1] == "inserted @ 5"


def test_navigation_and_deletion_keys() -> None:
    buffer = make_buffer()
    adapter = TextualMentionAdapter(buffer, TextualUIHooks(update_buffer=lambda m: None))
    type_keys(adapter, "abc")

    adapter.handle_textual_key("left")
    adapter.handle_textual_key("backspace")
    assert buffer.text == "ac"
    assert buffer.selection == TextRange.collapsed(1)

    adapter.handle_textual_key("delete")
    assert buffer.text == "a"

    adapter.handle_textual_key("home")
    adapter.handle_textual_key("backspace")
    assert buffer.text == "a"

    adapter.handle_textual_key("end")
    adapter.handle_textual_key("enter")
    assert buffer.text == "a\n"

    adapter.handle_textual_key("right")
    assert buffer.selection == TextRange.collapsed(2)


def test_backspace_removes_whole_embedding() -> None:
    buffer = make_buffer()
    adapter = TextualMentionAdapter(buffer, TextualUIHooks(update_buffer=lambda m: None))
    type_keys(adapter, "@b")
    adapter.choose_suggestion("@", "bob", display="@bob")

    adapter.handle_textual_key("backspace")
    adapter.handle_textual_key("backspace")

    assert buffer.text == ""
    assert buffer.plain_text == ""


def test_backspace_deletes_selected_range() -> None:
    buffer = make_buffer()
    adapter = TextualMentionAdapter(buffer, TextualUIHooks(update_buffer=lambda m: None))
    type_keys(adapter, "hello")
    buffer.set_selection(4, 1)

    adapter.handle_textual_key("backspace")

    assert buffer.text == "ho"


def test_unknown_keys_are_not_consumed() -> None:
    buffer = make_buffer()
    adapter = TextualMentionAdapter(buffer, TextualUIHooks(update_buffer=lambda m: None))

    assert adapter.handle_textual_key("f5") is False
    assert adapter.handle_textual_key("tab", text="\t") is False
    assert buffer.text == ""


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = TextualMentionAdapter(
        make_buffer(),
        TextualUIHooks(update_buffer=lambda mirror: None, log=logs.append),
    )

    adapter.handle_textual_key("@", text="@")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("match ->") for line in logs)
