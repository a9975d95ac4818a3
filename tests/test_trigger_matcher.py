from __future__ import annotations

from typing import List

import pytest

from mention_engine.buffer import TextBuffer
from mention_engine.bus import MATCHING_FINISHED, MATCHING_KEYWORD
from mention_engine.config import EngineConfig
from mention_engine.triggers import Trigger, TriggerMatch, TriggerMatcher, TriggerRegistry


def make_trigger(calls: List[str]) -> Trigger:
    return Trigger(
        on_keyword_change=calls.append,
        builder=lambda context, value: value,
    )


def make_buffer(
    mentions: List[str],
    finished: List[bool],
    *,
    tags: List[str] | None = None,
    config: EngineConfig | None = None,
) -> TextBuffer:
    triggers = {"@": make_trigger(mentions)}
    if tags is not None:
        triggers["#"] = make_trigger(tags)
    return TextBuffer(
        triggers,
        config=config,
        on_finish_matching=lambda: finished.append(True),
    )


def type_text(buffer: TextBuffer, text: str) -> None:
    for char in text:
        buffer.replace_selection(char)


def test_mid_word_trigger_reports_finished_only() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished)

    buffer.replace_range(0, 0, "hello@")

    assert mentions == []
    assert finished == [True]
    assert buffer.matcher.state == "idle"


def test_trigger_after_space_reports_empty_keyword() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished)

    buffer.replace_range(0, 0, "hi @")

    assert mentions == [""]
    assert finished == []
    assert buffer.matcher.state == "matching"


def test_keyword_streams_while_typing() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished)

    type_text(buffer, "hi @bo")

    assert mentions == ["", "b", "bo"]
    assert finished == [True]
    assert buffer.matcher.active_match == TriggerMatch("@", "bo", 3, 6)


def test_finish_fires_once_per_transition() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished)
    type_text(buffer, "@bo")

    type_text(buffer, " and more")

    assert finished == [True]

    type_text(buffer, " @x")

    assert mentions[-1] == "x"

    buffer.replace_selection(" ")

    assert finished == [True, True]


def test_unchanged_match_is_not_reported_twice() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished)
    buffer.replace_range(0, 0, "hi @bo")

    buffer.set_selection(6)

    assert mentions == ["bo"]


def test_moving_caret_inside_keyword_updates_keyword() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished)
    buffer.replace_range(0, 0, "hi @bob")

    buffer.set_selection(5)
    buffer.set_selection(2)

    assert mentions == ["bob", "b"]
    assert finished == [True]


def test_switching_between_triggers() -> None:
    mentions: List[str] = []
    tags: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished, tags=tags)

    buffer.replace_range(0, 0, "@a #b")

    assert mentions == []
    assert tags == ["b"]

    buffer.set_selection(2)

    assert mentions == ["a"]
    assert finished == []


def test_max_match_length_comes_from_config() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(
        mentions, finished, config=EngineConfig(max_match_length=3)
    )

    buffer.replace_range(0, 0, "@abcd")

    assert mentions == []
    assert finished == [True]


def test_clear_ends_active_match() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished)
    buffer.replace_range(0, 0, "@bo")

    buffer.clear()

    assert finished == [True]
    assert buffer.matcher.active_match is None


def test_matcher_publishes_bus_events() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    buffer = make_buffer(mentions, finished)
    events: List[object] = []
    buffer.bus.subscribe(MATCHING_KEYWORD, events.append)
    buffer.bus.subscribe(MATCHING_FINISHED, lambda payload: events.append("finished"))

    buffer.replace_range(0, 0, "@x")
    buffer.replace_selection(" ")

    assert events == [TriggerMatch("@", "x", 0, 2), "finished"]


def test_standalone_matcher_reset() -> None:
    mentions: List[str] = []
    finished: List[bool] = []
    matcher = TriggerMatcher(
        TriggerRegistry({"@": make_trigger(mentions)}),
        on_finish_matching=lambda: finished.append(True),
    )

    matcher.evaluate("@a", 2)
    matcher.reset()
    matcher.evaluate("@a", 2)

    assert mentions == ["a", "a"]
    assert matcher.state == "matching"

    matcher.evaluate("@a", 0)
    matcher.evaluate("", 0)

    assert finished == [True]


def test_keyword_callback_that_edits_buffer_ends_match() -> None:
    events: List[object] = []

    def pick_exact_match(keyword: str) -> None:
        if keyword == "bob":
            buffer.insert_triggered_value("@", "bob", remove_prefix_match=True)

    buffer = TextBuffer(
        {"@": Trigger(on_keyword_change=pick_exact_match, builder=lambda c, v: v)}
    )
    buffer.bus.subscribe(MATCHING_KEYWORD, lambda match: events.append(match.keyword))
    buffer.bus.subscribe(MATCHING_FINISHED, lambda payload: events.append("finished"))

    type_text(buffer, "hi @bob")

    assert buffer.text == f"hi {chr(0xE000)} "
    assert buffer.matcher.state == "idle"
    assert events == ["finished", "", "b", "bo", "finished"]


def test_keyword_callback_errors_propagate_after_edit() -> None:
    def explode(keyword: str) -> None:
        raise RuntimeError(f"lookup failed for {keyword!r}")

    buffer = TextBuffer({"@": Trigger(on_keyword_change=explode, builder=lambda c, v: v)})
    buffer.replace_range(0, 0, "hi ")

    with pytest.raises(RuntimeError, match="lookup failed"):
        buffer.replace_selection("@")

    assert buffer.text == "hi @"
    assert buffer.version == 2
    assert buffer.selection.start == 4
