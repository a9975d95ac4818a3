"""IDLE / MATCHING state machine driven by buffer change notifications."""

from __future__ import annotations

from typing import Callable, Literal, Optional

from mention_engine.bus import MATCHING_FINISHED, MATCHING_KEYWORD, EditorBus
from mention_engine.config import DEFAULT_MAX_MATCH_LENGTH
from mention_engine.runtime import telemetry

from .models import TriggerMatch
from .registry import TriggerRegistry
from .scanner import scan_for_trigger

MatchState = Literal["unknown", "idle", "matching"]


class TriggerMatcher:
    """Re-scans after every change and reports keyword / finished transitions.

    Keyword callbacks fire when the active match differs from the last one
    reported. ``on_finish_matching`` fires once per transition into IDLE,
    never again while already idle.
    """

    def __init__(
        self,
        registry: TriggerRegistry,
        *,
        bus: Optional[EditorBus] = None,
        on_finish_matching: Optional[Callable[[], None]] = None,
        max_match_length: int = DEFAULT_MAX_MATCH_LENGTH,
    ) -> None:
        self.registry = registry
        self.bus = bus or EditorBus()
        self.on_finish_matching = on_finish_matching
        self.max_match_length = max_match_length
        self._state: MatchState = "unknown"
        self._active: Optional[TriggerMatch] = None

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def active_match(self) -> Optional[TriggerMatch]:
        return self._active

    def evaluate(self, text: str, caret: int) -> Optional[TriggerMatch]:
        match = scan_for_trigger(
            text, caret, self.registry, max_match_length=self.max_match_length
        )
        if match is None:
            self._finish()
        else:
            self._report(match)
        return match

    def reset(self) -> None:
        """Forget the current match without notifying anyone."""

        self._state = "unknown"
        self._active = None

    def _report(self, match: TriggerMatch) -> None:
        previous = self._active
        self._state = "matching"
        self._active = match
        if previous == match:
            return
        trigger = self.registry.get(match.trigger_char)
        if trigger is None:  # pragma: no cover - scanner only yields registered chars
            return
        telemetry.record_event(
            "matching.keyword",
            level="debug",
            data={"trigger": match.trigger_char, "keyword": match.keyword},
        )
        trigger.on_keyword_change(match.keyword)
        # the callback may have edited the buffer and ended this match
        if self._active is not match:
            return
        self.bus.emit(MATCHING_KEYWORD, match)

    def _finish(self) -> None:
        if self._state == "idle":
            return
        self._state = "idle"
        self._active = None
        telemetry.record_event("matching.finished", level="debug")
        if self.on_finish_matching is not None:
            self.on_finish_matching()
        self.bus.emit(MATCHING_FINISHED, None)


__all__ = ["TriggerMatcher", "MatchState"]
