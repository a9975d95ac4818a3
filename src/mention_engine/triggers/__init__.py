"""Trigger definitions, registry and keyword matching."""

from .matcher import MatchState, TriggerMatcher
from .models import KeywordCallback, MarkupFunction, Trigger, TriggerMatch
from .registry import TriggerRegistry
from .scanner import at_word_boundary, is_word_char, scan_for_trigger

__all__ = [
    "KeywordCallback",
    "MarkupFunction",
    "MatchState",
    "Trigger",
    "TriggerMatch",
    "TriggerMatcher",
    "TriggerRegistry",
    "at_word_boundary",
    "is_word_char",
    "scan_for_trigger",
]
