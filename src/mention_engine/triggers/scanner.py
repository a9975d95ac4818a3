"""Backward scan from the caret for an in-progress trigger keyword."""

from __future__ import annotations

import re
from typing import Container, Optional

from mention_engine.config import DEFAULT_MAX_MATCH_LENGTH

from .models import TriggerMatch

_WORD_CHAR = re.compile(r"[A-Za-z0-9_]")


def is_word_char(char: str) -> bool:
    return bool(char) and _WORD_CHAR.fullmatch(char) is not None


def at_word_boundary(text: str, index: int) -> bool:
    """``True`` if a trigger at ``index`` starts a word (text start or non-word char before it)."""

    return index == 0 or not is_word_char(text[index - 1])


def scan_for_trigger(
    text: str,
    caret: int,
    triggers: Container[str],
    *,
    max_match_length: int = DEFAULT_MAX_MATCH_LENGTH,
) -> Optional[TriggerMatch]:
    """Look backwards from ``caret`` for the trigger that opened the current word.

    At most ``max_match_length`` characters are inspected. Whitespace aborts
    the scan, as does a registered trigger that sits mid-word (``a@b``).
    Returns ``None`` when no match is active.
    """

    cursor = min(caret, len(text)) - 1
    if cursor < 0:
        return None

    floor = max(0, cursor - max_match_length + 1)
    for index in range(cursor, floor - 1, -1):
        char = text[index]
        if char in triggers:
            if not at_word_boundary(text, index):
                return None
            return TriggerMatch(
                trigger_char=char,
                keyword=text[index + 1 : cursor + 1],
                start=index,
                end=cursor + 1,
            )
        if char.isspace():
            return None
    return None


__all__ = ["scan_for_trigger", "is_word_char", "at_word_boundary"]
