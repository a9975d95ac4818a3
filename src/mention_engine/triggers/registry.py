"""Read-only registry of trigger characters."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from mention_engine.runtime.telemetry import span

from .models import Trigger


class TriggerRegistry:
    """Maps single trigger characters to their ``Trigger`` definitions.

    Built once from a caller-supplied mapping and never mutated afterwards.
    """

    def __init__(
        self, triggers: Mapping[str, Trigger], *, logger_name: str | None = None
    ) -> None:
        with span(
            "triggers::build_registry",
            logger_name=logger_name,
            component="triggers",
            metadata={"count": len(triggers)},
        ):
            entries: dict[str, Trigger] = {}
            for char, trigger in triggers.items():
                if not isinstance(char, str) or len(char) != 1:
                    raise ValueError(
                        f"Trigger key {char!r} must be exactly one character"
                    )
                if char.isspace():
                    raise ValueError("Whitespace cannot be used as a trigger")
                if not isinstance(trigger, Trigger):
                    raise TypeError(f"Trigger for {char!r} must be a Trigger instance")
                entries[char] = trigger
            self._triggers: Mapping[str, Trigger] = MappingProxyType(entries)

    def get(self, char: str) -> Optional[Trigger]:
        return self._triggers.get(char)

    def contains(self, char: str) -> bool:
        return char in self._triggers

    def __contains__(self, char: object) -> bool:
        return char in self._triggers

    def __iter__(self) -> Iterator[str]:
        return iter(self._triggers)

    def __len__(self) -> int:
        return len(self._triggers)

    @property
    def chars(self) -> tuple[str, ...]:
        return tuple(self._triggers)


__all__ = ["TriggerRegistry"]
