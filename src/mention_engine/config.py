"""Engine configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass

from mention_engine.runtime.telemetry import env, env_flag

PRIVATE_USE_BASE = 0xE000
PRIVATE_USE_LIMIT = 0xF8FF
DEFAULT_MAX_MATCH_LENGTH = 50


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Options recognised by ``TextBuffer`` and its trigger matcher."""

    max_match_length: int = DEFAULT_MAX_MATCH_LENGTH
    remove_prefix_match: bool = False
    suffix_space: bool = True
    placeholder_base: int = PRIVATE_USE_BASE

    def __post_init__(self) -> None:
        if self.max_match_length <= 0:
            raise ValueError("max_match_length must be positive")
        if not PRIVATE_USE_BASE <= self.placeholder_base <= PRIVATE_USE_LIMIT:
            raise ValueError(
                f"placeholder_base must lie in U+{PRIVATE_USE_BASE:04X}..U+{PRIVATE_USE_LIMIT:04X}"
            )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        raw_length = env("MAX_MATCH_LENGTH")
        return cls(
            max_match_length=int(raw_length) if raw_length else DEFAULT_MAX_MATCH_LENGTH,
            remove_prefix_match=env_flag("REMOVE_PREFIX_MATCH", False),
            suffix_space=env_flag("SUFFIX_SPACE", True),
        )


__all__ = [
    "EngineConfig",
    "DEFAULT_MAX_MATCH_LENGTH",
    "PRIVATE_USE_BASE",
    "PRIVATE_USE_LIMIT",
]
