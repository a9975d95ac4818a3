"""UI-agnostic text engine for trigger keywords and embedded rich tokens."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "bus",
    "config",
    "embeddings",
    "runtime",
    "triggers",
]

__version__ = "0.1.0"
