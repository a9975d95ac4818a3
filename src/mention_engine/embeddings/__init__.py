"""Placeholder allocation and embedding storage."""

from .models import BoundEmbedding, DirectEmbedding, Embedding, RenderContext, Renderer
from .placeholders import PlaceholderAllocator, PlaceholderExhaustedError, is_placeholder
from .store import EmbeddingStore

__all__ = [
    "BoundEmbedding",
    "DirectEmbedding",
    "Embedding",
    "EmbeddingStore",
    "PlaceholderAllocator",
    "PlaceholderExhaustedError",
    "RenderContext",
    "Renderer",
    "is_placeholder",
]
