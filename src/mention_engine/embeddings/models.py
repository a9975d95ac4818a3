"""Embedding variants stored behind placeholder code points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Literal, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Everything a renderer receives besides the embedded value."""

    style: Any = None
    with_composing: bool = False
    host: Any = None


Renderer = Callable[[RenderContext, Any], Any]


@dataclass(frozen=True, slots=True)
class BoundEmbedding(Generic[T]):
    """Embedding drawn by a renderer bound to its value at insertion time."""

    value: T
    renderer: Renderer
    display: Optional[str] = None
    origin_trigger: Optional[str] = None

    kind: Literal["bound"] = field(default="bound", init=False, repr=False)

    def __post_init__(self) -> None:
        if not callable(self.renderer):
            raise TypeError("renderer must be callable")

    def render(self, context: RenderContext) -> Any:
        return self.renderer(context, self.value)


@dataclass(frozen=True, slots=True)
class DirectEmbedding(Generic[T]):
    """Embedding carrying a pre-built renderable node (icons, emoji, images)."""

    renderable: Any
    value: Optional[T] = None
    display: Optional[str] = None

    kind: Literal["direct"] = field(default="direct", init=False, repr=False)

    @property
    def origin_trigger(self) -> None:
        return None

    def render(self, context: RenderContext) -> Any:
        del context
        return self.renderable


Embedding = Union[BoundEmbedding[Any], DirectEmbedding[Any]]


__all__ = [
    "BoundEmbedding",
    "DirectEmbedding",
    "Embedding",
    "RenderContext",
    "Renderer",
]
