"""Common type aliases, enumerations and host capability protocols.

The renderer core never talks to a concrete window, canvas or image library.
It consumes the four capabilities declared here (draw surface, decode service,
frame timer, clock) and the host injects implementations at construction time.
See :mod:`spritegraph.host` for the Pillow / asyncio bindings.
"""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any, Callable, Protocol, Sequence, Tuple, TYPE_CHECKING


if TYPE_CHECKING:
    from spritegraph.nodes import Node

TextureHandle = int

# (x, y) and (w, h) pairs
Vec2 = Tuple[int, int]
# (x, y, w, h)
Rect = Tuple[int, int, int, int]

FrameCallback = Callable[[Sequence["Node"]], None]
TickCallback = Callable[[], None]
Clock = Callable[[], float]


class AnimState(StrEnum):
    """Animation policy of a composite node."""

    CYCLE = auto()
    HOLD = auto()
    FLATTEN_ALL = auto()
    STATIC_LEAF = auto()


@dataclass(frozen=True)
class DecodedImage:
    """Result of a decode: opaque pixel payload plus its pixel size."""

    pixels: Any
    width: int
    height: int


class DrawSurface(Protocol):
    def clear(self, width: int, height: int) -> None: ...

    def blit(self, texture: TextureHandle, src: Rect, dst: Rect) -> None: ...


class DecodeService(Protocol):
    async def decode(self, source: str) -> DecodedImage: ...


class FrameTimer(Protocol):
    def schedule_next_tick(self, callback: TickCallback) -> None: ...
