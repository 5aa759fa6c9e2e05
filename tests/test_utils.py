from typing import Dict, List, Optional, Tuple

from spritegraph.config import RendererConfig
from spritegraph.nodes import Composite, Leaf, Node
from spritegraph.renderer import Renderer
from spritegraph.textures import Texture, TextureTable
from spritegraph.types import (
    AnimState,
    DecodedImage,
    Rect,
    TextureHandle,
    TickCallback,
    Vec2,
)
from spritegraph.builders import leaf_from_rect


class FakeDecoder:
    """Decode service returning fixed sizes and recording every call."""

    def __init__(self, sizes: Optional[Dict[str, Vec2]] = None) -> None:
        self.sizes = sizes or {}
        self.calls: List[str] = []

    async def decode(self, source: str) -> DecodedImage:
        self.calls.append(source)
        if source not in self.sizes:
            raise FileNotFoundError(source)
        width, height = self.sizes[source]
        return DecodedImage(pixels=f"pixels:{source}", width=width, height=height)


class FakeSurface:
    """Records clears and blits in order."""

    def __init__(self) -> None:
        self.ops: List[Tuple[str, tuple]] = []

    def clear(self, width: int, height: int) -> None:
        self.ops.append(("clear", (width, height)))

    def blit(self, texture: TextureHandle, src: Rect, dst: Rect) -> None:
        self.ops.append(("blit", (texture, src, dst)))

    @property
    def blits(self) -> List[tuple]:
        return [args for op, args in self.ops if op == "blit"]


class FakeTimer:
    """Collects scheduled ticks instead of running them."""

    def __init__(self) -> None:
        self.scheduled: List[TickCallback] = []

    def schedule_next_tick(self, callback: TickCallback) -> None:
        self.scheduled.append(callback)

    def fire(self) -> None:
        self.scheduled.pop(0)()


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def make_texture(
    width: int, height: int, handle: TextureHandle = 0, source: str = "sheet.png"
) -> Texture:
    return Texture(
        handle=handle, source=source, pixels=None, width=width, height=height
    )


def make_leaf(
    texture: TextureHandle = 0,
    position: Vec2 = (0, 0),
    dst_offset: Vec2 = (0, 0),
    size: Vec2 = (8, 8),
    src_offset: Vec2 = (0, 0),
) -> Leaf:
    return leaf_from_rect(
        texture, dst_offset, size, src_offset, size, position=position
    )


def make_composite(
    children: List[Node],
    anim_state: AnimState = AnimState.CYCLE,
    position: Vec2 = (0, 0),
) -> Composite:
    return Composite(
        position=position, size=(8, 8), anim_state=anim_state, children=children
    )


def make_renderer(
    sizes: Optional[Dict[str, Vec2]] = None,
    width: int = 64,
    height: int = 48,
    fps: float = 24,
) -> Tuple[Renderer, FakeDecoder, FakeSurface, FakeTimer, FakeClock]:
    decoder = FakeDecoder(sizes)
    surface = FakeSurface()
    timer = FakeTimer()
    clock = FakeClock()
    renderer = Renderer(
        RendererConfig(width=width, height=height, fps=fps),
        TextureTable(decoder),
        surface,
        timer,
        clock=clock,
    )
    return renderer, decoder, surface, timer, clock
