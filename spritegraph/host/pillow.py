"""Pillow backed decode service and draw surface."""

import asyncio
import os
from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt
from PIL import Image

from spritegraph.config import DEFAULT_ASSET_ROOT, DEFAULT_BACKGROUND, RendererConfig
from spritegraph.renderer import Renderer
from spritegraph.textures import TextureTable
from spritegraph.types import DecodedImage, FrameTimer, Rect, TextureHandle

from .timing import AsyncioFrameTimer


UInt8Array = npt.NDArray[np.uint8]


def load_rgba(path: str) -> Image.Image:
    with Image.open(path) as image:
        return image.convert("RGBA")


class PillowDecoder:
    """Decodes image files under ``asset_root`` into RGBA ``PIL.Image`` objects.

    File I/O runs on a worker thread; the coroutine resumes on the caller's
    event loop, so the texture table is still only written from that loop.
    Missing or unreadable files raise (``FileNotFoundError``,
    ``PIL.UnidentifiedImageError``).
    """

    def __init__(self, asset_root: str = DEFAULT_ASSET_ROOT) -> None:
        self.asset_root = asset_root

    def path(self, source: str) -> str:
        return os.path.join(self.asset_root, source)

    async def decode(self, source: str) -> DecodedImage:
        image = await asyncio.to_thread(load_rgba, self.path(source))
        return DecodedImage(pixels=image, width=image.width, height=image.height)


class PillowSurface:
    """RGBA canvas drawing texture-table entries.

    ``clear`` allocates a fresh canvas of the requested size. ``blit`` crops
    the source rectangle, scales it to the destination size if the two
    differ, and alpha-composites it, clipped to the canvas.
    """

    def __init__(
        self,
        textures: TextureTable,
        background: Tuple[int, int, int, int] = DEFAULT_BACKGROUND,
    ) -> None:
        self.textures = textures
        self.background = background
        self._canvas: Optional[Image.Image] = None

    @property
    def image(self) -> Image.Image:
        if self._canvas is None:
            raise ValueError("Surface has not been cleared yet")
        return self._canvas

    def clear(self, width: int, height: int) -> None:
        self._canvas = Image.new("RGBA", (width, height), self.background)

    def blit(self, texture: TextureHandle, src: Rect, dst: Rect) -> None:
        canvas = self.image
        pixels: Image.Image = self.textures[texture].pixels
        if pixels.mode != "RGBA":
            pixels = pixels.convert("RGBA")

        sx, sy, sw, sh = src
        x, y, w, h = dst
        left, top = max(x, 0), max(y, 0)
        right, bottom = min(x + w, canvas.width), min(y + h, canvas.height)
        if right <= left or bottom <= top:
            return

        region = pixels.crop((sx, sy, sx + sw, sy + sh))
        if (sw, sh) != (w, h):
            region = region.resize((w, h), Image.Resampling.NEAREST)
        region = region.crop((left - x, top - y, right - x, bottom - y))
        canvas.alpha_composite(region, (left, top))

    def to_array(self) -> UInt8Array:
        """Current frame as an ``H x W x 4`` uint8 array."""
        return np.array(self.image, dtype=np.uint8)


def pillow_renderer(
    config: RendererConfig, timer: Optional[FrameTimer] = None
) -> Renderer:
    """Renderer decoding from ``config.asset_root`` onto a :class:`PillowSurface`.

    Without ``timer`` ticks run on the current asyncio loop.
    """
    textures = TextureTable(PillowDecoder(config.asset_root))
    surface = PillowSurface(textures, background=config.background)
    return Renderer(
        config,
        textures,
        surface,
        timer if timer is not None else AsyncioFrameTimer(),
    )
