"""Renderer: owns the texture table, the scene forest and the render loop.

Typical use::

    renderer = pillow_renderer(RendererConfig(width=320, height=240))
    await renderer.load_sprite("walk.png", 10, 20, 32, 32)
    await renderer.load_text("Score: 0", 4, 4)
    renderer.render(on_frame)

Host capabilities (surface, decoder, timer, clock) are injected; see
:func:`spritegraph.host.pillow_renderer` for the Pillow / asyncio wiring.
"""

import logging
from typing import List, Optional

from spritegraph.builders import composite_from_spritesheet, composite_from_text
from spritegraph.compositor import Blit, Compositor
from spritegraph.config import RendererConfig
from spritegraph.nodes import Composite, Node
from spritegraph.scheduler import FrameScheduler, monotonic_ms
from spritegraph.textures import TextureTable
from spritegraph.types import (
    Clock,
    DrawSurface,
    FrameCallback,
    FrameTimer,
    TextureHandle,
)


logger = logging.getLogger(__name__)


class Renderer:
    """Scene forest plus everything needed to draw it.

    Attributes:
        config: Frame size, fps and font options.
        textures: Texture table shared with the surface.
        surface: Draw surface cleared and blitted every frame.
        sprites: Root nodes, drawn in order. Only ever appended to.
        scheduler: Frame-rate capped loop driving :meth:`render_frame`.
    """

    def __init__(
        self,
        config: RendererConfig,
        textures: TextureTable,
        surface: DrawSurface,
        timer: FrameTimer,
        clock: Clock = monotonic_ms,
    ) -> None:
        self.config = config
        self.textures = textures
        self.surface = surface
        self.sprites: List[Node] = []
        self._compositor = Compositor()
        self.scheduler = FrameScheduler(
            render_fn=self.render_frame,
            forest=self.sprites,
            timer=timer,
            clock=clock,
            fps=config.fps,
        )

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def add(self, node: Node) -> Node:
        """Append ``node`` as a new root."""
        self.sprites.append(node)
        return node

    async def load_source(self, source: str) -> TextureHandle:
        return await self.textures.load(source)

    async def load_sprite(self, source: str, x: int, y: int, w: int, h: int) -> Node:
        """Load ``source`` as a spritesheet of ``w x h`` frames placed at ``(x, y)``.

        Single-frame sheets become a static leaf, larger sheets a cycling
        animation. The node is appended to :attr:`sprites` and returned.
        """
        handle = await self.load_source(source)
        node = composite_from_spritesheet(
            self.textures[handle], (w, h), position=(x, y)
        )
        logger.debug("Added sprite %r at (%d, %d)", source, x, y)
        return self.add(node)

    async def load_text(self, text: str, x: int, y: int) -> Composite:
        """Lay ``text`` out with the configured glyph atlas at ``(x, y)``."""
        handle = await self.load_source(self.config.font_source)
        node = composite_from_text(
            self.textures[handle], self.config.glyph_size, text, position=(x, y)
        )
        self.add(node)
        return node

    def render_frame(self) -> List[Blit]:
        """Draw one frame now, ignoring the fps cap."""
        return self._compositor.render(
            self.sprites, self.surface, self.config.width, self.config.height
        )

    def render(self, callback: Optional[FrameCallback] = None) -> None:
        """Start the render loop, calling ``callback(sprites)`` after every frame."""
        self.scheduler.start(callback)
