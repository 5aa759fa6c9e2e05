"""Construction-time renderer options.

A flat, immutable options record. Defaults mirror the module constants so
callers only pass what differs.
"""

from dataclasses import dataclass
from typing import Tuple

from spritegraph.types import Vec2


DEFAULT_FPS = 24
DEFAULT_FONT_SOURCE = "11x16_Linux_Libertine_Mono_O.png"
DEFAULT_GLYPH_SIZE: Vec2 = (11, 16)
DEFAULT_ASSET_ROOT = "assets"
DEFAULT_BACKGROUND: Tuple[int, int, int, int] = (0, 0, 0, 0)


@dataclass(frozen=True)
class RendererConfig:
    """Renderer options.

    Attributes:
        width: Frame width in pixels; the surface is cleared to this size.
        height: Frame height in pixels.
        fps: Target frame rate cap of the scheduler.
        font_source: Source identifier of the monospace glyph atlas used by
            ``Renderer.load_text``.
        glyph_size: Cell size ``(cw, ch)`` of one glyph in the atlas.
        asset_root: Directory the Pillow decoder resolves sources against.
        background: RGBA fill used by the Pillow surface on clear.
    """

    width: int
    height: int
    fps: float = DEFAULT_FPS
    font_source: str = DEFAULT_FONT_SOURCE
    glyph_size: Vec2 = DEFAULT_GLYPH_SIZE
    asset_root: str = DEFAULT_ASSET_ROOT
    background: Tuple[int, int, int, int] = DEFAULT_BACKGROUND

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Frame size must be positive, got {self.width}x{self.height}"
            )
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        cw, ch = self.glyph_size
        if cw <= 0 or ch <= 0:
            raise ValueError(f"Glyph size must be positive, got {self.glyph_size}")

    @property
    def frame_interval_ms(self) -> float:
        """Minimum milliseconds between two rendered frames."""
        return 1000.0 / self.fps
