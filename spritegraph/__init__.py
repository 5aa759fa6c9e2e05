"""2D sprite scene-graph renderer.

Nested, positioned sprite nodes (static images, animated clips, repeating
groups, text runs) are composited into one frame at a capped frame rate.
"""

from spritegraph.builders import (
    composite_from_spritesheet,
    composite_from_text,
    leaf_from_rect,
)
from spritegraph.compositor import Blit, Compositor, render_frame
from spritegraph.config import RendererConfig
from spritegraph.errors import SceneContractError
from spritegraph.nodes import Composite, ImageRef, Leaf, Node
from spritegraph.renderer import Renderer
from spritegraph.scheduler import FrameScheduler
from spritegraph.textures import Texture, TextureTable
from spritegraph.types import AnimState, DecodedImage

__all__ = [
    "AnimState",
    "Blit",
    "Composite",
    "Compositor",
    "DecodedImage",
    "FrameScheduler",
    "ImageRef",
    "Leaf",
    "Node",
    "Renderer",
    "RendererConfig",
    "SceneContractError",
    "Texture",
    "TextureTable",
    "composite_from_spritesheet",
    "composite_from_text",
    "leaf_from_rect",
    "render_frame",
]
