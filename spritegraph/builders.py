"""Node construction helpers.

All builders are pure: they take already-loaded textures and return new
nodes without touching the renderer. :class:`spritegraph.renderer.Renderer`
wraps them with texture loading and forest append.

Text layout uses a monospace glyph atlas laid out in one row, ordered by
ASCII code starting at ``!`` (33), 94 glyphs in total.
"""

from typing import List

from spritegraph.errors import SceneContractError
from spritegraph.nodes import Composite, ImageRef, Leaf, Node
from spritegraph.textures import Texture
from spritegraph.types import AnimState, TextureHandle, Vec2


FIRST_GLYPH = 33
GLYPH_COUNT = 94
TAB_CELLS = 4


def leaf_from_rect(
    texture: TextureHandle,
    dst_offset: Vec2,
    dst_size: Vec2,
    src_offset: Vec2,
    src_size: Vec2,
    position: Vec2 = (0, 0),
) -> Leaf:
    """Build a leaf drawing one sub-rectangle of ``texture``."""
    _check_size(dst_size, "Destination size")
    _check_size(src_size, "Source size")
    image = ImageRef(
        texture=texture,
        dst_offset=dst_offset,
        dst_size=dst_size,
        src_offset=src_offset,
        src_size=src_size,
    )
    return Leaf(position=position, size=dst_size, image=image)


def spritesheet_frames(texture: Texture, frame_size: Vec2) -> Vec2:
    """Return ``(x_frames, y_frames)`` for cutting ``texture`` into frames.

    Raises:
        SceneContractError: If the frame size is not positive or does not
            divide the sheet exactly.
    """
    _check_size(frame_size, "Frame size")
    w, h = frame_size
    if texture.width % w or texture.height % h:
        raise SceneContractError(
            f"Sheet {texture.source!r} ({texture.width}x{texture.height}) "
            f"is not a multiple of frame size {w}x{h}"
        )
    return texture.width // w, texture.height // h


def composite_from_spritesheet(
    texture: Texture, frame_size: Vec2, position: Vec2 = (0, 0)
) -> Node:
    """Cut a spritesheet into frames.

    A sheet holding exactly one frame becomes a single leaf. Otherwise the
    result is a ``CYCLE`` composite with one leaf per frame, in row-major
    order: frame ``i`` reads from ``((i % x_frames) * w, (i // x_frames) * h)``.

    Args:
        texture: Loaded sheet.
        frame_size: ``(w, h)`` of one frame.
        position: Position of the returned node.

    Returns:
        Node: ``Leaf`` for single-frame sheets, ``Composite`` otherwise.
    """
    x_frames, y_frames = spritesheet_frames(texture, frame_size)
    w, h = frame_size

    if x_frames == 1 and y_frames == 1:
        return leaf_from_rect(
            texture.handle, (0, 0), frame_size, (0, 0), frame_size, position=position
        )

    frames: List[Node] = []
    for i in range(x_frames * y_frames):
        src_offset = ((i % x_frames) * w, (i // x_frames) * h)
        frames.append(
            leaf_from_rect(texture.handle, (0, 0), frame_size, src_offset, frame_size)
        )
    return Composite(
        position=position,
        size=frame_size,
        anim_state=AnimState.CYCLE,
        children=frames,
    )


def composite_from_text(
    texture: Texture, cell_size: Vec2, text: str, position: Vec2 = (0, 0)
) -> Composite:
    """Lay ``text`` out as one glyph leaf per printable character.

    The cursor starts at ``(0, 0)`` and moves ``cw`` right after every
    character. A tab first adds ``4 * cw``. A newline sets x to ``-cw`` and
    moves down by ``ch``, so the next character lands at x = 0. Characters
    outside the atlas take up a cell but draw nothing.

    Raises:
        SceneContractError: If the cell size is not positive or the text has
            no character the atlas can draw.
    """
    _check_size(cell_size, "Cell size")
    cw, ch = cell_size
    glyphs: List[Node] = []
    dx, dy = 0, 0
    for char in text:
        glyph = ord(char) - FIRST_GLYPH
        if char == "\t":
            dx += TAB_CELLS * cw
        elif char == "\n":
            dy += ch
            dx = -cw
        elif 0 <= glyph < GLYPH_COUNT:
            glyphs.append(
                leaf_from_rect(
                    texture.handle, (dx, dy), cell_size, (glyph * cw, 0), cell_size
                )
            )
        dx += cw

    if not glyphs:
        raise SceneContractError(f"Text {text!r} has no drawable glyphs")
    return Composite(
        position=position,
        size=cell_size,
        anim_state=AnimState.FLATTEN_ALL,
        children=glyphs,
    )


def _check_size(size: Vec2, what: str) -> None:
    w, h = size
    if w <= 0 or h <= 0:
        raise SceneContractError(f"{what} must be positive, got {size}")
