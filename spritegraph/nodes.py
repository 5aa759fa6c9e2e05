"""Scene graph nodes.

A node is either a :class:`Leaf`, which draws one sub-rectangle of one
texture, or a :class:`Composite`, which owns an ordered, non-empty vector of
child nodes and an animation policy deciding which of them are drawn each
frame. Modelling the two kinds as separate classes makes "a node with both an
image and children" unrepresentable.

Positions are relative to the parent: the compositor adds every ancestor's
position on the way down (see :mod:`spritegraph.compositor`).

Children are stored in a ``pyrsistent.PVector`` so the tree shape is fixed once
built. The only mutable piece of a node is ``Composite.frame_cursor``.
"""

from dataclasses import dataclass
from typing import Union

from pyrsistent import pvector
from pyrsistent.typing import PVector

from spritegraph.errors import SceneContractError
from spritegraph.types import AnimState, TextureHandle, Vec2


@dataclass(frozen=True)
class ImageRef:
    """Blit this sub-rectangle of ``texture`` at ``dst_offset``, sized ``dst_size``.

    Attributes:
        texture: Handle into the renderer's texture table.
        dst_offset: Added to the owning node's position and the accumulated
            parent offset to get the final destination.
        dst_size: Destination width and height.
        src_offset: Top-left corner of the source rectangle in the texture.
        src_size: Source width and height.
    """

    texture: TextureHandle
    dst_offset: Vec2
    dst_size: Vec2
    src_offset: Vec2
    src_size: Vec2


@dataclass(frozen=True)
class Leaf:
    position: Vec2
    size: Vec2
    image: ImageRef


@dataclass(eq=False)
class Composite:
    """Positioned group of child nodes rendered under an animation policy.

    Attributes:
        position: Offset added to every child.
        size: Nominal size of the group (informational).
        anim_state: ``CYCLE`` shows one child per frame and advances,
            ``HOLD`` shows the child under the cursor, ``FLATTEN_ALL`` shows
            every child every frame.
        children: Ordered child nodes. Must not be empty.
        frame_cursor: Index of the next child shown by ``CYCLE`` / ``HOLD``.
    """

    position: Vec2
    size: Vec2
    anim_state: AnimState
    children: PVector["Node"]
    frame_cursor: int = 0

    def __post_init__(self) -> None:
        self.children = pvector(self.children)
        if len(self.children) == 0:
            raise SceneContractError("Composite node needs at least one child")
        if self.anim_state == AnimState.STATIC_LEAF:
            raise SceneContractError(
                "STATIC_LEAF nodes are leaves; build a Leaf instead"
            )
        self._check_cursor(self.frame_cursor)

    @property
    def current(self) -> "Node":
        """Child under the cursor."""
        return self.children[self.frame_cursor]

    def show(self, index: int) -> None:
        """Move the cursor to ``index``; the way to change a ``HOLD`` frame."""
        self._check_cursor(index)
        self.frame_cursor = index

    def _check_cursor(self, index: int) -> None:
        if not 0 <= index < len(self.children):
            raise SceneContractError(
                f"Frame cursor {index} out of range for {len(self.children)} children"
            )


Node = Union[Leaf, Composite]
