"""Frame compositor.

Flattens a scene forest into the ordered list of blits making up one frame.

Traversal is depth-first with an explicit work stack, so deep trees never hit
the interpreter's recursion limit. Each stack entry carries the offset
accumulated from its ancestors; a leaf draws at

    node position + accumulated offset + image destination offset

Composites decide which children are visited:

* ``CYCLE`` visits the child under its cursor, then advances the cursor,
  wrapping around. One step per rendered frame.
* ``HOLD`` visits the child under its cursor and leaves the cursor alone.
* ``FLATTEN_ALL`` visits every child.

Blits come out in painter's order: roots in forest order, siblings in the
order they were appended, each composite fully expanded before its next
sibling. The frame is planned completely before anything reaches the surface,
so a malformed node aborts the frame with a cleared surface rather than a
half-drawn one.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from spritegraph.errors import SceneContractError
from spritegraph.nodes import Composite, Leaf, Node
from spritegraph.types import AnimState, DrawSurface, Rect, TextureHandle


@dataclass(frozen=True)
class Blit:
    """Copy ``src`` of ``texture`` to ``dst`` (both ``(x, y, w, h)``)."""

    texture: TextureHandle
    src: Rect
    dst: Rect


StackEntry = Tuple[Node, int, int]


class Compositor:
    """Stateful wrapper keeping the work stack between frames."""

    def __init__(self) -> None:
        self._stack: List[StackEntry] = []

    def plan(self, forest: Sequence[Node]) -> List[Blit]:
        """Walk ``forest`` and return this frame's blits, advancing ``CYCLE`` cursors.

        Raises:
            SceneContractError: If an entry is not a node, or a composite has
                no children or an unrenderable state.
        """
        stack = self._stack
        stack.clear()
        for root in reversed(forest):
            stack.append((root, 0, 0))

        blits: List[Blit] = []
        try:
            while stack:
                node, dx, dy = stack.pop()
                if isinstance(node, Leaf):
                    blits.append(_leaf_blit(node, dx, dy))
                elif isinstance(node, Composite):
                    _expand(node, dx, dy, stack)
                else:
                    raise SceneContractError(
                        f"Expected a scene node, got {type(node).__name__}"
                    )
        finally:
            stack.clear()
        return blits

    def render(
        self, forest: Sequence[Node], surface: DrawSurface, width: int, height: int
    ) -> List[Blit]:
        """Clear ``surface``, draw one frame of ``forest`` and return the blits."""
        surface.clear(width, height)
        blits = self.plan(forest)
        for blit in blits:
            surface.blit(blit.texture, blit.src, blit.dst)
        return blits


def render_frame(
    forest: Sequence[Node], surface: DrawSurface, width: int, height: int
) -> List[Blit]:
    """One-shot :meth:`Compositor.render` with a fresh stack."""
    return Compositor().render(forest, surface, width, height)


def _leaf_blit(node: Leaf, dx: int, dy: int) -> Blit:
    image = node.image
    x, y = node.position
    ix, iy = image.dst_offset
    sx, sy = image.src_offset
    sw, sh = image.src_size
    w, h = image.dst_size
    return Blit(
        texture=image.texture,
        src=(sx, sy, sw, sh),
        dst=(x + dx + ix, y + dy + iy, w, h),
    )


def _expand(node: Composite, dx: int, dy: int, stack: List[StackEntry]) -> None:
    children = node.children
    if len(children) == 0:
        raise SceneContractError("Reached a composite node with no children")

    x, y = node.position
    cx, cy = dx + x, dy + y
    state = node.anim_state

    if state in (AnimState.CYCLE, AnimState.HOLD) and not (
        0 <= node.frame_cursor < len(children)
    ):
        raise SceneContractError(
            f"Frame cursor {node.frame_cursor} out of range "
            f"for {len(children)} children"
        )

    if state == AnimState.CYCLE:
        stack.append((children[node.frame_cursor], cx, cy))
        node.frame_cursor = (node.frame_cursor + 1) % len(children)
    elif state == AnimState.HOLD:
        stack.append((children[node.frame_cursor], cx, cy))
    elif state == AnimState.FLATTEN_ALL:
        # reversed so pops come out in append order
        for child in reversed(children):
            stack.append((child, cx, cy))
    else:
        raise SceneContractError(f"Composite node cannot have state {state}")
