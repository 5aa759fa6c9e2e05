from typing import List, Tuple

import pytest

from spritegraph.builders import (
    composite_from_spritesheet,
    composite_from_text,
    leaf_from_rect,
    spritesheet_frames,
)
from spritegraph.errors import SceneContractError
from spritegraph.nodes import Composite, Leaf
from spritegraph.types import AnimState
from tests.test_utils import make_texture


def test_leaf_from_rect_sets_image() -> None:
    leaf = leaf_from_rect(3, (1, 2), (10, 12), (20, 30), (10, 12), position=(5, 6))
    assert leaf.position == (5, 6)
    assert leaf.size == (10, 12)
    assert leaf.image.texture == 3
    assert leaf.image.dst_offset == (1, 2)
    assert leaf.image.src_offset == (20, 30)
    assert leaf.image.src_size == (10, 12)


@pytest.mark.parametrize(
    "sheet, frame, expected_offsets",
    [
        ((64, 16), (16, 16), [(0, 0), (16, 0), (32, 0), (48, 0)]),
        ((16, 48), (16, 16), [(0, 0), (0, 16), (0, 32)]),
        (
            (30, 20),
            (10, 10),
            [(0, 0), (10, 0), (20, 0), (0, 10), (10, 10), (20, 10)],
        ),
    ],
)
def test_spritesheet_frames_row_major(
    sheet: Tuple[int, int],
    frame: Tuple[int, int],
    expected_offsets: List[Tuple[int, int]],
) -> None:
    node = composite_from_spritesheet(make_texture(*sheet, handle=2), frame, (7, 9))

    assert isinstance(node, Composite)
    assert node.anim_state == AnimState.CYCLE
    assert node.position == (7, 9)
    assert node.frame_cursor == 0
    assert len(node.children) == len(expected_offsets)
    for child, offset in zip(node.children, expected_offsets):
        assert isinstance(child, Leaf)
        assert child.position == (0, 0)
        assert child.image.texture == 2
        assert child.image.src_offset == offset
        assert child.image.src_size == frame
        assert child.image.dst_offset == (0, 0)
        assert child.image.dst_size == frame


def test_single_frame_sheet_collapses_to_leaf() -> None:
    node = composite_from_spritesheet(make_texture(32, 24), (32, 24), (4, 5))
    assert isinstance(node, Leaf)
    assert node.position == (4, 5)
    assert node.image.src_offset == (0, 0)
    assert node.image.dst_size == (32, 24)


def test_sheet_not_multiple_of_frame_raises() -> None:
    with pytest.raises(SceneContractError):
        composite_from_spritesheet(make_texture(30, 16), (16, 16))


@pytest.mark.parametrize("frame", [(0, 16), (16, -2)])
def test_non_positive_frame_size_raises(frame: Tuple[int, int]) -> None:
    with pytest.raises(SceneContractError):
        spritesheet_frames(make_texture(32, 32), frame)


Placement = Tuple[Tuple[int, int], Tuple[int, int]]


def _glyphs(text: str, cw: int = 11, ch: int = 16) -> List[Placement]:
    node = composite_from_text(make_texture(94 * cw, ch, handle=1), (cw, ch), text)
    assert node.anim_state == AnimState.FLATTEN_ALL
    out = []
    for child in node.children:
        assert isinstance(child, Leaf)
        out.append((child.image.dst_offset, child.image.src_offset))
    return out


def test_text_glyph_source_follows_ascii_order() -> None:
    # '!' is the first glyph, '~' the last
    assert _glyphs("!A~") == [
        ((0, 0), (0, 0)),
        ((11, 0), ((ord("A") - 33) * 11, 0)),
        ((22, 0), (93 * 11, 0)),
    ]


def test_text_tab_newline_cursor_arithmetic() -> None:
    cw, ch = 11, 16
    dst = [d for d, _ in _glyphs("A\tB\nC", cw, ch)]
    # tab adds 4 cells on top of its own cell advance
    assert dst == [(0, 0), (6 * cw, 0), (0, ch)]


def test_text_skips_unrenderable_characters_but_advances() -> None:
    cw = 11
    dst = [d for d, _ in _glyphs("a béc", cw)]
    assert dst == [(0, 0), (2 * cw, 0), (4 * cw, 0)]


def test_text_multiple_lines() -> None:
    cw, ch = 4, 6
    dst = [d for d, _ in _glyphs("ab\ncd\n\ne", cw, ch)]
    assert dst == [(0, 0), (cw, 0), (0, ch), (cw, ch), (0, 3 * ch)]


def test_text_position_and_size() -> None:
    node = composite_from_text(make_texture(94 * 11, 16), (11, 16), "hi", (3, 4))
    assert node.position == (3, 4)
    assert node.size == (11, 16)


@pytest.mark.parametrize("text", ["", " \t\n"])
def test_text_without_glyphs_raises(text: str) -> None:
    with pytest.raises(SceneContractError):
        composite_from_text(make_texture(94 * 11, 16), (11, 16), text)
