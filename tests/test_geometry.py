from __future__ import annotations

import pytest

from falling_blocks.game import LETTERS, Pos, Shape, build_shape_table


def test_pos_addition():
    assert Pos(1, 2) + Pos(-3, 4) == Pos(-2, 6)


def test_shape_table_has_every_letter_once():
    table = build_shape_table()
    assert sorted(table) == sorted(LETTERS)
    for shape in table.values():
        assert len(shape.offsets) == 4
        assert len(set(shape.offsets)) == 4


def test_shape_table_is_read_only():
    table = build_shape_table()
    with pytest.raises(TypeError):
        table["X"] = table["O"]  # type: ignore[index]


def test_rotated_once_maps_x_y_to_minus_y_x():
    shape = Shape((Pos(1, 0), Pos(0, 1), Pos(-1, 0), Pos(2, -3)))
    assert shape.rotated_once().offsets == (Pos(0, 1), Pos(-1, 0), Pos(0, -1), Pos(3, 2))


@pytest.mark.parametrize("letter", LETTERS)
def test_full_rotation_is_identity(letter):
    shape = build_shape_table()[letter]
    assert shape.rotated(4) == shape
    assert shape.rotated(0) == shape
    once = shape
    for _ in range(4):
        once = once.rotated(1)
    assert once == shape.rotated(4)


def test_shape_at_translates_offsets():
    shape = build_shape_table()["T"]
    assert shape.at(Pos(4, 1)) == (Pos(4, 0), Pos(4, 1), Pos(4, 2), Pos(5, 1))
