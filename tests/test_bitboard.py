"""Tests covering bit-packed coordinate sets."""

from __future__ import annotations

import pytest

from gomori.bbox import BoundingBox
from gomori.bitboard import WINDOW_WIDTH, BitBoard


def _board(center: tuple[int, int], coords: list[tuple[int, int]]) -> BitBoard:
    bitboard = BitBoard.empty_board_centered_at(center)
    for i, j in coords:
        bitboard = bitboard.insert(i, j)
    return bitboard


def test_insert_remove_contains() -> None:
    empty = BitBoard.empty_board_centered_at((10, -4))
    assert empty.is_empty()

    bitboard = empty.insert(12, -6).insert(10, -4)
    assert bitboard.contains(12, -6)
    assert (10, -4) in bitboard
    assert not bitboard.contains(11, -4)
    assert len(bitboard) == 2
    assert empty.is_empty()

    removed = bitboard.remove(12, -6)
    assert not removed.contains(12, -6)
    assert removed.remove(40, 40) == removed


def test_insert_outside_window_raises() -> None:
    bitboard = BitBoard.empty_board_centered_at((0, 0))
    with pytest.raises(ValueError):
        bitboard.insert(4, 0)
    assert not bitboard.contains(4, 0)


def test_set_algebra_requires_shared_center() -> None:
    left = _board((0, 0), [(0, 0), (0, 1), (1, 1)])
    right = _board((0, 0), [(0, 1), (2, 2)])

    assert set(left | right) == {(0, 0), (0, 1), (1, 1), (2, 2)}
    assert set(left - right) == {(0, 0), (1, 1)}
    assert set(left & right) == {(0, 1)}

    other_center = _board((1, 1), [(0, 1)])
    with pytest.raises(ValueError):
        left.union(other_center)
    with pytest.raises(ValueError):
        left.difference(other_center)


def test_insert_area_is_clipped_to_window() -> None:
    bitboard = BitBoard.empty_board_centered_at((0, 0)).insert_area(-10, -10, 10, 10)
    assert len(bitboard) == WINDOW_WIDTH * WINDOW_WIDTH

    area = BitBoard.empty_board_centered_at((0, 0)).insert_area(-1, 0, 0, 2)
    assert set(area) == set(BoundingBox(i_min=-1, j_min=0, i_max=0, j_max=2))

    assert BitBoard.empty_board_centered_at((0, 0)).insert_area(5, 5, 9, 9).is_empty()


def test_iteration_is_ascending_and_restartable() -> None:
    coords = [(2, -1), (-3, 3), (0, 0), (0, -2)]
    bitboard = _board((0, 0), coords)
    assert list(bitboard) == sorted(coords)
    assert list(bitboard) == list(bitboard)


@pytest.mark.parametrize(
    "line",
    [
        [(0, 0), (0, 1), (0, 2), (0, 3)],
        [(-1, 2), (0, 2), (1, 2), (2, 2)],
        [(-1, -1), (0, 0), (1, 1), (2, 2)],
        [(-1, 2), (0, 1), (1, 0), (2, -1)],
    ],
)
def test_lines_going_through_point_finds_every_direction(line: list[tuple[int, int]]) -> None:
    bitboard = _board((0, 0), line + [(3, -3)])
    for i, j in line:
        assert set(bitboard.lines_going_through_point(i, j)) == set(line)
    assert bitboard.lines_going_through_point(3, -3).is_empty()


def test_three_in_a_row_is_not_a_line() -> None:
    bitboard = _board((0, 0), [(0, 0), (0, 1), (0, 2), (1, 3)])
    assert bitboard.lines_going_through_point(0, 1).is_empty()


def test_point_must_be_a_member() -> None:
    bitboard = _board((0, 0), [(0, 0), (0, 1), (0, 3)])
    assert bitboard.lines_going_through_point(0, 2).is_empty()


def test_lines_are_unioned_across_directions() -> None:
    row = [(0, -2), (0, -1), (0, 0), (0, 1), (0, 2)]
    column = [(-3, 0), (-2, 0), (-1, 0)]
    bitboard = _board((0, 0), row + column)
    assert set(bitboard.lines_going_through_point(0, 0)) == set(row) | set(column) | {(0, 0)}


def test_to_array_marks_members() -> None:
    bitboard = _board((5, 5), [(2, 2), (5, 5), (8, 7)])
    grid = bitboard.to_array()
    assert grid.shape == (WINDOW_WIDTH, WINDOW_WIDTH)
    assert int(grid.sum()) == 3
    assert grid[0, 0]
    assert grid[3, 3]
    assert grid[6, 5]
