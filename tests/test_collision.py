from __future__ import annotations

import itertools

import numpy as np
import pytest

from falling_blocks.game.collision import absolute_cells, collides
from falling_blocks.game.grid import BOARD_HEIGHT, BOARD_WIDTH, board_from_rows, empty_board
from falling_blocks.game.pieces import Rotation, TetrominoType

ALL_PIECES = list(itertools.product(TetrominoType, Rotation))


def full_board():
    return np.ones((BOARD_HEIGHT, BOARD_WIDTH), dtype=bool)


def test_absolute_cells_add_the_anchor():
    assert absolute_cells(TetrominoType.O, Rotation.R0, (4, 0)) == [(4, 0), (5, 0), (4, 1), (5, 1)]


@pytest.mark.parametrize("kind, rotation", ALL_PIECES)
def test_out_of_bounds_always_collides(kind, rotation):
    cells = absolute_cells(kind, rotation, (0, 0))
    min_x = min(x for x, _ in cells)
    max_x = max(x for x, _ in cells)
    max_y = max(y for _, y in cells)
    for board in (empty_board(), full_board()):
        # One column past the left wall, right wall and floor
        assert collides(board, kind, rotation, (-min_x - 1, 5))
        assert collides(board, kind, rotation, (BOARD_WIDTH - max_x, 5))
        assert collides(board, kind, rotation, (4, BOARD_HEIGHT - max_y))


@pytest.mark.parametrize("kind, rotation", ALL_PIECES)
def test_inside_empty_board_is_free(kind, rotation):
    assert not collides(empty_board(), kind, rotation, (4, 5))


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_spawn_point_is_free_on_empty_board(kind):
    assert not collides(empty_board(), kind, Rotation.R0, (4, 0))


def test_rows_above_the_board_are_open():
    # Vertical I at the top reaches row -1
    board = board_from_rows(["#" * BOARD_WIDTH] * (BOARD_HEIGHT - 3))
    assert not collides(board, TetrominoType.I, Rotation.R0, (0, 0))
    assert collides(board, TetrominoType.I, Rotation.R0, (0, 1))


def test_occupied_cell_collides():
    board = board_from_rows(["....#....."])
    assert collides(board, TetrominoType.O, Rotation.R0, (4, 18))
    assert collides(board, TetrominoType.O, Rotation.R0, (3, 18))
    assert not collides(board, TetrominoType.O, Rotation.R0, (5, 18))
    assert not collides(board, TetrominoType.O, Rotation.R0, (4, 17))


def test_collides_does_not_modify_the_board():
    board = board_from_rows(["....#....."])
    before = board.copy()
    collides(board, TetrominoType.T, Rotation.R180, (4, 19))
    assert np.array_equal(board, before)
