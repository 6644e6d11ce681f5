from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game.grid import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    board_from_rows,
    clear_full_rows,
    empty_board,
    format_board,
    full_rows,
    lock,
)

FULL = "#" * BOARD_WIDTH
EMPTY = "." * BOARD_WIDTH


def test_empty_board_shape_and_rows_are_independent():
    board = empty_board()
    assert board.shape == (BOARD_HEIGHT, BOARD_WIDTH)
    assert not board.any()
    assert not board.flags.writeable
    changed = lock(board, [(0, 0)])
    assert changed[0, 0]
    assert not changed[1, 0]
    assert not board[0, 0]


def test_lock_returns_new_board_and_ignores_outside_cells():
    board = empty_board()
    result = lock(board, [(4, 0), (5, 0), (-1, 3), (10, 3), (3, -1), (3, 20)])
    assert result is not board
    assert not result.flags.writeable
    assert int(result.sum()) == 2
    assert result[0, 4] and result[0, 5]
    assert not board.any()


def test_clear_without_full_rows_is_a_no_op():
    board = board_from_rows(["#########.", "##.#######"])
    cleared, result = clear_full_rows(board)
    assert cleared == 0
    assert np.array_equal(result, board)


def test_single_line_clear_shifts_rows_down():
    # Row 19 full except column 9, then column 9 gets filled
    rows = [EMPTY] * 17 + ["#.........", ".#........", "#########."]
    board = board_from_rows(rows)
    board = lock(board, [(9, 19)])
    cleared, result = clear_full_rows(board)
    assert cleared == 1
    assert result.shape == (BOARD_HEIGHT, BOARD_WIDTH)
    assert not result[0].any()
    assert np.array_equal(result[1:], board[:-1])


def test_non_contiguous_rows_clear_together():
    board = board_from_rows([
        "#.........",
        FULL,
        "..#.......",
        FULL,
        "....#.....",
    ])
    cleared, result = clear_full_rows(board)
    assert cleared == 2
    assert full_rows(result) == []
    assert format_board(result).splitlines()[-3:] == ["#.........", "..#.......", "....#....."]
    assert not result[:17].any()


@pytest.mark.parametrize("count", [0, 1, 4, 7, 19, 20])
def test_row_count_is_kept_for_any_number_of_full_rows(count):
    rng = np.random.default_rng(count)
    grid = np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=bool)
    chosen = rng.choice(BOARD_HEIGHT, size=count, replace=False)
    for row in range(BOARD_HEIGHT):
        if row in chosen:
            grid[row] = True
        else:
            grid[row, rng.integers(BOARD_WIDTH)] = True
    board = board_from_rows(grid.tolist())
    assert sorted(full_rows(board)) == sorted(int(r) for r in chosen)

    cleared, result = clear_full_rows(board)
    assert cleared == count
    assert result.shape == (BOARD_HEIGHT, BOARD_WIDTH)
    assert not result[:count].any()
    survivors = [row for row in range(BOARD_HEIGHT) if row not in chosen]
    assert np.array_equal(result[count:], grid[survivors])


def test_board_from_rows_rejects_bad_widths():
    with pytest.raises(ValueError):
        board_from_rows(["###"])
    with pytest.raises(ValueError):
        board_from_rows([EMPTY] * (BOARD_HEIGHT + 1))


def test_format_board_round_trips_rows():
    text = format_board(board_from_rows(["#........#"]))
    lines = text.splitlines()
    assert len(lines) == BOARD_HEIGHT
    assert lines[-1] == "#........#"
    assert lines[0] == EMPTY
