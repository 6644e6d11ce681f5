

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np


BOARD_WIDTH = 10
BOARD_HEIGHT = 20

Coordinate = Tuple[int, int]
Board = np.ndarray


def _freeze(grid: np.ndarray) -> Board:
    grid.setflags(write=False)
    return grid


def empty_board() -> Board:
    """Fresh all-empty board; row 0 is the top."""
    return _freeze(np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.bool_))


def is_inside(x: int, y: int) -> bool:
    return 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT


def lock(board: Board, cells: Iterable[Coordinate]) -> Board:
    """Return a copy of `board` with the (column, row) `cells` occupied.

    Cells outside the board are ignored.
    """
    grid = np.array(board, dtype=np.bool_, copy=True)
    for x, y in cells:
        if is_inside(x, y):
            grid[y, x] = True
    return _freeze(grid)


def full_rows(board: Board) -> List[int]:
    return [int(row) for row in np.flatnonzero(np.all(board, axis=1))]


def clear_full_rows(board: Board) -> Tuple[int, Board]:
    """Remove every full row and pad the top with empty rows.

    Returns the number of rows removed and the new board, which always keeps
    BOARD_HEIGHT rows.
    """
    rows = full_rows(board)
    if not rows:
        return 0, board
    num = len(rows)
    kept = np.delete(board, rows, axis=0)
    new_rows = np.zeros((num, BOARD_WIDTH), dtype=np.bool_)
    return num, _freeze(np.vstack((new_rows, kept)))


def board_from_rows(rows: Sequence[Union[str, Sequence[object]]]) -> Board:
    """Build a board from up to BOARD_HEIGHT rows, aligned to the bottom.

    String rows use '#' (or any non '.' / ' ' character) for occupied cells.
    """
    if len(rows) > BOARD_HEIGHT:
        raise ValueError(f"expected at most {BOARD_HEIGHT} rows, got {len(rows)}")
    grid = np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.bool_)
    top = BOARD_HEIGHT - len(rows)
    for i, row in enumerate(rows):
        if len(row) != BOARD_WIDTH:
            raise ValueError(f"row {i} has {len(row)} cells, expected {BOARD_WIDTH}")
        if isinstance(row, str):
            grid[top + i] = [c not in ". " for c in row]
        else:
            grid[top + i] = [bool(c) for c in row]
    return _freeze(grid)


def format_board(board: Board) -> str:
    return "\n".join("".join("#" if cell else "." for cell in row) for row in board)
