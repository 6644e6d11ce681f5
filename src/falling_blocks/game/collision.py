

from __future__ import annotations

from typing import List, Tuple

from .grid import BOARD_HEIGHT, BOARD_WIDTH, Board, Coordinate
from .pieces import Rotation, TetrominoType, shape_of


def absolute_cells(
    kind: TetrominoType, rotation: Rotation, position: Tuple[int, int]
) -> List[Coordinate]:
    x, y = position
    return [(x + dx, y + dy) for dx, dy in shape_of(kind, rotation)]


def collides(
    board: Board, kind: TetrominoType, rotation: Rotation, position: Tuple[int, int]
) -> bool:
    """True if the piece would leave the board or overlap an occupied cell.

    Rows above the top (negative) are open; they are never indexed.
    """
    for x, y in absolute_cells(kind, rotation, position):
        if y >= BOARD_HEIGHT or x < 0 or x >= BOARD_WIDTH:
            return True
        if y >= 0 and board[y, x]:
            return True
    return False
