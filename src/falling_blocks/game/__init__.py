"""Game module for Falling Blocks.

Exports the rules engine:
- TetrominoType / Rotation / shape_of: the shape table
- collides: the collision checker
- lock / clear_full_rows: board mutation and line clearing
- GameState / Command / apply: the game state machine
- GameConfig: spawn point and policy switches
- FallingBlocksGame: stateful host around `apply`
"""

from .pieces import Offset, Piece, Rotation, ShapeTableError, TetrominoType, shape_of
from .grid import BOARD_HEIGHT, BOARD_WIDTH, clear_full_rows, empty_board, lock
from .collision import absolute_cells, collides
from .rules import GameConfig
from .core import (
    Command,
    FallingBlocksGame,
    GameState,
    GameView,
    Position,
    apply,
    initial_state,
    overlay,
    view,
)

__all__ = [
    "Offset",
    "Piece",
    "Rotation",
    "ShapeTableError",
    "TetrominoType",
    "shape_of",
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "clear_full_rows",
    "empty_board",
    "lock",
    "absolute_cells",
    "collides",
    "GameConfig",
    "Command",
    "FallingBlocksGame",
    "GameState",
    "GameView",
    "Position",
    "apply",
    "initial_state",
    "overlay",
    "view",
]
