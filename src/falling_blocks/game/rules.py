

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameConfig:
    random_seed: Optional[int] = None
    spawn_x: int = 4
    spawn_y: int = 0
    # Moves, drops and rotations are dropped while the game is paused
    accept_input_while_paused: bool = False
    # Game over resets the board; the game keeps running unless this is set
    pause_on_game_over: bool = False


DEFAULT_CONFIG = GameConfig()
