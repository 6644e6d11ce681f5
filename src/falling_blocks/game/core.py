

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, Callable, Dict, NamedTuple, Optional, Protocol, Sequence, Tuple

import numpy as np

from .collision import absolute_cells, collides
from .grid import Board, clear_full_rows, empty_board, is_inside, lock
from .pieces import Rotation, TetrominoType
from .rules import DEFAULT_CONFIG, GameConfig

logger = logging.getLogger(__name__)

# Horizontal kicks tried by rotate, in order; -2 only applies to the I piece.
ROTATION_KICKS: Tuple[int, ...] = (0, -1, 1, -2)
I_ONLY_KICK = -2


class Command(IntEnum):
    TICK = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    MOVE_DOWN = 3
    ROTATE = 4
    TOGGLE_RUNNING = 5
    NEW_GAME = 6


class Position(NamedTuple):
    x: int
    y: int


class PieceRandom(Protocol):
    def choice(self, seq: Sequence[Any]) -> Any: ...


@dataclass(frozen=True, eq=False)
class GameState:
    board: Board
    kind: TetrominoType
    position: Position
    rotation: Rotation = Rotation.R0
    lines: int = 0
    running: bool = False
    # Set only on the state produced by a game-over restart
    game_over: bool = False
    # Rows removed by the lock that produced this state
    cleared: int = 0


@dataclass(frozen=True, eq=False)
class GameView:
    board: Board
    active_cells: Tuple[Tuple[int, int], ...]
    lines: int
    running: bool
    game_over: bool


def _random_kind(rng: Optional[PieceRandom]) -> TetrominoType:
    return (rng or random).choice(list(TetrominoType))


def _spawn_position(config: GameConfig) -> Position:
    return Position(config.spawn_x, config.spawn_y)


def initial_state(
    rng: Optional[PieceRandom] = None, config: Optional[GameConfig] = None
) -> GameState:
    config = config or DEFAULT_CONFIG
    return GameState(
        board=empty_board(),
        kind=_random_kind(rng),
        position=_spawn_position(config),
    )


def _collides_at(state: GameState, dx: int = 0, dy: int = 0,
                 rotation: Optional[Rotation] = None) -> bool:
    x, y = state.position
    return collides(
        state.board,
        state.kind,
        state.rotation if rotation is None else rotation,
        (x + dx, y + dy),
    )


def _gated(state: GameState, config: GameConfig) -> bool:
    return not state.running and not config.accept_input_while_paused


def _clean(state: GameState) -> GameState:
    if state.game_over or state.cleared:
        return replace(state, game_over=False, cleared=0)
    return state


def _lock_and_spawn(state: GameState, rng: Optional[PieceRandom], config: GameConfig) -> GameState:
    board = lock(state.board, absolute_cells(state.kind, state.rotation, state.position))
    cleared, board = clear_full_rows(board)
    spawned = GameState(
        board=board,
        kind=_random_kind(rng),
        position=_spawn_position(config),
        rotation=Rotation.R0,
        lines=state.lines + cleared,
        running=state.running,
        cleared=cleared,
    )
    if not _collides_at(spawned):
        return spawned
    return GameState(
        board=empty_board(),
        kind=_random_kind(rng),
        position=_spawn_position(config),
        rotation=Rotation.R0,
        lines=0,
        running=state.running and not config.pause_on_game_over,
        game_over=True,
        cleared=cleared,
    )


def _fall(state: GameState, rng: Optional[PieceRandom], config: GameConfig) -> GameState:
    if not _collides_at(state, dy=1):
        x, y = state.position
        return _clean(replace(state, position=Position(x, y + 1)))
    return _lock_and_spawn(state, rng, config)


def tick(state: GameState, rng: Optional[PieceRandom] = None,
         config: Optional[GameConfig] = None) -> GameState:
    """One gravity step: fall a row, or lock, clear lines and spawn the next piece."""
    if not state.running:
        return state
    return _fall(state, rng, config or DEFAULT_CONFIG)


def move_down(state: GameState, rng: Optional[PieceRandom] = None,
              config: Optional[GameConfig] = None) -> GameState:
    config = config or DEFAULT_CONFIG
    if _gated(state, config):
        return state
    return _fall(state, rng, config)


def _shift(state: GameState, dx: int, config: GameConfig) -> GameState:
    if _gated(state, config) or _collides_at(state, dx=dx):
        return state
    x, y = state.position
    return _clean(replace(state, position=Position(x + dx, y)))


def move_left(state: GameState, config: Optional[GameConfig] = None) -> GameState:
    return _shift(state, -1, config or DEFAULT_CONFIG)


def move_right(state: GameState, config: Optional[GameConfig] = None) -> GameState:
    return _shift(state, 1, config or DEFAULT_CONFIG)


def rotate(state: GameState, config: Optional[GameConfig] = None) -> GameState:
    """Rotate one step clockwise, trying the horizontal kicks in order.

    The state is returned unchanged when every eligible kick collides.
    """
    if _gated(state, config or DEFAULT_CONFIG):
        return state
    rotation = state.rotation.next()
    for kick in ROTATION_KICKS:
        if kick == I_ONLY_KICK and state.kind is not TetrominoType.I:
            continue
        if not _collides_at(state, dx=kick, rotation=rotation):
            x, y = state.position
            return _clean(replace(state, rotation=rotation, position=Position(x + kick, y)))
    return state


def toggle_running(state: GameState) -> GameState:
    return _clean(replace(state, running=not state.running))


def new_game(rng: Optional[PieceRandom] = None,
             config: Optional[GameConfig] = None) -> GameState:
    return initial_state(rng, config)


def apply(
    state: GameState,
    command: Command,
    rng: Optional[PieceRandom] = None,
    config: Optional[GameConfig] = None,
) -> GameState:
    """Apply one command and return the next state.

    `rng` supplies the uniform piece choice at each spawn (module-level
    `random` if omitted). Commands that change nothing return `state` itself.
    """
    config = config or DEFAULT_CONFIG
    if command == Command.TICK:
        return tick(state, rng, config)
    if command == Command.MOVE_LEFT:
        return move_left(state, config)
    if command == Command.MOVE_RIGHT:
        return move_right(state, config)
    if command == Command.MOVE_DOWN:
        return move_down(state, rng, config)
    if command == Command.ROTATE:
        return rotate(state, config)
    if command == Command.TOGGLE_RUNNING:
        return toggle_running(state)
    if command == Command.NEW_GAME:
        return new_game(rng, config)
    raise ValueError(f"unknown command: {command!r}")


def active_cells(state: GameState) -> Tuple[Tuple[int, int], ...]:
    """On-board (column, row) cells of the falling piece."""
    return tuple(
        (x, y)
        for x, y in absolute_cells(state.kind, state.rotation, state.position)
        if is_inside(x, y)
    )


def view(state: GameState) -> GameView:
    return GameView(
        board=state.board,
        active_cells=active_cells(state),
        lines=state.lines,
        running=state.running,
        game_over=state.game_over,
    )


def overlay(state: GameState) -> np.ndarray:
    # Locked cells are 1, the falling piece is the negative kind value
    grid = state.board.astype(np.int8)
    for x, y in active_cells(state):
        grid[y, x] = -int(state.kind)
    return grid


class FallingBlocksGame:
    """Stateful host around `apply`: owns the RNG and the current state."""

    def __init__(self, config: Optional[GameConfig] = None,
                 on_game_over: Optional[Callable[[GameState], None]] = None) -> None:
        self.config = config or GameConfig()
        self.rng = random.Random(self.config.random_seed)
        self.on_game_over = on_game_over
        self.state = initial_state(self.rng, self.config)

    def reset(self) -> GameState:
        self.state = new_game(self.rng, self.config)
        return self.state

    def step(self, command: Command) -> GameState:
        previous = self.state
        self.state = apply(previous, command, self.rng, self.config)
        logger.debug("%s -> kind=%s pos=%s rot=%s", command.name, self.state.kind.name,
                     tuple(self.state.position), self.state.rotation.name)
        if self.state is previous:
            return self.state
        if self.state.game_over:
            logger.info("game over after %d lines, restarting",
                        previous.lines + self.state.cleared)
            if self.on_game_over is not None:
                self.on_game_over(self.state)
        elif self.state.cleared:
            logger.info("cleared %d line(s), total %d",
                        self.state.cleared, self.state.lines)
        return self.state

    @property
    def running(self) -> bool:
        return self.state.running

    def view(self) -> GameView:
        return view(self.state)

    def get_state(self) -> np.ndarray:
        return overlay(self.state)

    def info(self) -> Dict[str, Any]:
        return {"lines": self.state.lines, "running": self.state.running}
