
from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional, Sequence

import pygame

from falling_blocks.game import Command, FallingBlocksGame, GameConfig
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE,
    pygame.K_DOWN: Command.MOVE_DOWN,
    pygame.K_SPACE: Command.TOGGLE_RUNNING,
    pygame.K_p: Command.TOGGLE_RUNNING,
    pygame.K_n: Command.NEW_GAME,
}


def caption_for(game: FallingBlocksGame, game_over_shown: bool) -> str:
    if game_over_shown:
        return f"Game Over! Lines: {game.state.lines}"
    status = "running" if game.running else "paused - space to start"
    return f"Lines: {game.state.lines} ({status})"


def run(config: Optional[GameConfig] = None, gravity_ms: int = 500, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game_over_at: List[int] = []
        game = FallingBlocksGame(config, on_game_over=lambda _state: game_over_at.append(pygame.time.get_ticks()))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.get_state()))
        pygame.display.set_caption("Falling Blocks")

        last_fall = pygame.time.get_ticks()

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            game.step(command)

            # Gravity
            now = pygame.time.get_ticks()
            if now - last_fall >= gravity_ms:
                game.step(Command.TICK)
                last_fall = now

            # Game over caption shows for two seconds
            shown = bool(game_over_at) and now - game_over_at[-1] < 2000
            renderer.draw(screen, game.get_state(), caption_for(game, shown))
            pygame.display.flip()

            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard")
    parser.add_argument("--gravity-ms", type=int, default=500, help="Milliseconds between ticks")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--pause-on-game-over", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=getattr(logging, args.log_level.upper(), logging.INFO),
    )
    config = GameConfig(random_seed=args.seed, pause_on_game_over=args.pause_on_game_over)
    logger.info("starting human play, gravity %d ms", args.gravity_ms)
    run(config, gravity_ms=args.gravity_ms)


if __name__ == "__main__":  # pragma: no cover
    main()
