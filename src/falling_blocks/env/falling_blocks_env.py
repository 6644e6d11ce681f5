from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import BOARD_HEIGHT, BOARD_WIDTH, Command, FallingBlocksGame, GameConfig, TetrominoType


class FallingBlocksEnv(gym.Env):
    """
    Falling-block environment with one gravity tick per step.

    Actions (5 total):
      0: No-op (gravity only)
      1: Move Left
      2: Move Right
      3: Move Down
      4: Rotate

    Notes:
    - Every action is followed by a tick, so pieces keep falling whatever the agent does.
    - The observation is the board overlay: 1 for locked cells, -kind for the falling piece.
    - Reward is the number of lines cleared during the step; the episode terminates on game over.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACTIONS = (None, Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.MOVE_DOWN, Command.ROTATE)

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10000,
        game_over_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = FallingBlocksGame(self.config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.game_over_penalty = float(game_over_penalty)

        self.observation_space = spaces.Box(
            low=-len(TetrominoType), high=1, shape=(BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(self.ACTIONS))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state()

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.info()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.config = replace(self.config, random_seed=seed)
            self.game = FallingBlocksGame(self.config)
        else:
            self.game.reset()
        self.game.step(Command.TOGGLE_RUNNING)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = self.ACTIONS[int(action)]
        commands = [Command.TICK] if command is None else [command, Command.TICK]
        reward = 0.0
        game_over = False

        for cmd in commands:
            previous = self.game.state
            state = self.game.step(cmd)
            if state is previous:
                continue
            # Counts the final lock too; lines are reset along with the board on game over
            reward += float(state.cleared)
            if state.game_over:
                game_over = True
                break

        self._steps += 1
        terminated = game_over
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward -= self.game_over_penalty

        obs = self._get_obs()
        info = self._get_info()
        info["game_over"] = terminated
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            state = self._get_obs()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(state[y, x])
                    if v > 0:
                        color = (70, 200, 120)
                    elif v < 0:
                        color = (200, 200, 200)
                    else:
                        color = (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
