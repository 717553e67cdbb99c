from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    Action,
    GameConfig,
    GameSession,
    ScoringRules,
    TetrominoType,
    count_holes,
    get_max_height,
)


class FallingBlocksEnv(gym.Env):
    """Headless falling-block game driven one action at a time.

    Observation:
      board: occupancy matrix, 1 for locked cells, -type for the falling piece
      next_piece: TetrominoType value of the preview piece
      level: current level
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        line_reward: float = 0.0,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.game = GameSession(config, rules)
        self.line_reward = float(line_reward)
        self.max_episode_steps = int(max_episode_steps)

        n_types = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_types, high=n_types, shape=(BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8),
                "next_piece": spaces.Discrete(n_types + 1),
                "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_piece = self.game.next_piece
        return {
            "board": self.game.get_state().astype(np.int8),
            "next_piece": int(next_piece.type) if next_piece is not None else 0,
            "level": np.array([self.game.level], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "level": self.game.level,
            "holes": count_holes(self.game.board),
            "max_height": get_max_height(self.game.board),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.seed(seed)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        result = self.game.step(Action(int(action)))
        self._steps += 1

        reward = float(result.score_delta) + self.line_reward * float(result.lines_cleared)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["lines_cleared"] = result.lines_cleared
        info["locked"] = result.locked
        return self._get_obs(), reward, terminated, truncated, info

    def close(self) -> None:
        pass
