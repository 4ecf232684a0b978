from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Game, GameConfig, GameState, Key, ScoringRules


class FallingBlocksEnv(gym.Env):
    """
    Real-time falling block game exposed as a discrete-action environment.

    Actions (6 total):
      0: No-op
      1: Move Left
      2: Move Right
      3: Rotate CW
      4: Soft Drop (one row)
      5: Hard Drop

    Each step presses the chosen key and then advances the game clock by
    `frame_ms`, so gravity keeps pulling the piece down between actions.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACT_NONE = 0
    ACT_LEFT = 1
    ACT_RIGHT = 2
    ACT_ROTATE = 3
    ACT_SOFT_DROP = 4
    ACT_HARD_DROP = 5

    ACTION_KEYS = {
        ACT_LEFT: Key.LEFT,
        ACT_RIGHT: Key.RIGHT,
        ACT_ROTATE: Key.UP,
        ACT_SOFT_DROP: Key.DOWN,
        ACT_HARD_DROP: Key.D,
    }

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        frame_ms: int = 100,
        max_episode_steps: int = 10000,
        row_reward: float = 1.0,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = Game(self.config, rules, rng=np.random.default_rng(self.config.random_seed))
        self.render_mode = render_mode
        self.frame_ms = frame_ms
        self.max_episode_steps = int(max_episode_steps)
        self.row_reward = float(row_reward)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(6)

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "rows_cleared": self.game.rows_cleared,
            "level": self.game.level,
            "next_letter": self.game.next_letter,
            "steps": self._steps,
        }

    def _start_game(self) -> None:
        self.game.reset()
        self.game.handle_key(Key.SPACE, True)
        # first update rolls the lookahead, the second spawns it
        while self.game.falling_piece is None and self.game.state == GameState.RUNNING:
            self.game.update(0)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng = np.random.default_rng(seed)
        self._start_game()
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        rows_before = self.game.rows_cleared

        key = self.ACTION_KEYS.get(int(action))
        if key is not None:
            self.game.handle_key(key, True)
            self.game.handle_key(key, False)
        self.game.update(self.frame_ms)
        self._steps += 1

        reward_components: Dict[str, float] = {
            "score": float(self.game.score - score_before),
            "rows": self.row_reward * float(self.game.rows_cleared - rows_before),
        }
        terminated = self.game.state == GameState.GAME_OVER
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        info = self._get_info()
        info["reward_components"] = reward_components
        return self.game.get_state(), float(sum(reward_components.values())), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        from falling_blocks.visualization.renderer import letter_palette

        palette = np.array(letter_palette(), dtype=np.uint8)
        state = np.abs(self.game.get_state().astype(np.int16))
        cell = 12
        img = palette[state]
        return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)

    def close(self) -> None:
        pass
