from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stackfall.game import Command, FallingBlockGame, GameConfig, PieceType, color_for_value


class FallingBlockEnv(gym.Env):
    """
    Falling-block environment over the 10x32 board.

    Actions (6 total):
      0: No-op (let gravity act)
      1: Move Left
      2: Move Right
      3: Rotate
      4: Soft Drop
      5: Hard Drop

    Every step applies the action, then advances time by one gravity interval,
    so each step fires exactly one gravity tick. A hard drop is therefore
    settled on the same step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACTION_COMMANDS: Dict[int, Optional[Command]] = {
        0: None,
        1: Command.MOVE_LEFT,
        2: Command.MOVE_RIGHT,
        3: Command.ROTATE,
        4: Command.SOFT_DROP,
        5: Command.HARD_DROP,
    }

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10000,
        step_penalty: float = 0.0,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        # Reward shaping parameters
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.game.board.height, self.game.board.width
        top = max(int(k) for k in PieceType)
        # Settled cells are positive color codes, the falling piece negative
        self.observation_space = spaces.Box(low=-top, high=top, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(self.ACTION_COMMANDS))

        self._last_obs: Optional[np.ndarray] = None
        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "state": self.game.state.value,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.reset()
        self.game.handle(Command.SPAWN)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        action = int(action)
        if action not in self.ACTION_COMMANDS:
            raise ValueError(f"invalid action {action}")

        score_before = self.game.score
        command = self.ACTION_COMMANDS[action]
        if command is not None:
            self.game.handle(command)
        self.game.advance(self.game.config.gravity_interval)

        reward_components: Dict[str, float] = {
            "score": float(self.game.score - score_before),
            "step": self.step_penalty,
        }
        terminated = bool(self.game.game_over)
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps

        reward = float(sum(reward_components.values()))
        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            state = self._last_obs if self._last_obs is not None else self._get_obs()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(state[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
