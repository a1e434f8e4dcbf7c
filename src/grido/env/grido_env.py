from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from grido.game import Action, GameConfig, GridoGame, TileKind
from grido.visualization.palette import color_for_code

# Actions an agent may take; pause/quit/restart stay with the human front end
PLAY_ACTIONS = (
    Action.NONE,
    Action.LEFT,
    Action.RIGHT,
    Action.UP,
    Action.DOWN,
    Action.ROTATE,
    Action.DROP,
    Action.SWAP,
)

PREVIEW_SIZE = 3


class FrameClock:
    """Deterministic clock advanced by a fixed frame time per step."""

    def __init__(self, frame_seconds: float) -> None:
        self.frame_seconds = float(frame_seconds)
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self) -> None:
        self.now += self.frame_seconds


class GridoEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 50}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 frame_seconds: float = 0.02, max_episode_steps: int = 20000) -> None:
        super().__init__()
        self.clock = FrameClock(frame_seconds)
        self.game = GridoGame(config, clock=self.clock)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self._steps = 0

        cfg = self.game.config
        n_kinds = len(TileKind)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(cfg.height, cfg.width), dtype=np.int8),
                "next": spaces.Box(low=0, high=n_kinds, shape=(PREVIEW_SIZE, PREVIEW_SIZE), dtype=np.int8),
                "multiplier": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            }
        )
        self.action_space = spaces.Discrete(len(PLAY_ACTIONS))

    def _preview(self) -> np.ndarray:
        preview = np.zeros((PREVIEW_SIZE, PREVIEW_SIZE), dtype=np.int8)
        half = PREVIEW_SIZE // 2
        for dx, dy, tt in self.game.next_block.tiles:
            if abs(dx) <= half and abs(dy) <= half:
                preview[dy + half, dx + half] = int(tt.kind)
        return preview

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.get_state(),
            "next": self._preview(),
            "multiplier": np.array([self.game.multiplier], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "multiplier": self.game.multiplier,
            "level": self.game.level,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.clock.now = 0.0
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        self.clock.advance()
        _, gained, _, _ = self.game.step(PLAY_ACTIONS[int(action)])
        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps
        info = self._get_info()
        if self.game.last_drop is not None:
            info["last_hits"] = self.game.last_drop.explosion.hits
        return self._get_obs(), float(gained), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.game.get_state()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_code(int(board[y, x]))
        return img

    def close(self) -> None:
        pass
