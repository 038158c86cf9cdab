from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from number_pair.game import GameConfig, MatchRules, NumberPairGame, TapOutcome
from number_pair.game.grid import Coordinate


# Direction component of a pair action: partner is to the right or below
RIGHT = 0
DOWN = 1


def decode_action(action: int, size: int) -> Optional[Tuple[Coordinate, Coordinate]]:
    """Map a pair action to its two cells. Returns None for the shuffle action
    and for pairs that would leave the board."""
    cell, direction = divmod(int(action), 2)
    if cell >= size * size:
        return None
    row, col = divmod(cell, size)
    partner = (row, col + 1) if direction == RIGHT else (row + 1, col)
    if partner[0] >= size or partner[1] >= size:
        return None
    return (row, col), partner


def encode_pair(a: Coordinate, b: Coordinate, size: int) -> int:
    first, second = sorted((a, b))
    direction = RIGHT if second[0] == first[0] else DOWN
    return (first[0] * size + first[1]) * 2 + direction


def _compute_action_mask(game: NumberPairGame) -> np.ndarray:
    size = game.board.size
    mask = np.zeros((2 * size * size + 1,), dtype=np.bool_)
    for a, b in game.valid_pairs():
        mask[encode_pair(a, b, size)] = True
    # Shuffling is always allowed while tiles remain
    mask[-1] = game.board.remaining() > 0
    return mask


class NumberPairEnv(gym.Env):
    """Agent surface over `NumberPairGame`.

    Episodes terminate only when the board is cleared, which needs an even
    tile count. The default 9x9 board holds 81 tiles, so at least one is
    always left and episodes end by truncation at `max_episode_steps`; use
    an even board (e.g. `NumberPair-8x8-v0`) when `clear_bonus` matters.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[MatchRules] = None,
                 render_mode: Optional[str] = None,
                 match_reward: float = 1.0,
                 clear_bonus: float = 10.0,
                 invalid_action_penalty: float = -0.1,
                 shuffle_penalty: float = -0.5) -> None:
        super().__init__()
        self.game = NumberPairGame(config, rules)
        self.render_mode = render_mode
        self.match_reward = float(match_reward)
        self.clear_bonus = float(clear_bonus)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.shuffle_penalty = float(shuffle_penalty)

        size = self.game.board.size
        self.shuffle_action = 2 * size * size
        self.observation_space = spaces.Box(low=0, high=9, shape=(size, size), dtype=np.int8)
        self.action_space = spaces.Discrete(self.shuffle_action + 1)
        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.board.clone_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "moves": self.game.moves,
            "remaining": self.game.board.remaining(),
            "stuck": self.game.is_stuck(),
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.new_game()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def _try_pair(self, a: Coordinate, b: Coordinate) -> bool:
        if self.game.board.get(*a) == 0:
            return False
        self.game.selection = None
        self.game.tap(*a)
        outcome = self.game.tap(*b)
        if outcome != TapOutcome.MATCHED:
            self.game.selection = None
            return False
        return True

    def step(self, action: int):
        action = int(action)
        reward = 0.0
        matched = False
        if action == self.shuffle_action:
            if self.game.board.remaining() > 0:
                self.game.shuffle()
                reward += self.shuffle_penalty
            else:
                reward += self.invalid_action_penalty
        else:
            pair = decode_action(action, self.game.board.size)
            matched = pair is not None and self._try_pair(*pair)
            reward += self.match_reward if matched else self.invalid_action_penalty

        terminated = self.game.board.is_cleared()
        if terminated and matched:
            reward += self.clear_bonus
        self._steps += 1
        truncated = not terminated and self._steps >= self.game.config.max_episode_steps

        info = self._get_info()
        info["matched"] = matched
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.board.grid
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(grid[y, x])
                    # Brightness tracks the tile value, empty cells stay dark
                    color = (30, 30, 36) if v == 0 else (40 + v * 20, 200 - v * 10, 120)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
