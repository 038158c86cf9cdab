"""Gymnasium environments for Number Pair."""

from __future__ import annotations

from gymnasium.envs.registration import register

from number_pair.game import GameConfig

# Register the default 9x9 environment
register(
    id="NumberPair-9x9-v0",
    entry_point="number_pair.env.number_pair_env:NumberPairEnv",
)

# Even tile count, so a board can be cleared and episodes can terminate
register(
    id="NumberPair-8x8-v0",
    entry_point="number_pair.env.number_pair_env:NumberPairEnv",
    kwargs={"config": GameConfig(board_size=8)},
)

__all__ = ["NumberPair-9x9-v0", "NumberPair-8x8-v0"]
