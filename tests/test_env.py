import gymnasium as gym
import numpy as np

import number_pair.env  # noqa: F401
from conftest import load_rows
from number_pair.env.number_pair_env import NumberPairEnv, decode_action, encode_pair
from number_pair.env.wrappers import ResampleInvalidActionWrapper
from number_pair.game import GameConfig


def small_env(rows):
    env = NumberPairEnv(GameConfig(board_size=len(rows)))
    env.reset(seed=0)
    load_rows(env.game, rows)
    return env


class TestActionCodec:
    def test_decode_right_and_down(self):
        assert decode_action(0, 3) == ((0, 0), (0, 1))
        assert decode_action(1, 3) == ((0, 0), (1, 0))
        assert decode_action(2 * 4 + 1, 3) == ((1, 1), (2, 1))

    def test_decode_off_board(self):
        # (0, 2) has no right neighbor, (2, 0) has no down neighbor
        assert decode_action(2 * 2, 3) is None
        assert decode_action(2 * 6 + 1, 3) is None
        assert decode_action(18, 3) is None

    def test_encode_matches_decode(self):
        for action in range(18):
            pair = decode_action(action, 3)
            if pair is not None:
                assert encode_pair(*pair, 3) == action
                assert encode_pair(pair[1], pair[0], 3) == action


class TestNumberPairEnv:
    def test_spaces(self):
        env = NumberPairEnv()
        obs, info = env.reset(seed=1)
        assert obs.shape == (9, 9)
        assert env.observation_space.contains(obs)
        assert env.action_space.n == 2 * 81 + 1
        assert info["action_mask"].shape == (163,)
        assert info["remaining"] == 81

    def test_registered(self):
        env = gym.make("NumberPair-9x9-v0")
        obs, _ = env.reset(seed=2)
        assert obs.shape == (9, 9)
        env.close()

    def test_valid_pair_step(self):
        env = small_env([[7, 3, 1], [2, 1, 2], [1, 2, 1]])
        obs, reward, terminated, truncated, info = env.step(0)
        assert info["matched"]
        assert reward == env.match_reward
        assert obs[0, 0] == 0 and obs[0, 1] == 0
        assert env.game.score == 10
        assert not terminated and not truncated

    def test_invalid_pair_step(self):
        env = small_env([[7, 4, 1], [2, 1, 2], [1, 2, 1]])
        _, reward, _, _, info = env.step(0)
        assert not info["matched"]
        assert reward == env.invalid_action_penalty
        assert env.game.selection is None
        assert env.game.board.get(0, 0) == 7

    def test_clearing_terminates(self):
        env = small_env([[7, 3], [0, 0]])
        _, reward, terminated, _, _ = env.step(0)
        assert terminated
        assert reward == env.match_reward + env.clear_bonus

    def test_even_board_registered_and_clearable(self):
        env = gym.make("NumberPair-8x8-v0")
        obs, info = env.reset(seed=3)
        assert obs.shape == (8, 8)
        assert info["remaining"] == 64
        assert env.unwrapped.game.board.remaining() % 2 == 0
        env.close()

    def test_mask_and_shuffle_on_stuck_board(self):
        env = small_env([[1, 2, 1], [2, 1, 2], [1, 2, 1]])
        mask = env.get_action_mask()
        assert np.flatnonzero(mask).tolist() == [env.shuffle_action]
        _, reward, _, _, info = env.step(env.shuffle_action)
        assert reward == env.shuffle_penalty
        assert env.game.moves == 1

    def test_truncation(self):
        env = NumberPairEnv(GameConfig(board_size=3, max_episode_steps=2))
        env.reset(seed=0)
        load_rows(env.game, [[1, 2, 1], [2, 1, 2], [1, 2, 1]])
        env.step(0)
        _, _, terminated, truncated, _ = env.step(0)
        assert truncated and not terminated

    def test_rgb_render(self):
        env = NumberPairEnv(render_mode="rgb_array")
        env.reset(seed=0)
        img = env.render()
        assert img.shape == (9 * 12, 9 * 12, 3)


class TestResampleWrapper:
    def test_invalid_action_replaced(self):
        env = small_env([[7, 3, 1], [2, 1, 2], [1, 2, 1]])
        wrapped = ResampleInvalidActionWrapper(env)
        wrapped.reset(seed=0)
        load_rows(env.game, [[7, 3, 1], [2, 1, 2], [1, 2, 1]])
        # Action 2 pairs (0, 1) with (0, 2): 3 + 1 is not removable
        _, _, _, _, info = wrapped.step(2)
        assert info["matched"] or env.game.moves == 1


def test_random_agent_runs():
    from number_pair.rl.random_agent import run_random

    total = run_random(steps=50, seed=0)
    assert isinstance(total, float)
