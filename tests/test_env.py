import numpy as np
import pytest

from fourinarow.game.env import FourInARowEnv
from fourinarow.utils import COLS, ROWS


def test_reset_returns_empty_board_for_yellow():
    env = FourInARowEnv()
    observation, info = env.reset(seed=0)
    assert observation.shape == (ROWS, COLS)
    assert not observation.any()
    assert info['state'] == 'IN_PROGRESS'
    assert info['turn_owner'] == 'PLAYER'


def test_computer_opens_when_agent_is_red():
    env = FourInARowEnv(player_color="R")
    observation, info = env.reset(seed=0)
    assert np.count_nonzero(observation) == 1
    assert info['turn_owner'] == 'PLAYER'


def test_step_plays_agent_and_computer():
    env = FourInARowEnv()
    env.reset(seed=1)
    observation, reward, terminated, truncated, info = env.step(3)
    assert np.count_nonzero(observation) == 2
    assert observation[0, 3] == 1
    assert reward == pytest.approx(env.reward_step)
    assert not terminated and not truncated


def test_full_column_is_an_invalid_action():
    env = FourInARowEnv()
    env.reset(seed=2)
    env.engine.board.grid[:, 0] = 2
    _, reward, terminated, truncated, info = env.step(0)
    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info['invalid_move']


def test_random_games_terminate():
    env = FourInARowEnv(render_mode="ascii")
    rng = np.random.default_rng(4)
    for episode in range(3):
        _, info = env.reset(seed=episode)
        terminated = False
        steps = 0
        while not terminated:
            _, reward, terminated, truncated, info = env.step(int(rng.choice(info['valid_moves'])))
            assert not truncated
            steps += 1
        assert steps <= 32
        assert reward in (env.reward_win, env.reward_lose, env.reward_draw)
        assert env.render().startswith("\n  ABCDEFGH")


def test_bad_player_color_is_rejected():
    with pytest.raises(ValueError):
        FourInARowEnv(player_color="G")
