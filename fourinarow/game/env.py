"""
env.py - Gymnasium environment for Four-in-a-Row

The agent plays the Player side against the engine's random computer
opponent. Every action goes through the same command protocol a device
caller would use (DROPC, then CTURN for the reply).
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Any, Dict, Optional, Tuple, Union

from fourinarow.config import EngineConfig
from fourinarow.debug import debug
from fourinarow.game.rules import GameEngine
from fourinarow.protocol.constants import Response
from fourinarow.protocol.parser import Command, CommandKind
from fourinarow.utils import ROWS, COLS, Chip, GameResult, Side, column_letter


class FourInARowEnv(gym.Env):
    """
    Four-in-a-Row environment following the Gymnasium interface.

    Actions are column indices 0-7 (A-H); observations are the 8x8 grid of
    chip values with row 0 at the bottom.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, player_color: str = "Y",
                 detector: str = "reference"):
        """
        Initialize the environment.

        Args:
            render_mode: Mode for rendering the environment
            player_color: "Y" to open the game, "R" to let the computer open
            detector: Win-detection strategy used by the engine
        """
        if player_color not in ("Y", "R"):
            raise ValueError("player_color must be 'Y' or 'R'")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(
            low=Chip.EMPTY.value, high=Chip.RED.value, shape=(ROWS, COLS), dtype=np.int8
        )

        self.render_mode = render_mode
        self.player_color = player_color
        self.detector = detector
        self.engine = GameEngine(EngineConfig(detector=detector))

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game; the computer opens when the agent plays Red.
        """
        super().reset(seed=seed)
        engine_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.engine = GameEngine(EngineConfig(detector=self.detector, seed=engine_seed))

        self.engine.dispatch(Command(CommandKind.RESET, self.player_color))
        if self.engine.session.turn_owner == Side.COMPUTER:
            self.engine.dispatch(Command(CommandKind.COMPUTER_TURN))

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop the agent's chip, then let the computer answer.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        if not self.engine.session.active or not self.engine.board.column_has_room(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        response = self.engine.dispatch(Command(CommandKind.DROP_CHIP, column_letter(action)))
        if response == Response.OK:
            self.engine.dispatch(Command(CommandKind.COMPUTER_TURN))

        outcome = self.engine.session.outcome
        reward = {
            GameResult.WIN: self.reward_win,
            GameResult.LOSE: self.reward_lose,
            GameResult.DRAW: self.reward_draw,
        }.get(outcome, self.reward_step)
        terminated = outcome.is_game_over()
        if terminated:
            debug.info(f"Game over: {outcome.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode is None:
            return None

        text = self.engine.query_board()
        if self.render_mode == "ascii":
            return text
        print(text)
        return None

    def _get_observation(self) -> np.ndarray:
        return self.engine.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        info = self.engine.info()
        info['valid_moves'] = self.engine.board.open_columns()
        return info

    def close(self):
        pass
