"""
rules.py - Game session state and the command-driven game engine

This module provides:
1. GameSession, the state of the single game the engine owns
2. GameEngine, which validates turn and game-state preconditions, applies
   placements to the board and asks the detector for the outcome
"""

from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from fourinarow.config import EngineConfig
from fourinarow.debug import debug
from fourinarow.game.board import Board
from fourinarow.game.detector import WinDetector
from fourinarow.protocol.constants import COLOR_CHOICES, Response
from fourinarow.protocol.parser import Command, CommandKind
from fourinarow.protocol.response import render_board, render_status
from fourinarow.utils import Chip, GameResult, Side, column_index, column_letter, position_name


class GameState(Enum):
    NO_GAME = auto()
    IN_PROGRESS = auto()
    TERMINAL = auto()


_OUTCOME_TOKENS = {
    GameResult.WIN: Response.WIN,
    GameResult.LOSE: Response.LOSE,
    GameResult.DRAW: Response.TIE,
}


class GameSession:
    """Mutable state of one game, overwritten by every RESET."""

    def __init__(self):
        self.active = False
        self.started = False
        self.turn_owner = Side.PLAYER
        self.player_chip = Chip.YELLOW
        self.computer_chip = Chip.RED
        self.turn_count = 0
        self.outcome = GameResult.IN_PROGRESS
        self.moves_made: List[Tuple[Side, int]] = []

    def start(self, player_chip: Chip):
        self.active = True
        self.started = True
        self.player_chip = player_chip
        self.computer_chip = player_chip.other()
        # Yellow always opens
        self.turn_owner = Side.PLAYER if player_chip == Chip.YELLOW else Side.COMPUTER
        self.turn_count = 0
        self.outcome = GameResult.IN_PROGRESS
        self.moves_made = []

    def chip_for(self, side: Side) -> Chip:
        return self.player_chip if side == Side.PLAYER else self.computer_chip

    @property
    def state(self) -> GameState:
        if not self.started:
            return GameState.NO_GAME
        if self.active:
            return GameState.IN_PROGRESS
        return GameState.TERMINAL


class GameEngine:
    """
    Four-in-a-Row game engine.

    Each operation returns the response text to publish, or None when the
    command is ignored and the previous response should stay in place.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.board = Board()
        self.session = GameSession()
        self.detector = WinDetector(self.config.detector)
        self._rng = np.random.default_rng(self.config.seed)
        self.winning_line: List[Tuple[int, int]] = []

    def dispatch(self, command: Command) -> Optional[str]:
        """Run a parsed command and return its response text, if any."""
        debug.debug(f"Dispatching {command.kind.name} {command.argument or ''}".rstrip(), "engine")

        if command.kind == CommandKind.RESET:
            response = self.reset(command.argument)
        elif command.kind == CommandKind.QUERY_BOARD:
            response = self.query_board()
        elif command.kind == CommandKind.DROP_CHIP:
            response = self.drop_chip(command.argument)
        elif command.kind == CommandKind.COMPUTER_TURN:
            response = self.computer_turn()
        else:
            response = None

        if response is None and self.config.strict:
            return render_status(Response.INVALID)
        return response

    def reset(self, color_choice: Optional[str]) -> Optional[str]:
        """
        Start a new game with the Player on the chosen color.

        Args:
            color_choice: "Y" or "R"; anything else leaves the session untouched
        """
        player_chip = COLOR_CHOICES.get(color_choice or "")
        if player_chip is None:
            debug.debug(f"Ignoring RESET with color {color_choice!r}", "engine")
            return None

        self.board.reset()
        self.session.start(player_chip)
        self.winning_line = []
        debug.info(f"New game: player is {player_chip.name}, "
                   f"{self.session.turn_owner.name} moves first", "engine")
        return render_status(Response.OK)

    def query_board(self) -> str:
        return render_board(self.board)

    def drop_chip(self, letter: Optional[str]) -> Optional[str]:
        """Place the Player's chip in the column named by ``letter``."""
        refusal = self._check_turn(Side.PLAYER)
        if refusal is not None:
            return refusal

        column = column_index(letter or "")
        if column is None:
            debug.debug(f"Ignoring DROPC with column {letter!r}", "engine")
            return None

        if not self.board.column_has_room(column):
            debug.debug(f"Ignoring DROPC into full column {column_letter(column)}", "engine")
            return None

        return self._place(Side.PLAYER, column)

    def computer_turn(self) -> Optional[str]:
        """Place the Computer's chip in a uniformly random column with room."""
        refusal = self._check_turn(Side.COMPUTER)
        if refusal is not None:
            return refusal

        if self.board.is_full():
            debug.warning("Computer has no open column; declaring a draw", "engine")
            self._finish(GameResult.DRAW)
            return render_status(Response.TIE)

        open_columns = self.board.open_columns()
        column = int(self._rng.choice(open_columns))
        debug.debug(f"Computer picks column {column_letter(column)} from "
                    f"{''.join(column_letter(c) for c in open_columns)}", "engine")
        return self._place(Side.COMPUTER, column)

    def _check_turn(self, side: Side) -> Optional[str]:
        if not self.session.active:
            debug.debug(f"{side.name} move refused: no active game", "engine")
            return render_status(Response.NOGAME)
        if self.session.turn_owner != side:
            debug.debug(f"{side.name} move refused: it is {self.session.turn_owner.name}'s turn", "engine")
            return render_status(Response.OOT)
        return None

    def _place(self, side: Side, column: int) -> str:
        session = self.session
        chip = session.chip_for(side)
        row = self.board.drop_chip(column, chip)
        session.turn_count += 1
        session.moves_made.append((side, column))
        debug.debug(f"{side.name} dropped {chip.name} at {position_name(row, column)} "
                    f"(turn {session.turn_count})", "engine")

        outcome = self.detector.evaluate(self.board, side, chip, session.turn_count)
        if outcome.is_game_over():
            self.winning_line = self.detector.last_line
            self._finish(outcome)
            return render_status(_OUTCOME_TOKENS[outcome])

        session.turn_owner = side.other()
        return render_status(Response.OK)

    def _finish(self, outcome: GameResult):
        self.session.outcome = outcome
        self.session.active = False
        debug.info(f"Game over after {self.session.turn_count} chips: {outcome.name}", "engine")

    @property
    def state(self) -> GameState:
        return self.session.state

    def info(self) -> Dict[str, Any]:
        """
        Summary of the current session.

        Returns:
            Dictionary with the session state, chips, counters and board details
        """
        session = self.session
        return {
            'state': session.state.name,
            'active': session.active,
            'turn_owner': session.turn_owner.name,
            'player_chip': session.player_chip.name,
            'computer_chip': session.computer_chip.name,
            'turn_count': session.turn_count,
            'outcome': session.outcome.name,
            'open_columns': [column_letter(c) for c in self.board.open_columns()],
            'last_move': self.board.last_move,
            'winning_line': [position_name(r, c) for r, c in self.winning_line],
        }
