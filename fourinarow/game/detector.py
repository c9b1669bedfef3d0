"""
detector.py - Win and draw detection

Two scan strategies are available:

``reference``
    Sweep the whole board. Every cell holding the mover's chip is used as an
    anchor and the three following cells are checked rightward, upward,
    up-right and down-right.

``complete``
    Look only through the last placed chip, counting matching chips in both
    directions along all four lines (eight directions in total).

A new line of four always runs through the chip just placed, and earlier
lines would already have ended the game, so both strategies classify every
reachable position the same way. The reference sweep is the default.
"""

from typing import List, Optional, Tuple

import numpy as np

from fourinarow.debug import debug
from fourinarow.game.board import Board
from fourinarow.utils import (BOARD_CAPACITY, CONNECT_N, ROWS, COLS, ANCHOR_DIRECTIONS,
                              DETECTOR_COMPLETE, DETECTOR_REFERENCE, DETECTOR_STRATEGIES,
                              DIRECTION_VECTORS, LINE_AXES, Chip, GameResult, Side,
                              is_valid_position, position_name)

REFERENCE = DETECTOR_REFERENCE
COMPLETE = DETECTOR_COMPLETE
STRATEGIES = DETECTOR_STRATEGIES


class WinDetector:
    """Classifies the outcome of a board after a placement."""

    def __init__(self, strategy: str = REFERENCE):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown detector strategy {strategy!r}; expected one of {STRATEGIES}")
        self.strategy = strategy
        self.last_line: List[Tuple[int, int]] = []

    def evaluate(self, board: Board, last_mover: Side, chip: Chip, turn_count: int) -> GameResult:
        """
        Classify the game after ``last_mover`` placed a ``chip``.

        Args:
            board: Board after the placement
            last_mover: Side that just moved
            chip: Chip color belonging to ``last_mover``
            turn_count: Chips placed so far this session

        Returns:
            WIN or LOSE (from the Player's point of view) for four in a row,
            DRAW once the board's capacity is reached, IN_PROGRESS otherwise

        The line found, if any, is kept in ``last_line``.
        """
        debug.start_timer("win_check")
        line = self.find_winning_line(board, chip)
        debug.end_timer("win_check", "detector")
        self.last_line = line

        if line:
            cells = ", ".join(position_name(r, c) for r, c in line)
            debug.debug(f"{last_mover.name} connected four: {cells}", "detector")
            return GameResult.WIN if last_mover == Side.PLAYER else GameResult.LOSE

        if turn_count >= BOARD_CAPACITY:
            return GameResult.DRAW

        return GameResult.IN_PROGRESS

    def find_winning_line(self, board: Board, chip: Chip) -> List[Tuple[int, int]]:
        """
        Positions of a line of four ``chip`` cells, or an empty list.
        """
        if self.strategy == COMPLETE:
            return self._line_through_last_move(board, chip)
        return self._anchored_sweep(board, chip)

    def _anchored_sweep(self, board: Board, chip: Chip) -> List[Tuple[int, int]]:
        grid = board.grid
        for row, col in np.argwhere(grid == chip.value):
            row, col = int(row), int(col)
            for direction in ANCHOR_DIRECTIONS:
                line = _run_from(grid, row, col, DIRECTION_VECTORS[direction], chip.value)
                if line:
                    return line
        return []

    def _line_through_last_move(self, board: Board, chip: Chip) -> List[Tuple[int, int]]:
        if board.last_move is None:
            return []

        row, col = board.last_move
        grid = board.grid
        if grid[row, col] != chip.value:
            return []

        for forward, backward in LINE_AXES:
            positions = [(row, col)]
            for direction in (forward, backward):
                dr, dc = DIRECTION_VECTORS[direction]
                r, c = row + dr, col + dc
                while is_valid_position(r, c) and grid[r, c] == chip.value:
                    positions.append((r, c))
                    r += dr
                    c += dc

            if len(positions) >= CONNECT_N:
                return sorted(positions, key=lambda p: (p[1], p[0]))

        return []


def _run_from(grid: np.ndarray, row: int, col: int, vector: Tuple[int, int],
              value: int) -> Optional[List[Tuple[int, int]]]:
    dr, dc = vector
    end_row, end_col = row + dr * (CONNECT_N - 1), col + dc * (CONNECT_N - 1)
    if not (0 <= end_row < ROWS and 0 <= end_col < COLS):
        return None

    line = [(row + dr * step, col + dc * step) for step in range(CONNECT_N)]
    if all(grid[r, c] == value for r, c in line):
        return line
    return None
