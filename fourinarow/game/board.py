"""
board.py - Board representation for the Four-in-a-Row engine

This module implements the Board class: an 8x8 grid of chips with gravity-fill
placement. Row 0 is the bottom row, so chips stack upward from index 0.
"""

import numpy as np
from typing import List, Optional, Tuple

from fourinarow.debug import debug
from fourinarow.protocol.response import render_board
from fourinarow.utils import ROWS, COLS, BOARD_CAPACITY, Chip, position_name


class Board:
    """
    Represents the Four-in-a-Row board.

    The board only knows about chips and gravity; turn order and outcomes
    belong to the engine and the detector.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        debug.trace("Resetting board", "board")
        self.grid = np.full((ROWS, COLS), Chip.EMPTY.value, dtype=np.int8)
        self.last_move: Optional[Tuple[int, int]] = None

    def get_chip(self, row: int, col: int) -> Chip:
        return Chip(int(self.grid[row, col]))

    def column_has_room(self, column: int) -> bool:
        """True if the column is on the board and its top cell is still empty."""
        if not (0 <= column < COLS):
            return False
        return self.grid[ROWS - 1, column] == Chip.EMPTY.value

    def open_columns(self) -> List[int]:
        """
        Get a list of columns that can still take a chip.

        Returns:
            List of column indices, in ascending order
        """
        return [int(col) for col in np.flatnonzero(self.grid[ROWS - 1] == Chip.EMPTY.value)]

    def column_height(self, column: int) -> int:
        """Number of chips stacked in a column."""
        return int(np.count_nonzero(self.grid[:, column] != Chip.EMPTY.value))

    def chip_count(self) -> int:
        return int(np.count_nonzero(self.grid != Chip.EMPTY.value))

    def is_full(self) -> bool:
        return self.chip_count() == BOARD_CAPACITY

    def drop_chip(self, column: int, chip: Chip) -> Optional[int]:
        """
        Place a chip in the lowest empty cell of a column.

        Args:
            column: The column to drop into (0-indexed)
            chip: The chip to place

        Returns:
            The row the chip landed on, or None if the column is full or off the board
        """
        if chip == Chip.EMPTY:
            raise ValueError("Cannot drop an empty chip")

        if not self.column_has_room(column):
            debug.debug(f"Column {column} cannot take a chip", "board")
            return None

        row = self.column_height(column)
        self.grid[row, column] = chip.value
        self.last_move = (row, column)
        debug.trace(f"Placed {chip.name} at {position_name(row, column)}", "board")
        return row

    def has_floating_chips(self) -> bool:
        """True if any chip sits above an empty cell in its column."""
        occupied = self.grid != Chip.EMPTY.value
        return bool(np.any(occupied[1:] & ~occupied[:-1]))

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array of chip values, row 0 at the bottom
        """
        return self.grid.copy()

    def render(self) -> str:
        """Render the board in the protocol's fixed-width text form."""
        return render_board(self)

    def __str__(self) -> str:
        return self.render()


def board_from_rows(rows: List[str]) -> Board:
    """
    Build a board from text rows written top row first, e.g. ``"YR000000"``.

    Missing rows are treated as empty. Useful for setting up positions in tests
    and in the CLI.
    """
    if len(rows) > ROWS:
        raise ValueError(f"At most {ROWS} rows are allowed")

    symbols = {chip.symbol: chip for chip in Chip}
    board = Board()
    padded = ["0" * COLS] * (ROWS - len(rows)) + list(rows)
    for offset, text in enumerate(padded):
        if len(text) != COLS:
            raise ValueError(f"Row {text!r} must have {COLS} cells")
        row = ROWS - 1 - offset
        for col, symbol in enumerate(text):
            if symbol not in symbols:
                raise ValueError(f"Unknown cell symbol {symbol!r}")
            board.grid[row, col] = symbols[symbol].value
    return board
