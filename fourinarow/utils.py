"""
utils.py - Constants, enumerations and helpers for the Four-in-a-Row engine

This module provides the board geometry, chip and side enumerations, and the
small position helpers shared by the board, the detector and the engine.
"""

from enum import Enum, auto
from typing import Dict, Optional, Tuple

# Game constants
ROWS = 8
COLS = 8
CONNECT_N = 4  # Number of chips in a row to win
BOARD_CAPACITY = ROWS * COLS

COLUMN_LETTERS = "ABCDEFGH"


class Chip(Enum):
    """Enumeration representing cell states."""
    EMPTY = 0
    YELLOW = 1   # Always moves first
    RED = 2

    def other(self) -> "Chip":
        """Get the opposite chip color."""
        if self == Chip.YELLOW:
            return Chip.RED
        elif self == Chip.RED:
            return Chip.YELLOW
        return Chip.EMPTY

    @property
    def symbol(self) -> str:
        return CHIP_SYMBOLS[self]

    def __str__(self):
        return self.symbol


CHIP_SYMBOLS: Dict[Chip, str] = {
    Chip.EMPTY: "0",
    Chip.YELLOW: "Y",
    Chip.RED: "R",
}


class Side(Enum):
    """The two participants of a session."""
    PLAYER = auto()
    COMPUTER = auto()

    def other(self) -> "Side":
        return Side.COMPUTER if self == Side.PLAYER else Side.PLAYER


class GameResult(Enum):
    """Enumeration representing the game outcome, from the Player's point of view."""
    IN_PROGRESS = auto()
    WIN = auto()
    LOSE = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    RIGHT = auto()
    LEFT = auto()
    UP = auto()
    DOWN = auto()
    UP_RIGHT = auto()
    DOWN_LEFT = auto()
    DOWN_RIGHT = auto()
    UP_LEFT = auto()


# Direction vectors (row, col); row 0 is the bottom of the board
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.RIGHT: (0, 1),
    Direction.LEFT: (0, -1),
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.UP_RIGHT: (1, 1),
    Direction.DOWN_LEFT: (-1, -1),
    Direction.DOWN_RIGHT: (-1, 1),
    Direction.UP_LEFT: (1, -1),
}

# Directions scanned forward from every anchor cell in a full-board sweep
ANCHOR_DIRECTIONS = (Direction.RIGHT, Direction.UP, Direction.UP_RIGHT, Direction.DOWN_RIGHT)

# Opposite pairs making up the four lines through a single cell
LINE_AXES = (
    (Direction.RIGHT, Direction.LEFT),
    (Direction.UP, Direction.DOWN),
    (Direction.UP_RIGHT, Direction.DOWN_LEFT),
    (Direction.DOWN_RIGHT, Direction.UP_LEFT),
)


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index (0 = bottom)
        col: Column index (0 = A)

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def column_index(letter: str) -> Optional[int]:
    """Map a column letter A-H to its index, or None for anything else."""
    if len(letter) != 1:
        return None
    index = COLUMN_LETTERS.find(letter)
    return index if index >= 0 else None


def column_letter(index: int) -> str:
    return COLUMN_LETTERS[index]


def position_name(row: int, col: int) -> str:
    """Human-readable cell name such as 'A1' (column letter, 1-based row)."""
    return f"{column_letter(col)}{row + 1}"


# Win-detection strategies
DETECTOR_REFERENCE = "reference"
DETECTOR_COMPLETE = "complete"
DETECTOR_STRATEGIES = (DETECTOR_REFERENCE, DETECTOR_COMPLETE)
