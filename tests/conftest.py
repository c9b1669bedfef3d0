"""Shared fixtures for the Four-in-a-Row tests."""

import pytest

from fourinarow.config import EngineConfig
from fourinarow.debug import DebugLevel, debug
from fourinarow.device import FourInARowDevice
from fourinarow.game.rules import GameEngine
from fourinarow.utils import column_index


class ScriptedChoice:
    """Stands in for the engine's generator and picks pre-arranged columns."""

    def __init__(self, letters):
        self.columns = [column_index(letter) for letter in letters]

    def choice(self, options):
        column = self.columns.pop(0)
        assert column in list(options), f"column {column} is not open"
        return column


@pytest.fixture(autouse=True)
def restore_debug():
    """Put the shared debug manager back to its defaults after each test."""
    yield
    debug.configure(level=DebugLevel.WARNING, log_file="", components=[])


@pytest.fixture
def engine():
    return GameEngine(EngineConfig(seed=1234))


@pytest.fixture
def device():
    return FourInARowDevice(config=EngineConfig(seed=1234))


@pytest.fixture
def script_computer():
    """Make an engine's computer player follow a list of column letters."""
    def _script(engine, letters):
        engine._rng = ScriptedChoice(letters)
        return engine
    return _script


def no_win_fill_order():
    """
    A 64-move game (Yellow first) that fills the board without four in a row.

    Cell (row, col) is Yellow when (col // 2 + row) is even, so no row,
    column or diagonal holds more than two matching chips in a run. Each row
    is filled alternating Yellow and Red, bottom row first.
    """
    order = []
    for row in range(8):
        yellow = [c for c in range(8) if (c // 2 + row) % 2 == 0]
        red = [c for c in range(8) if (c // 2 + row) % 2 == 1]
        for y, r in zip(yellow, red):
            order.append("ABCDEFGH"[y])
            order.append("ABCDEFGH"[r])
    return order
