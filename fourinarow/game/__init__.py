"""
fourinarow.game - Core game mechanics

This package contains the board representation, win/draw detection
and the game engine state machine.
"""

from fourinarow.game.board import Board
from fourinarow.game.detector import WinDetector
from fourinarow.game.rules import GameEngine, GameSession, GameState

__all__ = ['Board', 'WinDetector', 'GameEngine', 'GameSession', 'GameState']
