"""
constants.py - Wire-level constants and errors for the command protocol
"""

from fourinarow.utils import CHIP_SYMBOLS, Chip

# Largest command frame the engine looks at; anything past it is ignored
FRAME_SIZE = 8

# Logical capacity of the response buffer; a full board render fits exactly
RESPONSE_CAPACITY = 113

EMPTY_MARKER = CHIP_SYMBOLS[Chip.EMPTY]


class Command:
    RESET = "RESET "    # RESET <Y|R>
    BOARD = "BOARD"
    DROPC = "DROPC "    # DROPC <A-H>
    CTURN = "CTURN"


class Response:
    OK = "OK\n"
    NOGAME = "NOGAME\n"
    OOT = "OOT\n"       # out of turn
    WIN = "WIN\n"
    LOSE = "LOSE\n"
    TIE = "TIE\n"
    INVALID = "INVALID\n"  # strict mode only


COLOR_CHOICES = {
    "Y": Chip.YELLOW,
    "R": Chip.RED,
}


class ProtocolError(Exception):
    """Base class for misuse of the protocol layer."""


class ResponseOverflowError(ProtocolError):
    """Raised when a response does not fit in the response buffer."""
