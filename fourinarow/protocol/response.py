"""
response.py - Response rendering and the response buffer

The renderer turns board state or status tokens into protocol text. The
buffer holds the most recent response and serves it to readers by offset.
"""

from typing import TYPE_CHECKING

from fourinarow.protocol.constants import EMPTY_MARKER, RESPONSE_CAPACITY, ResponseOverflowError
from fourinarow.utils import CHIP_SYMBOLS, COLS, COLUMN_LETTERS, ROWS

if TYPE_CHECKING:
    from fourinarow.game.board import Board

BOARD_HEADER = "\n  " + COLUMN_LETTERS + "\n  " + "-" * COLS + "\n"
BOARD_FOOTER = "\n\n"

_SYMBOL_BY_VALUE = {chip.value: symbol for chip, symbol in CHIP_SYMBOLS.items()}


def render_board(board: "Board") -> str:
    """
    Render a board as fixed-width text.

    Rows are printed from the top (8) down to the bottom (1), each prefixed by
    its number and a bar::

          ABCDEFGH
          --------
        8|00000000
        ...
        1|Y0000000
    """
    lines = [BOARD_HEADER]
    for row in range(ROWS - 1, -1, -1):
        cells = "".join(_SYMBOL_BY_VALUE[int(value)] for value in board.grid[row])
        lines.append(f"{row + 1}|{cells}\n")
    lines.append(BOARD_FOOTER)
    return "".join(lines)


def render_status(token: str) -> str:
    """Status tokens are sent as-is, terminated by a single newline."""
    return token if token.endswith("\n") else token + "\n"


class ResponseBuffer:
    """
    Fixed-capacity text buffer holding the most recent response.

    Every write clears the whole buffer to the empty marker and then stores the
    new text from offset 0; the logical length is the length of that text.
    """

    def __init__(self, capacity: int = RESPONSE_CAPACITY):
        self.capacity = capacity
        self._data = bytearray(EMPTY_MARKER.encode("ascii") * capacity)
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def clear(self):
        self._data[:] = EMPTY_MARKER.encode("ascii") * self.capacity
        self._length = 0

    def write(self, text: str) -> int:
        """
        Replace the buffer contents with ``text``.

        Raises:
            ResponseOverflowError: if the encoded text exceeds the capacity
        """
        encoded = text.encode("ascii")
        if len(encoded) > self.capacity:
            raise ResponseOverflowError(
                f"Response of {len(encoded)} bytes exceeds capacity {self.capacity}"
            )
        self.clear()
        self._data[:len(encoded)] = encoded
        self._length = len(encoded)
        return self._length

    def read(self, offset: int, max_len: int) -> bytes:
        """
        Return up to ``max_len`` bytes of the response starting at ``offset``.

        An offset at or past the logical length yields ``b""``.
        """
        if offset < 0 or max_len < 0:
            raise ValueError("offset and max_len must be non-negative")
        if offset >= self._length:
            return b""
        end = min(self._length, offset + max_len)
        return bytes(self._data[offset:end])

    @property
    def text(self) -> str:
        return self._data[:self._length].decode("ascii")

    @property
    def raw(self) -> bytes:
        """The whole backing store, including the fill past the logical length."""
        return bytes(self._data)
