"""
parser.py - Decode raw command frames into typed commands

Commands are matched by exact, case-sensitive literal prefix in a fixed order;
the first prefix that matches wins. Arguments are taken from the byte right
after the prefix and are validated later by the engine.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from fourinarow.debug import debug
from fourinarow.protocol.constants import Command as CommandLiteral, FRAME_SIZE


class CommandKind(Enum):
    RESET = auto()
    QUERY_BOARD = auto()
    DROP_CHIP = auto()
    COMPUTER_TURN = auto()
    INVALID = auto()


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    argument: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.kind != CommandKind.INVALID


INVALID = Command(CommandKind.INVALID)

# (prefix, kind, takes an argument); order matters
_PREFIXES = (
    (CommandLiteral.RESET, CommandKind.RESET, True),
    (CommandLiteral.BOARD, CommandKind.QUERY_BOARD, False),
    (CommandLiteral.DROPC, CommandKind.DROP_CHIP, True),
    (CommandLiteral.CTURN, CommandKind.COMPUTER_TURN, False),
)


def decode_frame(raw: Union[bytes, bytearray, memoryview, str]) -> str:
    """
    Reduce a raw write to the text the engine looks at.

    Only the first FRAME_SIZE bytes are kept, and the text stops at the first
    NUL byte. Non-ASCII bytes decode to U+FFFD so they can never match a prefix.
    """
    if isinstance(raw, str):
        raw = raw.encode("ascii", errors="replace")
    frame = bytes(raw[:FRAME_SIZE])
    frame = frame.split(b"\0", 1)[0]
    return frame.decode("ascii", errors="replace")


def classify(raw: Union[bytes, bytearray, memoryview, str]) -> Command:
    """
    Classify a raw command frame.

    Args:
        raw: Bytes written by the caller (text is accepted for convenience)

    Returns:
        The matching Command, or an INVALID command if nothing matches
    """
    text = decode_frame(raw)

    for prefix, kind, takes_argument in _PREFIXES:
        if not text.startswith(prefix):
            continue
        if not takes_argument:
            debug.trace(f"Classified {text!r} as {kind.name}", "parser")
            return Command(kind)
        if len(text) <= len(prefix):
            debug.debug(f"Frame {text!r} is missing its argument", "parser")
            return INVALID
        argument = text[len(prefix)]
        debug.trace(f"Classified {text!r} as {kind.name} {argument!r}", "parser")
        return Command(kind, argument)

    debug.debug(f"Unrecognised frame {text!r}", "parser")
    return INVALID
