"""
fourinarow.protocol - The command/response text protocol

Command frames are classified by the parser; responses are rendered
as plain text into a fixed-capacity response buffer.
"""

from fourinarow.protocol.constants import (FRAME_SIZE, RESPONSE_CAPACITY, Response,
                                           ProtocolError, ResponseOverflowError)
from fourinarow.protocol.parser import Command, CommandKind, classify
from fourinarow.protocol.response import ResponseBuffer, render_board, render_status

__all__ = ['FRAME_SIZE', 'RESPONSE_CAPACITY', 'Response', 'ProtocolError', 'ResponseOverflowError',
           'Command', 'CommandKind', 'classify', 'ResponseBuffer', 'render_board', 'render_status']
