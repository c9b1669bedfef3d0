"""
device.py - Byte-stream front end for the game engine

FourInARowDevice is what a transport talks to: it accepts command frames
through ``write`` and serves the current response through offset-based
``read`` calls. ``open`` hands out file-like handles that track their own
read cursor, the way a character device's open file does.

One lock serialises "parse, dispatch, render" so concurrent callers see
whole commands; a single caller behaves exactly as without it.
"""

import threading
from typing import Optional, Union

from fourinarow.config import EngineConfig
from fourinarow.debug import debug
from fourinarow.game.rules import GameEngine
from fourinarow.protocol.constants import RESPONSE_CAPACITY
from fourinarow.protocol.parser import classify, decode_frame
from fourinarow.protocol.response import ResponseBuffer

DEVICE_NAME = "fourinarow"

BytesLike = Union[bytes, bytearray, memoryview]


class FourInARowDevice:
    """The game exposed as a write-command, read-response byte stream."""

    def __init__(self, engine: Optional[GameEngine] = None, config: Optional[EngineConfig] = None):
        self.name = DEVICE_NAME
        self.engine = engine or GameEngine(config)
        self._buffer = ResponseBuffer()
        self._lock = threading.Lock()
        self._generation = 0

    def write(self, data: BytesLike) -> int:
        """
        Deliver one command frame.

        Only the first FRAME_SIZE bytes are interpreted. The whole write is
        consumed, so the full length is returned.
        """
        with self._lock:
            self._publish(data)
        return len(data)

    def _publish(self, data: BytesLike):
        command = classify(data)
        response = self.engine.dispatch(command)
        if response is None:
            debug.debug(f"Ignored frame {decode_frame(data)!r}", "device")
        else:
            self._buffer.write(response)
            self._generation += 1
            debug.trace(f"Response {response!r}", "device")

    def read(self, offset: int, max_len: int) -> bytes:
        """Return up to ``max_len`` response bytes from ``offset``; empty once exhausted."""
        with self._lock:
            return self._buffer.read(offset, max_len)

    def write_for(self, handle: "DeviceFile", data: BytesLike) -> int:
        """Deliver a frame on behalf of a handle and point its cursor at the new response."""
        with self._lock:
            self._publish(data)
            handle.position = 0
            handle.generation = self._generation
        return len(data)

    def read_for(self, handle: "DeviceFile", size: int) -> bytes:
        """
        Read for a handle from its cursor.

        The cursor goes back to 0 first if a newer response has been published
        since the handle last looked, so a chunk never mixes two responses.
        """
        with self._lock:
            if handle.generation != self._generation:
                handle.position = 0
                handle.generation = self._generation
            chunk = self._buffer.read(handle.position, size)
            handle.position += len(chunk)
        return chunk

    def open(self) -> "DeviceFile":
        return DeviceFile(self)

    @property
    def generation(self) -> int:
        """Counts published responses; bumps whenever the buffer is rewritten."""
        return self._generation

    @property
    def response(self) -> str:
        with self._lock:
            return self._buffer.text

    def execute(self, command: Union[str, BytesLike], chunk_size: int = 16) -> str:
        """
        Write a command and drain the response through a fresh handle.

        Convenience for interactive use and tests; returns the decoded response.
        """
        data = command.encode("ascii", errors="replace") if isinstance(command, str) else command
        with self.open() as handle:
            handle.write(data)
            chunks = []
            for chunk in iter(lambda: handle.read(chunk_size), b""):
                chunks.append(chunk)
        return b"".join(chunks).decode("ascii")


class DeviceFile:
    """
    An open handle on the device with its own read cursor.

    The cursor goes back to 0 whenever a new response is published.
    """

    def __init__(self, device: FourInARowDevice):
        self.device = device
        self.position = 0
        self.generation = device.generation
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self):
        if self._closed:
            raise ValueError("I/O operation on closed device file")

    def write(self, data: BytesLike) -> int:
        self._check_open()
        return self.device.write_for(self, data)

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (everything remaining when negative)."""
        self._check_open()
        if size is None or size < 0:
            size = RESPONSE_CAPACITY
        return self.device.read_for(self, size)

    def close(self):
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
