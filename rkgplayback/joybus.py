"""Console-facing side of ghost playback: replies to joybus commands."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import IntEnum

from .padstatus import GCPadStatus
from .rkg import RKGReader

FRAME_RATE = 59.94
MICROSECONDS_PER_FRAME = 1_000_000 / FRAME_RATE

PROBE_RESPONSE = bytes((0x09, 0x00, 0x03))
ORIGIN_RESPONSE = bytes((0x00, 0x80, 128, 128, 128, 128, 0, 0, 0, 0))

_U32 = 0xFFFFFFFF
_U16 = 0xFFFF


class Command(IntEnum):
    """First byte of a command sent by the console."""

    PROBE = 0x00
    POLL = 0x40
    ORIGIN = 0x41


class UnknownCommand(ValueError):
    """Raised for a command byte the controller does not answer."""

    def __init__(self, command: int) -> None:
        super().__init__(f"unknown command byte 0x{command:02x}")
        self.command = command


def encode_pio(command: bytes) -> list[int]:
    """Encode bytes as 32-bit words for the output state machine.

    Each bit, most significant first, becomes a pair of bits shifted out
    to the right: the data bit followed by an enable bit. Two bytes fill a
    word, and a stop pair of two set bits follows the last byte.
    """
    command = bytes(command)
    if not command:
        return []
    words = [0] * (len(command) // 2 + 1)
    for position, byte in enumerate(command):
        base = 16 * (position % 2)
        for bit_index in range(8):
            bit = byte >> (7 - bit_index) & 1
            words[position // 2] |= (0b10 | bit) << (base + 2 * bit_index)
    words[len(command) // 2] |= 0b11 << (16 * (len(command) % 2))
    return words


def frame_at(elapsed_us: float) -> int:
    """Return the 16-bit video frame number reached after ``elapsed_us`` microseconds."""
    if elapsed_us < 0:
        raise ValueError(f"elapsed time cannot be negative, got {elapsed_us}")
    return int(elapsed_us / MICROSECONDS_PER_FRAME) & _U16


def _monotonic_us() -> int:
    return time.monotonic_ns() // 1000


class GhostController:
    """A controller that answers the console with recorded ghost inputs.

    Playback time starts at the first poll; ``clock`` returns microseconds
    and is treated as a wrapping 32-bit counter.
    """

    def __init__(self, reader: RKGReader, clock: Callable[[], int] | None = None) -> None:
        self.reader = reader
        self.clock = clock if clock is not None else _monotonic_us
        self._start: int | None = None

    def pad_status(self) -> GCPadStatus:
        """Return the controller state for the current moment of playback."""
        now = self.clock() & _U32
        if self._start is None:
            self._start = now
            frame = 0
        else:
            frame = frame_at((now - self._start) & _U32)
        return self.reader.calc_frame(frame)

    def respond(self, command: int) -> list[int]:
        """Return the encoded reply words for a command byte."""
        if command == Command.PROBE:
            return encode_pio(PROBE_RESPONSE)
        if command == Command.ORIGIN:
            return encode_pio(ORIGIN_RESPONSE)
        if command == Command.POLL:
            return encode_pio(self.pad_status().to_bytes())
        raise UnknownCommand(command)