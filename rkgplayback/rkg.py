"""Playback of ghost inputs recorded in RKG files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .padstatus import GCPadStatus
from .yaz1 import decompress

HEADER_SIZE = 0x88
INPUT_HEADER_SIZE = 0x8
FRAMES_AFTER_RECONNECT = 283

_COMPRESSED_OFFSET = 0xC
_COMPRESSED_FLAG = 0x8
_MAX_FRAME = 0xFFFF

# Raw 0-14 stick positions mapped to analog values; diagonals are limited
# to a unit circle in-game, hence the uneven spacing around the centre.
_STICK_VALUES = (59, 68, 77, 86, 95, 104, 112, 128, 152, 161, 170, 179, 188, 197, 205)


class DPad(IntEnum):
    """Direction pressed on the D-pad for a trick input."""

    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


class RKGError(ValueError):
    """Raised when ghost data is too short or its sections are inconsistent."""


def raw_to_stick(raw: int) -> int:
    """Convert a raw 0-14 stick position to its analog value."""
    if not 0 <= raw < len(_STICK_VALUES):
        raise ValueError(f"raw stick position must be 0-{len(_STICK_VALUES) - 1}, got {raw}")
    return _STICK_VALUES[raw]


@dataclass
class _Cursor:
    """Position within one section of (inputs, duration) tuples."""

    entries: tuple[tuple[int, int], ...]
    index: int = 0
    elapsed: int = 0

    @property
    def finished(self) -> bool:
        return self.index >= len(self.entries)

    def inputs(self) -> int:
        return 0 if self.finished else self.entries[self.index][0]

    def step(self, advance: bool) -> int:
        """Return the inputs for this frame, moving on first if ``advance``."""
        if self.finished:
            return 0
        duration = self.entries[self.index][1]
        if advance:
            self.elapsed = (self.elapsed + 1) & 0xFF
            if self.elapsed == duration:
                self.index += 1
                self.elapsed = 0
        return self.inputs()

    def step_trick(self, advance: bool) -> DPad:
        """Return the D-pad direction for this frame, moving on first if ``advance``.

        The low nibble of a trick tuple's inputs counts idle periods of 256
        frames that precede the press, so a tuple lasts idle + duration frames.
        """
        if self.finished:
            return DPad.NONE
        inputs, duration = self.entries[self.index]
        idle = (inputs & 0x0F) * 256
        if advance:
            self.elapsed = (self.elapsed + 1) & 0xFFFF
            if self.elapsed == idle + duration:
                self.index += 1
                self.elapsed = 0
                inputs = self.inputs()
                idle = (inputs & 0x0F) * 256
        if self.elapsed < idle:
            inputs = 0
        try:
            return DPad(inputs >> 4 & 0x07)
        except ValueError:
            return DPad.NONE


def _tuples(section: bytes) -> tuple[tuple[int, int], ...]:
    return tuple(zip(section[0::2], section[1::2]))


class RKGReader:
    """Replays the face-button, stick and trick inputs stored in a ghost file."""

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise RKGError(f"ghost file needs at least {HEADER_SIZE} header bytes, got {len(data)}")

        decoded = data[HEADER_SIZE:]
        if data[_COMPRESSED_OFFSET] & _COMPRESSED_FLAG:
            decoded = decompress(decoded)
        if len(decoded) < INPUT_HEADER_SIZE:
            raise RKGError("input data header is truncated")

        face_count = int.from_bytes(decoded[0:2], "big")
        dir_count = int.from_bytes(decoded[2:4], "big")
        trick_count = int.from_bytes(decoded[4:6], "big")

        face_start = INPUT_HEADER_SIZE
        dir_start = face_start + 2 * face_count
        trick_start = dir_start + 2 * dir_count
        trick_end = trick_start + 2 * trick_count
        if trick_end > len(decoded):
            raise RKGError(
                f"input sections need {trick_end} bytes but only {len(decoded)} are present"
            )

        self._face = _Cursor(_tuples(decoded[face_start:dir_start]))
        self._dir = _Cursor(_tuples(decoded[dir_start:trick_start]))
        self._trick = _Cursor(_tuples(decoded[trick_start:trick_end]))
        self._frame_count = 0

    def calc_frame(self, frame: int) -> GCPadStatus:
        """Return the controller state for ``frame`` counted from power-on.

        Frame 0 presses A to dismiss the reconnect screen; playback starts
        after the fade-out. Polling the same frame again gives the same
        state, and a later frame moves playback on by one frame only.
        """
        if not 0 <= frame <= _MAX_FRAME:
            raise ValueError(f"frame must be 0-{_MAX_FRAME}, got {frame}")
        if frame == 0:
            return GCPadStatus(a=True)
        if frame < FRAMES_AFTER_RECONNECT:
            return GCPadStatus()

        frame -= FRAMES_AFTER_RECONNECT
        advance = frame > self._frame_count

        face = self._face.step(advance)
        direction = self._dir.step(advance)
        trick = self._trick.step_trick(advance)

        if advance:
            self._frame_count += 1

        return GCPadStatus(
            a=bool(face & 0x01),
            b=bool(face & 0x02),
            l=bool(face & 0x04),
            x_stick=raw_to_stick(direction >> 4 & 0x0F),
            y_stick=raw_to_stick(direction & 0x0F),
            d_up=trick is DPad.UP,
            d_down=trick is DPad.DOWN,
            d_left=trick is DPad.LEFT,
            d_right=trick is DPad.RIGHT,
        )