"""The eight-byte GameCube controller status reported on each poll."""

from __future__ import annotations

from dataclasses import dataclass

_SIZE = 8

_BYTE0_BUTTONS = ("a", "b", "x", "y", "start")
_BYTE1_BUTTONS = ("d_left", "d_right", "d_down", "d_up", "z", "r", "l")
_AXES = ("x_stick", "y_stick", "cx_stick", "cy_stick", "analog_l", "analog_r")


@dataclass
class GCPadStatus:
    """Controller state, laid out on the wire as a packed 8-byte record.

    Byte 0 holds A, B, X, Y and Start in its low bits with three padding
    bits above them. Byte 1 holds the D-pad, Z, R and L with one padding
    bit on top. Six unsigned bytes follow for the sticks and triggers.
    The defaults are the neutral state: sticks centred, triggers released
    and the top padding bit of byte 1 set.
    """

    a: bool = False
    b: bool = False
    x: bool = False
    y: bool = False
    start: bool = False
    pad0: int = 0
    d_left: bool = False
    d_right: bool = False
    d_down: bool = False
    d_up: bool = False
    z: bool = False
    r: bool = False
    l: bool = False  # noqa: E741
    pad1: int = 1
    x_stick: int = 128
    y_stick: int = 128
    cx_stick: int = 128
    cy_stick: int = 128
    analog_l: int = 0
    analog_r: int = 0

    def to_bytes(self) -> bytes:
        """Pack the status into its 8-byte wire form."""
        if not 0 <= self.pad0 <= 0x7:
            raise ValueError(f"pad0 must fit in 3 bits, got {self.pad0}")
        if not 0 <= self.pad1 <= 0x1:
            raise ValueError(f"pad1 must fit in 1 bit, got {self.pad1}")

        byte0 = sum(1 << bit for bit, name in enumerate(_BYTE0_BUTTONS) if getattr(self, name))
        byte0 |= self.pad0 << 5
        byte1 = sum(1 << bit for bit, name in enumerate(_BYTE1_BUTTONS) if getattr(self, name))
        byte1 |= self.pad1 << 7

        axes = []
        for name in _AXES:
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} must fit in a byte, got {value}")
            axes.append(value)
        return bytes([byte0, byte1, *axes])

    @classmethod
    def from_bytes(cls, data: bytes) -> GCPadStatus:
        """Unpack a status from its 8-byte wire form."""
        if len(data) != _SIZE:
            raise ValueError(f"pad status is {_SIZE} bytes, got {len(data)}")
        byte0, byte1, *axes = data
        fields: dict[str, object] = {
            name: bool(byte0 >> bit & 1) for bit, name in enumerate(_BYTE0_BUTTONS)
        }
        fields.update(
            {name: bool(byte1 >> bit & 1) for bit, name in enumerate(_BYTE1_BUTTONS)}
        )
        fields["pad0"] = byte0 >> 5
        fields["pad1"] = byte1 >> 7
        fields.update(zip(_AXES, axes))
        return cls(**fields)