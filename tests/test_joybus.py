import struct

import pytest

from rkgplayback.joybus import (
    MICROSECONDS_PER_FRAME,
    ORIGIN_RESPONSE,
    PROBE_RESPONSE,
    GhostController,
    UnknownCommand,
    encode_pio,
    frame_at,
)
from rkgplayback.padstatus import GCPadStatus
from rkgplayback.rkg import HEADER_SIZE, RKGReader


def _reader(face=((0x02, 255),)):
    inputs = struct.pack(">HHHH", len(face), 1, 0, 0)
    inputs += b"".join(bytes(entry) for entry in face) + bytes((0x77, 255))
    return RKGReader(bytes(HEADER_SIZE) + inputs)


def _decode(words, length):
    """Recover the bytes from encoded words, checking enable bits and stop pair."""
    decoded = bytearray()
    for position in range(length):
        word = words[position // 2]
        base = 16 * (position % 2)
        value = 0
        for bit_index in range(8):
            pair = word >> (base + 2 * bit_index) & 0b11
            assert pair >> 1 == 1
            value = value << 1 | (pair & 1)
        decoded.append(value)
    assert words[length // 2] >> (16 * (length % 2)) & 0b11 == 0b11
    return bytes(decoded)


def test_encode_empty():
    assert encode_pio(b"") == []


def test_encode_zero_byte():
    assert encode_pio(b"\x00") == [0x3AAAA]


@pytest.mark.parametrize(
    "payload",
    [b"\x05", b"\xff", PROBE_RESPONSE, ORIGIN_RESPONSE, bytes(range(8)), b"\x12\x34"],
)
def test_encode_round_trip(payload):
    words = encode_pio(payload)
    assert len(words) == len(payload) // 2 + 1
    assert all(0 <= word <= 0xFFFFFFFF for word in words)
    assert _decode(words, len(payload)) == payload


def test_frame_at_values():
    assert frame_at(0) == 0
    assert frame_at(MICROSECONDS_PER_FRAME * 10 + 1) == 10
    assert frame_at(1_000_000) == 59


def test_frame_at_wraps_to_sixteen_bits():
    assert frame_at(MICROSECONDS_PER_FRAME * 0x10000 + 1) == 0


def test_frame_at_negative():
    with pytest.raises(ValueError):
        frame_at(-1)


def test_first_poll_is_frame_zero():
    controller = GhostController(_reader(), iter([5000]).__next__)
    assert controller.pad_status() == GCPadStatus(a=True)


def test_playback_follows_clock():
    start = 1000
    times = [start, start + int(MICROSECONDS_PER_FRAME * 100), start + int(MICROSECONDS_PER_FRAME * 300)]
    controller = GhostController(_reader(), iter(times).__next__)
    assert controller.pad_status().a
    assert controller.pad_status() == GCPadStatus()
    playing = controller.pad_status()
    assert playing.b and not playing.a


def test_clock_wraparound():
    start = 0xFFFF0000
    later = (start + 100_000) & 0xFFFFFFFF
    controller = GhostController(_reader(), iter([start, later]).__next__)
    controller.pad_status()
    assert controller.pad_status() == GCPadStatus()


def test_respond_probe():
    controller = GhostController(_reader(), iter([]).__next__)
    words = controller.respond(0x00)
    assert _decode(words, 3) == bytes((0x09, 0x00, 0x03))


def test_respond_origin():
    controller = GhostController(_reader(), iter([]).__next__)
    words = controller.respond(0x41)
    assert len(words) == 6
    assert _decode(words, 10) == ORIGIN_RESPONSE


def test_respond_poll():
    controller = GhostController(_reader(), iter([42]).__next__)
    words = controller.respond(0x40)
    assert len(words) == 5
    assert GCPadStatus.from_bytes(_decode(words, 8)) == GCPadStatus(a=True)


@pytest.mark.parametrize("command", [0x01, 0x42, 0xFF])
def test_respond_unknown(command):
    controller = GhostController(_reader(), iter([]).__next__)
    with pytest.raises(UnknownCommand) as info:
        controller.respond(command)
    assert info.value.command == command