"""Decompression of Yaz1-compressed ghost input data."""

from __future__ import annotations

_MAGIC = b"Yaz1"


class Yaz1Error(ValueError):
    """Raised when compressed data is malformed or truncated."""


def decompress_block(data: bytes, offset: int, size: int) -> tuple[bytes, int]:
    """Decode one Yaz1 block starting at ``offset`` into ``size`` bytes.

    Returns the decoded bytes and the number of source bytes consumed.
    """
    out = bytearray()
    pos = offset
    code = 0
    bits = 0
    try:
        while len(out) < size:
            if bits == 0:
                code = data[pos]
                pos += 1
                bits = 8

            if code & 0x80:
                out.append(data[pos])
                pos += 1
            else:
                byte1 = data[pos]
                byte2 = data[pos + 1]
                pos += 2
                dist = (byte1 & 0x0F) << 8 | byte2
                source = len(out) - (dist + 1)
                if source < 0:
                    raise Yaz1Error(f"back-reference reaches before start of block at {pos}")
                count = byte1 >> 4
                if count == 0:
                    count = data[pos] + 0x12
                    pos += 1
                else:
                    count += 2
                if len(out) + count > size:
                    raise Yaz1Error("run overflows the declared block size")
                for _ in range(count):
                    out.append(out[source])
                    source += 1

            code = code << 1 & 0xFF
            bits -= 1
    except IndexError:
        raise Yaz1Error("compressed block is truncated") from None
    return bytes(out), pos - offset


def decompress(data: bytes) -> bytes:
    """Decode a length-prefixed sequence of Yaz1 blocks.

    The data starts with a big-endian 32-bit compressed length; within
    that many following bytes every block begins with ``Yaz1``, a
    big-endian 32-bit decoded size and eight unused bytes.
    """
    if len(data) < 4:
        raise Yaz1Error("missing compressed length")
    length = int.from_bytes(data[:4], "big")
    body = data[4:]
    if length > len(body):
        raise Yaz1Error(f"compressed length {length} exceeds available {len(body)} bytes")

    result = bytearray()
    pos = 0
    while pos < length:
        found = body.find(_MAGIC, pos, length)
        if found < 0:
            break
        pos = found + len(_MAGIC)
        if pos + 4 > len(body):
            raise Yaz1Error("block header is truncated")
        block_size = int.from_bytes(body[pos:pos + 4], "big")
        pos += 12
        block, used = decompress_block(body, pos, block_size)
        pos += used
        result += block
    return bytes(result)