"""
Endian-aware writers for fixed-width numbers.

Integers are masked to their width before packing, so negative values are
stored as two's complement and oversized values are truncated to their
low-order bytes. Floats are IEEE-754.
"""

import struct


def _order(little_endian: bool) -> str:
    return "<" if little_endian else ">"


def pack_uint8(value: int) -> bytes:
    return bytes([value & 0xFF])


def pack_uint16(value: int, little_endian: bool = False) -> bytes:
    return struct.pack(_order(little_endian) + "H", value & 0xFFFF)


def pack_uint24(value: int, little_endian: bool = False) -> bytes:
    """Pack the low 24 bits of a value into 3 bytes."""
    data = struct.pack(">I", value & 0xFFFFFF)[1:]
    return data[::-1] if little_endian else data


def pack_uint32(value: int, little_endian: bool = False) -> bytes:
    return struct.pack(_order(little_endian) + "I", value & 0xFFFFFFFF)


def pack_float32(value: float, little_endian: bool = False) -> bytes:
    """
    Pack a single-precision float.

    Raises:
        OverflowError: If the value does not fit in single precision
    """
    return struct.pack(_order(little_endian) + "f", value)


def pack_float64(value: float, little_endian: bool = False) -> bytes:
    return struct.pack(_order(little_endian) + "d", value)


def unpack_uint16(data: bytes) -> int:
    """Big-endian unsigned 16-bit value, as used in MIDI chunks."""
    return struct.unpack(">H", data)[0]


def unpack_uint24(data: bytes) -> int:
    return struct.unpack(">I", b"\x00" + data)[0]


def unpack_uint32(data: bytes) -> int:
    return struct.unpack(">I", data)[0]
