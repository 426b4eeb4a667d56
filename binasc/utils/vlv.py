"""
MIDI Variable-Length Value utilities.

A VLV stores an unsigned integer big-endian in 7-bit groups. Every byte
except the last has its top bit set as a continuation flag:

    0x00000000  ->  00
    0x00000040  ->  40
    0x0000007F  ->  7F
    0x00000080  ->  81 00
    0x00003FFF  ->  FF 7F
    0x0FFFFFFF  ->  FF FF FF 7F
"""

from typing import Callable, List, Tuple

VLV_MAX = 0xFFFFFFFF


def encode_vlv(value: int) -> bytes:
    """
    Encode an unsigned integer as a Variable-Length Value.

    The value is split into five 7-bit groups, most significant first.
    Leading zero groups are dropped but the last group is always kept.

    Args:
        value: Integer in the range 0 to 2^32-1

    Returns:
        1 to 5 encoded bytes

    Example:
        >>> encode_vlv(128).hex()
        '8100'
    """
    if not 0 <= value <= VLV_MAX:
        raise ValueError(f"VLV value must be 0-{VLV_MAX}, got {value}")

    groups = [(value >> shift) & 0x7F for shift in (28, 21, 14, 7, 0)]

    result = bytearray()
    for i, group in enumerate(groups):
        if result or group != 0 or i == 4:
            result.append(group)

    # Continuation bit on all but the last byte
    for i in range(len(result) - 1):
        result[i] |= 0x80

    return bytes(result)


def decode_vlv(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode a Variable-Length Value from a byte buffer.

    Args:
        data: Buffer holding the VLV
        offset: Index of the first VLV byte

    Returns:
        (value, number of bytes consumed)
    """
    value = 0
    index = offset
    while True:
        if index >= len(data):
            raise ValueError("Truncated variable-length value")
        byte = data[index]
        index += 1
        value = (value << 7) | (byte & 0x7F)
        if byte < 0x80:
            break
    return value, index - offset


def read_vlv(read_byte: Callable[[], int]) -> int:
    """Read a VLV one byte at a time from a callable source."""
    value = 0
    while True:
        byte = read_byte()
        value = (value << 7) | (byte & 0x7F)
        if byte < 0x80:
            return value


def format_vlv(value: int, raw: bytes) -> List[str]:
    """
    Write a VLV read from a file as text tokens.

    A value stored in its shortest form becomes a single "v" token. Padded
    or oversized encodings are written as hex bytes so that they convert
    back to the same bytes.

    Example:
        >>> format_vlv(0, b"\\x80\\x00")
        ['80', '00']
    """
    if value <= VLV_MAX and encode_vlv(value) == raw:
        return [f"v{value}"]
    return [f"{b:02x}" for b in raw]
