"""
Error taxonomy and validation helpers for the binasc codec.
"""

from typing import Optional


class BinascError(Exception):
    """Base class for every error raised by the codec."""

    pass


class EncodingError(BinascError):
    """Raised when ASCII text cannot be converted to bytes."""

    pass


class TokenSyntaxError(EncodingError):
    """
    A malformed token in the encoder input.

    Attributes:
        line_number: 1-based line of the input text
        token: The offending token text
        reason: Which rule of the token grammar was violated
    """

    def __init__(self, line_number: int, token: str, reason: str):
        self.line_number = line_number
        self.token = token
        self.reason = reason
        super().__init__(f"Error on line {line_number} at token: {token}: {reason}")


class DecodingError(BinascError):
    """Raised when binary input cannot be converted to text."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (byte offset {offset})"
        super().__init__(message)


class ChunkTagMismatch(DecodingError):
    """A chunk does not start with the expected 4-byte tag."""

    def __init__(self, expected: str, index: int, found: int, offset: int):
        self.expected = expected
        self.index = index
        self.found = found
        super().__init__(
            f"Not a MIDI file: expected '{expected[index]}' of \"{expected}\", "
            f"found 0x{found:02x}",
            offset,
        )


class UnsupportedStatus(DecodingError):
    """A status byte the event decoder cannot handle."""

    def __init__(self, status: int, offset: int):
        self.status = status
        super().__init__(f"Unsupported status byte 0x{status:02x}", offset)


class StreamExhausted(DecodingError):
    """End of input reached in the middle of a field."""

    def __init__(self, field: str, offset: int):
        self.field = field
        super().__init__(f"Unexpected end of input while reading {field}", offset)


class MissingRunningStatus(DecodingError):
    """A data byte appeared before any status byte in a track."""

    def __init__(self, byte: int, offset: int):
        self.byte = byte
        super().__init__(f"Data byte 0x{byte:02x} with no running status", offset)


MTHD = b"MThd"
MTRK = b"MTrk"


def check_chunk_tag(tag: bytes, expected: bytes, offset: int = 0) -> None:
    """
    Validate a 4-byte chunk tag.

    Args:
        tag: The bytes read from the stream
        expected: MTHD or MTRK
        offset: Byte offset of the tag, for error reporting

    Raises:
        ChunkTagMismatch: Naming the first character that differs
    """
    for i, want in enumerate(expected):
        if tag[i] != want:
            raise ChunkTagMismatch(expected.decode("ascii"), i, tag[i], offset + i)


def is_midi_file(data: bytes) -> bool:
    """Quick check for the MThd signature."""
    return len(data) >= 4 and data[:4] == MTHD
