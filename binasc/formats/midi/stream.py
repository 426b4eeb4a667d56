"""Byte stream cursor shared by the MIDI decoders."""

from typing import BinaryIO, Tuple

from binasc.utils.validation import StreamExhausted
from binasc.utils.vlv import read_vlv


class ByteStream:
    """
    Read bytes from a borrowed binary stream with a position counter.

    Every read names the field being read so that a short stream raises
    StreamExhausted pointing at the field and offset. The stream is never
    closed here.
    """

    def __init__(self, source: BinaryIO):
        self._source = source
        self._pending = b""
        self._position = 0

    def tell(self) -> int:
        return self._position

    def read_exact(self, size: int, field: str) -> bytes:
        data = self._pending[:size]
        self._pending = self._pending[size:]
        if len(data) < size:
            data += self._source.read(size - len(data)) or b""
        if len(data) < size:
            raise StreamExhausted(field, self._position + len(data))
        self._position += size
        return data

    def read_byte(self, field: str) -> int:
        return self.read_exact(1, field)[0]

    def peek_byte(self, field: str) -> int:
        if not self._pending:
            self._pending = self._source.read(1) or b""
        if not self._pending:
            raise StreamExhausted(field, self._position)
        return self._pending[0]

    def read_vlv(self, field: str) -> Tuple[int, bytes]:
        """Read a MIDI variable-length value; returns (value, raw bytes)."""
        raw = bytearray()

        def next_byte() -> int:
            byte = self.read_byte(field)
            raw.append(byte)
            return byte

        value = read_vlv(next_byte)
        return value, bytes(raw)

    def read_rest(self) -> bytes:
        """Read whatever is left in the stream."""
        data = self._pending + (self._source.read() or b"")
        self._pending = b""
        self._position += len(data)
        return data
