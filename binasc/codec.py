"""
Binasc codec: conversion between binary data and its ASCII notation.
"""

import io
import logging
from typing import BinaryIO, Iterable, Iterator, Optional, TextIO

from binasc.config import FormatOptions, OutputStyle
from binasc.encoding.encoder import BinascEncoder
from binasc.formats.dump import ascii_lines, hex_comment_lines, hex_lines
from binasc.formats.midi.models import MidiFile
from binasc.formats.midi.reader import MidiReader

logger = logging.getLogger(__name__)


class Binasc:
    """
    Bidirectional converter between bytes and binasc text.

    Streams passed to the conversion methods are borrowed: the codec reads
    or writes them but never opens or closes them.

    Example:
        codec = Binasc(FormatOptions(parse_as_midi=True, show_comments=True))
        text = codec.decode(midi_bytes)
        assert codec.encode(text) == midi_bytes
    """

    def __init__(self, options: Optional[FormatOptions] = None):
        self.options = options or FormatOptions()
        self.encoder = BinascEncoder()

    def write_to_binary(self, out: BinaryIO, lines: Iterable[str]) -> int:
        """
        Convert text lines into bytes written to a binary stream.

        Returns:
            Number of bytes written

        Raises:
            TokenSyntaxError: At the first malformed token
        """
        return self.encoder.write_to_binary(out, lines)

    def encode(self, text: str) -> bytes:
        return self.encoder.encode(text)

    def read_from_binary(self, out: TextIO, source: BinaryIO) -> Optional[MidiFile]:
        """
        Convert a binary stream into text written to a text stream.

        The output style follows FormatOptions.output_style.

        Returns:
            The decoded MidiFile in MIDI mode, otherwise None
        """
        style = self.options.output_style
        if style is OutputStyle.MIDI:
            return MidiReader(self.options).parse(source, out)

        data = source.read()
        if not data:
            logger.warning("No input bytes to convert")
        for line in self._dump_lines(style, data):
            out.write(line + "\n")
        return None

    def decode(self, data: bytes) -> str:
        """Convert bytes held in memory to text."""
        out = io.StringIO()
        self.read_from_binary(out, io.BytesIO(data))
        return out.getvalue()

    def _dump_lines(self, style: OutputStyle, data: bytes) -> Iterator[str]:
        if style is OutputStyle.ASCII:
            return ascii_lines(data, self.options.max_line_length)
        if style is OutputStyle.BOTH:
            return hex_comment_lines(data, self.options.max_line_bytes)
        return hex_lines(data, self.options.max_line_bytes)
