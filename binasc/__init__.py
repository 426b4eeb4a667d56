"""
Binasc - bidirectional converter between binary data and ASCII byte codes.

This library provides tools to:
- Write binary files from a readable text notation (hex, binary, decimal,
  strings, MIDI variable-length values, tempos and pitch bends)
- Dump binary files as hex, hex with ASCII comments, or plain ASCII words
- Parse Standard MIDI Files into annotated text that converts back to the
  identical bytes

Example usage:
    from binasc import Binasc, FormatOptions

    data = Path("song.mid").read_bytes()
    codec = Binasc(FormatOptions(parse_as_midi=True, show_comments=True))
    text = codec.decode(data)

    assert codec.encode(text) == data
"""

__version__ = "0.1.0"
__author__ = "Binasc Contributors"

from binasc.codec import Binasc
from binasc.config import FormatOptions, OutputStyle
from binasc.encoding.encoder import BinascEncoder
from binasc.formats.midi.models import MidiEvent, MidiFile, MidiHeader, MidiTrack
from binasc.formats.midi.reader import MidiReader
from binasc.utils.validation import (
    BinascError,
    DecodingError,
    EncodingError,
    TokenSyntaxError,
)

__all__ = [
    "Binasc",
    "BinascEncoder",
    "FormatOptions",
    "OutputStyle",
    "MidiReader",
    "MidiFile",
    "MidiHeader",
    "MidiTrack",
    "MidiEvent",
    "BinascError",
    "EncodingError",
    "DecodingError",
    "TokenSyntaxError",
]
