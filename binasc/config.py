"""
Format configuration for binasc conversions.

Every codec instance owns one FormatOptions value. The options select which
decode formatter runs and how wide its output lines are.
"""

from dataclasses import dataclass
from enum import Enum

DEFAULT_LINE_LENGTH = 75
DEFAULT_LINE_BYTES = 25


class OutputStyle(str, Enum):
    """Decode formatters, in order of precedence."""

    MIDI = "midi"
    BOTH = "both"
    HEX = "hex"
    ASCII = "ascii"


@dataclass
class FormatOptions:
    """
    Options for converting between binary and ASCII forms.

    Attributes:
        show_hex_bytes: Print bytes as hex codes when decoding
        show_comments: Print printable characters / MIDI labels as comments
        parse_as_midi: Decode input as a Standard MIDI File
        max_line_length: Column limit for the ASCII-only dump
        max_line_bytes: Bytes per line for the hex dumps
    """

    show_hex_bytes: bool = True
    show_comments: bool = False
    parse_as_midi: bool = False
    max_line_length: int = DEFAULT_LINE_LENGTH
    max_line_bytes: int = DEFAULT_LINE_BYTES

    def __post_init__(self):
        self.set_line_length(self.max_line_length)
        self.set_line_bytes(self.max_line_bytes)

    @property
    def output_style(self) -> OutputStyle:
        """Resolve the decode formatter: midi > hex+comments > hex > ascii."""
        if self.parse_as_midi:
            return OutputStyle.MIDI
        if not self.show_hex_bytes:
            return OutputStyle.ASCII
        if self.show_comments:
            return OutputStyle.BOTH
        return OutputStyle.HEX

    def set_line_length(self, length: int) -> int:
        """Set the ASCII dump line length; values below 1 restore the default."""
        self.max_line_length = length if length >= 1 else DEFAULT_LINE_LENGTH
        return self.max_line_length

    def get_line_length(self) -> int:
        return self.max_line_length

    def set_line_bytes(self, count: int) -> int:
        """Set hex bytes per line; values below 1 restore the default."""
        self.max_line_bytes = count if count >= 1 else DEFAULT_LINE_BYTES
        return self.max_line_bytes

    def get_line_bytes(self) -> int:
        return self.max_line_bytes

    def set_comments(self, state: bool) -> None:
        self.show_comments = bool(state)

    def set_comments_on(self) -> None:
        self.set_comments(True)

    def set_comments_off(self) -> None:
        self.set_comments(False)

    def set_hex_bytes(self, state: bool) -> None:
        self.show_hex_bytes = bool(state)

    def set_hex_bytes_on(self) -> None:
        self.set_hex_bytes(True)

    def set_hex_bytes_off(self) -> None:
        self.set_hex_bytes(False)

    def set_midi(self, state: bool) -> None:
        self.parse_as_midi = bool(state)

    def set_midi_on(self) -> None:
        self.set_midi(True)

    def set_midi_off(self) -> None:
        self.set_midi(False)
