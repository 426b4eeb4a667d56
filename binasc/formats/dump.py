"""
Plain byte dumps for non-MIDI input.

Three layouts:
- ASCII: printable words only, wrapped at a column limit
- hex: two hex digits per byte, a fixed number of bytes per line
- both: hex lines, each followed by a ';' comment showing printable
  characters under their hex codes
"""

import re
from typing import Iterator

_WORD = re.compile(rb"[\x21-\x7e]+")


def _is_printable(byte: int) -> bool:
    return 0x20 <= byte < 0x7F


def ascii_lines(data: bytes, max_line_length: int = 75) -> Iterator[str]:
    """
    Yield printable, non-whitespace runs as space separated words.

    A word that would push the line past max_line_length starts a new
    line. Words are never split.
    """
    line = ""
    for match in _WORD.finditer(data):
        word = match.group().decode("ascii")
        if line and len(line) + 1 + len(word) > max_line_length:
            yield line
            line = word
        elif line:
            line += " " + word
        else:
            line = word
    if line:
        yield line


def hex_lines(data: bytes, max_line_bytes: int = 25) -> Iterator[str]:
    """Yield lines of max_line_bytes lowercase hex byte codes."""
    for offset in range(0, len(data), max_line_bytes):
        chunk = data[offset : offset + max_line_bytes]
        yield " ".join(f"{b:02x}" for b in chunk)


def hex_comment_lines(data: bytes, max_line_bytes: int = 25) -> Iterator[str]:
    """
    Yield hex lines, each followed by an ASCII comment line and a blank line.

    Example:
        >>> list(hex_comment_lines(b"MThd"))
        [' 4d 54 68 64', '; M  T  h  d', '']
    """
    for offset in range(0, len(data), max_line_bytes):
        chunk = data[offset : offset + max_line_bytes]
        yield " " + " ".join(f"{b:02x}" for b in chunk)
        comment = "".join(f" {chr(b) if _is_printable(b) else ' '} " for b in chunk)
        yield (";" + comment).rstrip()
        yield ""
