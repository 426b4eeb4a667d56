"""
Text to binary conversion.

Reads the binasc notation line by line and writes the bytes it describes.
"""

import logging
from typing import BinaryIO, Iterable, List

from binasc.encoding.emitters import emit_token
from binasc.encoding.tokenizer import tokenize_line

logger = logging.getLogger(__name__)


class BinascEncoder:
    """
    Encoder for the binasc text notation.

    A line is all-or-nothing: its bytes are written only after every token
    on it has been converted. The first bad token raises TokenSyntaxError,
    leaving the output of earlier lines in place.

    Example:
        encoder = BinascEncoder()
        data = encoder.encode('"MThd" 4\\'6 2\\'1 2\\'2 2\\'96')
    """

    def process_line(self, line: str, line_number: int = 0) -> bytes:
        """
        Convert one line of text to bytes.

        Args:
            line: Text line (comments and whitespace allowed)
            line_number: 1-based line number for error reports

        Returns:
            The bytes described by the line

        Raises:
            TokenSyntaxError: If any token on the line is malformed
        """
        output = bytearray()
        for token in tokenize_line(line, line_number):
            output += emit_token(token)
        return bytes(output)

    def write_to_binary(self, out: BinaryIO, lines: Iterable[str]) -> int:
        """
        Convert lines of text and write the bytes to a binary stream.

        The stream is borrowed: it is written to but never closed.

        Args:
            out: Writable binary stream
            lines: Text lines, e.g. an open text file

        Returns:
            Number of bytes written
        """
        written = 0
        for line_number, line in enumerate(lines, start=1):
            data = self.process_line(line.rstrip("\r\n"), line_number)
            if data:
                out.write(data)
                written += len(data)
        logger.debug("Encoded %d bytes", written)
        return written

    def encode_lines(self, lines: Iterable[str]) -> bytes:
        chunks: List[bytes] = []
        for line_number, line in enumerate(lines, start=1):
            chunks.append(self.process_line(line.rstrip("\r\n"), line_number))
        return b"".join(chunks)

    def encode(self, text: str) -> bytes:
        """
        Convert a block of text to bytes.

        Only line feeds end a line. Form feeds and other control characters
        stay part of the line, so they can appear inside quoted strings.
        """
        return self.encode_lines(text.split("\n"))
