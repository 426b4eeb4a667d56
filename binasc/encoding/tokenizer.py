"""
Tokenizer for the binasc text notation.

A line is split into whitespace separated words. Each word is classified
by its leading character or its content:

    ;  #  /     comment to end of line (only where a token begins)
    "..."       quoted string, \\" inserts a literal quote
    +c          single ASCII character byte (+ alone is a space)
    v123        MIDI variable-length value
    p0.5        MIDI pitch-bend value
    t120        MIDI tempo in beats per minute
    2u'-300     decimal number (contains a quote mark)
    0101,1100   binary number (contains a comma or is longer than 2)
    7f          hexadecimal byte
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

WHITESPACE = " \t\n\r"
COMMENT_CHARS = ";#/"


class TokenKind(Enum):
    """Classes of words in the text notation."""

    HEX = "hex"
    BINARY = "binary"
    DECIMAL = "decimal"
    QUOTED_STRING = "string"
    ASCII_LITERAL = "ascii"
    VARIABLE_LENGTH_VALUE = "vlv"
    PITCH_BEND = "pitch-bend"
    TEMPO = "tempo"


# Leading characters that select a token kind on their own
PREFIX_KINDS = {
    "+": TokenKind.ASCII_LITERAL,
    "v": TokenKind.VARIABLE_LENGTH_VALUE,
    "p": TokenKind.PITCH_BEND,
    "t": TokenKind.TEMPO,
}


@dataclass(frozen=True)
class Token:
    """
    A classified word from one input line.

    Attributes:
        text: Word text (for quoted strings: the unescaped content)
        kind: Token class
        line_number: 1-based source line, for diagnostics
    """

    text: str
    kind: TokenKind
    line_number: int = 0


def classify_word(word: str) -> TokenKind:
    """Pick the token kind of an unquoted word."""
    kind = PREFIX_KINDS.get(word[:1])
    if kind is not None:
        return kind
    if "'" in word:
        return TokenKind.DECIMAL
    if "," in word or len(word) > 2:
        return TokenKind.BINARY
    return TokenKind.HEX


def _read_word(line: str, start: int) -> Tuple[str, int]:
    end = start
    while end < len(line) and line[end] not in WHITESPACE:
        end += 1
    return line[start:end], end


def _read_quoted(line: str, start: int) -> Tuple[str, int]:
    """Read a quoted string starting at the opening quote.

    An unterminated string runs to the end of the line.
    """
    chars = []
    i = start + 1
    while i < len(line):
        if line[i] == "\\" and i + 1 < len(line) and line[i + 1] == '"':
            chars.append('"')
            i += 2
        elif line[i] == '"':
            return "".join(chars), i + 1
        else:
            chars.append(line[i])
            i += 1
    return "".join(chars), i


def tokenize_line(line: str, line_number: int = 0) -> List[Token]:
    """
    Split one line of text into classified tokens.

    Args:
        line: Input text line
        line_number: 1-based line number attached to each token

    Returns:
        Tokens in line order; comments and whitespace are dropped
    """
    tokens: List[Token] = []
    i = 0
    while i < len(line):
        ch = line[i]
        if ch in COMMENT_CHARS:
            break
        if ch in WHITESPACE:
            i += 1
            continue

        if ch == '"':
            text, i = _read_quoted(line, i)
            tokens.append(Token(text, TokenKind.QUOTED_STRING, line_number))
        else:
            text, i = _read_word(line, i)
            tokens.append(Token(text, classify_word(text), line_number))

    return tokens
