"""
Byte emitters for each token kind.

Every emitter takes one Token and returns the bytes it describes, or
raises TokenSyntaxError naming the rule the token breaks. An emitter
never returns partial output.
"""

import re
import string
from typing import Callable, Dict

from binasc.encoding.tokenizer import Token, TokenKind
from binasc.formats.midi.models import MICROSECONDS_PER_MINUTE
from binasc.utils.byteorder import (
    pack_float32,
    pack_float64,
    pack_uint8,
    pack_uint16,
    pack_uint24,
    pack_uint32,
)
from binasc.utils.validation import TokenSyntaxError
from binasc.utils.vlv import VLV_MAX, encode_vlv

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Characters that may start the number of a tempo or pitch-bend word
_FLOAT_START = set(string.digits + ".-+")


def parse_int_prefix(text: str) -> int:
    """Parse the leading integer of a string; 0 when there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def parse_float_prefix(text: str) -> float:
    """Parse the leading floating-point literal of a string; 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _to_bytes(token: Token, text: str) -> bytes:
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError:
        raise TokenSyntaxError(token.line_number, token.text, "character outside the 8-bit range")


def emit_hex(token: Token) -> bytes:
    """One or two hex digits -> one byte."""
    word = token.text
    if len(word) > 2:
        raise TokenSyntaxError(
            token.line_number, word, "size of hexadecimal number is too large, max is ff"
        )
    if not word or any(ch not in string.hexdigits for ch in word):
        raise TokenSyntaxError(token.line_number, word, "invalid character in hexadecimal number")
    return bytes([int(word, 16)])


def emit_ascii(token: Token) -> bytes:
    """'+c' -> the byte of c, '+' alone -> a space."""
    word = token.text
    if not word.startswith("+"):
        raise TokenSyntaxError(token.line_number, word, "character byte must start with '+' sign")
    if len(word) > 2:
        raise TokenSyntaxError(
            token.line_number, word, "character byte word is too long, specify only one character"
        )
    if len(word) == 2:
        return _to_bytes(token, word[1])
    return b" "


def emit_string(token: Token) -> bytes:
    return _to_bytes(token, token.text)


def emit_binary(token: Token) -> bytes:
    """
    Binary digits -> one byte.

    Without a comma the digits fill the low bits of the byte. With a comma
    the left digits form the high nibble and the right digits the low nibble:
    "1010,1100" -> 0xAC, "1,1" -> 0x11.
    """
    word = token.text
    line = token.line_number
    comma = -1

    for i, ch in enumerate(word):
        if ch == ",":
            if comma != -1:
                raise TokenSyntaxError(line, word, "extra comma in binary number")
            comma = i
        elif ch not in "01":
            raise TokenSyntaxError(
                line, word, f"invalid character in binary number (character is {ch})"
            )

    if comma == 0:
        raise TokenSyntaxError(line, word, "cannot start binary number with a comma")
    if comma == len(word) - 1:
        raise TokenSyntaxError(line, word, "cannot end binary number with a comma")

    if comma == -1:
        if len(word) > 8:
            raise TokenSyntaxError(line, word, "too many digits in binary number")
        return bytes([int(word, 2)])

    left, right = word[:comma], word[comma + 1 :]
    if len(left) > 4:
        raise TokenSyntaxError(line, word, "too many digits to left of comma")
    if len(right) > 4:
        raise TokenSyntaxError(line, word, "too many digits to right of comma")

    return bytes([(int(left, 2) << 4) | int(right, 2)])


def emit_decimal(token: Token) -> bytes:
    """
    Decimal word -> 1, 2, 3, 4 or 8 bytes.

    Layout: [byte count][u]'[-]digits[.digits]

    The optional byte count (1-4, or 8 for doubles) and the little-endian
    marker 'u' come before the quote. A period selects floating point,
    which defaults to 4 bytes.
    """
    word = token.text
    line = token.line_number

    def error(reason: str) -> TokenSyntaxError:
        return TokenSyntaxError(line, word, reason)

    byte_count = None
    quote = sign = period = endian = None

    for i, ch in enumerate(word):
        if ch == "'":
            if quote is not None:
                raise error("extra quote in decimal number")
            quote = i
        elif ch == "-":
            if sign is not None:
                raise error("cannot have more than one minus sign in number")
            sign = i
            if i == 0 or word[i - 1] != "'":
                raise error("minus sign must immediately follow quote mark")
        elif ch == ".":
            if quote is None:
                raise error("cannot have decimal marker before quote")
            if period is not None:
                raise error("extra period in decimal number")
            period = i
        elif ch in "uU":
            if quote is not None:
                raise error("cannot have endian specified after quote")
            if endian is not None:
                raise error('extra "u" in decimal number')
            endian = i
        elif ch in "12348":
            if quote is None:
                if byte_count is not None:
                    raise error("invalid byte specification before quote in decimal number")
                byte_count = int(ch)
        elif ch in "05679":
            if quote is None:
                raise error("cannot have numbers before quote in decimal number")
        else:
            raise error(f"invalid character in decimal number (character number {i})")

    if quote is None:
        raise error("there must be a quote to signify a decimal number")
    if quote == len(word) - 1:
        raise error("there must be a decimal number after the quote")
    if period is None and byte_count == 8:
        raise error("only floating-point numbers can use 8 bytes")

    little_endian = endian is not None
    number = word[quote + 1 :]

    if period is not None:
        value = parse_float_prefix(number)
        if byte_count is None or byte_count == 4:
            try:
                return pack_float32(value, little_endian)
            except OverflowError:
                raise error("floating-point number out of range for 4 bytes")
        if byte_count == 8:
            return pack_float64(value, little_endian)
        raise error("floating-point numbers can be only 4 or 8 bytes")

    value = parse_int_prefix(number)

    # Without a byte count the number must fit in one byte
    if byte_count is None:
        if sign is not None:
            if not -128 <= value <= 127:
                raise error("decimal number out of range from -128 to 127")
        elif value > 255:
            raise error("decimal number out of range from 0 to 255")
        return pack_uint8(value)

    if byte_count == 1:
        return pack_uint8(value)
    if byte_count == 2:
        return pack_uint16(value, little_endian)
    if byte_count == 3:
        if sign is not None:
            raise error("negative decimal numbers cannot be stored in 3 bytes")
        return pack_uint24(value, little_endian)
    if byte_count == 4:
        return pack_uint32(value, little_endian)

    raise error("invalid byte count specification for decimal number")


def emit_vlv(token: Token) -> bytes:
    """'v<uint>' -> MIDI variable-length value."""
    word = token.text
    if len(word) < 2 or not word[1].isdigit():
        raise TokenSyntaxError(
            token.line_number, word, "'v' needs to be followed immediately by a decimal digit"
        )
    value = parse_int_prefix(word[1:])
    if value > VLV_MAX:
        raise TokenSyntaxError(
            token.line_number, word, "number is too large for a variable-length value"
        )
    return encode_vlv(value)


def _float_argument(token: Token, prefix: str) -> float:
    word = token.text
    if len(word) < 2 or word[1] not in _FLOAT_START:
        raise TokenSyntaxError(
            token.line_number,
            word,
            f"'{prefix}' needs to be followed immediately by a floating-point number",
        )
    return parse_float_prefix(word[1:])


def emit_tempo(token: Token) -> bytes:
    """'t<bpm>' -> 3-byte big-endian microseconds per quarter note."""
    bpm = abs(_float_argument(token, "t"))
    if bpm == 0.0:
        raise TokenSyntaxError(token.line_number, token.text, "tempo must be non-zero")
    microseconds = int(MICROSECONDS_PER_MINUTE / bpm + 0.5)
    return pack_uint24(microseconds)


def emit_pitch_bend(token: Token) -> bytes:
    """
    'p<value>' -> 2-byte MIDI pitch-bend data.

    The value is clamped to -1.0..+1.0 and mapped onto 0..16383. The low
    7 bits are written first, then the high 7 bits.
    """
    value = _float_argument(token, "p")
    value = max(-1.0, min(1.0, value))
    bend = int(((1 << 13) - 0.5) * (value + 1.0) + 0.5)
    return bytes([bend & 0x7F, (bend >> 7) & 0x7F])


EMITTERS: Dict[TokenKind, Callable[[Token], bytes]] = {
    TokenKind.HEX: emit_hex,
    TokenKind.BINARY: emit_binary,
    TokenKind.DECIMAL: emit_decimal,
    TokenKind.QUOTED_STRING: emit_string,
    TokenKind.ASCII_LITERAL: emit_ascii,
    TokenKind.VARIABLE_LENGTH_VALUE: emit_vlv,
    TokenKind.PITCH_BEND: emit_pitch_bend,
    TokenKind.TEMPO: emit_tempo,
}


def emit_token(token: Token) -> bytes:
    """Convert one token to bytes with the emitter for its kind."""
    return EMITTERS[token.kind](token)
