"""Text to binary conversion."""

from binasc.encoding.encoder import BinascEncoder
from binasc.encoding.tokenizer import Token, TokenKind, tokenize_line
from binasc.encoding.emitters import emit_token

__all__ = ["BinascEncoder", "Token", "TokenKind", "tokenize_line", "emit_token"]
