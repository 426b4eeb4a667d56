"""Utility functions for binasc."""

from binasc.utils.vlv import encode_vlv, decode_vlv
from binasc.utils.pitch import key_to_pitch_name
from binasc.utils.validation import (
    BinascError,
    EncodingError,
    TokenSyntaxError,
    DecodingError,
    ChunkTagMismatch,
    UnsupportedStatus,
    StreamExhausted,
    MissingRunningStatus,
)

__all__ = [
    "encode_vlv",
    "decode_vlv",
    "key_to_pitch_name",
    "BinascError",
    "EncodingError",
    "TokenSyntaxError",
    "DecodingError",
    "ChunkTagMismatch",
    "UnsupportedStatus",
    "StreamExhausted",
    "MissingRunningStatus",
]
