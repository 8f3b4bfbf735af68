"""Decoder and evaluator for BITS hex-encoded packet transmissions."""

from bitsdecoder.errors import (
    ArityError,
    DecodeError,
    FramingOverflowError,
    TruncatedStreamError,
)
from bitsdecoder.primitives import BitCursor, read_literal, read_uint
from bitsdecoder.protocol import (
    DecoderConfig,
    LengthType,
    Packet,
    PacketType,
    decode,
    encode,
    evaluate,
    version_sum,
)

__version__ = "0.1.0"

__all__ = [
    "BitCursor",
    "read_uint",
    "read_literal",
    "Packet",
    "PacketType",
    "LengthType",
    "DecoderConfig",
    "decode",
    "encode",
    "evaluate",
    "version_sum",
    "DecodeError",
    "TruncatedStreamError",
    "FramingOverflowError",
    "ArityError",
]
