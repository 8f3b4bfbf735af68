"""Primitives - bit cursor and fixed-width readers for BITS transmissions."""

from bitsdecoder.primitives.bit_cursor import (
    NIBBLE_BITS,
    BitCursor,
    hex_to_bits,
)
from bitsdecoder.primitives.readers import (
    LITERAL_GROUP_BITS,
    LITERAL_PAYLOAD_BITS,
    read_literal,
    read_uint,
)

__all__ = [
    # Cursor
    "BitCursor",
    "hex_to_bits",
    "NIBBLE_BITS",
    # Readers
    "read_uint",
    "read_literal",
    "LITERAL_GROUP_BITS",
    "LITERAL_PAYLOAD_BITS",
]
