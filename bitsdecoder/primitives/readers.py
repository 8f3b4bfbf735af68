"""Primitive readers: fixed-width unsigned integers and literal nibble groups.

All numbers in a BITS packet are unsigned and most significant bit first.
Literal payloads use 5-bit groups: one continuation bit, then 4 payload bits.
The group whose continuation bit is 0 is the last one.
"""

from typing import Tuple

from bitsdecoder.primitives.bit_cursor import BitCursor

LITERAL_GROUP_BITS = 5
LITERAL_PAYLOAD_BITS = 4


def read_uint(cursor: BitCursor, n: int) -> int:
    """Read an n-bit unsigned integer, MSB first."""
    value = 0
    for _ in range(n):
        value = value * 2 + cursor.take_bit()
    return value


def read_literal(cursor: BitCursor) -> Tuple[int, int]:
    """Read one variable-length literal value.

    Returns:
        (value, bits_read) where bits_read is a positive multiple of 5
    """
    value = 0
    bits_read = 0
    more = True
    while more:
        more = cursor.take_bit() == 1
        value = value * 16 + read_uint(cursor, LITERAL_PAYLOAD_BITS)
        bits_read += LITERAL_GROUP_BITS
    return value, bits_read
