"""Bit-addressable cursor over a hexadecimal BITS transmission.

Each hex character expands to four bits, most significant bit first, in
input order. Bits are materialised once as a numpy uint8 array and consumed
strictly forward; the cursor is never rewound.

Trailing bits left over when the root packet ends are padding. The cursor
does not trim them, the decoder simply never reads them.
"""

import string

import numpy as np

from bitsdecoder.errors import TruncatedStreamError

# --- Constants ---

NIBBLE_BITS = 4

_HEX_DIGITS = frozenset(string.hexdigits)

# Bit weights for expanding one nibble, MSB first
_NIBBLE_SHIFTS = np.arange(NIBBLE_BITS - 1, -1, -1, dtype=np.uint8)


def hex_to_bits(hex_string: str) -> np.ndarray:
    """Expand a hex string into a flat uint8 array of 0/1 values.

    Args:
        hex_string: Hex digits, either case, surrounding whitespace ignored

    Returns:
        Array of length 4 * len(hex_string)

    Raises:
        ValueError: If the string is empty or contains a non-hex character
    """
    digits = hex_string.strip()
    if not digits:
        raise ValueError("Empty hex string")

    for pos, c in enumerate(digits):
        if c not in _HEX_DIGITS:
            raise ValueError(f"Invalid hex character {c!r} at position {pos}")

    nibbles = np.array([int(c, 16) for c in digits], dtype=np.uint8)
    return ((nibbles[:, None] >> _NIBBLE_SHIFTS) & 1).astype(np.uint8).ravel()


class BitCursor:
    """Forward-only reader over a fixed sequence of bits."""

    def __init__(self, bits: np.ndarray) -> None:
        self._bits = np.asarray(bits, dtype=np.uint8)
        self.position = 0

    @classmethod
    def from_hex(cls, hex_string: str) -> "BitCursor":
        """Create a cursor positioned at the first bit of hex_string."""
        return cls(hex_to_bits(hex_string))

    @property
    def length(self) -> int:
        """Total number of bits, padding included."""
        return len(self._bits)

    @property
    def remaining(self) -> int:
        """Number of bits not yet consumed."""
        return self.length - self.position

    def take_bit(self) -> int:
        """Consume and return the next bit (0 or 1).

        Raises:
            TruncatedStreamError: If every bit has already been consumed
        """
        if self.position >= self.length:
            raise TruncatedStreamError(
                f"Bit stream exhausted at position {self.position} of {self.length}"
            )
        bit = int(self._bits[self.position])
        self.position += 1
        return bit

    def take_bits(self, n: int) -> np.ndarray:
        """Consume the next n bits and return them as a uint8 array.

        Nothing is consumed if fewer than n bits remain.

        Raises:
            TruncatedStreamError: If fewer than n bits remain
        """
        if n < 0:
            raise ValueError(f"Cannot take a negative number of bits: {n}")
        if n > self.remaining:
            raise TruncatedStreamError(
                f"Need {n} bits at position {self.position}, only {self.remaining} remain"
            )
        chunk = self._bits[self.position:self.position + n]
        self.position += n
        return chunk

    def rest(self) -> np.ndarray:
        """Unconsumed bits, without advancing."""
        return self._bits[self.position:]

    def __repr__(self) -> str:
        return f"BitCursor(position={self.position}, length={self.length})"
