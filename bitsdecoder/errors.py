"""Decode error taxonomy.

Every decode failure is fatal: there is no partial result. All errors derive
from ValueError so callers that already guard input parsing with
``except ValueError`` keep working.
"""


class DecodeError(ValueError):
    """Malformed BITS transmission."""


class TruncatedStreamError(DecodeError):
    """Bit stream ended before a packet or framing rule was complete."""


class FramingOverflowError(DecodeError):
    """Sub-packets of a bit-length framed group overran the declared length."""


class ArityError(DecodeError):
    """Operator packet has a sub-packet count its operator cannot accept."""
