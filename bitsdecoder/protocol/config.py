"""Decoder configuration."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DecoderConfig:
    """Options controlling how strictly a transmission is decoded.

    Attributes:
        strict_framing: Reject bit-length framed groups whose sub-packets
            overrun the declared length. When False, sub-packets are read
            while any declared bits remain and the overrun is accepted.
        check_padding: Require every bit after the root packet to be 0.
        max_depth: Maximum packet nesting depth, root is depth 0. None means
            unbounded.
    """
    strict_framing: bool = True
    check_padding: bool = False
    max_depth: Optional[int] = None


DEFAULT_CONFIG = DecoderConfig()
