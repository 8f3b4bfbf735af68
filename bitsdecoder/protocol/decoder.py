"""Decoder for BITS packets.

Decoding is single pass, depth first, pre-order, with no backtracking. Each
packet owns a contiguous span of the cursor and reports its exact size in
Packet.bits_consumed, which is what lets a bit-length framed parent know
when its group is complete.

Nesting depth is unbounded, so operator packets whose sub-packets are still
being read are kept on an explicit stack of frames instead of the call stack.

Operator packet layout after the header:
    I        -- length-type bit
    L...L    -- 15-bit total sub-packet length (I=0) or 11-bit count (I=1)
    ...      -- sub-packets
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from bitsdecoder.errors import DecodeError, FramingOverflowError
from bitsdecoder.primitives.bit_cursor import BitCursor
from bitsdecoder.primitives.readers import read_literal, read_uint
from bitsdecoder.protocol.config import DEFAULT_CONFIG, DecoderConfig
from bitsdecoder.protocol.packet import (
    HEADER_BITS,
    LENGTH_TYPE_BITS,
    TYPE_ID_BITS,
    VERSION_BITS,
    LengthType,
    Packet,
    PacketType,
)


@dataclass
class _Frame:
    """Operator packet whose sub-packets are still being decoded."""
    packet: Packet
    length_field: int       # declared total bits or sub-packet count
    consumed: int = 0       # bits consumed by sub-packets so far

    def is_complete(self) -> bool:
        if self.packet.length_type is LengthType.TOTAL_BITS:
            return self.consumed >= self.length_field
        return len(self.packet.sub_packets) >= self.length_field


def decode(hex_string: str, config: Optional[DecoderConfig] = None) -> Packet:
    """Decode the root packet of a hex-encoded transmission.

    Trailing bits after the root packet are padding and are ignored unless
    config.check_padding is set.

    Raises:
        ValueError: If hex_string is not valid hex
        DecodeError: If the transmission is malformed
    """
    config = config or DEFAULT_CONFIG
    cursor = BitCursor.from_hex(hex_string)
    packet = decode_packet(cursor, config)

    if config.check_padding and cursor.rest().any():
        raise DecodeError(
            f"Non-zero padding after root packet: {cursor.remaining} trailing bits "
            f"starting at position {cursor.position}"
        )

    return packet


def _read_head(cursor: BitCursor) -> Tuple[Packet, int]:
    """Read a packet header and either its literal payload or its length field.

    Returns:
        (packet, length_field); length_field is 0 for literals
    """
    version = read_uint(cursor, VERSION_BITS)
    type_id = read_uint(cursor, TYPE_ID_BITS)
    packet = Packet(version=version, type_id=type_id, bits_consumed=HEADER_BITS)

    if type_id == PacketType.LITERAL.value:
        value, literal_bits = read_literal(cursor)
        packet.literal_value = value
        packet.bits_consumed += literal_bits
        return packet, 0

    packet.length_type = LengthType(read_uint(cursor, LENGTH_TYPE_BITS))
    length_field = read_uint(cursor, packet.length_type.field_bits)
    packet.bits_consumed += LENGTH_TYPE_BITS + packet.length_type.field_bits
    return packet, length_field


def _close_frame(frame: _Frame, cursor: BitCursor, config: DecoderConfig) -> Packet:
    """Finish an operator packet once its framing rule is satisfied."""
    packet = frame.packet
    if (packet.length_type is LengthType.TOTAL_BITS and frame.consumed > frame.length_field
            and config.strict_framing):
        raise FramingOverflowError(
            f"Sub-packets consumed {frame.consumed} bits, declared length is "
            f"{frame.length_field} (packet ending at position {cursor.position})"
        )
    packet.bits_consumed += frame.consumed
    return packet


def decode_packet(cursor: BitCursor, config: DecoderConfig = DEFAULT_CONFIG,
                  depth: int = 0) -> Packet:
    """Decode one packet, and everything nested in it, from the cursor.

    Args:
        cursor: Cursor positioned at the packet header
        config: Decode options
        depth: Nesting depth of this packet, checked against config.max_depth
    """
    stack: List[_Frame] = []

    while True:
        current_depth = depth + len(stack)
        if config.max_depth is not None and current_depth > config.max_depth:
            raise DecodeError(
                f"Packet nesting exceeds max depth {config.max_depth} at position {cursor.position}"
            )

        packet, length_field = _read_head(cursor)
        if packet.is_literal:
            done: Optional[Packet] = packet
        else:
            stack.append(_Frame(packet, length_field))
            done = None

        # Hand finished packets to their parents, closing every frame whose
        # framing rule is now satisfied
        while True:
            if done is not None:
                if not stack:
                    return done
                parent = stack[-1]
                parent.packet.sub_packets.append(done)
                parent.consumed += done.bits_consumed
            if not stack[-1].is_complete():
                break
            done = _close_frame(stack.pop(), cursor, config)
