"""BITS packet encoder.

Inverse of the decoder: serializes a Packet tree to a hex string. Operator
packets keep the framing recorded in their length_type (bit-length framing
when unset). The output is padded with zero bits to a whole nibble.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np

from bitsdecoder.primitives.bit_cursor import NIBBLE_BITS
from bitsdecoder.primitives.readers import LITERAL_GROUP_BITS, LITERAL_PAYLOAD_BITS
from bitsdecoder.protocol.packet import (
    HEADER_BITS,
    LENGTH_TYPE_BITS,
    TYPE_ID_BITS,
    VERSION_BITS,
    LengthType,
    Packet,
    PacketType,
    fold,
)


def _uint_bits(value: int, n: int, what: str) -> List[int]:
    """MSB-first bits of an n-bit unsigned integer."""
    if value < 0 or value >= (1 << n):
        raise ValueError(f"{what} {value} does not fit in {n} bits")
    return [(value >> i) & 1 for i in range(n - 1, -1, -1)]


def _literal_groups(value: int) -> int:
    """Number of 4-bit payload groups needed for value (at least one)."""
    return max(1, -(-value.bit_length() // LITERAL_PAYLOAD_BITS))


def _literal_bits(value: int) -> List[int]:
    if value < 0:
        raise ValueError(f"Literal value must be non-negative, got {value}")
    n_groups = _literal_groups(value)
    bits: List[int] = []
    for g in range(n_groups - 1, -1, -1):
        more = 1 if g > 0 else 0
        nibble = (value >> (g * LITERAL_PAYLOAD_BITS)) & 0xF
        bits.append(more)
        bits.extend(_uint_bits(nibble, LITERAL_PAYLOAD_BITS, "Nibble"))
    return bits


def _encoded_size(node: Packet, child_sizes: List[int]) -> int:
    """Exact encoded bit length of node, given the sizes of its sub-packets."""
    if node.is_literal:
        if node.literal_value is None:
            raise ValueError("Literal packet has no value")
        return HEADER_BITS + LITERAL_GROUP_BITS * _literal_groups(node.literal_value)
    length_type = node.length_type or LengthType.TOTAL_BITS
    return HEADER_BITS + LENGTH_TYPE_BITS + length_type.field_bits + sum(child_sizes)


def _packet_bits(packet: Packet) -> List[int]:
    """Write the tree pre-order, using an explicit stack."""
    sizes: Dict[int, int] = {}

    def record(node: Packet, child_sizes: List[int]) -> int:
        sizes[id(node)] = _encoded_size(node, child_sizes)
        return sizes[id(node)]

    fold(packet, record)

    bits: List[int] = []
    stack = [packet]
    while stack:
        node = stack.pop()
        bits += _uint_bits(node.version, VERSION_BITS, "Version")
        bits += _uint_bits(node.type_id, TYPE_ID_BITS, "Type ID")

        if node.is_literal:
            bits += _literal_bits(node.literal_value)
            continue

        length_type = node.length_type or LengthType.TOTAL_BITS
        if length_type is LengthType.TOTAL_BITS:
            length_field = sum(sizes[id(child)] for child in node.sub_packets)
        else:
            length_field = len(node.sub_packets)
        bits += _uint_bits(length_type.value, LENGTH_TYPE_BITS, "Length type")
        bits += _uint_bits(length_field, length_type.field_bits, f"{length_type.name} length field")
        stack.extend(reversed(node.sub_packets))
    return bits


def encode_bits(packet: Packet) -> np.ndarray:
    """Serialize packet to an unpadded uint8 bit array."""
    return np.array(_packet_bits(packet), dtype=np.uint8)


def encode(packet: Packet) -> str:
    """Serialize packet to an upper-case hex string, zero-padded to a nibble."""
    bits = encode_bits(packet)
    pad = (-len(bits)) % NIBBLE_BITS
    bits = np.concatenate([bits, np.zeros(pad, dtype=np.uint8)])
    weights = 1 << np.arange(NIBBLE_BITS - 1, -1, -1)
    nibbles = bits.reshape(-1, NIBBLE_BITS) @ weights
    return "".join(f"{int(n):X}" for n in nibbles)


# --- Packet Builders ---

def literal(value: int, version: int = 0) -> Packet:
    """Build a literal packet with its exact bits_consumed."""
    if value < 0:
        raise ValueError(f"Literal value must be non-negative, got {value}")
    _uint_bits(version, VERSION_BITS, "Version")
    return Packet(
        version=version,
        type_id=PacketType.LITERAL.value,
        bits_consumed=HEADER_BITS + LITERAL_GROUP_BITS * _literal_groups(value),
        literal_value=value,
    )


def operator(type_id: int, children: Sequence[Packet], version: int = 0,
             length_type: Optional[LengthType] = LengthType.TOTAL_BITS) -> Packet:
    """Build an operator packet over children with its exact bits_consumed."""
    _uint_bits(version, VERSION_BITS, "Version")
    _uint_bits(type_id, TYPE_ID_BITS, "Type ID")
    if type_id == PacketType.LITERAL.value:
        raise ValueError("Type ID 4 is a literal, use literal()")

    length_type = length_type or LengthType.TOTAL_BITS
    children = list(children)
    children_bits = sum(child.bits_consumed for child in children)
    length_field = children_bits if length_type is LengthType.TOTAL_BITS else len(children)
    _uint_bits(length_field, length_type.field_bits, f"{length_type.name} length field")

    return Packet(
        version=version,
        type_id=type_id,
        bits_consumed=HEADER_BITS + LENGTH_TYPE_BITS + length_type.field_bits + children_bits,
        length_type=length_type,
        sub_packets=children,
    )
