"""BITS packet data structures.

A packet is a 6-bit header (3-bit version, 3-bit type ID) followed by either
a literal payload (type ID 4) or a framed list of sub-packets. The tree is
purely structural: derived values (version sum, expression value) are
computed by the evaluator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, TypeVar

# --- Header / Framing Widths ---

VERSION_BITS = 3
TYPE_ID_BITS = 3
HEADER_BITS = VERSION_BITS + TYPE_ID_BITS
LENGTH_TYPE_BITS = 1
TOTAL_LENGTH_BITS = 15
SUB_PACKET_COUNT_BITS = 11

T = TypeVar("T")


class PacketType(Enum):
    """Packet type ID. Every 3-bit value is defined."""
    SUM = 0
    PRODUCT = 1
    MINIMUM = 2
    MAXIMUM = 3
    LITERAL = 4
    GREATER_THAN = 5
    LESS_THAN = 6
    EQUAL_TO = 7

    @property
    def label(self) -> str:
        """Short operator name."""
        return _TYPE_LABELS[self]

    @property
    def is_comparison(self) -> bool:
        return self in (PacketType.GREATER_THAN, PacketType.LESS_THAN, PacketType.EQUAL_TO)


_TYPE_LABELS = {
    PacketType.SUM: "sum",
    PacketType.PRODUCT: "prod",
    PacketType.MINIMUM: "min",
    PacketType.MAXIMUM: "max",
    PacketType.LITERAL: "lit",
    PacketType.GREATER_THAN: "gt",
    PacketType.LESS_THAN: "lt",
    PacketType.EQUAL_TO: "eq",
}


class LengthType(Enum):
    """Sub-packet framing mode, selected by the length-type bit."""
    TOTAL_BITS = 0          # 15-bit total length of sub-packets
    SUB_PACKET_COUNT = 1    # 11-bit number of sub-packets

    @property
    def field_bits(self) -> int:
        """Width of the length field that follows the length-type bit."""
        return TOTAL_LENGTH_BITS if self is LengthType.TOTAL_BITS else SUB_PACKET_COUNT_BITS


@dataclass
class Packet:
    """One decoded packet and everything nested inside it.

    Attributes:
        version: 3-bit version field (0-7)
        type_id: 3-bit type ID (0-7), 4 means literal
        bits_consumed: Bits read for this packet, header and nested packets included
        literal_value: Payload of a literal packet, None for operators
        length_type: Framing used by an operator packet, None for literals
        sub_packets: Children of an operator packet, in stream order
    """
    version: int
    type_id: int
    bits_consumed: int = 0
    literal_value: Optional[int] = None
    length_type: Optional[LengthType] = None
    sub_packets: list["Packet"] = field(default_factory=list)

    @property
    def packet_type(self) -> PacketType:
        return PacketType(self.type_id)

    @property
    def is_literal(self) -> bool:
        return self.type_id == PacketType.LITERAL.value


# --- Tree Traversal ---
# Packets can nest arbitrarily deep, so traversals use an explicit stack
# rather than the interpreter's call stack.

def iter_post_order(packet: Packet) -> Iterator[Packet]:
    """Yield every packet in the tree, children before their parent."""
    stack = [(packet, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(node.sub_packets):
            stack.append((child, False))


def fold(packet: Packet, combine: Callable[[Packet, List[T]], T]) -> T:
    """Reduce the tree bottom-up.

    combine(node, child_results) is called once per packet, with the results
    of its sub-packets in stream order.
    """
    results: Dict[int, T] = {}
    for node in iter_post_order(packet):
        results[id(node)] = combine(node, [results[id(child)] for child in node.sub_packets])
    return results[id(packet)]
