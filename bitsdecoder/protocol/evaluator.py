"""Evaluation and inspection of decoded packet trees.

Operator semantics by type ID:
    0 sum       -- sum of sub-packet values (empty -> 0)
    1 product   -- product of sub-packet values (empty -> 1)
    2 minimum   -- smallest sub-packet value
    3 maximum   -- largest sub-packet value
    4 literal   -- the literal value
    5 gt        -- 1 if first > second else 0 (exactly two sub-packets)
    6 lt        -- 1 if first < second else 0 (exactly two sub-packets)
    7 eq        -- 1 if first == second else 0 (exactly two sub-packets)

Values are Python ints, so products never overflow. Every traversal is a
bottom-up fold over the tree, so arbitrarily deep trees are handled.
"""

import math
from typing import Any, List

from bitsdecoder.errors import ArityError
from bitsdecoder.protocol.packet import Packet, PacketType, fold

_INFIX_SYMBOLS = {
    PacketType.SUM: "+",
    PacketType.PRODUCT: "*",
    PacketType.GREATER_THAN: ">",
    PacketType.LESS_THAN: "<",
    PacketType.EQUAL_TO: "==",
}


def version_sum(packet: Packet) -> int:
    """Sum of the version fields of packet and every packet nested in it."""
    return fold(packet, lambda node, sums: node.version + sum(sums))


def _apply(node: Packet, values: List[int]) -> int:
    """Value of one packet given the values of its sub-packets."""
    packet_type = node.packet_type

    if packet_type is PacketType.LITERAL:
        return node.literal_value

    if packet_type.is_comparison:
        if len(values) != 2:
            raise ArityError(
                f"'{packet_type.label}' packet needs exactly 2 sub-packets, got {len(values)}"
            )
        a, b = values
        if packet_type is PacketType.GREATER_THAN:
            return int(a > b)
        elif packet_type is PacketType.LESS_THAN:
            return int(a < b)
        return int(a == b)

    if packet_type is PacketType.SUM:
        return sum(values)
    elif packet_type is PacketType.PRODUCT:
        return math.prod(values)

    # Minimum / maximum
    if not values:
        raise ArityError(f"'{packet_type.label}' packet has no sub-packets")
    return min(values) if packet_type is PacketType.MINIMUM else max(values)


def evaluate(packet: Packet) -> int:
    """Compute the value of the expression rooted at packet.

    Raises:
        ArityError: If min/max has no sub-packets, or a comparison does not
            have exactly two
    """
    return fold(packet, _apply)


def _render_node(node: Packet, texts: List[str]) -> str:
    packet_type = node.packet_type

    if packet_type is PacketType.LITERAL:
        return str(node.literal_value)

    if packet_type in (PacketType.MINIMUM, PacketType.MAXIMUM):
        return f"{packet_type.label}({', '.join(texts)})"

    if not texts:
        return f"{packet_type.label}()"

    parts = []
    for child, text in zip(node.sub_packets, texts):
        child_type = child.packet_type
        infix = child_type.is_comparison or child_type in (PacketType.SUM, PacketType.PRODUCT)
        if infix and len(child.sub_packets) > 1:
            text = f"({text})"
        parts.append(text)
    return f" {_INFIX_SYMBOLS[packet_type]} ".join(parts)


def render(packet: Packet) -> str:
    """Render the tree as an infix expression, e.g. ``(1 + 3) == (2 * 2)``."""
    return fold(packet, _render_node)


def count_packets(packet: Packet) -> int:
    """Number of packets in the tree, root included."""
    return fold(packet, lambda node, counts: 1 + sum(counts))


def depth(packet: Packet) -> int:
    """Nesting depth of the tree; a lone literal has depth 0."""
    return fold(packet, lambda node, depths: 1 + max(depths) if depths else 0)


def _node_to_dict(node: Packet, children: List[dict[str, Any]]) -> dict[str, Any]:
    j: dict[str, Any] = {
        "version": node.version,
        "type_id": node.type_id,
        "op": node.packet_type.label,
        "bits_consumed": node.bits_consumed,
    }
    if node.is_literal:
        # Literals can exceed 64 bits; keep them exact as strings
        j["value"] = str(node.literal_value)
    else:
        j["length_type"] = node.length_type.value if node.length_type is not None else None
        j["sub_packets"] = children
    return j


def packet_to_dict(packet: Packet) -> dict[str, Any]:
    """Convert a packet tree to a JSON-serializable dictionary."""
    return fold(packet, _node_to_dict)
