"""Tests for the packet model and tree traversal helpers."""

from bitsdecoder.protocol.encoder import literal, operator
from bitsdecoder.protocol.packet import (
    LengthType,
    PacketType,
    fold,
    iter_post_order,
)
from tests.vectors import nested_sums


class TestPacketType:
    """Test type ID metadata."""

    def test_comparison_types(self) -> None:
        """Only gt, lt and eq are comparisons."""
        comparisons = {t for t in PacketType if t.is_comparison}
        assert comparisons == {PacketType.GREATER_THAN, PacketType.LESS_THAN, PacketType.EQUAL_TO}

    def test_labels(self) -> None:
        """Every type ID has a distinct label."""
        labels = [PacketType(i).label for i in range(8)]
        assert labels == ["sum", "prod", "min", "max", "lit", "gt", "lt", "eq"]

    def test_length_field_widths(self) -> None:
        """Bit-length framing uses 15 bits, count framing 11."""
        assert LengthType.TOTAL_BITS.field_bits == 15
        assert LengthType.SUB_PACKET_COUNT.field_bits == 11


class TestTraversal:
    """Test iter_post_order and fold."""

    def test_post_order(self) -> None:
        """Children are yielded before their parent, in stream order."""
        a, b, c = literal(1), literal(2), literal(3)
        inner = operator(0, [b, c])
        root = operator(1, [a, inner])
        assert list(iter_post_order(root)) == [a, b, c, inner, root]

    def test_fold_receives_child_results_in_order(self) -> None:
        """fold passes sub-packet results in stream order."""
        root = operator(0, [literal(1), operator(0, [literal(2), literal(3)])])

        def combine(node, children):
            if node.is_literal:
                return [node.literal_value]
            return [v for child in children for v in child]

        assert fold(root, combine) == [1, 2, 3]

    def test_fold_shared_child(self) -> None:
        """A sub-packet object appearing twice is folded consistently."""
        leaf = literal(5)
        root = operator(0, [leaf, leaf])
        assert fold(root, lambda node, xs: node.literal_value if node.is_literal else sum(xs)) == 10

    def test_fold_deep_tree(self) -> None:
        """fold does not use the call stack per nesting level."""
        packet = nested_sums(5000)
        assert fold(packet, lambda node, depths: 1 + max(depths) if depths else 0) == 5000
