"""Tests for the BITS encoder and packet builders."""

import pytest

from bitsdecoder.cli import main
from bitsdecoder.protocol.decoder import decode
from bitsdecoder.protocol.encoder import encode, encode_bits, literal, operator
from bitsdecoder.protocol.evaluator import depth, evaluate, version_sum
from bitsdecoder.protocol.packet import LengthType, Packet
from tests.vectors import ALL_HEX, nested_sums


class TestLiteralBuilder:
    """Test literal packet construction and encoding."""

    @pytest.mark.parametrize("value,bits", [
        (0, 11),
        (15, 11),
        (16, 16),
        (2021, 21),
        (2 ** 64, 6 + 5 * 17),
    ])
    def test_bits_consumed(self, value: int, bits: int) -> None:
        """bits_consumed is the header plus one 5-bit group per nibble."""
        assert literal(value).bits_consumed == bits

    def test_encode_known_literal(self) -> None:
        """Version 6 literal 2021 encodes to D2FE28."""
        assert encode(literal(2021, version=6)) == "D2FE28"

    def test_literal_groups(self) -> None:
        """Groups carry continuation bits 1, 1, 0."""
        bits = encode_bits(literal(2021, version=6))
        assert "".join(str(b) for b in bits) == "110100101111111000101"

    def test_negative_value(self) -> None:
        """Negative literals are rejected."""
        with pytest.raises(ValueError):
            literal(-1)

    def test_version_out_of_range(self) -> None:
        """Versions must fit in 3 bits."""
        with pytest.raises(ValueError, match="Version 8"):
            literal(1, version=8)


class TestOperatorBuilder:
    """Test operator packet construction and field limits."""

    def test_reencode_bit_length_example(self) -> None:
        """Rebuilding 38006F45291200 reproduces its significant nibbles."""
        packet = operator(6, [literal(10, version=6), literal(20, version=2)], version=1)
        assert packet.bits_consumed == 49
        assert encode(packet) == "38006F4529120"

    def test_reencode_count_example(self) -> None:
        """Rebuilding EE00D40C823060 reproduces it exactly."""
        children = [literal(1, version=2), literal(2, version=4), literal(3, version=1)]
        packet = operator(3, children, version=7, length_type=LengthType.SUB_PACKET_COUNT)
        assert packet.bits_consumed == 53
        assert encode(packet) == "EE00D40C823060"

    def test_literal_type_rejected(self) -> None:
        """Type ID 4 cannot be built as an operator."""
        with pytest.raises(ValueError):
            operator(4, [])

    def test_type_id_out_of_range(self) -> None:
        """Type IDs must fit in 3 bits."""
        with pytest.raises(ValueError):
            operator(8, [])

    def test_count_field_overflow(self) -> None:
        """More than 2047 sub-packets do not fit the 11-bit count."""
        children = [literal(0)] * 2048
        with pytest.raises(ValueError, match="SUB_PACKET_COUNT"):
            operator(0, children, length_type=LengthType.SUB_PACKET_COUNT)

    def test_total_bits_field_overflow(self) -> None:
        """More than 32767 sub-packet bits do not fit the 15-bit length."""
        children = [literal(0)] * 3000
        with pytest.raises(ValueError, match="TOTAL_BITS"):
            operator(0, children)


class TestRoundTrip:
    """decode(encode(p)) reproduces p."""

    @pytest.mark.parametrize("hex_string", ALL_HEX)
    def test_decoded_examples_reencode(self, hex_string: str) -> None:
        """Every example transmission survives re-encoding."""
        packet = decode(hex_string)
        assert decode(encode(packet)) == packet

    def test_builder_tree(self) -> None:
        """A mixed-framing tree round trips and evaluates."""
        packet = operator(7, [
            operator(0, [literal(1, 3), literal(3, 1)], version=5),
            operator(1, [literal(2), literal(2)], version=2,
                     length_type=LengthType.SUB_PACKET_COUNT),
        ], version=4)
        decoded = decode(encode(packet))
        assert decoded == packet
        assert evaluate(decoded) == 1

    def test_large_literal(self) -> None:
        """Literals wider than 64 bits round trip exactly."""
        packet = literal(2 ** 100 + 12345, version=3)
        assert decode(encode(packet)) == packet

    def test_deep_nesting(self) -> None:
        """100 nested sums round trip."""
        packet = nested_sums(100)
        decoded = decode(encode(packet))
        assert decoded.bits_consumed == packet.bits_consumed
        assert evaluate(decoded) == 42

    @pytest.mark.parametrize("length_type", list(LengthType))
    def test_very_deep_nesting(self, length_type: LengthType) -> None:
        """1000 nested sums decode, evaluate and re-encode."""
        packet = nested_sums(1000, length_type)
        hex_string = encode(packet)
        decoded = decode(hex_string)
        assert decoded.bits_consumed == packet.bits_consumed
        assert depth(decoded) == 1000
        assert version_sum(decoded) == 1001
        assert evaluate(decoded) == 42
        assert encode(decoded) == hex_string

    @pytest.mark.parametrize("length_type", list(LengthType))
    def test_very_deep_nesting_through_cli(self, length_type: LengthType,
                                           capsys: pytest.CaptureFixture) -> None:
        """The CLI reports results for a 1000-level transmission."""
        hex_string = encode(nested_sums(1000, length_type))
        assert main([hex_string, "--expr"]) == 0
        out = capsys.readouterr().out
        assert "version sum: 1001" in out
        assert "value: 42" in out
        assert "expression: 42" in out

    def test_unset_length_type_uses_bit_length(self) -> None:
        """Operators without a recorded framing use bit-length framing."""
        packet = Packet(version=0, type_id=0, sub_packets=[literal(1)])
        assert decode(encode(packet)).length_type is LengthType.TOTAL_BITS
