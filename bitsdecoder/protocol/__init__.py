"""Protocol - BITS packet model, decoder, evaluator and encoder."""

from bitsdecoder.protocol.config import DEFAULT_CONFIG, DecoderConfig
from bitsdecoder.protocol.decoder import decode, decode_packet
from bitsdecoder.protocol.encoder import encode, encode_bits, literal, operator
from bitsdecoder.protocol.evaluator import (
    count_packets,
    depth,
    evaluate,
    packet_to_dict,
    render,
    version_sum,
)
from bitsdecoder.protocol.packet import (
    HEADER_BITS,
    SUB_PACKET_COUNT_BITS,
    TOTAL_LENGTH_BITS,
    LengthType,
    Packet,
    PacketType,
    fold,
    iter_post_order,
)

__all__ = [
    # Model
    "Packet",
    "PacketType",
    "LengthType",
    "HEADER_BITS",
    "TOTAL_LENGTH_BITS",
    "SUB_PACKET_COUNT_BITS",
    "iter_post_order",
    "fold",
    # Config
    "DecoderConfig",
    "DEFAULT_CONFIG",
    # Decoding
    "decode",
    "decode_packet",
    # Evaluation
    "version_sum",
    "evaluate",
    "render",
    "count_packets",
    "depth",
    "packet_to_dict",
    # Encoding
    "encode",
    "encode_bits",
    "literal",
    "operator",
]
