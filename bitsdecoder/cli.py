"""Command-line driver: decode a BITS transmission and report its results.

Usage:
    bits-decode D2FE28
    bits-decode --input transmission.txt --tree
    python -m bitsdecoder 9C0141080250320F1802104A08 --expr

Prints the version sum of every packet and the value of the root packet.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from bitsdecoder.errors import DecodeError
from bitsdecoder.protocol.config import DecoderConfig
from bitsdecoder.protocol.decoder import decode
from bitsdecoder.protocol.evaluator import depth, evaluate, packet_to_dict, render, version_sum


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bits-decode",
        description="Decode a hex-encoded BITS transmission and evaluate it.",
    )
    parser.add_argument(
        "hex",
        nargs="?",
        help="Hex-encoded transmission (e.g., D2FE28)",
    )
    parser.add_argument(
        "--input",
        help="Path to a file containing the hex transmission",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the decoded packet tree as JSON",
    )
    parser.add_argument(
        "--expr",
        action="store_true",
        help="Print the decoded tree as an infix expression",
    )
    parser.add_argument(
        "--lenient-framing",
        action="store_true",
        help="Accept sub-packets that overrun a declared bit length",
    )
    parser.add_argument(
        "--check-padding",
        action="store_true",
        help="Reject non-zero bits after the root packet",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum packet nesting depth",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.hex is None) == (args.input is None):
        parser.error("provide exactly one of a hex argument or --input")

    if args.input is not None:
        try:
            hex_string = Path(args.input).read_text().strip()
        except OSError as e:
            print(f"ERROR: cannot read input: {e}", file=sys.stderr)
            return 1
    else:
        hex_string = args.hex

    config = DecoderConfig(
        strict_framing=not args.lenient_framing,
        check_padding=args.check_padding,
        max_depth=args.max_depth,
    )

    try:
        packet = decode(hex_string, config)
        value = evaluate(packet)
    except DecodeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"ERROR: invalid input: {e}", file=sys.stderr)
        return 1

    print(f"version sum: {version_sum(packet)}")
    print(f"value: {value}")

    if args.expr:
        print(f"expression: {render(packet)}")
    if args.tree:
        try:
            tree_json = json.dumps(packet_to_dict(packet), indent=2)
        except RecursionError:
            print(f"ERROR: packet tree too deep for JSON output (depth {depth(packet)})",
                  file=sys.stderr)
            return 1
        print(tree_json)

    return 0


if __name__ == "__main__":
    sys.exit(main())
