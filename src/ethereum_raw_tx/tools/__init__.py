"""
Command line tools for signing and inspecting raw transactions.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence, Text, TextIO

from .. import __version__
from .decode import Decode, decode_arguments
from .sign import Sign, sign_arguments
from .utils import get_stream_logger

DESCRIPTION = """
Build and inspect legacy Ethereum transactions without a node.

You can use this to run the following tools:
    1. sign: Sign a JSON transaction with EIP-155 replay protection.
    2. decode: Decode a signed transaction and recover its sender.
"""


def create_parser() -> argparse.ArgumentParser:
    """
    Create a command-line argument parser for the tool.
    """
    new_parser = argparse.ArgumentParser(
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    new_parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show the version of the tool.",
    )
    new_parser.add_argument(
        "--verbosity",
        dest="verbosity",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level of the tool.",
    )

    subparsers = new_parser.add_subparsers(dest="raw_tx_tool")

    sign_arguments(subparsers)
    decode_arguments(subparsers)

    return new_parser


def main(
    args: Optional[Sequence[Text]] = None,
    out_file: Optional[TextIO] = None,
    in_file: Optional[TextIO] = None,
) -> int:
    """Run the tools based on the given options."""
    parser = create_parser()

    options = parser.parse_args(args)

    if out_file is None:
        out_file = sys.stdout

    if in_file is None:
        in_file = sys.stdin

    logger = get_stream_logger("RAWTX")
    logger.setLevel(options.verbosity)
    if options.verbosity == "DEBUG":
        get_stream_logger("ethereum_raw_tx").setLevel(logging.DEBUG)

    if options.raw_tx_tool == "sign":
        sign_tool = Sign(options, out_file, in_file)
        return sign_tool.run()
    elif options.raw_tx_tool == "decode":
        decode_tool = Decode(options, out_file, in_file)
        return decode_tool.run()
    else:
        parser.print_help(file=out_file)
        return 0
