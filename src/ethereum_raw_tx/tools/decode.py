"""
Decode a signed transaction and recover its sender.
"""

import argparse
import json
from typing import Any, Dict, TextIO

from ..exceptions import EthereumException
from ..transactions import (
    SignedTransaction,
    chain_id_from_v,
    decode_signed,
    recover_sender,
    transaction_hash,
)
from ..utils.hexadecimal import bytes_to_hex, hex_to_bytes
from .utils import get_stream_logger


def decode_arguments(subparsers: argparse._SubParsersAction) -> None:
    """
    Adds the arguments for the decode tool subparser.
    """
    decode_parser = subparsers.add_parser(
        "decode", help="Decode a signed transaction."
    )

    decode_parser.add_argument(
        "--input.raw", dest="input_raw", type=str, default="stdin"
    )


def signed_transaction_to_json(signed: SignedTransaction) -> Dict[str, Any]:
    """
    Convert the fields of `signed` into their JSON-RPC spelling.
    """
    return {
        "nonce": hex(signed.nonce),
        "gasPrice": hex(signed.gas_price),
        "gas": hex(signed.gas),
        "to": bytes_to_hex(signed.to) if len(signed.to) else None,
        "value": hex(signed.value),
        "data": bytes_to_hex(signed.data),
        "v": hex(signed.v),
        "r": hex(signed.r),
        "s": hex(signed.s),
    }


class Decode:
    """Decodes a single raw transaction"""

    def __init__(
        self, options: Any, out_file: TextIO, in_file: TextIO
    ) -> None:
        self.options = options
        self.out_file = out_file
        self.in_file = in_file
        self.logger = get_stream_logger("RAWTX")

    def run(self) -> int:
        """Decode the transaction and write its fields"""
        if self.options.input_raw == "stdin":
            raw_hex = self.in_file.read().strip()
        else:
            raw_hex = self.options.input_raw

        try:
            raw = hex_to_bytes(raw_hex)
        except ValueError:
            self.logger.error("Input is not a hex string")
            return 1

        try:
            signed = decode_signed(raw)
            chain_id = chain_id_from_v(signed.v)
            sender = recover_sender(signed)
        except EthereumException as e:
            self.logger.error(f"Could not decode transaction: {e}")
            return 1

        result = signed_transaction_to_json(signed)
        result["chainId"] = None if chain_id is None else int(chain_id)
        result["sender"] = bytes_to_hex(sender)
        result["hash"] = bytes_to_hex(transaction_hash(raw))

        json.dump(result, self.out_file, indent=4)
        self.out_file.write("\n")
        return 0
