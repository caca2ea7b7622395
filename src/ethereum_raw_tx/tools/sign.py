"""
Sign a transaction and print the bytes to broadcast.
"""

import argparse
import json
from typing import Any, TextIO

from ethereum_types.numeric import U64

from ..exceptions import EthereumException
from ..signing import sign_transaction
from ..transactions import transaction_hash
from ..utils.hexadecimal import bytes_to_hex
from .utils import get_stream_logger, load_private_key, load_transaction


def sign_arguments(subparsers: argparse._SubParsersAction) -> None:
    """
    Adds the arguments for the sign tool subparser.
    """
    sign_parser = subparsers.add_parser(
        "sign", help="Sign a transaction for broadcast."
    )

    sign_parser.add_argument(
        "--input.tx", dest="input_tx", type=str, default="stdin"
    )
    sign_parser.add_argument(
        "--input.key", dest="input_key", type=str, required=True
    )
    sign_parser.add_argument(
        "--state.chainid", dest="state_chainid", type=int, default=1
    )
    sign_parser.add_argument(
        "--output.file", dest="output_file", type=str, default="stdout"
    )


class Sign:
    """Signs a single transaction read from JSON"""

    def __init__(
        self, options: Any, out_file: TextIO, in_file: TextIO
    ) -> None:
        self.options = options
        self.out_file = out_file
        self.in_file = in_file
        self.logger = get_stream_logger("RAWTX")

    def read_transaction(self) -> Any:
        """
        Load the transaction from stdin or the file given on the command line.
        """
        if self.options.input_tx == "stdin":
            return load_transaction(self.in_file)
        with open(self.options.input_tx, "r") as f:
            return load_transaction(f)

    def run(self) -> int:
        """Sign the transaction and write the result"""
        try:
            tx = self.read_transaction()
            private_key = load_private_key(self.options.input_key)
            chain_id = U64(self.options.state_chainid)
            raw = sign_transaction(tx, private_key, chain_id)
        except OverflowError:
            self.logger.error(
                f"Chain id out of range: {self.options.state_chainid}"
            )
            return 1
        except OSError as e:
            self.logger.error(f"Could not read input: {e}")
            return 1
        except EthereumException as e:
            self.logger.error(f"Could not sign transaction: {e}")
            return 1

        result = {
            "raw": bytes_to_hex(raw),
            "hash": bytes_to_hex(transaction_hash(raw)),
        }
        self.logger.info(f"Signed transaction {result['hash']}")

        if self.options.output_file == "stdout":
            json.dump(result, self.out_file, indent=4)
            self.out_file.write("\n")
        else:
            try:
                with open(self.options.output_file, "w") as f:
                    json.dump(result, f, indent=4)
            except OSError as e:
                self.logger.error(f"Could not write output: {e}")
                return 1
        return 0
