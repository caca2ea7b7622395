"""
Utilities for the command line tools
"""

import json
import logging
from typing import Any, Callable, Dict, TextIO, TypeVar, Union

from ethereum_types.bytes import Bytes0
from ethereum_types.numeric import U64, U256

from ..exceptions import EthereumException
from ..fork_types import Address, PrivateKey
from ..transactions import Transaction
from ..utils.hexadecimal import hex_to_address, hex_to_bytes, hex_to_bytes32

W = TypeVar("W", U64, U256)


class FatalException(EthereumException):
    """Exception that causes the tool to stop"""

    pass


def parse_hex_or_int(value: Union[str, int], to_type: Callable[[int], W]) -> W:
    """Read an unsigned integer from a hex string, a decimal string or int"""
    if isinstance(value, str) and value.startswith("0x"):
        return to_type(int(value[2:] or "0", 16))
    else:
        return to_type(int(value))


def get_stream_logger(name: str) -> Any:
    """
    Get a logger that writes to stderr.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level=logging.INFO)
        stream_handler = logging.StreamHandler()
        formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    return logger


def json_to_transaction(data: Dict[str, Any]) -> Transaction:
    """
    Build a transaction from its JSON representation.

    Field names follow the JSON-RPC spelling (`gasPrice`). `gasLimit` is
    accepted for `gas` and `input` for `data`. A missing or `null` `to`
    makes a contract creation.
    """
    try:
        to = data.get("to")
        recipient: Union[Bytes0, Address]
        if to is None:
            recipient = Bytes0(b"")
        else:
            recipient = hex_to_address(to)

        return Transaction(
            nonce=parse_hex_or_int(data["nonce"], U256),
            gas_price=parse_hex_or_int(data["gasPrice"], U256),
            gas=parse_hex_or_int(data.get("gas", data.get("gasLimit")), U256),
            to=recipient,
            value=parse_hex_or_int(data.get("value", 0), U256),
            data=hex_to_bytes(data.get("data", data.get("input", ""))),
        )
    except KeyError as e:
        raise FatalException(f"missing transaction field {e}") from e
    except (AttributeError, TypeError, ValueError, OverflowError) as e:
        raise FatalException(f"malformed transaction: {e}") from e


def load_transaction(in_file: TextIO) -> Transaction:
    """
    Read a JSON encoded transaction from `in_file`.
    """
    try:
        data = json.load(in_file)
    except json.JSONDecodeError as e:
        raise FatalException(f"transaction is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FatalException("transaction must be a JSON object")
    return json_to_transaction(data)


def load_private_key(path: str) -> PrivateKey:
    """
    Read a hex encoded private key from the file at `path`.
    """
    with open(path, "r") as f:
        contents = f.read().strip()
    try:
        return hex_to_bytes32(contents)
    except ValueError as e:
        raise FatalException(f"malformed private key in {path}") from e
