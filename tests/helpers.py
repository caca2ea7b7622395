import json
import os
from typing import Any, Dict, List, Tuple

from ethereum_raw_tx.tools.utils import json_to_transaction
from ethereum_raw_tx.transactions import Transaction
from ethereum_raw_tx.utils.hexadecimal import hex_to_bytes, hex_to_bytes32

FIXTURES_PATH = os.path.join(os.path.dirname(__file__), "fixtures")


def load_json_fixture(name: str) -> Dict[str, Any]:
    with open(os.path.join(FIXTURES_PATH, name), "r") as fp:
        return json.load(fp)


def signing_fixtures() -> List[Tuple[str, Dict[str, Any]]]:
    return sorted(load_json_fixture("signed_transactions.json").items())


def fixture_transaction(fixture: Dict[str, Any]) -> Transaction:
    return json_to_transaction(fixture["transaction"])


def fixture_private_key(fixture: Dict[str, Any]) -> bytes:
    return hex_to_bytes32(fixture["privateKey"])


def fixture_signed(fixture: Dict[str, Any]) -> bytes:
    return hex_to_bytes(fixture["signed"])
