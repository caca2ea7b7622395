from typing import Any, Dict

import pytest
from ethereum_rlp import rlp
from ethereum_types.bytes import Bytes0, Bytes20
from ethereum_types.numeric import U64, U256

from ethereum_raw_tx.crypto.elliptic_curve import SECP256K1N, secp256k1_sign
from ethereum_raw_tx.crypto.hash import keccak256
from ethereum_raw_tx.exceptions import (
    InvalidSignatureError,
    InvalidTransaction,
    RLPEncodingError,
)
from ethereum_raw_tx.transactions import (
    SignedTransaction,
    Transaction,
    chain_id_from_v,
    decode_signed,
    encode_signed,
    encode_unsigned_for_hashing,
    recover_sender,
    signing_hash_155,
    signing_hash_pre155,
    transaction_hash,
    unsigned_transaction,
)
from ethereum_raw_tx.utils.address import private_key_to_address
from ethereum_raw_tx.utils.hexadecimal import hex_to_bytes

from .helpers import (
    fixture_private_key,
    fixture_signed,
    fixture_transaction,
    load_json_fixture,
    signing_fixtures,
)

EIP155_EXAMPLE = load_json_fixture("signed_transactions.json")[
    "eip155_example"
]

CREATION = Transaction(
    nonce=U256(0),
    gas_price=U256(1),
    gas=U256(0x5208),
    to=Bytes0(b""),
    value=U256(0),
    data=b"\x60\x00",
)


def test_eip155_signing_data() -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    assert encode_unsigned_for_hashing(tx, U64(1)) == hex_to_bytes(
        EIP155_EXAMPLE["signingData"]
    )


def test_eip155_signing_hash() -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    assert signing_hash_155(tx, U64(1)) == hex_to_bytes(
        EIP155_EXAMPLE["signingHash"]
    )


@pytest.mark.parametrize(
    "chain_id, header, chain_triple",
    [
        (0, "ec", "808080"),
        (1, "ec", "018080"),
        (3, "ec", "038080"),
        (137, "ed", "81898080"),
    ],
)
def test_unsigned_encoding_for_chain(
    chain_id: int, header: str, chain_triple: str
) -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    expected = bytes.fromhex(
        header
        + "098504a817c800825208943535353535353535353535353535353535353535"
        + "880de0b6b3a764000080"
        + chain_triple
    )
    assert encode_unsigned_for_hashing(tx, U64(chain_id)) == expected
    assert signing_hash_155(tx, U64(chain_id)) == keccak256(expected)


def test_unsigned_encoding_is_deterministic() -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    assert encode_unsigned_for_hashing(
        tx, U64(3)
    ) == encode_unsigned_for_hashing(tx, U64(3))


def test_unsigned_encoding_matches_reference_encoder() -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    expected = rlp.encode(
        (
            tx.nonce,
            tx.gas_price,
            tx.gas,
            tx.to,
            tx.value,
            tx.data,
            U64(1337),
            U256(0),
            U256(0),
        )
    )
    assert encode_unsigned_for_hashing(tx, U64(1337)) == expected


def test_contract_creation_encodes_empty_recipient() -> None:
    assert encode_unsigned_for_hashing(CREATION, U64(1)) == hex_to_bytes(
        "0xcd80018252088080826000018080"
    )


def test_zero_address_recipient_is_not_contract_creation() -> None:
    tx = Transaction(
        nonce=CREATION.nonce,
        gas_price=CREATION.gas_price,
        gas=CREATION.gas,
        to=Bytes20(b"\x00" * 20),
        value=CREATION.value,
        data=CREATION.data,
    )
    assert encode_unsigned_for_hashing(
        tx, U64(1)
    ) != encode_unsigned_for_hashing(CREATION, U64(1))


def test_chain_id_changes_signing_hash() -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    assert signing_hash_155(tx, U64(1)) != signing_hash_155(tx, U64(3))


def test_pre155_hash_omits_chain_triple() -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    expected = keccak256(
        hex_to_bytes(
            "0xe9098504a817c800825208943535353535353535353535353535353535353535"
            "880de0b6b3a764000080"
        )
    )
    assert signing_hash_pre155(tx) == expected


def test_transaction_is_immutable() -> None:
    with pytest.raises(AttributeError):
        CREATION.nonce = U256(1)  # type: ignore[misc]


def test_encode_signed_matches_eip155_example() -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    r = U256(int(EIP155_EXAMPLE["r"])).to_be_bytes()
    s = U256(int(EIP155_EXAMPLE["s"])).to_be_bytes()
    assert encode_signed(tx, U256(EIP155_EXAMPLE["v"]), r, s) == (
        fixture_signed(EIP155_EXAMPLE)
    )


def test_encode_signed_rejects_padded_component() -> None:
    with pytest.raises(RLPEncodingError):
        encode_signed(CREATION, U256(37), b"\x00\x01", b"\x01")
    with pytest.raises(RLPEncodingError):
        encode_signed(CREATION, U256(37), b"\x01", b"\x00" * 32)


@pytest.mark.parametrize(
    "name, fixture",
    signing_fixtures(),
    ids=[name for name, _ in signing_fixtures()],
)
def test_decode_signed_fixture(name: str, fixture: Dict[str, Any]) -> None:
    signed = decode_signed(fixture_signed(fixture))

    assert unsigned_transaction(signed) == fixture_transaction(fixture)
    assert signed.v == fixture["v"]
    assert signed.r == int(fixture["r"])
    assert signed.s == int(fixture["s"])
    assert chain_id_from_v(signed.v) == fixture["chainId"]
    assert recover_sender(signed) == private_key_to_address(
        fixture_private_key(fixture)
    )


@pytest.mark.parametrize(
    "raw",
    [
        "0x",
        "0x80",
        "0xc0",
        "0xc3010203",
        "0x02f86c",
    ],
)
def test_decode_signed_rejects_garbage(raw: str) -> None:
    with pytest.raises(InvalidTransaction):
        decode_signed(hex_to_bytes(raw))


def _signed_example(**changes: Any) -> SignedTransaction:
    signed = decode_signed(fixture_signed(EIP155_EXAMPLE))
    fields = {
        "nonce": signed.nonce,
        "gas_price": signed.gas_price,
        "gas": signed.gas,
        "to": signed.to,
        "value": signed.value,
        "data": signed.data,
        "v": signed.v,
        "r": signed.r,
        "s": signed.s,
    }
    fields.update(changes)
    return SignedTransaction(**fields)


@pytest.mark.parametrize(
    "changes",
    [
        {"r": U256(0)},
        {"r": SECP256K1N},
        {"s": U256(0)},
        {"s": SECP256K1N // U256(2) + U256(1)},
        {"v": U256(29)},
        {"v": U256(0)},
    ],
)
def test_recover_sender_rejects_bad_signature(changes: Dict[str, U256]) -> None:
    with pytest.raises(InvalidSignatureError):
        recover_sender(_signed_example(**changes))


def test_recover_sender_with_wrong_chain_id_gives_other_sender() -> None:
    # v = 39 claims chain id 2 with the same recovery id
    signed = _signed_example(v=U256(39))
    expected = private_key_to_address(fixture_private_key(EIP155_EXAMPLE))
    assert recover_sender(signed) != expected


def test_recover_sender_of_unprotected_signature() -> None:
    tx = fixture_transaction(EIP155_EXAMPLE)
    secret_key = fixture_private_key(EIP155_EXAMPLE)
    r, s, recovery_id = secp256k1_sign(signing_hash_pre155(tx), secret_key)
    signed = SignedTransaction(
        nonce=tx.nonce,
        gas_price=tx.gas_price,
        gas=tx.gas,
        to=tx.to,
        value=tx.value,
        data=tx.data,
        v=U256(27) + recovery_id,
        r=U256.from_be_bytes(r),
        s=U256.from_be_bytes(s),
    )
    assert chain_id_from_v(signed.v) is None
    assert recover_sender(signed) == private_key_to_address(secret_key)


@pytest.mark.parametrize(
    "v, chain_id",
    [
        (U256(35), U64(0)),
        (U256(36), U64(0)),
        (U256(37), U64(1)),
        (U256(42), U64(3)),
        (U256(2 * 11155111 + 36), U64(11155111)),
    ],
)
def test_chain_id_from_v(v: U256, chain_id: U64) -> None:
    assert chain_id_from_v(v) == chain_id


def test_transaction_hash_is_keccak_of_signed_bytes() -> None:
    raw = fixture_signed(EIP155_EXAMPLE)
    assert transaction_hash(raw) == keccak256(raw)
