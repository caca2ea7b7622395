"""
Transactions are atomic units of work created externally to Ethereum and
submitted to be executed. This module defines the legacy transaction, the
two ways it is serialized (for hashing and once signed), the signing hash
that binds a signature to a chain, and the reverse path from signed bytes
back to a sender.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from ethereum_rlp import rlp
from ethereum_rlp.exceptions import DecodingError
from ethereum_types.bytes import Bytes, Bytes0
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U64, U256, Uint

from .crypto.elliptic_curve import SECP256K1N, secp256k1_recover
from .crypto.hash import Hash32, keccak256
from .exceptions import (
    InvalidSignatureError,
    InvalidTransaction,
    RLPEncodingError,
)
from .fork_types import Address, ChainId
from .rlp import RLPList, encode_address, encode_bytes, encode_uint
from .utils.address import public_key_to_address

logger = logging.getLogger(__name__)


@slotted_freezable
@dataclass
class Transaction:
    """
    An unsigned legacy transaction.
    """

    nonce: U256
    """
    A scalar value equal to the number of transactions sent by the sender.
    """

    gas_price: U256
    """
    The price of gas for this transaction.
    """

    gas: U256
    """
    The maximum amount of gas that can be used by this transaction.
    """

    to: Union[Bytes0, Address]
    """
    The address of the recipient. If empty, the transaction is a contract
    creation.
    """

    value: U256
    """
    The amount of ether (in wei) to send with this transaction.
    """

    data: Bytes
    """
    Call data, or the init code of the contract being created.
    """


@slotted_freezable
@dataclass
class SignedTransaction:
    """
    A legacy transaction together with its signature, as found on the wire.
    """

    nonce: U256
    gas_price: U256
    gas: U256
    to: Union[Bytes0, Address]
    value: U256
    data: Bytes
    v: U256
    r: U256
    s: U256


def encode_fields(stream: RLPList, tx: Transaction) -> RLPList:
    """
    Append the six transaction fields to `stream`, in consensus order.

    The order is part of the format: encoding the same fields in any other
    order produces a different (and non-standard) transaction hash.
    """
    stream.append_raw(encode_uint(tx.nonce))
    stream.append_raw(encode_uint(tx.gas_price))
    stream.append_raw(encode_uint(tx.gas))
    stream.append_raw(encode_address(tx.to))
    stream.append_raw(encode_uint(tx.value))
    stream.append_raw(encode_bytes(tx.data))
    return stream


def encode_unsigned_for_hashing(tx: Transaction, chain_id: ChainId) -> Bytes:
    """
    Serialize `tx` in the form that is hashed and signed under EIP-155.

    The six transaction fields are followed by `chain_id`, `0` and `0`.

    Parameters
    ----------
    tx :
        Transaction of interest.
    chain_id :
        The id of the chain the signature will be valid on.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        RLP encoding of the nine item list.
    """
    stream = encode_fields(RLPList(), tx)
    stream.append_raw(encode_uint(U64(chain_id)))
    stream.append_raw(encode_uint(Uint(0)))
    stream.append_raw(encode_uint(Uint(0)))
    return stream.finish()


def encode_signed(tx: Transaction, v: U256, r: Bytes, s: Bytes) -> Bytes:
    """
    Serialize `tx` together with its signature, ready for broadcast.

    Parameters
    ----------
    tx :
        Transaction that was signed.
    v :
        Recovery id combined with the chain id.
    r :
        The `r` component, big endian, without leading zero bytes.
    s :
        The `s` component, big endian, without leading zero bytes.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        RLP encoding of the signed transaction.
    """
    for name, component in (("r", r), ("s", s)):
        if component[:1] == b"\x00":
            raise RLPEncodingError(
                f"signature component {name} has a leading zero byte"
            )

    stream = encode_fields(RLPList(), tx)
    stream.append_raw(encode_uint(v))
    stream.append_raw(encode_bytes(r))
    stream.append_raw(encode_bytes(s))
    return stream.finish()


def signing_hash_155(tx: Transaction, chain_id: ChainId) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP 155 signature.

    Parameters
    ----------
    tx :
        Transaction of interest.
    chain_id :
        The id of the current chain.

    Returns
    -------
    hash : `ethereum_raw_tx.crypto.hash.Hash32`
        Hash of the transaction.
    """
    signing_hash = keccak256(encode_unsigned_for_hashing(tx, chain_id))
    logger.debug(
        "signing hash for chain %d is %s", int(chain_id), signing_hash.hex()
    )
    return signing_hash


def signing_hash_pre155(tx: Transaction) -> Hash32:
    """
    Compute the hash of a transaction used in a legacy (pre EIP 155)
    signature. Only needed to recover the sender of old transactions.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `ethereum_raw_tx.crypto.hash.Hash32`
        Hash of the transaction.
    """
    return keccak256(encode_fields(RLPList(), tx).finish())


def unsigned_transaction(signed: SignedTransaction) -> Transaction:
    """
    Strip the signature from `signed`.
    """
    return Transaction(
        nonce=signed.nonce,
        gas_price=signed.gas_price,
        gas=signed.gas,
        to=signed.to,
        value=signed.value,
        data=signed.data,
    )


def decode_signed(raw: Bytes) -> SignedTransaction:
    """
    Parse the RLP encoding of a signed legacy transaction.

    Parameters
    ----------
    raw :
        Bytes as produced by `encode_signed`.

    Returns
    -------
    signed : `SignedTransaction`
        The decoded fields.
    """
    try:
        return rlp.decode_to(SignedTransaction, raw)
    except DecodingError as e:
        raise InvalidTransaction("not a signed legacy transaction") from e


def chain_id_from_v(v: U256) -> Optional[ChainId]:
    """
    Extract the chain id folded into `v`.

    Returns `None` for signatures made without replay protection
    (`v` of 27 or 28).
    """
    if v == 27 or v == 28:
        return None
    if v < U256(35):
        raise InvalidSignatureError("bad v")
    chain_id = (int(v) - 35) // 2
    if chain_id > int(U64.MAX_VALUE):
        raise InvalidSignatureError("bad v")
    return U64(chain_id)


def recover_sender(signed: SignedTransaction) -> Address:
    """
    Extracts the sender address from a transaction.

    The v, r, and s values are the three parts that make up the signature
    of a transaction. In order to recover the sender of a transaction the two
    components needed are the signature (``v``, ``r``, and ``s``) and the
    signing hash of the transaction. The sender's public key can be obtained
    with these two values and therefore the sender address can be retrieved.

    Parameters
    ----------
    signed :
        Transaction of interest.

    Returns
    -------
    sender : `ethereum_raw_tx.fork_types.Address`
        The address of the account that signed the transaction.
    """
    v, r, s = signed.v, signed.r, signed.s
    if U256(0) >= r or r >= SECP256K1N:
        raise InvalidSignatureError("bad r")
    if U256(0) >= s or s > SECP256K1N // U256(2):
        raise InvalidSignatureError("bad s")

    tx = unsigned_transaction(signed)
    chain_id = chain_id_from_v(v)
    if chain_id is None:
        public_key = secp256k1_recover(
            r, s, v - U256(27), signing_hash_pre155(tx)
        )
    else:
        chain_id_x2 = U256(chain_id) * U256(2)
        public_key = secp256k1_recover(
            r, s, v - U256(35) - chain_id_x2, signing_hash_155(tx, chain_id)
        )
    return public_key_to_address(public_key)


def transaction_hash(raw: Bytes) -> Hash32:
    """
    Compute the hash nodes use to identify the signed transaction `raw`.
    """
    return keccak256(raw)
