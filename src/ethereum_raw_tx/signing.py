"""
Signing
^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Produces the EIP-155 signature of a transaction and the final bytes that
are broadcast to a node.
"""
import logging
from dataclasses import dataclass

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import U64, U256

from .crypto.elliptic_curve import secp256k1_sign
from .crypto.hash import Hash32
from .fork_types import ChainId
from .transactions import Transaction, encode_signed, signing_hash_155

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Signature:
    """
    Signature components in the form they are serialized.
    """

    v: U256
    r: Bytes
    s: Bytes


def strip_leading_zeros(component: Bytes) -> Bytes:
    """
    Return the minimal big endian representation of a signature component.

    RLP forbids leading zero bytes in integers. A component whose value is
    zero becomes the empty byte string.

    Parameters
    ----------
    component :
        Big endian bytes, usually 32 of them.

    Returns
    -------
    minimal : `ethereum_types.bytes.Bytes`
        `component` without its leading zero bytes.
    """
    return bytes(component).lstrip(b"\x00")


def compute_v(recovery_id: U256, chain_id: ChainId) -> U256:
    """
    Combine a recovery id with a chain id, as described in EIP-155.

    A `chain_id` of zero is accepted and gives `recovery_id + 35`. Chains
    without replay protection expect `27` or `28` instead, so that value is
    only useful where the receiving node is known to accept it.
    """
    return recovery_id + U256(chain_id) * U256(2) + U256(35)


def sign_message_hash(
    msg_hash: Hash32, private_key: Bytes, chain_id: ChainId
) -> Signature:
    """
    Sign `msg_hash` and normalize the result for serialization.

    Parameters
    ----------
    msg_hash :
        The 32 byte digest to sign.
    private_key :
        The 32 byte secret key of the signer.
    chain_id :
        The id of the chain the signature will be valid on.

    Returns
    -------
    signature : `Signature`
        `v` with the chain id folded in, `r` and `s` without leading zeros.
    """
    secret = bytearray(private_key)
    try:
        r, s, recovery_id = secp256k1_sign(msg_hash, secret)
    finally:
        # Only this buffer is wiped; the immutable copies made while
        # validating and signing are left to the garbage collector.
        secret[:] = bytes(len(secret))

    v = compute_v(recovery_id, chain_id)
    logger.debug("signed with recovery id %d, v=%d", int(recovery_id), int(v))
    return Signature(v=v, r=strip_leading_zeros(r), s=strip_leading_zeros(s))


def sign_transaction(
    tx: Transaction, private_key: Bytes, chain_id: ChainId
) -> Bytes:
    """
    Sign `tx` for the chain `chain_id` and return the signed encoding.

    Signing is deterministic: nonces are derived from the key and the
    message, so signing the same transaction twice gives the same bytes.

    Parameters
    ----------
    tx :
        Transaction to sign.
    private_key :
        The 32 byte secret key of the signer.
    chain_id :
        The id of the chain the transaction is meant for. Any value that
        fits in 64 bits is accepted.

    Returns
    -------
    signed : `ethereum_types.bytes.Bytes`
        RLP encoded signed transaction, ready to be broadcast.
    """
    chain_id = U64(chain_id)
    msg_hash = signing_hash_155(tx, chain_id)
    signature = sign_message_hash(msg_hash, private_key, chain_id)
    return encode_signed(tx, signature.v, signature.r, signature.s)
