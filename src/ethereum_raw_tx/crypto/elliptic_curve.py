"""
Elliptic Curves
^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Signing and public key recovery over the secp256k1 curve. The curve
arithmetic itself is delegated to libsecp256k1 through `coincurve`, which
derives signing nonces deterministically as described in `RFC 6979`_, so
the same key and message always produce the same signature.

.. _RFC 6979: https://www.rfc-editor.org/rfc/rfc6979
"""

from typing import Tuple

import coincurve
from ethereum_types.bytes import Bytes, Bytes32, Bytes64
from ethereum_types.numeric import U256

from ..exceptions import InvalidKey, InvalidMessage, InvalidSignatureError
from .hash import Hash32

SECP256K1B = U256(7)
SECP256K1P = U256(
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
)
SECP256K1N = U256(
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
)


def validate_secret_key(secret_key: Bytes) -> None:
    """
    Ensure `secret_key` is a scalar in `[1, SECP256K1N - 1]`.

    Parameters
    ----------
    secret_key :
        Big endian private key, exactly 32 bytes long.
    """
    if len(secret_key) != 32:
        raise InvalidKey(f"expected 32 bytes but got {len(secret_key)}")
    scalar = int.from_bytes(secret_key, "big")
    if scalar == 0:
        raise InvalidKey("private key is zero")
    if scalar >= int(SECP256K1N):
        raise InvalidKey("private key is not less than the curve order")


def secp256k1_sign(
    msg_hash: Hash32, secret_key: Bytes
) -> Tuple[Bytes32, Bytes32, U256]:
    """
    Computes a recoverable signature of a message hash.

    Parameters
    ----------
    msg_hash :
        Hash of the message being signed. Must be exactly 32 bytes.
    secret_key :
        Private key of the signer.

    Returns
    -------
    signature : `Tuple[Bytes32, Bytes32, U256]`
        The `r` and `s` components, each as 32 big endian bytes, followed by
        the recovery id (`0` or `1`).
    """
    if len(msg_hash) != 32:
        raise InvalidMessage(
            f"expected a 32 byte digest but got {len(msg_hash)} bytes"
        )
    validate_secret_key(secret_key)

    private_key = coincurve.PrivateKey(bytes(secret_key))
    try:
        signature = private_key.sign_recoverable(bytes(msg_hash), hasher=None)
    finally:
        del private_key

    return (
        Bytes32(signature[0:32]),
        Bytes32(signature[32:64]),
        U256(signature[64]),
    )


def secp256k1_recover(r: U256, s: U256, v: U256, msg_hash: Hash32) -> Bytes64:
    """
    Recovers the public key from a given signature.

    Parameters
    ----------
    r :
        The `r` component of the signature.
    s :
        The `s` component of the signature.
    v :
        The recovery id (`0` or `1`), not the EIP-155 `v`.
    msg_hash :
        Hash of the message being recovered.

    Returns
    -------
    public_key : `ethereum_types.bytes.Bytes64`
        Recovered public key, without the `0x04` prefix.
    """
    is_square = pow(
        pow(r, U256(3), SECP256K1P) + SECP256K1B,
        (SECP256K1P - U256(1)) // U256(2),
        SECP256K1P,
    )

    if is_square != 1:
        raise InvalidSignatureError(
            "r is not the x-coordinate of a point on the secp256k1 curve"
        )

    signature = r.to_be_bytes32() + s.to_be_bytes32() + bytes([int(v)])

    # If the recovery algorithm returns the point at infinity,
    # the signature is considered invalid
    # the below function will raise a ValueError.
    try:
        public_key = coincurve.PublicKey.from_signature_and_message(
            signature, bytes(msg_hash), hasher=None
        )
    except ValueError as e:
        raise InvalidSignatureError from e

    return Bytes64(public_key.format(compressed=False)[1:])


def secp256k1_public_key(secret_key: Bytes) -> Bytes64:
    """
    Derives the uncompressed public key belonging to `secret_key`.

    Parameters
    ----------
    secret_key :
        Private key, exactly 32 bytes long.

    Returns
    -------
    public_key : `ethereum_types.bytes.Bytes64`
        The public key, without the `0x04` prefix.
    """
    validate_secret_key(secret_key)
    private_key = coincurve.PrivateKey(bytes(secret_key))
    return Bytes64(private_key.public_key.format(compressed=False)[1:])
