"""
Address specific functions used in this package.
"""
from ethereum_types.bytes import Bytes

from ..crypto.elliptic_curve import secp256k1_public_key
from ..crypto.hash import keccak256
from ..fork_types import Address


def public_key_to_address(public_key: Bytes) -> Address:
    """
    Derive the address of an uncompressed public key (64 bytes, without the
    `0x04` prefix).
    """
    return Address(keccak256(public_key)[12:32])


def private_key_to_address(private_key: Bytes) -> Address:
    """
    Derive the address controlled by `private_key`.
    """
    return public_key_to_address(secp256k1_public_key(private_key))
