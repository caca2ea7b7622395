"""
Ethereum Types
^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Types re-used throughout this package, which are specific to Ethereum.
"""

from ethereum_types.bytes import Bytes20, Bytes32
from ethereum_types.numeric import U64

from .crypto.hash import Hash32

Address = Bytes20
PrivateKey = Bytes32
ChainId = U64

__all__ = ("Address", "ChainId", "Hash32", "PrivateKey")
