"""
Ethereum Raw Transactions
^^^^^^^^^^^^^^^^^^^^^^^^^
A client that wants to hand a transaction to a node does not need a node, or
a wallet daemon, to do it. All that is required is the canonical encoding of
the transaction fields, a signature binding those fields to a chain, and the
canonical encoding of the signed result.

This package builds exactly those three things for legacy (pre-typed)
transactions, with replay protection as described in `EIP-155`_.

.. _EIP-155: https://eips.ethereum.org/EIPS/eip-155
"""

__version__ = "0.1.0"
