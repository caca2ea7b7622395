"""
Cryptographic primitives used to sign Ethereum transactions.
"""
