"""
Error types raised while encoding, signing and decoding transactions.
"""


class EthereumException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.
    """


class InvalidKey(EthereumException):
    """
    Thrown when a private key is not a valid secp256k1 scalar, that is, when
    it is zero, not less than the curve order, or not exactly 32 bytes long.
    """


class InvalidMessage(EthereumException):
    """
    Thrown when the digest handed to the signer is not exactly 32 bytes.

    Digests produced by this package are always 32 bytes, so seeing this
    error means an internal contract was violated.
    """


class RLPEncodingError(EthereumException):
    """
    Thrown when a value of an unsupported type is given to the RLP encoder.
    """


class InvalidTransaction(EthereumException):
    """
    Thrown when a byte sequence is not a signed legacy transaction.
    """


class InvalidSignatureError(InvalidTransaction):
    """
    Thrown when a transaction has an invalid signature.
    """
