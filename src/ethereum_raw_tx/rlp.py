"""
.. _rlp:

Recursive Length Prefix (RLP) Encoding
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Defines the serialization used for transactions. Every transaction field is
mapped onto an RLP byte string by the field codec (`encode_uint`,
`encode_address` and `encode_bytes`), and the fields are then framed into an
RLP list by `RLPList`.

Transactions are built from the typed field encoders and
`RLPList.append_raw`, which keeps the field order explicit. `encode_item`,
`encode_sequence` and `RLPList.append` dispatch on the type of each item
instead, for callers framing lists of their own.

Decoding is not implemented here; `ethereum_rlp` is used for that.
"""

import logging
from typing import Optional, Sequence, Union

from ethereum_types.bytes import Bytes, Bytes0
from ethereum_types.numeric import Uint, Unsigned

from .exceptions import RLPEncodingError
from .fork_types import Address

logger = logging.getLogger(__name__)

Item = Union[Unsigned, bytes, bytearray, Sequence["Item"]]

SHORT_STRING_OFFSET = 0x80
LONG_STRING_OFFSET = 0xB7
SHORT_LIST_OFFSET = 0xC0
LONG_LIST_OFFSET = 0xF7

# Payloads shorter than this are framed with a single header byte.
SHORT_PAYLOAD_LIMIT = 0x38


#
# Field codec
#


def encode_uint(value: Unsigned) -> Bytes:
    """
    Encodes an unsigned integer as an RLP byte string holding its minimal
    big endian representation. Zero is encoded as the empty byte string.

    Parameters
    ----------
    value :
        A `Uint`, `U256` or other `ethereum_types` unsigned integer.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP encoded bytes representing `value`.
    """
    return encode_bytes(value.to_be_bytes())


def encode_address(address: Union[Bytes0, Address, None]) -> Bytes:
    """
    Encodes an optional recipient address.

    An absent address (`None` or `Bytes0`) is the empty byte string, which
    marks a contract creation. It must never be encoded as twenty zero
    bytes, since that is a perfectly valid recipient.

    Parameters
    ----------
    address :
        The recipient, or nothing.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP encoded bytes representing `address`.
    """
    if address is None or len(address) == 0:
        return encode_bytes(b"")
    if len(address) != Address.LENGTH:
        raise RLPEncodingError(
            f"address must be {Address.LENGTH} bytes, got {len(address)}"
        )
    return encode_bytes(address)


def encode_bytes(raw_bytes: Bytes) -> Bytes:
    """
    Encodes `raw_bytes`, a sequence of bytes, using RLP.

    Parameters
    ----------
    raw_bytes :
        Bytes to encode with RLP.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP encoded bytes representing `raw_bytes`.
    """
    raw_bytes = bytes(raw_bytes)
    if len(raw_bytes) == 1 and raw_bytes[0] < SHORT_STRING_OFFSET:
        return raw_bytes
    return (
        encode_length_prefix(
            len(raw_bytes), SHORT_STRING_OFFSET, LONG_STRING_OFFSET
        )
        + raw_bytes
    )


def encode_length_prefix(
    length: int, short_offset: int, long_offset: int
) -> Bytes:
    """
    Builds the header placed in front of a payload of `length` bytes.

    Parameters
    ----------
    length :
        Length of the payload following the header.
    short_offset :
        Header base for payloads shorter than 56 bytes.
    long_offset :
        Header base for longer payloads, which is followed by the big endian
        length itself.

    Returns
    -------
    header : `ethereum_types.bytes.Bytes`
        The header bytes.
    """
    if length < SHORT_PAYLOAD_LIMIT:
        return bytes([short_offset + length])

    # length of payload represented as big endian bytes
    length_as_be = Uint(length).to_be_bytes()
    return bytes([long_offset + len(length_as_be)]) + length_as_be


def encode_item(item: Item) -> Bytes:
    """
    Encodes a single field, dispatching on its type.

    Parameters
    ----------
    item :
        An unsigned integer, a byte string, or a sequence of items.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP encoded bytes representing `item`.
    """
    if isinstance(item, Unsigned):
        return encode_uint(item)
    elif isinstance(item, (bytes, bytearray)):
        return encode_bytes(item)
    elif isinstance(item, (list, tuple)):
        return encode_sequence(item)
    else:
        raise RLPEncodingError(
            "RLP Encoding of type {} is not supported".format(type(item))
        )


def encode_sequence(raw_sequence: Sequence[Item]) -> Bytes:
    """
    Encodes a list of RLP encodable objects (`raw_sequence`) using RLP.

    Parameters
    ----------
    raw_sequence :
        Sequence of RLP encodable objects.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP encoded bytes representing `raw_sequence`.
    """
    stream = RLPList()
    for item in raw_sequence:
        stream.append(item)
    return stream.finish()


#
# List framing
#


class RLPList:
    """
    Incrementally builds an RLP list.

    Items are encoded as they are appended and collected in a buffer; the
    list header can only be computed once every item is known, so it is
    prepended by `finish`.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._item_count = 0
        self._output: Optional[Bytes] = None

    def __len__(self) -> int:
        return self._item_count

    def append(self, item: Item) -> "RLPList":
        """
        Encode `item` and add it to the end of the list.
        """
        return self.append_raw(encode_item(item))

    def append_raw(self, encoded: Bytes) -> "RLPList":
        """
        Add an item that is already RLP encoded to the end of the list.
        """
        if self._output is not None:
            raise RLPEncodingError("cannot append to a finished list")
        self._buffer.extend(encoded)
        self._item_count += 1
        return self

    def finish(self) -> Bytes:
        """
        Prepend the list header and return the complete encoding.

        Calling `finish` again returns the same bytes.
        """
        if self._output is None:
            payload = bytes(self._buffer)
            self._output = (
                encode_length_prefix(
                    len(payload), SHORT_LIST_OFFSET, LONG_LIST_OFFSET
                )
                + payload
            )
            logger.debug(
                "framed %d items into %d bytes",
                self._item_count,
                len(self._output),
            )
        return self._output
