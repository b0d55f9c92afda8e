"""
BCS Codec Module

Canonical binary decoding of Aptos transaction envelopes.

Key components:
- reader.py: Binary reader with ULEB128/primitive decoding
- writer.py: Binary writer with ULEB128/primitive encoding
- vectors.py: Generic vector<T> and vector<vector<T>> codec
- transaction_codec.py: Transaction envelope decoding and report rendering
- hexutil.py: Hex and account address rendering
"""

from .reader import BinaryReader
from .writer import BinaryWriter
from .vectors import decode_vector, decode_nested_vector, encode_vector, encode_nested_vector
from .hexutil import decode_hex, to_hex, format_address
from .transaction_codec import (
    TransactionCodec,
    Transaction,
    RawTransactionHeader,
    EntryFunctionPayload,
    TypeTag,
    StructTag,
    TransactionShape,
)

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "decode_vector",
    "decode_nested_vector",
    "encode_vector",
    "encode_nested_vector",
    "decode_hex",
    "to_hex",
    "format_address",
    "TransactionCodec",
    "Transaction",
    "RawTransactionHeader",
    "EntryFunctionPayload",
    "TypeTag",
    "StructTag",
    "TransactionShape",
]
