"""
Generic BCS vector codec.

A BCS ``vector<T>`` is a ULEB128 element count followed by the elements
in order. Nested vectors apply the same rule recursively.
"""

from __future__ import annotations
from typing import Callable, Iterable, List, TypeVar

from .reader import BinaryReader
from .writer import BinaryWriter

T = TypeVar("T")

ElementDecoder = Callable[[BinaryReader], T]
ElementEncoder = Callable[[BinaryWriter, T], None]


def decode_vector(reader: BinaryReader, element_decoder: ElementDecoder) -> List[T]:
    """
    Decode a ``vector<T>`` from the reader.

    Args:
        reader: Reader positioned at the length prefix
        element_decoder: Reads one element from the reader

    Returns:
        Elements in encoded order; empty list for a zero-length vector
    """
    length = reader.uleb128_as_u32()
    return [element_decoder(reader) for _ in range(length)]


def decode_nested_vector(reader: BinaryReader, element_decoder: ElementDecoder) -> List[List[T]]:
    """Decode a ``vector<vector<T>>`` from the reader."""
    return decode_vector(reader, lambda r: decode_vector(r, element_decoder))


def decode_u8_vector(reader: BinaryReader) -> bytes:
    """
    Decode a ``vector<u8>``.

    Equivalent to decode_vector with a u8 element decoder, read in one slice.
    """
    return reader.len_prefixed_bytes()


def encode_vector(writer: BinaryWriter, items: Iterable[T], element_encoder: ElementEncoder) -> None:
    """
    Encode a ``vector<T>`` into the writer.

    Args:
        writer: Destination writer
        items: Elements to encode, in order
        element_encoder: Writes one element
    """
    items = list(items)
    writer.uleb128(len(items))
    for item in items:
        element_encoder(writer, item)


def encode_nested_vector(writer: BinaryWriter, items: Iterable[Iterable[T]],
                         element_encoder: ElementEncoder) -> None:
    """Encode a ``vector<vector<T>>`` into the writer."""
    encode_vector(writer, items, lambda w, inner: encode_vector(w, inner, element_encoder))
