"""
Test generic vector<T> and vector<vector<T>> decoding.
"""

import os

import pytest

from aptos_txcodec.codec.reader import BinaryReader
from aptos_txcodec.codec.writer import BinaryWriter
from aptos_txcodec.codec.vectors import (
    decode_nested_vector,
    decode_u8_vector,
    decode_vector,
    encode_nested_vector,
    encode_vector,
)
from aptos_txcodec.runtime.errors import BufferUnderrunError


def _encode_byte_strings(items):
    writer = BinaryWriter()
    encode_vector(writer, items, lambda w, b: w.len_prefixed_bytes(b))
    return writer.to_bytes()


@pytest.mark.parametrize("items", [
    [],
    [b""],
    [b"\x01"],
    [b"abc", b"", b"defg"],
    [os.urandom(200) for _ in range(3)],
    [bytes([i]) * i for i in range(140)],
])
def test_byte_string_vectors_survive_encoding(items):
    """Decoding what was encoded yields the same ordered sequence."""
    reader = BinaryReader(_encode_byte_strings(items))
    assert decode_vector(reader, BinaryReader.len_prefixed_bytes) == items
    assert reader.eof


def test_empty_vector_is_empty_list():
    result = decode_vector(BinaryReader(b"\x00"), BinaryReader.u8)
    assert result == []
    assert result is not None


def test_element_order_is_preserved():
    reader = BinaryReader(b"\x04\x04\x03\x02\x01")
    assert decode_vector(reader, BinaryReader.u8) == [4, 3, 2, 1]


def test_length_prefix_uses_uleb128():
    items = list(range(256))
    writer = BinaryWriter()
    encode_vector(writer, items, lambda w, v: w.u16(v))
    data = writer.to_bytes()

    assert data[:2] == b"\x80\x02"
    assert decode_vector(BinaryReader(data), BinaryReader.u16) == items


def test_nested_u8_vectors():
    code = [os.urandom(100) for _ in range(5)]
    writer = BinaryWriter()
    encode_nested_vector(writer, code, lambda w, b: w.u8(b))

    decoded = decode_nested_vector(BinaryReader(writer.to_bytes()), BinaryReader.u8)
    assert [bytes(inner) for inner in decoded] == code


def test_nested_vector_with_empty_inner():
    # [[], [7], []]
    decoded = decode_nested_vector(BinaryReader(b"\x03\x00\x01\x07\x00"), BinaryReader.u8)
    assert decoded == [[], [7], []]


def test_decode_u8_vector_matches_element_decode():
    payload = os.urandom(64)
    writer = BinaryWriter()
    writer.len_prefixed_bytes(payload)
    data = writer.to_bytes()

    assert decode_u8_vector(BinaryReader(data)) == payload
    assert bytes(decode_vector(BinaryReader(data), BinaryReader.u8)) == payload


def test_truncated_vector_fails():
    # Declares three elements, provides two
    with pytest.raises(BufferUnderrunError):
        decode_vector(BinaryReader(b"\x03\x01\x02"), BinaryReader.u8)
