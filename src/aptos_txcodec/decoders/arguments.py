"""
Argument decoders for entry function arguments.

Each decoder takes the raw BCS bytes of a single argument and returns a
JSON-friendly value. A decoder must consume its input completely.
"""

from __future__ import annotations
from typing import Any, Callable, List

from ..codec.reader import BinaryReader
from ..codec.vectors import decode_vector, decode_u8_vector
from ..codec.hexutil import format_address, to_hex

ArgumentDecoder = Callable[[bytes], Any]


def _decode_whole(raw: bytes, what: str, read: Callable[[BinaryReader], Any]) -> Any:
    reader = BinaryReader(raw)
    value = read(reader)
    reader.expect_end(what)
    return value


def decode_address(raw: bytes) -> str:
    """``address`` -> canonical address string."""
    return _decode_whole(raw, "address", lambda r: format_address(r.fixed_address()))


def decode_bytes_hex(raw: bytes) -> str:
    """``vector<u8>`` -> ``0x`` hex string."""
    return _decode_whole(raw, "vector<u8>", lambda r: to_hex(decode_u8_vector(r)))


def decode_nested_bytes_hex(raw: bytes) -> List[str]:
    """``vector<vector<u8>>`` -> list of ``0x`` hex strings."""
    return _decode_whole(
        raw,
        "vector<vector<u8>>",
        lambda r: [to_hex(item) for item in decode_vector(r, decode_u8_vector)],
    )


def decode_address_vector(raw: bytes) -> List[str]:
    """``vector<address>`` -> list of address strings."""
    return _decode_whole(
        raw,
        "vector<address>",
        lambda r: [format_address(a) for a in decode_vector(r, BinaryReader.fixed_address)],
    )


def decode_u8(raw: bytes) -> str:
    """``u8`` -> decimal string."""
    return _decode_whole(raw, "u8", lambda r: str(r.u8()))


def decode_u64(raw: bytes) -> str:
    """``u64`` -> decimal string."""
    return _decode_whole(raw, "u64", lambda r: str(r.u64()))


def decode_bool(raw: bytes) -> bool:
    return _decode_whole(raw, "bool", BinaryReader.bool)


def decode_string(raw: bytes) -> str:
    """Move ``String`` -> str."""
    return _decode_whole(raw, "string", BinaryReader.string)


def passthrough_hex(raw: bytes) -> str:
    """Raw argument bytes as a ``0x`` hex string."""
    return to_hex(raw)
