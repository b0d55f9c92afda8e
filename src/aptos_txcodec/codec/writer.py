"""
Binary Writer - BCS primitive encoding

Inverse of BinaryReader: little-endian fixed-width integers, ULEB128 length
prefixes and length-prefixed byte strings.
"""

import struct
from typing import List


class BinaryWriter:
    """
    Append-only BCS byte buffer.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        self._bb.append(v & 0xFF)

    def u16(self, v: int) -> None:
        """Write unsigned 16-bit integer in little-endian format."""
        self._bb.extend(struct.pack('<H', v & 0xFFFF))

    def u32(self, v: int) -> None:
        """
        Write unsigned 32-bit integer in little-endian format.

        Args:
            v: Integer value to write as 32-bit little-endian
        """
        self._bb.extend(struct.pack('<I', v & 0xFFFFFFFF))

    def u64(self, v: int) -> None:
        """
        Write unsigned 64-bit integer in little-endian format.

        Args:
            v: Integer value to write as 64-bit little-endian
        """
        self._bb.extend(struct.pack('<Q', v & 0xFFFFFFFFFFFFFFFF))

    def u128(self, v: int) -> None:
        """Write unsigned 128-bit integer in little-endian format."""
        self._bb.extend(v.to_bytes(16, "little"))

    def u256(self, v: int) -> None:
        """Write unsigned 256-bit integer in little-endian format."""
        self._bb.extend(v.to_bytes(32, "little"))

    def bool(self, v: bool) -> None:
        """Write a BCS boolean."""
        self.u8(1 if v else 0)

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """
        Write bytes with a ULEB128 length prefix.

        Args:
            v: Bytes to write with length prefix
        """
        self.uleb128(len(v))
        self.bytes(v)

    def string(self, s: str) -> None:
        """
        Write a UTF-8 string with length prefix.

        Args:
            s: String to write
        """
        self.len_prefixed_bytes(s.encode("utf-8"))

    def uleb128(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Args:
            v: Unsigned integer value to encode as varint
        """
        if v < 0:
            raise ValueError(f"Cannot encode negative value {v} as ULEB128")
        while v >= 0x80:
            self.u8((v & 0x7F) | 0x80)
            v >>= 7
        self.u8(v)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
