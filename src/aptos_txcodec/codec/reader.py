"""
Binary Reader - BCS primitive decoding

Implements the canonical binary (BCS) decoding rules used by Aptos
transactions: little-endian fixed-width integers, ULEB128 length prefixes
and length-prefixed byte strings. Every failure reports the byte offset
at which it happened; nothing is ever silently truncated.
"""

import builtins
import struct

from ..runtime.errors import BufferUnderrunError, MalformedVarintError, TrailingBytesError, DecodeError

MAX_U32 = 0xFFFFFFFF
ADDRESS_LENGTH = 32


class BinaryReader:
    """
    Cursor over an immutable byte buffer.

    The read offset only moves forward and never passes the end of the
    buffer. A failed read of any kind leaves the offset where it was.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def offset(self) -> int:
        """Current read offset."""
        return self._off

    @property
    def eof(self) -> bool:
        """True once every byte has been consumed."""
        return self._off >= len(self._buf)

    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buf) - self._off

    def _take(self, n: int, what: str) -> builtins.bytes:
        if n < 0:
            raise DecodeError(f"Negative read length {n} for {what}", offset=self._off)
        if self._off + n > len(self._buf):
            raise BufferUnderrunError(
                f"Buffer underrun reading {what}: need {n} bytes, {self.remaining()} remaining",
                offset=self._off,
                details={"needed": n, "remaining": self.remaining()},
            )
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def u8(self) -> int:
        """
        Read unsigned 8-bit integer.

        Returns:
            Unsigned 8-bit integer value
        """
        return self._take(1, "u8")[0]

    def u16(self) -> int:
        """Read unsigned 16-bit integer in little-endian format."""
        return struct.unpack("<H", self._take(2, "u16"))[0]

    def u32(self) -> int:
        """
        Read unsigned 32-bit integer in little-endian format.

        Returns:
            Unsigned 32-bit integer value
        """
        return struct.unpack("<I", self._take(4, "u32"))[0]

    def u64(self) -> int:
        """
        Read unsigned 64-bit integer in little-endian format.

        Returns:
            Unsigned 64-bit integer value
        """
        return struct.unpack("<Q", self._take(8, "u64"))[0]

    def u128(self) -> int:
        """Read unsigned 128-bit integer in little-endian format."""
        return int.from_bytes(self._take(16, "u128"), "little")

    def u256(self) -> int:
        """Read unsigned 256-bit integer in little-endian format."""
        return int.from_bytes(self._take(32, "u256"), "little")

    def bool(self) -> builtins.bool:
        """
        Read a BCS boolean.

        Raises:
            DecodeError: If the byte is neither 0 nor 1
        """
        start = self._off
        value = self.u8()
        if value not in (0, 1):
            self._off = start
            raise DecodeError(f"Invalid boolean byte 0x{value:02x}", offset=start)
        return value == 1

    def uleb128_as_u32(self) -> int:
        """
        Read unsigned varint in ULEB128 format, bounded to 32 bits.

        Each byte carries 7 data bits, low group first; the high bit marks
        continuation.

        Returns:
            Decoded unsigned integer value

        Raises:
            MalformedVarintError: On values above 2^32-1, encodings longer
                than 5 bytes, or a non-canonical trailing zero byte
            BufferUnderrunError: If the buffer ends mid-varint
        """
        start = self._off
        value = 0
        shift = 0
        for position in range(5):
            if self.eof:
                self._off = start
                raise BufferUnderrunError("Buffer underrun reading ULEB128 varint", offset=start)
            byte = self._buf[self._off]
            self._off += 1
            value |= (byte & 0x7F) << shift
            if byte & 0x80 == 0:
                if byte == 0 and position > 0:
                    self._off = start
                    raise MalformedVarintError("Non-canonical ULEB128 encoding", offset=start)
                if value > MAX_U32:
                    self._off = start
                    raise MalformedVarintError(
                        f"ULEB128 value {value} overflows u32", offset=start
                    )
                return value
            shift += 7
        self._off = start
        raise MalformedVarintError("ULEB128 varint longer than 5 bytes", offset=start)

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        return self._take(n, f"{n} bytes")

    def len_prefixed_bytes(self) -> builtins.bytes:
        """
        Read bytes with a ULEB128 length prefix.

        Returns:
            Bytes with length read from the prefix
        """
        start = self._off
        n = self.uleb128_as_u32()
        try:
            return self._take(n, "length-prefixed bytes")
        except BufferUnderrunError:
            self._off = start
            raise

    def string(self) -> str:
        """
        Read a length-prefixed UTF-8 string.

        Raises:
            DecodeError: If the bytes are not valid UTF-8
        """
        start = self._off
        raw = self.len_prefixed_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            self._off = start
            raise DecodeError("Invalid UTF-8 string", offset=start, cause=e)

    def fixed_address(self) -> builtins.bytes:
        """Read a 32-byte account address."""
        return self._take(ADDRESS_LENGTH, "address")

    def expect_end(self, what: str = "value") -> None:
        """
        Assert that the whole buffer has been consumed.

        Raises:
            TrailingBytesError: If unread bytes remain
        """
        if not self.eof:
            raise TrailingBytesError(
                f"{self.remaining()} unexpected trailing bytes after {what}",
                offset=self._off,
                details={"remaining": self.remaining()},
            )
