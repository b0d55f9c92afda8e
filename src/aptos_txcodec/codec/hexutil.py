"""
Hex and account address helpers.
"""

from ..runtime.errors import InvalidHexError


def decode_hex(text: str) -> bytes:
    """
    Decode a hex string, with or without a ``0x`` prefix.

    Raises:
        InvalidHexError: If the text is not an even-length hex string
    """
    body = text.strip()
    if body[:2] in ("0x", "0X"):
        body = body[2:]
    try:
        return bytes.fromhex(body)
    except ValueError as e:
        raise InvalidHexError(f"Invalid hex string: {e}", details={"length": len(body)}, cause=e)


def to_hex(data: bytes) -> str:
    """Render bytes as a ``0x``-prefixed lowercase hex string."""
    return "0x" + bytes(data).hex()


def format_address(address: bytes) -> str:
    """
    Render a 32-byte account address in its canonical form.

    Special addresses (``0x0`` through ``0xf``) use the short form; every
    other address is rendered with all 64 hex digits.
    """
    if len(address) == 32 and not any(address[:31]) and address[31] < 0x10:
        return f"0x{address[31]:x}"
    return to_hex(address)
