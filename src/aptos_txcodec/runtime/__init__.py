"""Runtime helpers for aptos-txcodec"""

from .errors import TxCodecError, ErrorCode

__all__ = [
    "TxCodecError",
    "ErrorCode",
]
