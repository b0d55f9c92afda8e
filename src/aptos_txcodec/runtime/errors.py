"""
Transaction Codec Error Model

This module provides the error handling framework for aptos-txcodec.
Every decode, authentication and execution failure raised by the package is
a TxCodecError carrying a stable error code and structured details.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for aptos-txcodec failures."""

    # General errors (1-99)
    UNKNOWN = 1
    INVALID_HEX = 2

    # Decoding errors (100-199)
    DECODE_ERROR = 100
    BUFFER_UNDERRUN = 101
    MALFORMED_VARINT = 102
    TRAILING_BYTES = 103
    UNSUPPORTED_PAYLOAD_TYPE = 104
    UNSUPPORTED_TRANSACTION_SHAPE = 105
    UNSUPPORTED_TYPE_TAG = 106

    # Argument errors (200-299)
    ARGUMENT_COUNT_MISMATCH = 200

    # Authentication errors (300-399)
    AUTHENTICATION_ERROR = 300
    AUTHENTICATOR_LENGTH_MISMATCH = 301
    THRESHOLD_INDEX_OUT_OF_RANGE = 302
    INSUFFICIENT_SIGNATURES = 303
    UNSUPPORTED_KEY_SCHEME = 304
    AUTHENTICATOR_MISMATCH = 305

    # Execution errors (400-499)
    EXECUTION_ERROR = 400
    MISSING_SIGNATURE = 401

    # Network errors (500-599)
    NETWORK_FAILURE = 500


class TxCodecError(Exception):
    """
    Base class for all aptos-txcodec errors.

    Provides structured error information: a code, a message, optional
    details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidHexError(TxCodecError):
    """Input text is not valid hex."""

    def __init__(self, message: str = "Invalid hex string",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_HEX, details, cause)


# =============================================================================
# Decoding errors
# =============================================================================

class DecodeError(TxCodecError):
    """Binary decoding errors. Details carry the failing byte offset."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.DECODE_ERROR,
                 offset: Optional[int] = None, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        details = dict(details or {})
        if offset is not None:
            details.setdefault("offset", offset)
        super().__init__(message, code, details, cause)

    @property
    def offset(self) -> Optional[int]:
        return self.details.get("offset")


class BufferUnderrunError(DecodeError):
    """Read past the end of the buffer."""

    def __init__(self, message: str = "Buffer underrun", offset: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.BUFFER_UNDERRUN, offset, details)


class MalformedVarintError(DecodeError):
    """ULEB128 value overflows or is not canonically encoded."""

    def __init__(self, message: str = "Malformed ULEB128 varint", offset: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.MALFORMED_VARINT, offset, details)


class TrailingBytesError(DecodeError):
    """Bytes remain after a value that must consume its whole input."""

    def __init__(self, message: str = "Unexpected trailing bytes", offset: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.TRAILING_BYTES, offset, details)


class UnsupportedPayloadTypeError(DecodeError):
    """Transaction payload is not an entry function."""

    def __init__(self, message: str = "Only transactions with entry function payloads are supported",
                 offset: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_PAYLOAD_TYPE, offset, details)


class UnsupportedTransactionShapeError(DecodeError):
    """Envelope is neither a plain nor a fee payer transaction."""

    def __init__(self, message: str = "Unsupported transaction shape",
                 offset: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_TRANSACTION_SHAPE, offset, details)


class UnsupportedTypeTagError(DecodeError):
    """Unknown type tag variant."""

    def __init__(self, message: str = "Unsupported type tag", offset: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_TYPE_TAG, offset, details)


# =============================================================================
# Argument errors
# =============================================================================

class ArgumentCountMismatchError(TxCodecError):
    """Registered decoders and raw arguments differ in arity."""

    def __init__(self, function_name: str, expected: int, actual: int):
        super().__init__(
            f"Function '{function_name}' expects {expected} arguments, transaction has {actual}",
            ErrorCode.ARGUMENT_COUNT_MISMATCH,
            {"function": function_name, "expected": expected, "actual": actual},
        )


# =============================================================================
# Authentication errors
# =============================================================================

class AuthenticationError(TxCodecError):
    """Public key, signature and authenticator construction errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.AUTHENTICATION_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class AuthenticatorLengthMismatchError(AuthenticationError):
    """Key or signature has the wrong size."""

    def __init__(self, message: str = "Authenticator length mismatch",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.AUTHENTICATOR_LENGTH_MISMATCH, details, cause)


class ThresholdIndexOutOfRangeError(AuthenticationError):
    """Signature index does not name a member key."""

    def __init__(self, index: int, member_count: int):
        super().__init__(
            f"Signature index {index} is out of range for {member_count} member keys",
            ErrorCode.THRESHOLD_INDEX_OUT_OF_RANGE,
            {"index": index, "memberCount": member_count},
        )


class InsufficientSignaturesError(AuthenticationError):
    """Fewer signatures than the declared threshold."""

    def __init__(self, supplied: int, threshold: int):
        super().__init__(
            f"{supplied} signatures supplied, threshold requires {threshold}",
            ErrorCode.INSUFFICIENT_SIGNATURES,
            {"supplied": supplied, "threshold": threshold},
        )


class UnsupportedKeySchemeError(AuthenticationError):
    """Key or signature scheme outside Ed25519/Secp256k1."""

    def __init__(self, message: str = "Unsupported key scheme",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_KEY_SCHEME, details)


class AuthenticatorMismatchError(AuthenticationError):
    """Authenticator variant does not match the signer identity."""

    def __init__(self, message: str = "Authenticator does not match signer identity",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.AUTHENTICATOR_MISMATCH, details)


# =============================================================================
# Execution errors
# =============================================================================

class ExecutionError(TxCodecError):
    """Transaction execution errors raised before reaching the network."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.EXECUTION_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MissingSignatureError(ExecutionError):
    """Committed execution requested without a signature."""

    def __init__(self, message: str = "Missing required signature for transaction execution",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.MISSING_SIGNATURE, details)


class NetworkFailure(TxCodecError):
    """
    Network errors raised by NetworkClient implementations.

    The execution engine never wraps or retries these; they reach the caller
    exactly as the client raised them.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_FAILURE, details, cause)


__all__ = [
    "ErrorCode",
    "TxCodecError",
    "InvalidHexError",
    "DecodeError",
    "BufferUnderrunError",
    "MalformedVarintError",
    "TrailingBytesError",
    "UnsupportedPayloadTypeError",
    "UnsupportedTransactionShapeError",
    "UnsupportedTypeTagError",
    "ArgumentCountMismatchError",
    "AuthenticationError",
    "AuthenticatorLengthMismatchError",
    "ThresholdIndexOutOfRangeError",
    "InsufficientSignaturesError",
    "UnsupportedKeySchemeError",
    "AuthenticatorMismatchError",
    "ExecutionError",
    "MissingSignatureError",
    "NetworkFailure",
]
