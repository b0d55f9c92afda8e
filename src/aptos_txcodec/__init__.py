"""
aptos-txcodec

Decodes BCS-serialized Aptos transactions into human-readable reports and
executes prepared transactions as simulations or signed submissions under
single-key or threshold multi-key authentication.
"""

from .codec import BinaryReader, BinaryWriter, TransactionCodec, Transaction
from .decoders import ArgumentDecoderRegistry, default_registry
from .auth import AuthenticationBuilder, SignerMode
from .execution import (
    ExecutionEngine,
    NetworkClient,
    SimulationResult,
    CommittedResult,
    SubmitResponse,
    execute_transaction,
)
from .report import decode_transaction, build_report
from .config import ToolConfig
from .runtime.errors import *

__version__ = "0.1.0"

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "TransactionCodec",
    "Transaction",
    "ArgumentDecoderRegistry",
    "default_registry",
    "AuthenticationBuilder",
    "SignerMode",
    "ExecutionEngine",
    "NetworkClient",
    "SimulationResult",
    "CommittedResult",
    "SubmitResponse",
    "execute_transaction",
    "decode_transaction",
    "build_report",
    "ToolConfig",
    "TxCodecError",
    "ErrorCode",
    "DecodeError",
    "BufferUnderrunError",
    "MalformedVarintError",
    "TrailingBytesError",
    "UnsupportedPayloadTypeError",
    "UnsupportedTransactionShapeError",
    "ArgumentCountMismatchError",
    "AuthenticationError",
    "AuthenticatorLengthMismatchError",
    "ThresholdIndexOutOfRangeError",
    "InsufficientSignaturesError",
    "MissingSignatureError",
    "NetworkFailure",
]
