"""
Transaction Codec - BCS transaction envelope decoding

Decodes a serialized Aptos ``SimpleTransaction``: a raw transaction
(header fields around an entry function payload) followed by an optional
fee payer address. Only entry function payloads and the plain and fee payer
envelope shapes are supported; multi-agent envelopes are rejected.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple
import logging

from .reader import BinaryReader
from .vectors import decode_vector
from .hexutil import format_address
from ..runtime.errors import (
    DecodeError,
    UnsupportedPayloadTypeError,
    UnsupportedTransactionShapeError,
    UnsupportedTypeTagError,
)

logger = logging.getLogger(__name__)

MAX_TYPE_TAG_DEPTH = 128


class PayloadVariant(IntEnum):
    """Transaction payload discriminants."""

    SCRIPT = 0
    MODULE_BUNDLE = 1
    ENTRY_FUNCTION = 2
    MULTISIG = 3


class TransactionShape(IntEnum):
    """Envelope extension discriminants following the raw transaction."""

    PLAIN = 0
    FEE_PAYER = 1


class TypeTagVariant(IntEnum):
    """Move type tag discriminants."""

    BOOL = 0
    U8 = 1
    U64 = 2
    U128 = 3
    ADDRESS = 4
    SIGNER = 5
    VECTOR = 6
    STRUCT = 7
    U16 = 8
    U32 = 9
    U256 = 10
    REFERENCE = 254
    GENERIC = 255


_PRIMITIVE_NAMES = {
    TypeTagVariant.BOOL: "bool",
    TypeTagVariant.U8: "u8",
    TypeTagVariant.U16: "u16",
    TypeTagVariant.U32: "u32",
    TypeTagVariant.U64: "u64",
    TypeTagVariant.U128: "u128",
    TypeTagVariant.U256: "u256",
    TypeTagVariant.ADDRESS: "address",
    TypeTagVariant.SIGNER: "signer",
}


@dataclass(frozen=True)
class StructTag:
    """Fully qualified Move struct type."""

    address: bytes
    module: str
    name: str
    type_args: Tuple["TypeTag", ...] = ()

    def __str__(self) -> str:
        base = f"{format_address(self.address)}::{self.module}::{self.name}"
        if self.type_args:
            base += "<" + ", ".join(str(arg) for arg in self.type_args) + ">"
        return base


@dataclass(frozen=True)
class TypeTag:
    """
    A Move type argument.

    ``inner`` is set for vector and reference tags, ``struct`` for struct
    tags and ``index`` for generic type parameters.
    """

    variant: TypeTagVariant
    inner: Optional["TypeTag"] = None
    struct: Optional[StructTag] = None
    index: Optional[int] = None

    def __str__(self) -> str:
        if self.variant in _PRIMITIVE_NAMES:
            return _PRIMITIVE_NAMES[self.variant]
        if self.variant == TypeTagVariant.VECTOR:
            return f"vector<{self.inner}>"
        if self.variant == TypeTagVariant.STRUCT:
            return str(self.struct)
        if self.variant == TypeTagVariant.REFERENCE:
            return f"&{self.inner}"
        return f"T{self.index}"


@dataclass(frozen=True)
class RawTransactionHeader:
    """Header fields of a raw transaction."""

    sender: bytes
    sequence_number: int
    max_gas_amount: int
    gas_unit_price: int
    expiration_timestamp_secs: int
    chain_id: int


@dataclass(frozen=True)
class EntryFunctionPayload:
    """An entry function call with undecoded argument bytes."""

    module_address: bytes
    module_name: str
    function_name: str
    type_args: Tuple[TypeTag, ...]
    args: Tuple[bytes, ...]

    @property
    def function_id(self) -> str:
        return f"{format_address(self.module_address)}::{self.module_name}::{self.function_name}"


@dataclass(frozen=True)
class Transaction:
    """
    A decoded transaction envelope.

    Attributes:
        header: Raw transaction header fields
        payload: Entry function payload
        fee_payer: Fee payer address, None for plain transactions
        raw_transaction_bytes: BCS bytes of the raw transaction alone
        envelope_bytes: The complete input bytes
    """

    header: RawTransactionHeader
    payload: EntryFunctionPayload
    fee_payer: Optional[bytes]
    raw_transaction_bytes: bytes
    envelope_bytes: bytes

    @property
    def shape(self) -> TransactionShape:
        return TransactionShape.PLAIN if self.fee_payer is None else TransactionShape.FEE_PAYER


class TransactionCodec:
    """
    Decoder for BCS transaction envelopes.
    """

    @staticmethod
    def decode(data: bytes) -> Transaction:
        """
        Decode a serialized transaction envelope.

        Args:
            data: BCS bytes of a SimpleTransaction

        Returns:
            Decoded transaction

        Raises:
            BufferUnderrunError: If the input ends early
            MalformedVarintError: On an invalid length prefix
            UnsupportedPayloadTypeError: If the payload is not an entry function
            UnsupportedTransactionShapeError: If the envelope is not plain or fee payer
        """
        reader = BinaryReader(data)

        sender = reader.fixed_address()
        sequence_number = reader.u64()
        payload = TransactionCodec._decode_payload(reader)
        max_gas_amount = reader.u64()
        gas_unit_price = reader.u64()
        expiration_timestamp_secs = reader.u64()
        chain_id = reader.u8()
        raw_end = reader.offset

        header = RawTransactionHeader(
            sender=sender,
            sequence_number=sequence_number,
            max_gas_amount=max_gas_amount,
            gas_unit_price=gas_unit_price,
            expiration_timestamp_secs=expiration_timestamp_secs,
            chain_id=chain_id,
        )

        shape_offset = reader.offset
        shape = reader.u8()
        if shape == TransactionShape.PLAIN:
            fee_payer = None
        elif shape == TransactionShape.FEE_PAYER:
            fee_payer = reader.fixed_address()
        else:
            raise UnsupportedTransactionShapeError(
                f"Unsupported transaction shape discriminant {shape}",
                offset=shape_offset,
                details={"discriminant": shape},
            )

        # Multi-agent envelopes carry secondary signers after this point.
        if not reader.eof:
            raise UnsupportedTransactionShapeError(
                f"{reader.remaining()} bytes follow the transaction envelope; "
                "multi-agent transactions are not supported",
                offset=reader.offset,
                details={"remaining": reader.remaining()},
            )

        data = bytes(data)
        logger.debug(
            f"Decoded {payload.function_id} from {format_address(sender)} "
            f"(seq={sequence_number}, args={len(payload.args)}, fee_payer={fee_payer is not None})"
        )
        return Transaction(
            header=header,
            payload=payload,
            fee_payer=fee_payer,
            raw_transaction_bytes=data[:raw_end],
            envelope_bytes=data,
        )

    @staticmethod
    def _decode_payload(reader: BinaryReader) -> EntryFunctionPayload:
        start = reader.offset
        variant = reader.uleb128_as_u32()
        if variant != PayloadVariant.ENTRY_FUNCTION:
            try:
                name = PayloadVariant(variant).name.lower()
            except ValueError:
                name = "unknown"
            raise UnsupportedPayloadTypeError(
                f"Only transactions with entry function payloads are supported, got {name} ({variant})",
                offset=start,
                details={"variant": variant},
            )

        module_address = reader.fixed_address()
        module_name = reader.string()
        function_name = reader.string()
        type_args = decode_vector(reader, TransactionCodec.decode_type_tag)
        args = decode_vector(reader, BinaryReader.len_prefixed_bytes)

        return EntryFunctionPayload(
            module_address=module_address,
            module_name=module_name,
            function_name=function_name,
            type_args=tuple(type_args),
            args=tuple(args),
        )

    @staticmethod
    def decode_type_tag(reader: BinaryReader, depth: int = 0) -> TypeTag:
        """
        Decode one Move type tag.

        Raises:
            UnsupportedTypeTagError: On an unknown variant
            DecodeError: If nesting exceeds MAX_TYPE_TAG_DEPTH
        """
        if depth > MAX_TYPE_TAG_DEPTH:
            raise DecodeError("Type tag nesting too deep", offset=reader.offset)

        start = reader.offset
        raw_variant = reader.uleb128_as_u32()
        try:
            variant = TypeTagVariant(raw_variant)
        except ValueError:
            raise UnsupportedTypeTagError(
                f"Unsupported type tag variant {raw_variant}", offset=start,
                details={"variant": raw_variant},
            )

        if variant in _PRIMITIVE_NAMES:
            return TypeTag(variant)
        if variant in (TypeTagVariant.VECTOR, TypeTagVariant.REFERENCE):
            return TypeTag(variant, inner=TransactionCodec.decode_type_tag(reader, depth + 1))
        if variant == TypeTagVariant.STRUCT:
            address = reader.fixed_address()
            module = reader.string()
            name = reader.string()
            type_args = decode_vector(
                reader, lambda r: TransactionCodec.decode_type_tag(r, depth + 1)
            )
            return TypeTag(variant, struct=StructTag(address, module, name, tuple(type_args)))
        return TypeTag(variant, index=reader.u32())

    @staticmethod
    def to_report(transaction: Transaction, args: List[Any]) -> Dict[str, Any]:
        """
        Build the human-readable report for a decoded transaction.

        Integers are rendered as decimal strings. ``feePayer`` is present
        only for fee payer transactions.

        Args:
            transaction: Decoded transaction
            args: Decoded (or passthrough) argument values

        Returns:
            Report dictionary in presentation order
        """
        header = transaction.header
        report: Dict[str, Any] = {
            "sender": format_address(header.sender),
            "sequenceNumber": str(header.sequence_number),
            "maxGasAmount": str(header.max_gas_amount),
            "gasUnitPrice": str(header.gas_unit_price),
            "expirationTimestampSecs": str(header.expiration_timestamp_secs),
            "chainId": str(header.chain_id),
        }
        if transaction.fee_payer is not None:
            report["feePayer"] = format_address(transaction.fee_payer)
        report["payload"] = {
            "function": transaction.payload.function_id,
            "typeArgs": [str(tag) for tag in transaction.payload.type_args],
            "args": list(args),
        }
        return report
