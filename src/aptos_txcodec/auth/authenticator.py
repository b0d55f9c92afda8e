"""
Account authenticators for single-key and threshold (multi-key) signers.

Parses hex-decoded public key and signature bytes into a signer identity
and an authenticator ready to be attached to a transaction submission.

Accepted encodings:
- single: a 32-byte Ed25519 public key and 64-byte signature, either raw or
  BCS length-prefixed
- threshold: a BCS ``MultiKey`` (member keys + required signature count)
  and a BCS ``MultiKeySignature`` (signatures + 4-byte member bitmap)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Sequence, Tuple, Union
import logging

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter
from ..codec.vectors import decode_vector, encode_vector
from ..runtime.errors import (
    AuthenticationError,
    AuthenticatorLengthMismatchError,
    AuthenticatorMismatchError,
    DecodeError,
    InsufficientSignaturesError,
    ThresholdIndexOutOfRangeError,
    UnsupportedKeySchemeError,
)

logger = logging.getLogger(__name__)

ED25519_PUBLIC_KEY_LENGTH = 32
ED25519_SIGNATURE_LENGTH = 64
BITMAP_LENGTH = 4
MAX_MEMBER_KEYS = BITMAP_LENGTH * 8


class SignerMode(Enum):
    """Authentication scheme of the transaction sender."""

    SINGLE = "single"
    THRESHOLD = "threshold"

    @classmethod
    def from_flag(cls, multi_sig: bool) -> "SignerMode":
        return cls.THRESHOLD if multi_sig else cls.SINGLE


class KeyScheme(IntEnum):
    """Member key schemes supported inside a multi-key."""

    ED25519 = 0
    SECP256K1 = 1


class AuthenticatorVariant(IntEnum):
    """Account authenticator discriminants."""

    ED25519 = 0
    MULTI_ED25519 = 1
    SINGLE_KEY = 2
    MULTI_KEY = 3


_PUBLIC_KEY_LENGTHS = {
    KeyScheme.ED25519: ED25519_PUBLIC_KEY_LENGTH,
    KeyScheme.SECP256K1: 65,
}

_SIGNATURE_LENGTHS = {
    KeyScheme.ED25519: ED25519_SIGNATURE_LENGTH,
    KeyScheme.SECP256K1: 64,
}


# =============================================================================
# Signer identities
# =============================================================================

@dataclass(frozen=True)
class MemberKey:
    """One member of a threshold key."""

    scheme: KeyScheme
    key: bytes


@dataclass(frozen=True)
class SingleKey:
    """A single Ed25519 verification key."""

    public_key: bytes

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.len_prefixed_bytes(self.public_key)
        return writer.to_bytes()


@dataclass(frozen=True)
class ThresholdKey:
    """K-of-N member keys."""

    members: Tuple[MemberKey, ...]
    threshold: int

    def to_bytes(self) -> bytes:
        """Serialize as a BCS MultiKey."""
        writer = BinaryWriter()
        encode_vector(writer, self.members, _encode_member_key)
        writer.u8(self.threshold)
        return writer.to_bytes()


SignerIdentity = Union[SingleKey, ThresholdKey]


# =============================================================================
# Authenticators
# =============================================================================

@dataclass(frozen=True)
class IndexedSignature:
    """A member signature and the index of the member key it belongs to."""

    index: int
    scheme: KeyScheme
    signature: bytes


@dataclass(frozen=True)
class SingleKeyAuth:
    """Ed25519 key + signature."""

    public_key: SingleKey
    signature: bytes

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.uleb128(AuthenticatorVariant.ED25519)
        writer.bytes(self.public_key.to_bytes())
        writer.len_prefixed_bytes(self.signature)
        return writer.to_bytes()


@dataclass(frozen=True)
class ThresholdKeyAuth:
    """Multi-key descriptor + signatures ordered by member index."""

    public_key: ThresholdKey
    signatures: Tuple[IndexedSignature, ...]

    @property
    def indices(self) -> List[int]:
        return [sig.index for sig in self.signatures]

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.uleb128(AuthenticatorVariant.MULTI_KEY)
        writer.bytes(self.public_key.to_bytes())
        writer.bytes(encode_threshold_signature(self.signatures))
        return writer.to_bytes()


Authenticator = Union[SingleKeyAuth, ThresholdKeyAuth]


# =============================================================================
# Encoding helpers
# =============================================================================

def _encode_member_key(writer: BinaryWriter, member: MemberKey) -> None:
    writer.uleb128(member.scheme)
    writer.len_prefixed_bytes(member.key)


def _encode_indexed_signature(writer: BinaryWriter, sig: IndexedSignature) -> None:
    writer.uleb128(sig.scheme)
    writer.len_prefixed_bytes(sig.signature)


def encode_bitmap(indices: Sequence[int]) -> bytes:
    """Build the member bitmap; bit 0 is the most significant bit of byte 0."""
    bitmap = bytearray(BITMAP_LENGTH)
    for index in indices:
        if index < 0 or index >= MAX_MEMBER_KEYS:
            raise ThresholdIndexOutOfRangeError(index, MAX_MEMBER_KEYS)
        bitmap[index // 8] |= 0x80 >> (index % 8)
    return bytes(bitmap)


def decode_bitmap(bitmap: bytes) -> List[int]:
    """Member indices whose bits are set, ascending."""
    return [i for i in range(len(bitmap) * 8) if bitmap[i // 8] & (0x80 >> (i % 8))]


def encode_threshold_signature(signatures: Sequence[IndexedSignature]) -> bytes:
    """Serialize signatures as a BCS MultiKeySignature."""
    ordered = sorted(signatures, key=lambda s: s.index)
    writer = BinaryWriter()
    encode_vector(writer, ordered, _encode_indexed_signature)
    writer.len_prefixed_bytes(encode_bitmap([s.index for s in ordered]))
    return writer.to_bytes()


# =============================================================================
# Parsing
# =============================================================================

def _unwrap_fixed(data: bytes, length: int, what: str) -> bytes:
    """Accept ``length`` raw bytes or the same bytes with a BCS length prefix."""
    if len(data) == length:
        return bytes(data)
    try:
        reader = BinaryReader(data)
        value = reader.len_prefixed_bytes()
        reader.expect_end(what)
    except DecodeError as e:
        raise AuthenticatorLengthMismatchError(
            f"{what} must be {length} bytes, got {len(data)}",
            details={"expected": length, "actual": len(data)},
            cause=e,
        )
    if len(value) != length:
        raise AuthenticatorLengthMismatchError(
            f"{what} must be {length} bytes, got {len(value)}",
            details={"expected": length, "actual": len(value)},
        )
    return value


def _load_ed25519_key(key: bytes) -> None:
    try:
        Ed25519PublicKey.from_public_bytes(key)
    except ValueError as e:
        raise AuthenticationError(f"Invalid Ed25519 public key: {e}", cause=e)


def _read_scheme(reader: BinaryReader, what: str) -> KeyScheme:
    start = reader.offset
    raw = reader.uleb128_as_u32()
    try:
        return KeyScheme(raw)
    except ValueError:
        raise UnsupportedKeySchemeError(
            f"Unsupported {what} scheme {raw}", details={"scheme": raw, "offset": start}
        )


def _read_member_key(reader: BinaryReader) -> MemberKey:
    scheme = _read_scheme(reader, "public key")
    key = reader.len_prefixed_bytes()
    expected = _PUBLIC_KEY_LENGTHS[scheme]
    if len(key) != expected:
        raise AuthenticatorLengthMismatchError(
            f"{scheme.name} public key must be {expected} bytes, got {len(key)}",
            details={"expected": expected, "actual": len(key)},
        )
    if scheme == KeyScheme.ED25519:
        _load_ed25519_key(key)
    return MemberKey(scheme, key)


def _read_member_signature(reader: BinaryReader) -> Tuple[KeyScheme, bytes]:
    scheme = _read_scheme(reader, "signature")
    signature = reader.len_prefixed_bytes()
    expected = _SIGNATURE_LENGTHS[scheme]
    if len(signature) != expected:
        raise AuthenticatorLengthMismatchError(
            f"{scheme.name} signature must be {expected} bytes, got {len(signature)}",
            details={"expected": expected, "actual": len(signature)},
        )
    return scheme, signature


def _parse_threshold_key(data: bytes) -> ThresholdKey:
    try:
        reader = BinaryReader(data)
        members = decode_vector(reader, _read_member_key)
        threshold = reader.u8()
        reader.expect_end("multi-key")
    except DecodeError as e:
        raise AuthenticatorLengthMismatchError(f"Malformed multi-key public key: {e.message}", cause=e)

    if not members or len(members) > MAX_MEMBER_KEYS:
        raise AuthenticationError(
            f"Multi-key must have 1 to {MAX_MEMBER_KEYS} member keys, got {len(members)}"
        )
    if threshold < 1 or threshold > len(members):
        raise AuthenticationError(
            f"Threshold {threshold} is invalid for {len(members)} member keys",
            details={"threshold": threshold, "memberCount": len(members)},
        )
    return ThresholdKey(tuple(members), threshold)


def _parse_threshold_signature(data: bytes, identity: ThresholdKey) -> Tuple[IndexedSignature, ...]:
    try:
        reader = BinaryReader(data)
        signatures = decode_vector(reader, _read_member_signature)
        bitmap = reader.len_prefixed_bytes()
        reader.expect_end("multi-key signature")
    except DecodeError as e:
        raise AuthenticatorLengthMismatchError(f"Malformed multi-key signature: {e.message}", cause=e)

    if len(bitmap) != BITMAP_LENGTH:
        raise AuthenticatorLengthMismatchError(
            f"Signature bitmap must be {BITMAP_LENGTH} bytes, got {len(bitmap)}",
            details={"expected": BITMAP_LENGTH, "actual": len(bitmap)},
        )

    member_count = len(identity.members)
    indices = decode_bitmap(bitmap)
    for index in indices:
        if index >= member_count:
            raise ThresholdIndexOutOfRangeError(index, member_count)

    if len(indices) != len(signatures):
        raise AuthenticatorLengthMismatchError(
            f"Bitmap names {len(indices)} signers but {len(signatures)} signatures were supplied",
            details={"bitmapCount": len(indices), "signatureCount": len(signatures)},
        )
    if len(signatures) < identity.threshold:
        raise InsufficientSignaturesError(len(signatures), identity.threshold)

    pairs = []
    for index, (scheme, signature) in zip(indices, signatures):
        member = identity.members[index]
        if member.scheme != scheme:
            raise AuthenticatorMismatchError(
                f"Signature {index} is {scheme.name} but member key is {member.scheme.name}",
                details={"index": index},
            )
        pairs.append(IndexedSignature(index, scheme, signature))
    return tuple(pairs)


def parse_signer_identity(mode: SignerMode, public_key_bytes: bytes) -> SignerIdentity:
    """
    Parse the sender's public key for the given mode.

    Args:
        mode: Single-key or threshold
        public_key_bytes: Raw or BCS Ed25519 key, or BCS MultiKey

    Returns:
        SingleKey or ThresholdKey
    """
    if mode == SignerMode.SINGLE:
        key = _unwrap_fixed(public_key_bytes, ED25519_PUBLIC_KEY_LENGTH, "Ed25519 public key")
        _load_ed25519_key(key)
        return SingleKey(key)
    if mode == SignerMode.THRESHOLD:
        return _parse_threshold_key(public_key_bytes)
    raise AuthenticationError(f"Unknown signer mode: {mode}")


class AuthenticationBuilder:
    """
    Builds authenticators from hex-decoded key and signature bytes.
    """

    @staticmethod
    def build(mode: SignerMode, public_key_bytes: bytes, signature_bytes: bytes) -> Authenticator:
        """
        Build an authenticator.

        Args:
            mode: Single-key or threshold
            public_key_bytes: Sender public key bytes
            signature_bytes: Signature bytes

        Returns:
            SingleKeyAuth for single mode, ThresholdKeyAuth for threshold mode

        Raises:
            AuthenticatorLengthMismatchError: On wrongly sized keys or signatures
            ThresholdIndexOutOfRangeError: If a signature names a missing member
            InsufficientSignaturesError: If fewer signatures than the threshold
        """
        identity = parse_signer_identity(mode, public_key_bytes)
        return AuthenticationBuilder.for_identity(identity, signature_bytes)

    @staticmethod
    def for_identity(identity: SignerIdentity, signature_bytes: bytes) -> Authenticator:
        """Build an authenticator for an already parsed identity."""
        if isinstance(identity, SingleKey):
            signature = _unwrap_fixed(signature_bytes, ED25519_SIGNATURE_LENGTH, "Ed25519 signature")
            logger.debug("Built single-key authenticator")
            return SingleKeyAuth(identity, signature)
        if isinstance(identity, ThresholdKey):
            signatures = _parse_threshold_signature(signature_bytes, identity)
            logger.debug(
                f"Built {len(signatures)}-of-{len(identity.members)} threshold authenticator "
                f"(threshold {identity.threshold}, indices {[s.index for s in signatures]})"
            )
            return ThresholdKeyAuth(identity, signatures)
        raise AuthenticationError(f"Unknown signer identity: {type(identity).__name__}")


def authenticator_matches(identity: SignerIdentity, authenticator: Authenticator) -> bool:
    """True if the authenticator was built for this signer identity."""
    if isinstance(authenticator, SingleKeyAuth):
        return isinstance(identity, SingleKey) and authenticator.public_key == identity
    if isinstance(authenticator, ThresholdKeyAuth):
        return isinstance(identity, ThresholdKey) and authenticator.public_key == identity
    return False


def describe_identity(identity: Optional[SignerIdentity]) -> str:
    if isinstance(identity, SingleKey):
        return f"single-key 0x{identity.public_key.hex()}"
    if isinstance(identity, ThresholdKey):
        return f"{identity.threshold}-of-{len(identity.members)} multi-key"
    return "unknown signer"
