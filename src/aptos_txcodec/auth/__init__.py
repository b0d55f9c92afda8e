"""Signer identities and account authenticators"""

from .authenticator import (
    AuthenticationBuilder,
    Authenticator,
    IndexedSignature,
    KeyScheme,
    MemberKey,
    SignerIdentity,
    SignerMode,
    SingleKey,
    SingleKeyAuth,
    ThresholdKey,
    ThresholdKeyAuth,
    authenticator_matches,
    encode_threshold_signature,
    parse_signer_identity,
)

__all__ = [
    "AuthenticationBuilder",
    "Authenticator",
    "IndexedSignature",
    "KeyScheme",
    "MemberKey",
    "SignerIdentity",
    "SignerMode",
    "SingleKey",
    "SingleKeyAuth",
    "ThresholdKey",
    "ThresholdKeyAuth",
    "authenticator_matches",
    "encode_threshold_signature",
    "parse_signer_identity",
]
