"""Entry function argument decoding"""

from .registry import ArgumentDecoderRegistry, DEFAULT_ARGUMENT_DECODERS, default_registry
from .arguments import (
    ArgumentDecoder,
    decode_address,
    decode_address_vector,
    decode_bool,
    decode_bytes_hex,
    decode_nested_bytes_hex,
    decode_string,
    decode_u8,
    decode_u64,
    passthrough_hex,
)

__all__ = [
    "ArgumentDecoderRegistry",
    "DEFAULT_ARGUMENT_DECODERS",
    "default_registry",
    "ArgumentDecoder",
    "decode_address",
    "decode_address_vector",
    "decode_bool",
    "decode_bytes_hex",
    "decode_nested_bytes_hex",
    "decode_string",
    "decode_u8",
    "decode_u64",
    "passthrough_hex",
]
