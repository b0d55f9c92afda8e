"""
Argument decoder registry.

Maps an entry function name to the ordered list of decoders for its
arguments. Functions without an entry fall back to hex passthrough, so new
functions are supported by registering decoders, never by changing the
transaction codec.
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

from .arguments import (
    ArgumentDecoder,
    decode_address,
    decode_bytes_hex,
    decode_nested_bytes_hex,
    passthrough_hex,
)
from ..runtime.errors import ArgumentCountMismatchError

logger = logging.getLogger(__name__)


# Function name -> argument decoders, in parameter order.
DEFAULT_ARGUMENT_DECODERS: Dict[str, List[ArgumentDecoder]] = {
    # aptos_extensions::upgradable::upgrade_package
    "upgradePackage": [
        decode_address,  # resource_acct: address
        decode_bytes_hex,  # metadata_serialized: vector<u8>
        decode_nested_bytes_hex,  # code: vector<vector<u8>>
    ],
}


class ArgumentDecoderRegistry:
    """
    Lookup table from function name to argument decoders.
    """

    def __init__(self, decoders: Optional[Mapping[str, Sequence[ArgumentDecoder]]] = None):
        """
        Initialize the registry.

        Args:
            decoders: Initial function name -> decoder list mapping
        """
        self._decoders: Dict[str, List[ArgumentDecoder]] = {}
        for name, function_decoders in (decoders or {}).items():
            self.register(name, function_decoders)

    def register(self, function_name: str, decoders: Sequence[ArgumentDecoder]) -> None:
        """
        Register (or replace) the decoders for a function.

        Args:
            function_name: Function name used as the lookup key
            decoders: One decoder per argument, in parameter order
        """
        self._decoders[function_name] = list(decoders)

    def lookup(self, function_name: Optional[str]) -> Optional[List[ArgumentDecoder]]:
        """Get the decoders registered for a function, or None."""
        if function_name is None:
            return None
        decoders = self._decoders.get(function_name)
        return list(decoders) if decoders is not None else None

    def is_registered(self, function_name: Optional[str]) -> bool:
        return function_name is not None and function_name in self._decoders

    def function_names(self) -> List[str]:
        return list(self._decoders.keys())

    def decode(self, function_name: Optional[str], raw_args: Sequence[bytes]) -> List[Any]:
        """
        Decode raw entry function arguments.

        Args:
            function_name: Registered function name, or None to skip decoding
            raw_args: Raw BCS bytes of each argument, in order

        Returns:
            One decoded value per argument, in order. Unregistered functions
            yield each argument as a ``0x`` hex string.

        Raises:
            ArgumentCountMismatchError: If the registered decoder count differs
                from the number of arguments
        """
        decoders = self.lookup(function_name)
        if decoders is None:
            return [passthrough_hex(arg) for arg in raw_args]

        if len(decoders) != len(raw_args):
            raise ArgumentCountMismatchError(function_name, len(decoders), len(raw_args))

        logger.debug(f"Decoding {len(raw_args)} arguments for {function_name}")
        return [decoder(arg) for decoder, arg in zip(decoders, raw_args)]


def default_registry() -> ArgumentDecoderRegistry:
    """Create a registry populated with the built-in decoders."""
    return ArgumentDecoderRegistry(DEFAULT_ARGUMENT_DECODERS)


__all__ = [
    "ArgumentDecoderRegistry",
    "DEFAULT_ARGUMENT_DECODERS",
    "default_registry",
]
