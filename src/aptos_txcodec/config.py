"""
Configuration for decode and execute calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging

from .decoders.registry import ArgumentDecoderRegistry, default_registry

PACKAGE_LOGGER = "aptos_txcodec"


@dataclass
class ToolConfig:
    """Configuration shared by decode_transaction and execute_transaction."""

    output_root: Path = field(default_factory=Path.cwd)
    timeout: Optional[float] = None
    debug: bool = False
    indent: int = 2
    registry: ArgumentDecoderRegistry = field(default_factory=default_registry)

    def __post_init__(self):
        self.output_root = Path(self.output_root)
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.debug:
            logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    def resolve_output(self, output: Union[str, Path]) -> Path:
        """Resolve an output path against output_root; absolute paths are kept."""
        path = Path(output)
        if path.is_absolute():
            return path
        return self.output_root / path
