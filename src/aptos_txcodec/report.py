"""
Decode a serialized transaction into a human-readable JSON report.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from .codec.hexutil import decode_hex
from .codec.transaction_codec import TransactionCodec
from .config import ToolConfig

logger = logging.getLogger(__name__)


def build_report(tx_bytes: bytes, function_name: Optional[str] = None,
                 config: Optional[ToolConfig] = None) -> Dict[str, Any]:
    """
    Decode transaction bytes and their arguments into a report dictionary.

    Args:
        tx_bytes: BCS transaction envelope
        function_name: Registered function name used to pick argument decoders
        config: Tool configuration (registry, formatting)

    Returns:
        Report dictionary
    """
    config = config or ToolConfig()
    transaction = TransactionCodec.decode(tx_bytes)

    if not config.registry.is_registered(function_name):
        logger.warning(
            "NOTE: Argument decoding is either disabled or is unsupported for the entry "
            "function called. The decoded transaction will return the arguments as their "
            "raw BCS-serialized bytes."
        )
    args = config.registry.decode(function_name, transaction.payload.args)
    return TransactionCodec.to_report(transaction, args)


def write_report(report: Dict[str, Any], path: Path, indent: int = 2) -> None:
    """
    Write the report as JSON, creating parent directories.

    The report is serialized before the file is opened, so a value that
    cannot be encoded leaves any existing file untouched.
    """
    text = json.dumps(report, indent=indent)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def decode_transaction(tx_bytes: str, output: Union[str, Path], function_name: Optional[str] = None,
                       config: Optional[ToolConfig] = None) -> Dict[str, Any]:
    """
    Decode a hex-encoded transaction and save the report to a file.

    Nothing is written if decoding fails.

    Args:
        tx_bytes: Hex-encoded BCS transaction envelope
        output: Output file path, relative to config.output_root
        function_name: Function name for argument decoding, e.g. ``upgradePackage``
        config: Tool configuration

    Returns:
        The report that was written
    """
    config = config or ToolConfig()
    report = build_report(decode_hex(tx_bytes), function_name, config)

    output_path = config.resolve_output(output)
    write_report(report, output_path, config.indent)
    logger.info(f"Transaction successfully decoded and saved to: '{output_path}'")
    return report
