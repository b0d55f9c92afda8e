"""
Hex-level entry point for executing a transaction.
"""

from __future__ import annotations
from typing import Optional

from ..codec.hexutil import decode_hex
from ..config import ToolConfig
from .engine import ExecutionEngine, NetworkClient
from .models import ExecutionOutcome


async def execute_transaction(client: NetworkClient, tx_bytes: str, public_key: str,
                              signature: Optional[str] = None, *, multi_sig: bool = False,
                              dry_run: bool = False, timeout: Optional[float] = None,
                              config: Optional[ToolConfig] = None) -> ExecutionOutcome:
    """
    Simulate or submit a hex-encoded transaction.

    Args:
        client: Network client
        tx_bytes: Hex-encoded BCS transaction envelope
        public_key: Hex-encoded sender public key; a BCS MultiKey when multi_sig is set
        signature: Hex-encoded signature; a BCS MultiKeySignature when multi_sig is set.
            Required unless dry_run is set.
        multi_sig: Sender is a threshold multi-key account
        dry_run: Simulate only
        timeout: Per-request timeout passed to the client; defaults to config.timeout
        config: Tool configuration

    Returns:
        SimulationResult or CommittedResult
    """
    config = config or ToolConfig()
    if timeout is None:
        timeout = config.timeout

    engine = ExecutionEngine(client)
    return await engine.execute(
        decode_hex(tx_bytes),
        decode_hex(public_key),
        decode_hex(signature) if signature is not None else None,
        multi_sig=multi_sig,
        dry_run=dry_run,
        timeout=timeout,
    )
