"""
Transaction execution engine.

Runs a serialized transaction either as a read-only simulation or as a
signed submission that waits for on-chain inclusion. The network client is
supplied by the caller; this module never retries, deduplicates or imposes
deadlines of its own. A caller-supplied timeout is handed to the client on
every round trip.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol
import logging

from ..auth.authenticator import (
    AuthenticationBuilder,
    Authenticator,
    SignerIdentity,
    SignerMode,
    describe_identity,
    parse_signer_identity,
)
from ..codec.transaction_codec import Transaction, TransactionCodec
from ..runtime.errors import MissingSignatureError
from .models import CommittedResult, ExecutionOutcome, SimulationResult, SubmitResponse

logger = logging.getLogger(__name__)


class NetworkClient(Protocol):
    """
    Network operations consumed by the engine.

    Implementations raise NetworkFailure (or their own exceptions) on
    transport or API errors; the engine lets them propagate unchanged.
    """

    async def simulate(self, transaction: Transaction, identity: SignerIdentity, *,
                       timeout: Optional[float] = None) -> SimulationResult:
        ...

    async def submit(self, transaction: Transaction, authenticator: Authenticator, *,
                     timeout: Optional[float] = None) -> SubmitResponse:
        ...

    async def wait_for_inclusion(self, tx_hash: str, *,
                                 timeout: Optional[float] = None) -> CommittedResult:
        ...


class ExecutionState(Enum):
    """Lifecycle of a single execution."""

    BUILT = "built"
    SIMULATING = "simulating"
    SUBMITTING = "submitting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class Execution:
    """
    One prepared execution request and its progress.

    Created per call by ExecutionEngine.prepare and never shared.
    """

    transaction: Transaction
    identity: SignerIdentity
    signature: Optional[bytes]
    dry_run: bool
    state: ExecutionState = ExecutionState.BUILT
    authenticator: Optional[Authenticator] = None
    outcome: Optional[ExecutionOutcome] = None


class ExecutionEngine:
    """
    Simulates or submits transactions through a NetworkClient.
    """

    def __init__(self, client: NetworkClient):
        """
        Initialize the engine.

        Args:
            client: Network client used for every round trip
        """
        self.client = client

    def prepare(self, tx_bytes: bytes, public_key: bytes, signature: Optional[bytes] = None, *,
                multi_sig: bool = False, dry_run: bool = False) -> Execution:
        """
        Decode the transaction and the sender's public key.

        Args:
            tx_bytes: BCS transaction envelope
            public_key: Sender public key (BCS MultiKey when multi_sig is set)
            signature: Sender signature; required unless dry_run is set
            multi_sig: Sender is a threshold multi-key account
            dry_run: Simulate instead of submitting

        Returns:
            Execution in the BUILT state
        """
        transaction = TransactionCodec.decode(tx_bytes)
        identity = parse_signer_identity(SignerMode.from_flag(multi_sig), public_key)
        return Execution(
            transaction=transaction,
            identity=identity,
            signature=signature,
            dry_run=dry_run,
        )

    async def run(self, execution: Execution, *, timeout: Optional[float] = None) -> ExecutionOutcome:
        """
        Run a prepared execution.

        Args:
            execution: Execution in the BUILT state
            timeout: Per-request timeout passed through to the client

        Returns:
            SimulationResult for dry runs, CommittedResult otherwise

        Raises:
            MissingSignatureError: If committing without a signature
            AuthenticationError: If the signature cannot be parsed
        """
        if execution.state != ExecutionState.BUILT:
            raise ValueError(f"Execution already {execution.state.value}")

        try:
            if execution.dry_run:
                outcome = await self._simulate(execution, timeout)
            else:
                outcome = await self._commit(execution, timeout)
        except BaseException:
            execution.state = ExecutionState.FAILED
            raise

        execution.outcome = outcome
        execution.state = ExecutionState.DONE
        logger.info(outcome.describe())
        logger.debug(outcome.model_dump_json(by_alias=True, indent=2))
        return outcome

    async def execute(self, tx_bytes: bytes, public_key: bytes, signature: Optional[bytes] = None, *,
                      multi_sig: bool = False, dry_run: bool = False,
                      timeout: Optional[float] = None) -> ExecutionOutcome:
        """Prepare and run in one call."""
        execution = self.prepare(tx_bytes, public_key, signature, multi_sig=multi_sig, dry_run=dry_run)
        return await self.run(execution, timeout=timeout)

    async def _simulate(self, execution: Execution, timeout: Optional[float]) -> SimulationResult:
        logger.info("Dry running transaction...")
        execution.state = ExecutionState.SIMULATING
        logger.debug(f"Simulating as {describe_identity(execution.identity)}")
        return await self.client.simulate(execution.transaction, execution.identity, timeout=timeout)

    async def _commit(self, execution: Execution, timeout: Optional[float]) -> CommittedResult:
        logger.info("Executing transaction...")
        if execution.signature is None:
            raise MissingSignatureError()

        authenticator = AuthenticationBuilder.for_identity(execution.identity, execution.signature)
        execution.authenticator = authenticator

        execution.state = ExecutionState.SUBMITTING
        pending = await self.client.submit(execution.transaction, authenticator, timeout=timeout)
        logger.info(f"Submitted transaction {pending.hash}, waiting for inclusion...")
        return await self.client.wait_for_inclusion(pending.hash, timeout=timeout)


__all__ = [
    "NetworkClient",
    "ExecutionState",
    "Execution",
    "ExecutionEngine",
]
