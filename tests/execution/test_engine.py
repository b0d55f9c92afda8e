"""
Test the execution engine against a recording mock network client.

Verifies dry-run vs commit routing, signature requirements, call counts,
timeout passthrough and state transitions on failure.
"""

import asyncio
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import MockNetworkClient, MultiKeyAccount, mk_ed25519_keypair

from aptos_txcodec.auth import SingleKey, SingleKeyAuth, ThresholdKey, ThresholdKeyAuth
from aptos_txcodec.execution import (
    CommittedResult,
    ExecutionEngine,
    ExecutionState,
    SimulationResult,
    execute_transaction,
)
from aptos_txcodec.config import ToolConfig
from aptos_txcodec.runtime.errors import (
    AuthenticatorLengthMismatchError,
    InsufficientSignaturesError,
    InvalidHexError,
    MissingSignatureError,
    NetworkFailure,
    UnsupportedPayloadTypeError,
)


class TestDryRun:
    """Simulation never submits"""

    def test_dry_run_without_signature(self, upgrade_tx, ed25519_keypair, mock_client):
        _, public_key = ed25519_keypair
        engine = ExecutionEngine(mock_client)

        outcome = asyncio.run(engine.execute(upgrade_tx["tx_bytes"], public_key, dry_run=True))

        assert isinstance(outcome, SimulationResult)
        assert outcome.success
        assert outcome.gas_used == 12
        assert mock_client.method_names() == ["simulate"]

    def test_dry_run_ignores_signature(self, upgrade_tx, ed25519_keypair, mock_client):
        private_key, public_key = ed25519_keypair
        signature = private_key.sign(upgrade_tx["raw_transaction"])
        engine = ExecutionEngine(mock_client)

        asyncio.run(engine.execute(upgrade_tx["tx_bytes"], public_key, signature, dry_run=True))

        assert mock_client.method_names() == ["simulate"]

    def test_simulation_receives_decoded_transaction(self, upgrade_tx, ed25519_keypair, mock_client):
        _, public_key = ed25519_keypair
        engine = ExecutionEngine(mock_client)

        asyncio.run(engine.execute(upgrade_tx["tx_bytes"], public_key, dry_run=True))

        _, kwargs = mock_client.calls[0]
        assert kwargs["transaction"].header.sender == upgrade_tx["sender"]
        assert kwargs["identity"] == SingleKey(public_key)

    def test_failed_simulation_is_reported_not_raised(self, upgrade_tx, ed25519_keypair):
        _, public_key = ed25519_keypair
        client = MockNetworkClient(success=False)
        engine = ExecutionEngine(client)

        outcome = asyncio.run(engine.execute(upgrade_tx["tx_bytes"], public_key, dry_run=True))

        assert isinstance(outcome, SimulationResult)
        assert not outcome.success

    def test_multi_sig_dry_run(self, upgrade_tx, mock_client):
        account = MultiKeyAccount(threshold=2, member_count=3)
        engine = ExecutionEngine(mock_client)

        outcome = asyncio.run(
            engine.execute(upgrade_tx["tx_bytes"], account.public_key_bytes, multi_sig=True, dry_run=True)
        )

        assert isinstance(outcome, SimulationResult)
        _, kwargs = mock_client.calls[0]
        assert isinstance(kwargs["identity"], ThresholdKey)
        assert kwargs["identity"].threshold == 2


class TestCommit:
    """Signed submission followed by inclusion"""

    def test_commit_requires_signature(self, upgrade_tx, ed25519_keypair, mock_client):
        _, public_key = ed25519_keypair
        engine = ExecutionEngine(mock_client)
        execution = engine.prepare(upgrade_tx["tx_bytes"], public_key)

        with pytest.raises(MissingSignatureError):
            asyncio.run(engine.run(execution))

        assert mock_client.calls == []
        assert execution.state == ExecutionState.FAILED

    def test_commit_submits_then_waits_once(self, upgrade_tx, ed25519_keypair, mock_client):
        private_key, public_key = ed25519_keypair
        signature = private_key.sign(upgrade_tx["raw_transaction"])
        engine = ExecutionEngine(mock_client)

        outcome = asyncio.run(engine.execute(upgrade_tx["tx_bytes"], public_key, signature))

        assert isinstance(outcome, CommittedResult)
        assert outcome.version == 1234
        assert mock_client.method_names() == ["submit", "wait_for_inclusion"]

        _, submit_kwargs = mock_client.calls[0]
        _, wait_kwargs = mock_client.calls[1]
        assert isinstance(submit_kwargs["authenticator"], SingleKeyAuth)
        assert submit_kwargs["authenticator"].signature == signature
        assert wait_kwargs["tx_hash"] == "0x" + "ab" * 32
        assert outcome.hash == wait_kwargs["tx_hash"]

    def test_authenticator_is_built_for_sender_identity(self, upgrade_tx, ed25519_keypair, mock_client):
        private_key, public_key = ed25519_keypair
        engine = ExecutionEngine(mock_client)
        execution = engine.prepare(upgrade_tx["tx_bytes"], public_key, private_key.sign(b"tx"))

        asyncio.run(engine.run(execution))

        assert execution.authenticator.public_key == execution.identity
        assert mock_client.calls[0][1]["authenticator"] is execution.authenticator

    def test_on_chain_failure_is_reported_not_raised(self, upgrade_tx, ed25519_keypair):
        private_key, public_key = ed25519_keypair
        client = MockNetworkClient(success=False)
        engine = ExecutionEngine(client)

        outcome = asyncio.run(
            engine.execute(upgrade_tx["tx_bytes"], public_key, private_key.sign(b"tx"))
        )

        assert isinstance(outcome, CommittedResult)
        assert not outcome.success
        assert outcome.vm_status == "Move abort"

    def test_multi_sig_commit(self, upgrade_tx, mock_client):
        account = MultiKeyAccount(threshold=2, member_count=3)
        signature = account.sign(upgrade_tx["raw_transaction"], [0, 2])
        engine = ExecutionEngine(mock_client)

        execution = engine.prepare(
            upgrade_tx["tx_bytes"], account.public_key_bytes, signature, multi_sig=True
        )
        outcome = asyncio.run(engine.run(execution))

        assert isinstance(outcome, CommittedResult)
        assert execution.state == ExecutionState.DONE
        assert execution.outcome is outcome
        assert isinstance(execution.authenticator, ThresholdKeyAuth)
        assert execution.authenticator.indices == [0, 2]
        assert mock_client.method_names() == ["submit", "wait_for_inclusion"]

    def test_multi_sig_below_threshold_never_submits(self, upgrade_tx, mock_client):
        account = MultiKeyAccount(threshold=2, member_count=3)
        signature = account.sign(upgrade_tx["raw_transaction"], [1])
        engine = ExecutionEngine(mock_client)

        with pytest.raises(InsufficientSignaturesError):
            asyncio.run(engine.execute(
                upgrade_tx["tx_bytes"], account.public_key_bytes, signature, multi_sig=True
            ))
        assert mock_client.calls == []

    def test_bad_signature_length_never_submits(self, upgrade_tx, ed25519_keypair, mock_client):
        _, public_key = ed25519_keypair
        engine = ExecutionEngine(mock_client)

        with pytest.raises(AuthenticatorLengthMismatchError):
            asyncio.run(engine.execute(upgrade_tx["tx_bytes"], public_key, b"\x01" * 10))
        assert mock_client.calls == []


class TestLifecycle:
    """State transitions, timeouts and error propagation"""

    def test_prepare_leaves_execution_built(self, upgrade_tx, ed25519_keypair, mock_client):
        _, public_key = ed25519_keypair
        execution = ExecutionEngine(mock_client).prepare(upgrade_tx["tx_bytes"], public_key, dry_run=True)

        assert execution.state == ExecutionState.BUILT
        assert execution.outcome is None
        assert mock_client.calls == []

    def test_execution_runs_once(self, upgrade_tx, ed25519_keypair, mock_client):
        _, public_key = ed25519_keypair
        engine = ExecutionEngine(mock_client)
        execution = engine.prepare(upgrade_tx["tx_bytes"], public_key, dry_run=True)

        asyncio.run(engine.run(execution))
        with pytest.raises(ValueError, match="already done"):
            asyncio.run(engine.run(execution))
        assert mock_client.method_names() == ["simulate"]

    def test_timeout_is_passed_to_every_call(self, upgrade_tx, ed25519_keypair, mock_client):
        private_key, public_key = ed25519_keypair
        engine = ExecutionEngine(mock_client)

        asyncio.run(engine.execute(upgrade_tx["tx_bytes"], public_key, private_key.sign(b"tx"), timeout=7.5))

        assert [kwargs["timeout"] for _, kwargs in mock_client.calls] == [7.5, 7.5]

    def test_network_failure_propagates(self, upgrade_tx, ed25519_keypair):
        private_key, public_key = ed25519_keypair
        failure = NetworkFailure("connection reset")
        client = MockNetworkClient(fail_with=failure, fail_on="wait_for_inclusion")
        engine = ExecutionEngine(client)
        execution = engine.prepare(upgrade_tx["tx_bytes"], public_key, private_key.sign(b"tx"))

        with pytest.raises(NetworkFailure) as exc_info:
            asyncio.run(engine.run(execution))

        assert exc_info.value is failure
        assert execution.state == ExecutionState.FAILED
        assert client.method_names() == ["submit", "wait_for_inclusion"]

    def test_client_exceptions_are_not_wrapped(self, upgrade_tx, ed25519_keypair):
        _, public_key = ed25519_keypair
        client = MockNetworkClient(fail_with=asyncio.TimeoutError(), fail_on="simulate")
        engine = ExecutionEngine(client)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(engine.execute(upgrade_tx["tx_bytes"], public_key, dry_run=True))

    def test_unsupported_payload_fails_before_network(self, ed25519_keypair, mock_client):
        from helpers import mk_address, mk_raw_transaction, mk_transaction

        _, public_key = ed25519_keypair
        raw = mk_raw_transaction(
            mk_address(), module_address=mk_address(1), module_name="m", function_name="f",
            args=[], payload_variant=0,
        )
        with pytest.raises(UnsupportedPayloadTypeError):
            ExecutionEngine(mock_client).prepare(mk_transaction(raw), public_key, dry_run=True)
        assert mock_client.calls == []


class TestExecuteTransaction:
    """Hex entry point"""

    def test_hex_dry_run(self, upgrade_tx, mock_client):
        _, public_key = mk_ed25519_keypair(seed=42)

        outcome = asyncio.run(execute_transaction(
            mock_client, "0x" + upgrade_tx["tx_bytes"].hex(), public_key.hex(), dry_run=True
        ))

        assert isinstance(outcome, SimulationResult)
        assert mock_client.method_names() == ["simulate"]

    def test_hex_commit_uses_config_timeout(self, upgrade_tx, mock_client):
        private_key, public_key = mk_ed25519_keypair(seed=42)
        signature = private_key.sign(upgrade_tx["raw_transaction"])

        outcome = asyncio.run(execute_transaction(
            mock_client,
            upgrade_tx["tx_bytes"].hex(),
            "0x" + public_key.hex(),
            signature.hex(),
            config=ToolConfig(timeout=30),
        ))

        assert isinstance(outcome, CommittedResult)
        assert [kwargs["timeout"] for _, kwargs in mock_client.calls] == [30, 30]

    def test_explicit_timeout_wins_over_config(self, upgrade_tx, mock_client):
        _, public_key = mk_ed25519_keypair(seed=42)

        asyncio.run(execute_transaction(
            mock_client, upgrade_tx["tx_bytes"].hex(), public_key.hex(),
            dry_run=True, timeout=3, config=ToolConfig(timeout=30),
        ))

        assert mock_client.calls[0][1]["timeout"] == 3

    def test_invalid_hex(self, mock_client):
        with pytest.raises(InvalidHexError):
            asyncio.run(execute_transaction(mock_client, "0xzz", "00" * 32, dry_run=True))
        assert mock_client.calls == []
