"""
Execution outcome models.

SimulationResult is produced by a dry run and never reaches the chain;
CommittedResult is only available once the network has confirmed the
transaction's inclusion.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator


class _OutcomeBase(BaseModel):
    success: bool = Field(description="Whether the VM executed the transaction successfully")
    vm_status: str = Field(default="", alias="vmStatus", description="VM status message")
    gas_used: int = Field(default=0, alias="gasUsed", ge=0, description="Gas units consumed")

    model_config = {"populate_by_name": True}

    @field_validator('gas_used', mode='before')
    @classmethod
    def parse_gas_used(cls, v: Any) -> int:
        """Node APIs report u64 values as decimal strings."""
        if isinstance(v, str):
            return int(v)
        return v


class SimulationResult(_OutcomeBase):
    """
    Outcome of a read-only simulation.
    """
    hash: Optional[str] = Field(default=None, description="Hash the transaction would have")
    changes: List[Dict[str, Any]] = Field(default_factory=list, description="Simulated state changes")

    def describe(self) -> str:
        status = "succeeded" if self.success else "failed"
        return f"Simulation {status}: gas used {self.gas_used}, vm status '{self.vm_status}'"


class CommittedResult(_OutcomeBase):
    """
    Outcome of a transaction the network has included on-chain.
    """
    hash: str = Field(description="Transaction hash")
    version: Optional[int] = Field(default=None, ge=0, description="Ledger version of inclusion")
    changes: List[Dict[str, Any]] = Field(default_factory=list, description="Observed on-chain state changes")

    @field_validator('version', mode='before')
    @classmethod
    def parse_version(cls, v: Any) -> Optional[int]:
        if isinstance(v, str):
            return int(v)
        return v

    def describe(self) -> str:
        status = "committed" if self.success else "aborted on-chain"
        return (
            f"Transaction {self.hash} {status} at version {self.version}: "
            f"gas used {self.gas_used}, vm status '{self.vm_status}'"
        )


class SubmitResponse(BaseModel):
    """Acknowledgement of a submitted, not yet included, transaction."""
    hash: str = Field(description="Transaction hash")

    model_config = {"populate_by_name": True}


ExecutionOutcome = Union[SimulationResult, CommittedResult]


__all__ = [
    "SimulationResult",
    "CommittedResult",
    "SubmitResponse",
    "ExecutionOutcome",
]
