"""Transaction simulation and submission"""

from .engine import Execution, ExecutionEngine, ExecutionState, NetworkClient
from .models import CommittedResult, ExecutionOutcome, SimulationResult, SubmitResponse
from .execute import execute_transaction

__all__ = [
    "Execution",
    "ExecutionEngine",
    "ExecutionState",
    "NetworkClient",
    "CommittedResult",
    "ExecutionOutcome",
    "SimulationResult",
    "SubmitResponse",
    "execute_transaction",
]
