"""Execution engine: the live pool that enforces the concurrency ceiling."""

from convsync.engine.pool import TaskPool
from convsync.engine.protocols import ErrorSimulatingEngine, ExecutionEngine, MockEngine

__all__ = [
    "ErrorSimulatingEngine",
    "ExecutionEngine",
    "MockEngine",
    "TaskPool",
]
