"""Application services"""

from .orchestrator import (
    OrchestratorState,
    RequestOrchestrator,
    is_stale_session,
)

__all__ = ["OrchestratorState", "RequestOrchestrator", "is_stale_session"]
