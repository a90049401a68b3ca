"""Agent persistence and interaction pipeline."""

from .pipeline import AgentPipeline, ProgressUpdate
from .store import AgentNotFoundError, AgentStore, StaleRecordError

__all__ = [
    "AgentNotFoundError",
    "AgentPipeline",
    "AgentStore",
    "ProgressUpdate",
    "StaleRecordError",
]
