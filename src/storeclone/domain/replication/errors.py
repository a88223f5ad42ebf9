"""Errors raised by the replication engine itself."""

from __future__ import annotations


class ReplicationError(RuntimeError):
    """Base class for replication failures that are not transport errors."""


class ReplicationCancelledError(ReplicationError):
    """Raised at the next entity boundary once cancellation was requested."""

    def __init__(self, stage: str) -> None:
        self.stage = stage
        super().__init__(f"Replication cancelled during {stage}")
