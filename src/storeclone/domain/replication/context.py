"""State shared by the reconcilers of one replication run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import ReplicationCancelledError
from .identity import ReplicationIdentity
from .progress import log_progress
from .report import ReplicationReport

if TYPE_CHECKING:
    from storeclone.domain.ports import TargetStore

    from .progress import CancelSignal, ProgressSink


@dataclass(slots=True)
class ReplicationContext:
    store: TargetStore
    progress: ProgressSink = log_progress
    cancel_event: CancelSignal | None = None
    identity: ReplicationIdentity = field(default_factory=ReplicationIdentity)
    report: ReplicationReport = field(default_factory=ReplicationReport)

    def checkpoint(self, stage: str) -> None:
        """Raise ``ReplicationCancelledError`` when cancellation was requested."""

        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ReplicationCancelledError(stage)
