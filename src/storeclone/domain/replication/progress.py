"""Progress reporting and cooperative cancellation hooks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

type ProgressSink = Callable[[str], None]

PROGRESS_LOGGER_NAME = "storeclone.progress"
progress_log = logging.getLogger(PROGRESS_LOGGER_NAME)


def log_progress(message: str) -> None:
    """Default sink: forward progress messages to the progress logger."""

    progress_log.info(message)


class CancelSignal(Protocol):
    """Anything with ``is_set``, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...
