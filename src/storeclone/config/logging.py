"""Console logging for replication runs."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
# httpx logs every request at INFO, query string included, which carries the
# consumer secret on /wc/ routes.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    Transport loggers stay at WARNING unless ``level`` is DEBUG. Pass
    ``force=True`` to replace handlers installed earlier.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
