import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

logger = structlog.get_logger()


def configure_logging(level: str = "info") -> None:
    """
    Emit log events at or above the given level name to stderr, keeping
    stdout free for command output.
    """
    levels = logging.getLevelNamesMapping()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            levels.get(level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


@contextmanager
def timed(name: str, **kwargs: Any) -> Iterator[None]:
    t = time.monotonic()
    try:
        yield
    finally:
        elapsed_ms = round((time.monotonic() - t) * 1000, 2)
        logger.debug(name, elapsed_ms=elapsed_ms, **kwargs)
