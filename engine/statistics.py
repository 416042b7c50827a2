"""Lightweight counters for one search run."""

import logging
import time

_log = logging.getLogger(__name__)


class Statistics:
    """
    Count positions considered and time a single search run.

    Created at the start of a search and stopped at its end; nothing here
    outlives the run.
    """

    def __init__(self) -> None:
        self.iterations: int = 0
        self.start_time: float = time.monotonic()

    def increment(self) -> None:
        self.iterations += 1

    def elapsed(self) -> float:
        return time.monotonic() - self.start_time

    def stop(self) -> float:
        """Log a summary line and return the elapsed seconds."""
        elapsed = self.elapsed()
        _log.info(
            "Run finished. Considered %d positions in %.3f seconds",
            self.iterations,
            elapsed,
        )
        return elapsed
