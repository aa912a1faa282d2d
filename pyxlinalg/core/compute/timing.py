"""
Timing of provider calls.

A two-phase LAPACK call is timed per phase, the workspace query and the
computation, so that callers can see how much of a call the negotiation
costs. Single-phase calls only report the compute phase.
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

QUERY_PHASE = 'workspace_query'
COMPUTE_PHASE = 'compute'


class CallTimer:
    """
    Wall-clock timer for one provider call.

    Usage:
        with CallTimer('dgesdd') as timer:
            with timer.phase(QUERY_PHASE):
                sizes = negotiate(routine, call, work)
            with timer.phase(COMPUTE_PHASE):
                info = call()
        timer.timing
        # {'total_seconds': 0.05, 'workspace_query': 0.001, 'compute': 0.049}

    A phase entered more than once accumulates.
    """

    def __init__(self, routine: str) -> None:
        self.routine = routine
        self._phases: dict[str, float] = {}
        self._started: float | None = None
        self._total: float | None = None

    def __enter__(self) -> 'CallTimer':
        self._started = time.perf_counter()
        self._total = None
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._started is None:
            raise RuntimeError(f"{self.routine}: timer exited without being entered")
        self._total = time.perf_counter() - self._started
        logger.debug("%s: %.6fs (%s)", self.routine, self._total,
                     ', '.join(f"{k}={v:.6f}s" for k, v in self._phases.items()))

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        if self._started is None:
            raise RuntimeError(f"{self.routine}: phase {name!r} timed outside the call")
        start = time.perf_counter()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + time.perf_counter() - start

    @property
    def timing(self) -> dict[str, float]:
        """
        Seconds per phase plus 'total_seconds'.

        Raises:
            RuntimeError: While the call is still being timed
        """
        if self._total is None:
            raise RuntimeError(f"{self.routine}: timing read before the call finished")
        return {'total_seconds': self._total, **self._phases}
