"""
Job status polling

One loop shared by image and video jobs. Callers pass the single-fetch
function for the job type; the loop only decides when to stop.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional, TypeVar

from .errors import PollCancelledError, PollTimeoutError
from .schemas import is_terminal

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _snapshot_done(snapshot: Any) -> bool:
    return is_terminal(getattr(snapshot, "status", None))


def poll_until_done(
    fetch: Callable[[str], T],
    job_id: str,
    *,
    interval: float,
    timeout: float,
    is_done: Callable[[T], bool] = _snapshot_done,
    cancel_event: Optional[threading.Event] = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Any] = time.sleep,
) -> T:
    """
    Poll a job until it reaches a terminal status or the timeout elapses

    Args:
        fetch: Performs exactly one status query for a job id
        job_id: Opaque job identifier
        interval: Seconds to wait between status checks (> 0)
        timeout: Total budget in seconds, measured from the first call (>= 0)
        is_done: Terminal-status predicate (default: DONE or FAIL)
        cancel_event: Optional event; setting it stops polling at the next wait
        clock: Monotonic time source
        sleep: Wait function used when no cancel_event is given

    Returns:
        The first snapshot whose status is terminal. A FAIL snapshot is
        returned, not raised; inspect `status` / `error`.

    Raises:
        PollTimeoutError: If the budget is exhausted before a terminal status
        PollCancelledError: If cancel_event was set
        APIError / TransportError: From the fetch call, unchanged
    """
    if interval <= 0:
        raise ValueError("interval must be positive")
    if timeout < 0:
        raise ValueError("timeout must not be negative")

    start_time = clock()

    while True:
        snapshot = fetch(job_id)

        if is_done(snapshot):
            logger.info("Job %s finished with status %s", job_id, getattr(snapshot, "status", None))
            return snapshot

        elapsed = clock() - start_time
        if elapsed > timeout:
            logger.warning("Job %s still running after %.1fs, giving up", job_id, elapsed)
            raise PollTimeoutError(job_id, elapsed, timeout)

        if cancel_event is None:
            sleep(interval)
        elif cancel_event.is_set() or cancel_event.wait(interval):
            raise PollCancelledError(job_id, clock() - start_time)
