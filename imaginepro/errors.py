from __future__ import annotations

from typing import Any, Optional

import requests


# Network-level failures are raised by requests as-is; this name is exported
# so callers can catch them without importing requests themselves.
TransportError = requests.RequestException


class ImagineProError(Exception):
    """Base class for errors raised by this client"""


class APIError(ImagineProError):
    """The server answered with a non-success status"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return self.message


class PollTimeoutError(ImagineProError, TimeoutError):
    """A job did not reach DONE or FAIL within the polling budget"""

    def __init__(self, job_id: str, elapsed: float, timeout: float):
        super().__init__(
            f"Timeout exceeded while waiting for message status "
            f"(id={job_id}, elapsed={elapsed:.1f}s, timeout={timeout:.1f}s)"
        )
        self.job_id = job_id
        self.elapsed = elapsed
        self.timeout = timeout


class PollCancelledError(ImagineProError):
    """Polling was stopped by the caller before the job finished"""

    def __init__(self, job_id: str, elapsed: float):
        super().__init__(f"Polling cancelled for message {job_id} after {elapsed:.1f}s")
        self.job_id = job_id
        self.elapsed = elapsed
