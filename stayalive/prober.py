"""
Design (prober.py)
- Purpose: Decide whether one database answered: walk the candidate paths in order and stop
           at the first healthy response.
- Inputs: Target; transport (HttpGet); ordered candidate paths.
- Outputs: Outcome (never raises).
- Side effects: One GET per attempted path; optional observer callbacks (start/result).
- Thread-safety: Stateless between calls; one Prober is shared by all dispatcher workers.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence

from .config import CANDIDATE_PATHS
from .errors import ProbeFailure, TransportError
from .models import Outcome, Target, utcnow
from .transport import DEFAULT_TIMEOUT, HttpGet, Timeout, build_headers

logger = logging.getLogger(__name__)

HEALTHY_BELOW = 300


class ProbeObserver(Protocol):
    def on_start(self, target: Target) -> None:
        ...

    def on_result(self, outcome: Outcome) -> None:
        ...


def is_healthy(status_code: int) -> bool:
    return status_code < HEALTHY_BELOW


class Prober:
    def __init__(self, transport: HttpGet, paths: Sequence[str] = CANDIDATE_PATHS,
                 timeout: Timeout = DEFAULT_TIMEOUT, observer: Optional[ProbeObserver] = None,
                 clock: Callable[[], datetime] = utcnow):
        if not paths:
            raise ValueError("at least one candidate path is required")
        self.transport = transport
        self.paths = tuple(paths)
        self.timeout = timeout
        self.observer = observer
        self.clock = clock

    def probe(self, target: Target) -> Outcome:
        """
        Purpose: Produce exactly one Outcome for target.
        Rules:
            - status < 300 on any path -> SUCCESS, later paths are not attempted.
            - status >= 300 or TransportError -> remember the detail, try the next path.
            - all paths exhausted -> FAILURE carrying only the last detail.
        """
        self._notify("on_start", target)
        try:
            endpoint = self._walk(target)
            outcome = Outcome.success(target.name, endpoint, self.clock())
        except ProbeFailure as failure:
            outcome = Outcome.failure(target.name, failure.detail, self.clock())
        except Exception as exc:
            logger.exception("unexpected error while pinging %s", target.name)
            outcome = Outcome.failure(target.name, f"{type(exc).__name__}: {exc}", self.clock())
        self._notify("on_result", outcome)
        return outcome

    def _walk(self, target: Target) -> str:
        headers = build_headers(target.credential)
        last_error: Optional[str] = None
        for path in self.paths:
            url = target.endpoint(path)
            try:
                status = self.transport.get(url, headers, self.timeout)
            except TransportError as exc:
                last_error = exc.message
                logger.debug("%s: GET %s failed: %s", target.name, path, last_error)
                continue
            if is_healthy(status):
                logger.debug("%s: GET %s -> %s", target.name, path, status)
                return path
            last_error = f"HTTP {status}"
            logger.debug("%s: GET %s -> %s, trying next endpoint", target.name, path, status)
        raise ProbeFailure(target.name, last_error or "All endpoints failed")

    def _notify(self, hook: str, arg) -> None:
        if self.observer is None:
            return
        try:
            getattr(self.observer, hook)(arg)
        except Exception:
            # reporting must never change a verdict
            logger.exception("observer %s failed", hook)
