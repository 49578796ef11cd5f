"""
Background ping dispatcher.

Design:
- Runs one Prober.probe per Target on a thread pool capped at `concurrency` workers.
- Each submitted future remembers the input index of its Target; the dispatching thread
  alone fills a pre-sized slot list from those futures, so workers share no mutable state
  and the returned list is in input order whatever order the probes finish in.
- concurrency < 1 is clamped to 1 (with a warning); 1 means strictly sequential pinging.
- No cancellation: a run lasts until every probe has returned (each probe is bounded by
  the transport timeout times the number of candidate paths).
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence

from .config import MAX_CONCURRENCY
from .models import Outcome, Target
from .prober import Prober

logger = logging.getLogger(__name__)


def clamp_concurrency(concurrency: int) -> int:
    if concurrency < 1:
        logger.warning("concurrency %s is invalid; using 1 (sequential)", concurrency)
        return 1
    return concurrency


class Dispatcher:
    def __init__(self, prober: Prober, concurrency: int = MAX_CONCURRENCY):
        self.prober = prober
        self.concurrency = clamp_concurrency(concurrency)

    def dispatch(self, targets: Sequence[Target]) -> List[Outcome]:
        if not targets:
            return []
        slots: List[Optional[Outcome]] = [None] * len(targets)
        workers = min(self.concurrency, len(targets))
        logger.debug("pinging %d database(s) with %d worker(s)", len(targets), workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="stayalive") as pool:
            pending: Dict[Future, int] = {
                pool.submit(self.prober.probe, target): position
                for position, target in enumerate(targets)
            }
            for future in as_completed(pending):
                slots[pending[future]] = future.result()
        return [outcome for outcome in slots if outcome is not None]
