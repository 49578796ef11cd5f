"""
Design (aggregator.py)
- Purpose: Reduce a run's Outcomes into a Summary and a process exit code.
- Inputs: Outcomes in input order.
- Outputs: Summary (pure function of the outcomes), int exit code.
- Side effects: None.
"""

from typing import Sequence

from .config import EXIT_FAILURES, EXIT_NO_TARGETS, EXIT_OK
from .models import Outcome, Summary


def summarize(outcomes: Sequence[Outcome]) -> Summary:
    failures = tuple(o for o in outcomes if not o.ok)
    total = len(outcomes)
    return Summary(
        success_count=total - len(failures),
        failure_count=len(failures),
        total=total,
        failures=failures,
    )


def exit_code(summary: Summary) -> int:
    """
    Purpose: Map a Summary to the process exit status.
    Outputs: EXIT_NO_TARGETS when nothing ran, EXIT_FAILURES when any database failed,
             EXIT_OK otherwise.
    """
    if summary.total == 0:
        return EXIT_NO_TARGETS
    if summary.all_succeeded:
        return EXIT_OK
    return EXIT_FAILURES
