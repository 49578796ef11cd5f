"""
Design (report.py)
- Purpose: Operator-facing console output for a run (banner, per-database lines, summary).
- Inputs: Targets, Outcomes, Summary, TargetSkipped notices.
- Outputs: Lines written to a text stream (stdout by default).
- Side effects: Writes to the stream.
- Thread-safety: on_start/on_result are called from dispatcher worker threads; every write
                 takes _lock so lines never interleave.
"""

import json
import sys
import threading
from typing import Sequence, TextIO

from .models import Outcome, Summary, Target, utcnow
from .errors import TargetSkipped


class ConsoleReporter:
    def __init__(self, stream: TextIO | None = None, quiet: bool = False):
        self.stream = stream if stream is not None else sys.stdout
        # quiet keeps stdout clean for --json; only the JSON document is printed
        self.quiet = quiet
        self._lock = threading.Lock()

    def _write(self, line: str = "") -> None:
        if self.quiet:
            return
        with self._lock:
            print(line, file=self.stream, flush=True)

    # -------- run lifecycle --------

    def banner(self, targets: Sequence[Target]) -> None:
        self._write("🚀 Supabase Stay Alive Script Started")
        self._write(f"📊 Found {len(targets)} database(s) to ping")
        self._write(f"⏰ Timestamp: {utcnow().isoformat()}")
        self._write()

    def skipped(self, skip: TargetSkipped) -> None:
        self._write(f"⚠️  Missing configuration for DB{skip.index} - skipping")

    def no_targets(self) -> None:
        self._write("❌ No databases configured. Please check your .env file.")

    # -------- ProbeObserver --------

    def on_start(self, target: Target) -> None:
        self._write(f"🏓 Pinging {target.name}...")

    def on_result(self, outcome: Outcome) -> None:
        if outcome.ok:
            self._write(f"✅ {outcome.target_name} - Connection successful")
        else:
            self._write(f"❌ {outcome.target_name} - Connection failed: {outcome.detail}")

    # -------- summary --------

    def summary(self, summary: Summary) -> None:
        self._write()
        self._write("📈 Summary:")
        self._write(f"✅ Successful: {summary.success_count}")
        self._write(f"❌ Failed: {summary.failure_count}")
        self._write(f"🔄 Total: {summary.total}")
        if summary.failures:
            self._write()
            self._write("❌ Failed databases:")
            for outcome in summary.failures:
                self._write(f"   - {outcome.target_name}: {outcome.detail}")
        elif summary.total:
            self._write()
            self._write("🎉 All databases pinged successfully!")


def render_json(outcomes: Sequence[Outcome], summary: Summary) -> str:
    """Machine-readable record of a run (results in input order plus counts)."""
    return json.dumps(
        {
            "results": [o.to_dict() for o in outcomes],
            "summary": {
                "successful": summary.success_count,
                "failed": summary.failure_count,
                "total": summary.total,
            },
        },
        indent=2,
    )
