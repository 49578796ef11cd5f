"""
Design (models.py)
- Purpose: Define simple, typed data structures for the run (Target, Outcome, Summary).
- Inputs: Field values.
- Outputs: Frozen dataclass instances.
- Side effects: None.
- Thread-safety: All types are immutable; safe to hand between worker threads.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple

from .config import DEFAULT_NAME
from .errors import TargetSkipped


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Target:
    """
    Design (Target)
    - Purpose: One remote database to keep awake.
    - Fields:
        name: display label (defaults to "Database {index}").
        base_address: project URL without trailing slash.
        credential: anon/API key sent as bearer token and apikey header.
        index: 1-based position in the DB{n}_* configuration.
    """
    name: str
    base_address: str
    credential: str = field(repr=False)
    index: int = 0

    @classmethod
    def create(cls, index: int, url: Optional[str], credential: Optional[str],
               name: Optional[str] = None) -> "Target":
        """
        Purpose: Build a normalized Target or refuse an incomplete entry.
        Inputs: index (1-based), raw url, raw credential, optional name.
        Outputs: Target.
        Raises: TargetSkipped when url or credential is blank.
        """
        url = (url or "").strip()
        credential = (credential or "").strip()
        if not url:
            raise TargetSkipped(index, "URL is empty")
        if not credential:
            raise TargetSkipped(index, "anon key is empty")
        label = (name or "").strip() or DEFAULT_NAME.format(index=index)
        return cls(name=label, base_address=url.rstrip("/"), credential=credential, index=index)

    def endpoint(self, path: str) -> str:
        return f"{self.base_address}{path}"


class OutcomeStatus(Enum):
    SUCCESS = "success"
    FAILURE = "error"


@dataclass(frozen=True)
class Outcome:
    """
    Design (Outcome)
    - Purpose: The single verdict for one Target in one run.
    - Fields:
        target_name: Target.name
        status: OutcomeStatus
        detail: error text, only set on FAILURE
        timestamp: when the verdict was reached (UTC)
        endpoint: candidate path that answered healthy, only set on SUCCESS
    """
    target_name: str
    status: OutcomeStatus
    detail: Optional[str] = None
    timestamp: datetime = field(default_factory=utcnow)
    endpoint: Optional[str] = None

    @classmethod
    def success(cls, target_name: str, endpoint: Optional[str] = None,
                timestamp: Optional[datetime] = None) -> "Outcome":
        return cls(target_name, OutcomeStatus.SUCCESS, None, timestamp or utcnow(), endpoint)

    @classmethod
    def failure(cls, target_name: str, detail: str,
                timestamp: Optional[datetime] = None) -> "Outcome":
        return cls(target_name, OutcomeStatus.FAILURE, detail or "All endpoints failed",
                   timestamp or utcnow())

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def to_dict(self) -> dict:
        record = {
            "database": self.target_name,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if not self.ok:
            record["error"] = self.detail
        return record


@dataclass(frozen=True)
class Summary:
    success_count: int
    failure_count: int
    total: int
    failures: Tuple[Outcome, ...] = ()

    @property
    def all_succeeded(self) -> bool:
        return self.total > 0 and self.failure_count == 0
