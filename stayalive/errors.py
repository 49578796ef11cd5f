"""
Design (errors.py)
- Purpose: Exception taxonomy for a stay-alive run.
- Propagation:
    ConfigError     fatal, aborts before any database is pinged
    TargetSkipped   one incomplete DB{n} entry; reported, never dispatched or counted
    ProbeFailure    every candidate path failed for a database; becomes a failure Outcome
    TransportError  one request failed below HTTP (DNS, connect, TLS, timeout, redirects)
"""


class StayAliveError(Exception):
    """Base class for all stayalive errors."""


class ConfigError(StayAliveError):
    pass


class TargetSkipped(StayAliveError):
    def __init__(self, index: int, reason: str):
        super().__init__(f"Missing configuration for DB{index} - skipping ({reason})")
        self.index = index
        self.reason = reason


class ProbeFailure(StayAliveError):
    def __init__(self, target_name: str, detail: str):
        super().__init__(detail)
        self.target_name = target_name
        self.detail = detail


class TransportError(StayAliveError):
    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url
        self.message = message
