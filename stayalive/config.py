"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: None.
- Outputs: Constants (endpoint paths, timeouts, env key templates, exit codes).
- Side effects: None.
- Thread-safety: N/A (read-only constants).
"""

import math

# Relative paths tried in order against each database; the first healthy one wins
CANDIDATE_PATHS = (
    "/rest/v1/_realtime_schema_version?select=*&limit=1",
    "/auth/v1/settings",
    "/rest/v1/",
)

## HTTP behavior
# requests has no whole-request deadline: CONNECT bounds the connect, REQUEST bounds each
# socket read while waiting for the status line and headers. The body is never read, so a
# slow body cannot stretch a request. A server trickling its headers, or each of up to
# MAX_REDIRECTS redirect bodies, can still exceed REQUEST_TIMEOUT_SEC in total.
REQUEST_TIMEOUT_SEC = 30
CONNECT_TIMEOUT_SEC = 10
MAX_REDIRECTS = 3
VERIFY_TLS = True
USER_AGENT = "SupabaseStayAlive/1.0"

# Default number of databases pinged at the same time (1 = sequential)
MAX_CONCURRENCY = 5

## Environment layout: DB1_URL / DB1_ANON_KEY / DB1_NAME, DB2_..., stops at first gap
ENV_FILENAME = ".env"
URL_KEY = "DB{index}_URL"
ANON_KEY_KEY = "DB{index}_ANON_KEY"
NAME_KEY = "DB{index}_NAME"
DEFAULT_NAME = "Database {index}"

## Process exit codes
EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_NO_TARGETS = 2
EXIT_CONFIG_ERROR = 3


def worst_case_runtime_sec(total: int, concurrency: int = MAX_CONCURRENCY,
                           paths: int = len(CANDIDATE_PATHS),
                           timeout: float = REQUEST_TIMEOUT_SEC) -> float:
    """
    Purpose: Upper bound on wall-clock time of one run, for operators sizing a scheduler slot.
    Inputs: number of targets, concurrency cap, candidate path count, per-request timeout.
    Outputs: ceil(total / concurrency) * timeout * paths (seconds). Not enforced anywhere.
    """
    if total <= 0:
        return 0.0
    waves = math.ceil(total / max(1, concurrency))
    return float(waves * timeout * paths)
