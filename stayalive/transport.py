"""
Design (transport.py)
- Purpose: The one network capability the prober needs: GET a URL with headers and a timeout,
           return the status code or raise TransportError.
- Inputs: url, headers, timeout ((connect, read) seconds).
- Outputs: int status code.
- Side effects: Network I/O through a shared requests.Session.
- Thread-safety: One Session is shared by all worker threads; requests pools connections per host.
"""

from typing import Dict, Protocol, Tuple, Union

import requests

from .config import CONNECT_TIMEOUT_SEC, MAX_REDIRECTS, REQUEST_TIMEOUT_SEC, USER_AGENT, VERIFY_TLS
from .errors import TransportError

Timeout = Union[float, Tuple[float, float]]

DEFAULT_TIMEOUT: Tuple[float, float] = (CONNECT_TIMEOUT_SEC, REQUEST_TIMEOUT_SEC)


class HttpGet(Protocol):
    def get(self, url: str, headers: Dict[str, str], timeout: Timeout) -> int:
        ...


def build_headers(credential: str) -> Dict[str, str]:
    """Supabase expects the anon key both as a bearer token and as the apikey header."""
    return {
        "Authorization": f"Bearer {credential}",
        "apikey": credential,
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }


class RequestsTransport:
    """
    Design (RequestsTransport)
    - Redirects followed up to MAX_REDIRECTS; TLS verification on.
    - Only the status line and headers are read (stream=True); the body never is.
    - Any requests.RequestException (DNS, connect, TLS, timeout, too many redirects)
      is re-raised as TransportError carrying the exception text.
    - Use as a context manager, or call close() when done.
    """

    def __init__(self, session: requests.Session | None = None,
                 max_redirects: int = MAX_REDIRECTS, verify: bool = VERIFY_TLS):
        self.session = session if session is not None else requests.Session()
        self.session.max_redirects = max_redirects
        self.verify = verify

    def get(self, url: str, headers: Dict[str, str], timeout: Timeout = DEFAULT_TIMEOUT) -> int:
        try:
            response = self.session.get(
                url,
                headers=headers,
                timeout=timeout,
                verify=self.verify,
                allow_redirects=True,
                stream=True,
            )
        except requests.RequestException as exc:
            raise TransportError(url, f"{type(exc).__name__}: {exc}") from exc
        # stream=True returns once headers arrive; close() drops the unread body
        response.close()
        return response.status_code

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
