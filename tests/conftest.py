import threading
import time

import pytest

from stayalive.errors import TransportError
from stayalive.models import Target

PATHS = ("/one", "/two", "/three")


class FakeTransport:
    """
    Scripted HttpGet: responses[(base_address, path)] is an int status or an Exception to raise.
    Unscripted URLs answer 200. Records every call and the peak number of concurrent calls.
    """

    def __init__(self, responses=None, delays=None):
        self.responses = responses or {}
        self.delays = delays or {}
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def get(self, url, headers, timeout):
        with self._lock:
            self.calls.append((url, dict(headers), timeout))
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            for prefix, delay in self.delays.items():
                if url.startswith(prefix):
                    time.sleep(delay)
            answer = self.responses.get(url, 200)
            if isinstance(answer, Exception):
                raise answer
            return answer
        finally:
            with self._lock:
                self.in_flight -= 1

    def urls(self):
        return [url for url, _, _ in self.calls]


def transport_error(url, message):
    return TransportError(url, message)


def make_target(index, name=None, url=None, key="anon-key"):
    return Target.create(index, url or f"https://db{index}.supabase.co", key, name or f"db{index}")


@pytest.fixture
def targets():
    return [make_target(i) for i in range(1, 4)]
