from datetime import datetime, timezone

import pytest

from conftest import PATHS, FakeTransport, make_target, transport_error
from stayalive.config import CANDIDATE_PATHS
from stayalive.models import OutcomeStatus
from stayalive.prober import Prober, is_healthy

BASE = "https://db1.supabase.co"


def test_first_healthy_path_stops_the_walk():
    transport = FakeTransport()
    outcome = Prober(transport, PATHS).probe(make_target(1))
    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.detail is None
    assert outcome.endpoint == "/one"
    assert len(transport.calls) == 1


def test_falls_through_to_later_paths():
    transport = FakeTransport({
        BASE + "/one": 404,
        BASE + "/two": transport_error(BASE + "/two", "ConnectTimeout: timed out"),
        BASE + "/three": 204,
    })
    outcome = Prober(transport, PATHS).probe(make_target(1))
    assert outcome.ok
    assert outcome.endpoint == "/three"
    assert transport.urls() == [BASE + p for p in PATHS]


def test_failure_reports_only_last_error():
    transport = FakeTransport({
        BASE + "/one": transport_error(BASE + "/one", "ConnectionError: DNS failure"),
        BASE + "/two": 500,
        BASE + "/three": 401,
    })
    outcome = Prober(transport, PATHS).probe(make_target(1))
    assert outcome.status is OutcomeStatus.FAILURE
    assert outcome.detail == "HTTP 401"
    assert len(transport.calls) == 3


def test_failure_with_transport_error_last():
    transport = FakeTransport({
        BASE + "/one": 503,
        BASE + "/two": 302,
        BASE + "/three": transport_error(BASE + "/three", "SSLError: bad certificate"),
    })
    outcome = Prober(transport, PATHS).probe(make_target(1))
    assert outcome.detail == "SSLError: bad certificate"


def test_status_boundary():
    assert is_healthy(200)
    assert is_healthy(299)
    assert not is_healthy(300)


def test_requests_carry_credential_and_timeout():
    transport = FakeTransport()
    Prober(transport, PATHS, timeout=(10, 30)).probe(make_target(1, key="secret"))
    url, headers, timeout = transport.calls[0]
    assert url == BASE + "/one"
    assert headers["Authorization"] == "Bearer secret"
    assert headers["apikey"] == "secret"
    assert headers["Content-Type"] == "application/json"
    assert timeout == (10, 30)


def test_default_paths():
    transport = FakeTransport()
    Prober(transport).probe(make_target(1))
    assert transport.urls() == [BASE + CANDIDATE_PATHS[0]]


def test_unexpected_transport_exception_becomes_failure():
    transport = FakeTransport({BASE + "/one": RuntimeError("boom")})
    outcome = Prober(transport, PATHS).probe(make_target(1))
    assert not outcome.ok
    assert outcome.detail == "RuntimeError: boom"


def test_observer_sees_start_and_result_and_cannot_break_probe():
    events = []

    class Observer:
        def on_start(self, target):
            events.append(("start", target.name))

        def on_result(self, outcome):
            events.append(("result", outcome.target_name))
            raise ValueError("console closed")

    outcome = Prober(FakeTransport(), PATHS, observer=Observer()).probe(make_target(1))
    assert outcome.ok
    assert events == [("start", "db1"), ("result", "db1")]


def test_timestamp_comes_from_clock():
    moment = datetime(2026, 1, 1, tzinfo=timezone.utc)
    outcome = Prober(FakeTransport(), PATHS, clock=lambda: moment).probe(make_target(1))
    assert outcome.timestamp == moment


def test_empty_path_list_rejected():
    with pytest.raises(ValueError):
        Prober(FakeTransport(), ())
