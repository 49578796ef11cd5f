import pytest

from stayalive.aggregator import exit_code, summarize
from stayalive.config import EXIT_FAILURES, EXIT_NO_TARGETS, EXIT_OK, worst_case_runtime_sec
from stayalive.models import Outcome


def _outcomes(pattern):
    return [
        Outcome.success(f"db{i}") if ok else Outcome.failure(f"db{i}", f"HTTP 50{i}")
        for i, ok in enumerate(pattern)
    ]


@pytest.mark.parametrize("pattern", [[], [True], [False], [True, False, True], [False] * 4, [True] * 6])
def test_counts_add_up(pattern):
    summary = summarize(_outcomes(pattern))
    assert summary.success_count + summary.failure_count == summary.total == len(pattern)
    assert summary.success_count == sum(pattern)


def test_failures_listed_in_input_order():
    summary = summarize(_outcomes([False, True, False]))
    assert [o.target_name for o in summary.failures] == ["db0", "db2"]
    assert [o.detail for o in summary.failures] == ["HTTP 500", "HTTP 502"]


def test_exit_codes():
    assert exit_code(summarize([])) == EXIT_NO_TARGETS
    assert exit_code(summarize(_outcomes([True, False]))) == EXIT_FAILURES
    assert exit_code(summarize(_outcomes([True, True]))) == EXIT_OK
    assert EXIT_NO_TARGETS not in (EXIT_OK, EXIT_FAILURES)


def test_failure_without_detail_gets_default():
    outcome = Outcome.failure("db", "")
    assert outcome.detail == "All endpoints failed"
    assert outcome.to_dict()["error"] == "All endpoints failed"


def test_success_record_has_no_error_key():
    record = Outcome.success("db").to_dict()
    assert record["status"] == "success"
    assert "error" not in record


def test_worst_case_runtime():
    assert worst_case_runtime_sec(11, concurrency=5, paths=3, timeout=30) == 3 * 30 * 3
    assert worst_case_runtime_sec(0) == 0.0


def test_all_succeeded_needs_at_least_one_outcome():
    assert summarize(_outcomes([True, True])).all_succeeded
    assert not summarize(_outcomes([True, False])).all_succeeded
    assert not summarize([]).all_succeeded
