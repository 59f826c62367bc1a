# pylint: disable=missing-module-docstring,missing-function-docstring

from typing import Any

import pytest

from observability import metrics


def test_timed_emits_exactly_one_metric(events: list[dict[str, Any]]) -> None:
    with metrics.timed("unit_metric", details={"k": "v"}):
        pass

    assert len(events) == 1
    event = events[0]
    assert event["event_type"] == "METRIC_TIMER"
    assert event["metric"] == "unit_metric"
    assert event["outcome"] == "ok"
    assert event["details"] == {"k": "v"}
    assert event["value_ms"] >= 0


def test_timed_marks_error_and_reraises(events: list[dict[str, Any]]) -> None:
    with pytest.raises(ValueError):
        with metrics.timed("failing_metric"):
            raise ValueError("boom")

    assert [e["outcome"] for e in events] == ["error"]


def test_stop_timer_unknown_id_returns_none(events: list[dict[str, Any]]) -> None:
    assert metrics.stop_timer("timer_missing") is None
    assert not events


def test_stop_timer_is_single_shot() -> None:
    timer_id = metrics.start_timer("once")

    assert metrics.stop_timer(timer_id) is not None
    assert metrics.stop_timer(timer_id) is None
