"""Tests for feeding-window classification."""

import random

import pytest

from helpers import at, ev
from woof_tracker.classifier import classify, events_in_window, feeding_day_start
from woof_tracker.config import WindowConfig


def test_feeding_day_start_after_reset_hour():
    assert feeding_day_start(at("2024-01-01T18:00:00"), 2) == at("2024-01-01T02:00:00")


def test_feeding_day_start_before_reset_hour_is_previous_day():
    assert feeding_day_start(at("2024-01-02T01:30:00"), 2) == at("2024-01-01T02:00:00")


def test_feeding_day_start_exactly_at_reset_hour():
    assert feeding_day_start(at("2024-01-02T02:00:00"), 2) == at("2024-01-02T02:00:00")


def test_feeding_day_start_crosses_month_boundary():
    assert feeding_day_start(at("2024-03-01T00:15:00"), 2) == at("2024-02-29T02:00:00")


def test_worked_example(windows):
    events = [
        ev("2024-01-01T07:30:00"),
        ev("2024-01-01T07:45:00"),
        ev("2024-01-01T17:10:00"),
    ]
    status = classify(events, at("2024-01-01T18:00:00"), 2, windows)

    assert status.per_window["breakfast"].satisfied
    assert status.per_window["breakfast"].satisfying_event == ev("2024-01-01T07:45:00")
    assert status.per_window["dinner"].satisfied
    assert status.per_window["dinner"].satisfying_event == ev("2024-01-01T17:10:00")
    assert status.last_event_overall == ev("2024-01-01T17:10:00")


def test_satisfying_event_is_most_recent_regardless_of_input_order(windows):
    events = [
        ev("2024-01-01T09:15:00"),
        ev("2024-01-01T07:05:00"),
        ev("2024-01-01T08:40:00"),
    ]
    random.Random(7).shuffle(events)
    status = classify(events, at("2024-01-01T12:00:00"), 2, windows)
    assert status.per_window["breakfast"].satisfying_event == ev("2024-01-01T09:15:00")


def test_window_start_inclusive_end_exclusive(windows):
    now = at("2024-01-01T23:00:00")

    at_start = classify([ev("2024-01-01T07:00:00")], now, 2, windows)
    assert at_start.per_window["breakfast"].satisfied

    at_end = classify([ev("2024-01-01T10:00:00")], now, 2, windows)
    assert not at_end.per_window["breakfast"].satisfied

    last_minute = classify([ev("2024-01-01T19:59:59")], now, 2, windows)
    assert last_minute.per_window["dinner"].satisfied

    dinner_end = classify([ev("2024-01-01T20:00:00")], now, 2, windows)
    assert not dinner_end.per_window["dinner"].satisfied


def test_reset_hour_boundary():
    windows = [WindowConfig(name="late", start_hour=1, end_hour=3)]
    now = at("2024-01-02T12:00:00")

    before = classify([ev("2024-01-02T01:59:00")], now, 2, windows)
    assert not before.per_window["late"].satisfied

    on = classify([ev("2024-01-02T02:00:00")], now, 2, windows)
    assert on.per_window["late"].satisfied


def test_before_reset_hour_counts_previous_evening(windows):
    # At 01:00 we are still in the feeding day that started yesterday at 02:00
    events = [ev("2024-01-01T17:30:00")]
    status = classify(events, at("2024-01-02T01:00:00"), 2, windows)
    assert status.per_window["dinner"].satisfied


def test_yesterdays_events_do_not_count(windows):
    events = [ev("2023-12-31T08:00:00"), ev("2023-12-31T17:00:00")]
    status = classify(events, at("2024-01-01T18:00:00"), 2, windows)
    assert not status.per_window["breakfast"].satisfied
    assert not status.per_window["dinner"].satisfied
    assert status.last_event_overall == ev("2023-12-31T17:00:00")


def test_last_event_overall_outside_any_window(windows):
    status = classify([ev("2024-01-01T03:00:00")], at("2024-01-01T12:00:00"), 2, windows)
    assert not status.per_window["breakfast"].satisfied
    assert not status.per_window["dinner"].satisfied
    assert status.last_event_overall == ev("2024-01-01T03:00:00")


def test_empty_event_set(windows):
    status = classify([], at("2024-01-01T12:00:00"), 2, windows)
    assert all(not s.satisfied for s in status.per_window.values())
    assert all(s.satisfying_event is None for s in status.per_window.values())
    assert status.last_event_overall is None


def test_no_windows():
    status = classify([ev("2024-01-01T08:00:00")], at("2024-01-01T12:00:00"), 2, [])
    assert status.per_window == {}
    assert status.last_event_overall == ev("2024-01-01T08:00:00")


def test_classification_is_idempotent(windows):
    events = [ev("2024-01-01T07:30:00"), ev("2024-01-01T16:00:00")]
    now = at("2024-01-01T18:00:00")
    assert classify(events, now, 2, windows) == classify(events, now, 2, windows)


def test_overlapping_windows_rejected():
    overlapping = [
        WindowConfig(name="a", start_hour=7, end_hour=10),
        WindowConfig(name="b", start_hour=9, end_hour=12),
    ]
    with pytest.raises(ValueError, match="overlap"):
        classify([], at("2024-01-01T12:00:00"), 2, overlapping)


def test_events_in_window_sorted_ascending():
    window = WindowConfig(name="breakfast", start_hour=7, end_hour=10)
    events = [ev("2024-01-01T09:00:00"), ev("2024-01-01T12:00:00"), ev("2024-01-01T07:00:00")]
    assert events_in_window(events, window) == [ev("2024-01-01T07:00:00"), ev("2024-01-01T09:00:00")]
