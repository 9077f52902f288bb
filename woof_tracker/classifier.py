"""Feeding-window classification of beacon events."""

from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

from .config import WindowConfig, validate_windows
from .models import Event, OverallStatus, WindowStatus


def feeding_day_start(now: datetime, reset_hour: int) -> datetime:
    """
    Start of the feeding day containing ``now``.

    The feeding day runs from reset_hour:00 to reset_hour:00 the next day, so
    before the reset hour we are still in the previous day's feeding day.
    """
    start = now.replace(hour=reset_hour, minute=0, second=0, microsecond=0)
    if now.hour < reset_hour:
        start -= timedelta(days=1)
    return start


def events_in_window(events: Iterable[Event], window: WindowConfig) -> List[Event]:
    """Events whose local hour-of-day falls in [start_hour, end_hour), oldest first."""
    return sorted(e for e in events if window.contains_hour(e.occurred_at.hour))


def classify(
    events: Sequence[Event],
    now: datetime,
    reset_hour: int,
    windows: Sequence[WindowConfig],
) -> OverallStatus:
    """
    Decide, for each window, whether it has been satisfied in the current feeding day.

    A satisfied window reports its most recent qualifying event. The last
    event overall is taken from the full event set regardless of feeding day
    or window, so it reflects the sensor even on a day with no meals.

    Args:
        events: Every event from the latest fetch.
        now: Current local time.
        reset_hour: Hour at which the feeding day rolls over.
        windows: Non-overlapping meal windows.

    Returns:
        OverallStatus with one WindowStatus per window name.
    """
    validate_windows(list(windows))

    day_start = feeding_day_start(now, reset_hour)
    today_events = [e for e in events if e.occurred_at >= day_start]

    per_window = {}
    for window in windows:
        matched = events_in_window(today_events, window)
        per_window[window.name] = WindowStatus(
            satisfied=bool(matched),
            satisfying_event=matched[-1] if matched else None,
        )

    return OverallStatus(
        feeding_day_start=day_start,
        per_window=per_window,
        last_event_overall=max(events) if events else None,
    )
