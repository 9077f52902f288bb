"""Reduce classifier output into a presentation-ready status report."""

import math
from datetime import datetime, timedelta
from typing import Optional, Sequence

from .config import WindowConfig
from .models import LastDetection, MealStatus, OverallStatus, StatusReport


def format_time_ago(delta: timedelta) -> str:
    """
    Human relative time with the largest non-zero unit dominant.

    Anything under a minute, including a negative delta from an event stamped
    slightly ahead of the clock, is "just now".
    """
    minutes = math.floor(delta.total_seconds() / 60)
    hours = minutes // 60
    days = hours // 24

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{days}d ago"


def _clock(hour: int, minute: int = 0) -> str:
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def format_clock(dt: datetime) -> str:
    """12-hour clock label, e.g. "7:45 AM"."""
    return _clock(dt.hour, dt.minute)


def format_window(window: WindowConfig) -> str:
    """Window bounds label, e.g. "7:00 AM - 10:00 AM"."""
    return f"{_clock(window.start_hour)} - {_clock(window.end_hour)}"


def _last_detection(status: OverallStatus, now: datetime) -> Optional[LastDetection]:
    event = status.last_event_overall
    if event is None:
        return None
    return LastDetection(
        occurred_at=event.occurred_at,
        clock_label=format_clock(event.occurred_at),
        time_ago=format_time_ago(now - event.occurred_at),
    )


def reduce_status(
    status: OverallStatus,
    windows: Sequence[WindowConfig],
    now: datetime,
) -> StatusReport:
    """Flatten an OverallStatus into a StatusReport, one MealStatus per window in config order."""
    meals = []
    for window in windows:
        window_status = status.per_window[window.name]
        meal = MealStatus(
            name=window.name,
            label=window.display_name,
            window_label=format_window(window),
            fed=window_status.satisfied,
        )
        event = window_status.satisfying_event
        if event is not None:
            meal.fed_at = event.occurred_at
            meal.clock_label = format_clock(event.occurred_at)
            meal.time_ago = format_time_ago(now - event.occurred_at)
        meals.append(meal)

    return StatusReport(
        generated_at=now,
        feeding_day_start=status.feeding_day_start,
        meals=meals,
        satisfied_count=sum(1 for m in meals if m.fed),
        total_windows=len(meals),
        last_detection=_last_detection(status, now),
    )
