"""Small constructors shared by the test modules."""

from datetime import datetime

from woof_tracker.models import Event


def at(text: str) -> datetime:
    return datetime.fromisoformat(text)


def ev(text: str) -> Event:
    return Event(occurred_at=at(text))
