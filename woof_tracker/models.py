"""Data models for beacon events and feeding status."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union


@dataclass(frozen=True, order=True)
class Event:
    """A single beacon detection."""
    occurred_at: datetime  # naive wall-clock time in the display zone


@dataclass(frozen=True)
class ValidTimestamp:
    """A log line whose timestamp parsed."""
    value: datetime


@dataclass(frozen=True)
class Unparseable:
    """A log line whose timestamp did not parse; dropped by the parser."""
    raw: str
    reason: str


ParsedTimestamp = Union[ValidTimestamp, Unparseable]


@dataclass(frozen=True)
class WindowStatus:
    """Classification result for one window."""
    satisfied: bool
    satisfying_event: Optional[Event] = None


@dataclass
class OverallStatus:
    """Classifier output for one poll cycle."""
    feeding_day_start: datetime
    per_window: Dict[str, WindowStatus] = field(default_factory=dict)
    last_event_overall: Optional[Event] = None


@dataclass
class MealStatus:
    """Presentation-ready status of one window."""
    name: str
    label: str
    window_label: str         # e.g. "7:00 AM - 10:00 AM"
    fed: bool
    fed_at: Optional[datetime] = None
    clock_label: Optional[str] = None  # e.g. "7:45 AM"
    time_ago: Optional[str] = None     # e.g. "3h ago"


@dataclass
class LastDetection:
    """Most recent event across the whole log."""
    occurred_at: datetime
    clock_label: str
    time_ago: str


@dataclass
class StatusReport:
    """Reduced status emitted to the presentation sink."""
    generated_at: datetime
    feeding_day_start: datetime
    meals: List[MealStatus]
    satisfied_count: int
    total_windows: int
    last_detection: Optional[LastDetection] = None

    @property
    def progress(self) -> float:
        if self.total_windows == 0:
            return 0.0
        return self.satisfied_count / self.total_windows

    @property
    def summary_label(self) -> str:
        return f"{self.satisfied_count}/{self.total_windows} meals"

    @property
    def tone(self) -> str:
        if self.total_windows and self.satisfied_count == self.total_windows:
            return "complete"
        if self.satisfied_count > 0:
            return "partial"
        return "none"


@dataclass
class CycleResult:
    """Outcome of one poll cycle: a report or an error, never both."""
    report: Optional[StatusReport] = None
    error: Optional[str] = None
    event_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None
