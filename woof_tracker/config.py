"""Configuration management."""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SOURCE_URL = (
    "https://raw.githubusercontent.com/bobarke2000/dogfood/main/beacon_events.csv"
)
DEFAULT_WINDOWS = "breakfast:7-10,dinner:16-20"


@dataclass(frozen=True)
class WindowConfig:
    """A named half-open hour-of-day interval [start_hour, end_hour)."""
    name: str
    start_hour: int
    end_hour: int
    label: str = ""  # display name, e.g. "Breakfast"

    @property
    def display_name(self) -> str:
        return self.label or self.name.replace("_", " ").title()

    def contains_hour(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour

    def overlaps(self, other: "WindowConfig") -> bool:
        return self.start_hour < other.end_hour and other.start_hour < self.end_hour


@dataclass
class SourceConfig:
    """Beacon log source configuration."""
    url: str
    timeout_seconds: float = 10.0
    cache_bust: bool = True  # append ?t=<epoch ms> to every request
    comment_marker: str = "#"


@dataclass
class FeedingConfig:
    """Feeding-day rules."""
    reset_hour: int = 2
    windows: List[WindowConfig] = field(default_factory=list)
    timezone: Optional[str] = None  # IANA name; None means host local zone

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        return ZoneInfo(self.timezone) if self.timezone else None


@dataclass
class PollConfig:
    """Poll driver configuration."""
    interval_seconds: float = 120.0


@dataclass
class AppConfig:
    """Complete application configuration."""
    source: SourceConfig
    feeding: FeedingConfig
    poll: PollConfig


def _parse_bool_env(key: str, default: bool) -> bool:
    """Parse a true/false environment variable."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}")


def parse_windows(text: str) -> List[WindowConfig]:
    """
    Parse a window list of the form "breakfast:7-10,dinner:16-20".

    Args:
        text: Comma-separated "name:start-end" entries.

    Returns:
        List of WindowConfig in the order given.

    Raises:
        ValueError: If an entry is malformed.
    """
    windows = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, hours = item.partition(":")
        start, dash, end = hours.partition("-")
        if not sep or not dash or not name.strip():
            raise ValueError(
                f"Invalid window {item!r}. Expected 'name:start-end', e.g. 'breakfast:7-10'"
            )
        windows.append(WindowConfig(
            name=name.strip(),
            start_hour=_parse_int(start.strip(), f"Window {name.strip()!r} start hour"),
            end_hour=_parse_int(end.strip(), f"Window {name.strip()!r} end hour"),
        ))
    return windows


def validate_windows(windows: List[WindowConfig]) -> None:
    """
    Check window bounds, name uniqueness and that no two windows overlap.

    Raises:
        ValueError: On the first violation found.
    """
    seen = set()
    for window in windows:
        for hour, which in ((window.start_hour, "start"), (window.end_hour, "end")):
            if not 0 <= hour <= 23:
                raise ValueError(
                    f"Window {window.name!r} {which} hour must be between 0 and 23, got {hour}"
                )
        if window.start_hour >= window.end_hour:
            raise ValueError(
                f"Window {window.name!r} must start before it ends "
                f"(got {window.start_hour}-{window.end_hour}); windows cannot wrap past midnight"
            )
        if window.name in seen:
            raise ValueError(f"Duplicate window name {window.name!r}")
        seen.add(window.name)

    ordered = sorted(windows, key=lambda w: w.start_hour)
    for earlier, later in zip(ordered, ordered[1:]):
        if earlier.overlaps(later):
            raise ValueError(
                f"Windows {earlier.name!r} ({earlier.start_hour}-{earlier.end_hour}) and "
                f"{later.name!r} ({later.start_hour}-{later.end_hour}) overlap"
            )


def validate_feeding(feeding: FeedingConfig) -> None:
    """Validate reset hour, windows and timezone."""
    if not 0 <= feeding.reset_hour <= 23:
        raise ValueError(f"WOOF_RESET_HOUR must be between 0 and 23, got {feeding.reset_hour}")
    validate_windows(feeding.windows)
    if feeding.timezone:
        try:
            ZoneInfo(feeding.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Invalid timezone {feeding.timezone!r}. Use IANA timezone identifiers."
            )


def load_config() -> AppConfig:
    """
    Load configuration from environment variables.

    Raises:
        ValueError: If a configuration value is invalid.
    """
    # Source
    source_url = os.getenv("WOOF_SOURCE_URL", DEFAULT_SOURCE_URL).strip()
    if not source_url:
        raise ValueError("WOOF_SOURCE_URL must not be empty")
    try:
        timeout = float(os.getenv("WOOF_HTTP_TIMEOUT", "10"))
    except ValueError:
        raise ValueError(f"WOOF_HTTP_TIMEOUT must be a number, got {os.getenv('WOOF_HTTP_TIMEOUT')!r}")
    cache_bust = _parse_bool_env("WOOF_CACHE_BUST", True)
    comment_marker = os.getenv("WOOF_COMMENT_MARKER", "#")

    # Feeding day
    reset_hour = _parse_int(os.getenv("WOOF_RESET_HOUR", "2"), "WOOF_RESET_HOUR")
    windows = parse_windows(os.getenv("WOOF_WINDOWS") or DEFAULT_WINDOWS)
    timezone_name = os.getenv("WOOF_TIMEZONE") or None

    # Poll driver
    try:
        interval = float(os.getenv("WOOF_POLL_INTERVAL", "120"))
    except ValueError:
        raise ValueError(f"WOOF_POLL_INTERVAL must be a number, got {os.getenv('WOOF_POLL_INTERVAL')!r}")

    config = AppConfig(
        source=SourceConfig(
            url=source_url,
            timeout_seconds=timeout,
            cache_bust=cache_bust,
            comment_marker=comment_marker,
        ),
        feeding=FeedingConfig(
            reset_hour=reset_hour,
            windows=windows,
            timezone=timezone_name,
        ),
        poll=PollConfig(
            interval_seconds=interval,
        ),
    )
    validate_config(config)
    return config


def validate_config(config: AppConfig) -> None:
    """
    Validate a complete configuration.

    Raises:
        ValueError: If any section is invalid.
    """
    if config.source.timeout_seconds <= 0:
        raise ValueError(f"WOOF_HTTP_TIMEOUT must be positive, got {config.source.timeout_seconds}")
    if config.poll.interval_seconds <= 0:
        raise ValueError(f"WOOF_POLL_INTERVAL must be positive, got {config.poll.interval_seconds}")
    validate_feeding(config.feeding)
