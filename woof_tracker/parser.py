"""
Beacon log parsing.

The log is CSV-ish text: a header line, optional comment lines, and data
lines whose first comma-separated field is a timestamp. Malformed lines are
dropped without raising; only a failed fetch is an error.
"""

import logging
from datetime import datetime, tzinfo
from typing import List, Optional

from .models import Event, ParsedTimestamp, Unparseable, ValidTimestamp

logger = logging.getLogger(__name__)


def parse_timestamp(raw: str, tz: Optional[tzinfo] = None) -> ParsedTimestamp:
    """
    Parse one timestamp field.

    Offset-aware timestamps are converted to the display zone ``tz`` (the
    host's local zone when None). Naive timestamps are taken as already being
    local wall-clock time. The result is always naive local time.
    """
    value = raw.strip().strip('"').strip()
    if not value:
        return Unparseable(raw=raw, reason="empty timestamp")

    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        return Unparseable(raw=raw, reason=str(e))

    if parsed.tzinfo is not None:
        # Offsets at the edges of the datetime range cannot be shifted
        try:
            parsed = parsed.astimezone(tz).replace(tzinfo=None)
        except (OverflowError, ValueError) as e:
            return Unparseable(raw=raw, reason=str(e))

    return ValidTimestamp(parsed)


def parse_events(text: str, comment_marker: str = "#", tz: Optional[tzinfo] = None) -> List[Event]:
    """
    Convert raw log text into events, in file order.

    The first line is a header and is always discarded.
    """
    lines = text.strip().splitlines()

    events = []
    skipped = 0
    for line_no, line in enumerate(lines[1:], start=2):
        if comment_marker and line.startswith(comment_marker):
            continue

        field = line.split(",", 1)[0]
        result = parse_timestamp(field, tz)
        if isinstance(result, Unparseable):
            skipped += 1
            logger.debug(f"Skipping line {line_no}: {result.raw!r} ({result.reason})")
            continue

        events.append(Event(occurred_at=result.value))

    if skipped:
        logger.debug(f"Skipped {skipped} unparseable line(s)")
    return events
