"""One poll cycle: fetch, parse, classify, reduce."""

import logging
from datetime import datetime
from typing import Callable, Optional

from .classifier import classify
from .config import AppConfig, FeedingConfig, SourceConfig
from .models import CycleResult
from .parser import parse_events
from .reducer import reduce_status
from .source_client import FetchFailure, fetch_log

logger = logging.getLogger(__name__)

Fetcher = Callable[[SourceConfig], str]


def local_now(feeding: FeedingConfig) -> datetime:
    """Current naive wall-clock time in the display zone."""
    tz = feeding.tzinfo
    if tz is None:
        return datetime.now()
    return datetime.now(tz).replace(tzinfo=None)


def build_result(text: str, config: AppConfig, now: datetime) -> CycleResult:
    """Derive the full status from raw log text. Pure: no I/O, no clock reads."""
    feeding = config.feeding
    events = parse_events(text, config.source.comment_marker, feeding.tzinfo)
    status = classify(events, now, feeding.reset_hour, feeding.windows)
    report = reduce_status(status, feeding.windows, now)
    return CycleResult(report=report, event_count=len(events))


def run_cycle(
    config: AppConfig,
    fetch: Fetcher = fetch_log,
    now: Optional[datetime] = None,
) -> CycleResult:
    """
    Run one full poll cycle.

    A fetch failure becomes an error result rather than an exception, so
    the caller can render it and carry on with the next cycle.
    """
    try:
        text = fetch(config.source)
    except FetchFailure as e:
        logger.warning(f"Poll cycle failed: {e}")
        return CycleResult(error=str(e))

    if now is None:
        now = local_now(config.feeding)

    result = build_result(text, config, now)
    report = result.report
    logger.info(
        f"Parsed {result.event_count} events; {report.summary_label} "
        f"since {report.feeding_day_start.isoformat()}"
    )
    return result
