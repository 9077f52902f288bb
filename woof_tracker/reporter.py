"""Console and JSON rendering of poll cycle results."""

import json
from typing import Optional

from .models import CycleResult, StatusReport

WIDTH = 40
BAR_WIDTH = 30


def _progress_bar(report: StatusReport) -> str:
    filled = round(report.progress * BAR_WIDTH)
    return "[" + "#" * filled + "-" * (BAR_WIDTH - filled) + "]"


def render_text(result: CycleResult) -> str:
    """Render a cycle result as a plain-text status card."""
    lines = ["=" * WIDTH, "W O O F", "Wireless Observation Of Feeding", "=" * WIDTH]

    if not result.ok:
        lines.append("")
        lines.append("Connection Error")
        lines.append(f"  {result.error}")
        return "\n".join(lines)

    report = result.report
    lines.append(f"{report.summary_label}  {_progress_bar(report)}")

    for meal in report.meals:
        lines.append("")
        lines.append(meal.label.upper())
        if meal.fed:
            lines.append(f"  Fed      {meal.clock_label}  ({meal.time_ago})")
        else:
            lines.append(f"  Waiting  {meal.window_label}")

    if report.last_detection is not None:
        last = report.last_detection
        lines.append("")
        lines.append("-" * WIDTH)
        lines.append(f"Last Detection  {last.clock_label}  ({last.time_ago})")

    return "\n".join(lines)


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def report_to_dict(report: StatusReport) -> dict:
    """Convert a StatusReport into a JSON-serializable dict."""
    last = report.last_detection
    return {
        "generated_at": _iso(report.generated_at),
        "feeding_day_start": _iso(report.feeding_day_start),
        "summary": {
            "satisfied": report.satisfied_count,
            "total": report.total_windows,
            "label": report.summary_label,
            "progress": report.progress,
            "tone": report.tone,
        },
        "meals": [
            {
                "name": meal.name,
                "label": meal.label,
                "window": meal.window_label,
                "fed": meal.fed,
                "fed_at": _iso(meal.fed_at),
                "clock": meal.clock_label,
                "time_ago": meal.time_ago,
            }
            for meal in report.meals
        ],
        "last_detection": {
            "occurred_at": _iso(last.occurred_at),
            "clock": last.clock_label,
            "time_ago": last.time_ago,
        } if last is not None else None,
    }


def render_json(result: CycleResult) -> str:
    """Render a cycle result as JSON."""
    if not result.ok:
        return json.dumps({"error": result.error}, indent=2)
    return json.dumps(report_to_dict(result.report), indent=2)
