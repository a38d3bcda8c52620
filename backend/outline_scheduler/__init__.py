"""Turn course outlines and work schedules into dated calendar items."""

from .aggregation import aggregate_events
from .dates import normalize_date
from .extraction import extract_schedule
from .heuristic import extract_schedule_heuristic
from .ics import events_to_ics
from .reminders import compute_reminders
from .text import normalize_text

__all__ = [
    "aggregate_events",
    "compute_reminders",
    "events_to_ics",
    "extract_schedule",
    "extract_schedule_heuristic",
    "normalize_date",
    "normalize_text",
]
