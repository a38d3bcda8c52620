import time
from typing import Any, Iterable, Mapping

from icalendar import Calendar, Event, vText

from .models import CalendarEvent

PRODID = "-//Course Outline Scheduler//EN"
UID_DOMAIN = "outline-scheduler.local"


# ============================================================
# ICS GENERATION
# ============================================================
def _format_weight(weight: float) -> str:
    return f"{weight:g}"


def _date_value(compact: str, date_only: bool = False) -> vText:
    # Written as text so malformed dates end up in the file untouched.
    value = vText(compact)
    if date_only:
        value.params["VALUE"] = "DATE"
    return value


def build_event(ev: Any, index: int, stamp_ms: int) -> Event:
    dt = (ev.date or "").replace("-", "")

    e = Event()
    e.add("uid", f"event-{index}-{stamp_ms}@{UID_DOMAIN}")
    e.add("dtstamp", _date_value(f"{dt}T000000Z"))
    e.add("dtstart", _date_value(dt, date_only=True))
    e.add("summary", f"{ev.course} - {ev.title}")
    e.add("description", f"Weight {_format_weight(ev.weight)}%" if ev.weight else "")
    return e


def events_to_ics(events: Iterable[Any]) -> str:
    """
    Render events as an all-day iCalendar document.

    Each event needs course, title, date (YYYY-MM-DD) and weight; plain
    mappings are accepted as well as models.
    """
    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")

    stamp_ms = int(time.time() * 1000)
    for index, ev in enumerate(events):
        if isinstance(ev, Mapping):
            ev = CalendarEvent.model_validate(ev)
        cal.add_component(build_event(ev, index, stamp_ms))

    return cal.to_ical().decode("utf-8")
