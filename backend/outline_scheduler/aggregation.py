import logging
from typing import Any, Iterable, List, Mapping, Optional

from .models import UNKNOWN_COURSE, AggregatedEvent, Weight

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _weight(value: Any) -> Optional[Weight]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Dropping non-numeric weight %r", value)
        return None


def aggregate_events(extractions: Iterable[Mapping[str, Any]]) -> List[AggregatedEvent]:
    """
    Flatten per-document extractions into one list of events tagged with
    their course, sorted by date. Events without a date sort first and the
    sort is stable, so same-day events keep document order.
    """
    events: List[AggregatedEvent] = []
    for extraction in extractions:
        course = _text(extraction.get("course_name")) or UNKNOWN_COURSE
        for item in extraction.get("items") or []:
            if not isinstance(item, Mapping):
                continue
            events.append(
                AggregatedEvent(
                    course=course,
                    title=_text(item.get("title")),
                    type=_text(item.get("type")) or "assignment",
                    date=_text(item.get("date")),
                    time=_text(item.get("time")),
                    weight=_weight(item.get("weight")),
                    notes=_text(item.get("notes")),
                )
            )

    events.sort(key=lambda ev: ev.date or "")
    return events
