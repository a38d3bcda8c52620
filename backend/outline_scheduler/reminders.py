import logging
from datetime import date, timedelta
from typing import List

logger = logging.getLogger(__name__)

REMINDER_OFFSETS_DAYS = (7, 5, 3)
EARLIEST_REMINDER = date(1900, 1, 1)


def compute_reminders(due: str) -> List[str]:
    """
    Reminder dates 7, 5 and 3 days before a YYYY-MM-DD due date, in that
    order. Reminders that would land before 1900-01-01 are left out; an
    unparseable due date gets no reminders.
    """
    try:
        due_date = date.fromisoformat((due or "").strip())
    except ValueError:
        logger.debug("No reminders for unparseable due date %r", due)
        return []

    reminders: List[str] = []
    for offset in REMINDER_OFFSETS_DAYS:
        try:
            reminder = due_date - timedelta(days=offset)
        except OverflowError:
            continue
        if reminder < EARLIEST_REMINDER:
            continue
        reminders.append(reminder.isoformat())
    return reminders
