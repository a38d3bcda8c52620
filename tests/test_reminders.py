import pytest

from outline_scheduler.reminders import compute_reminders


def test_offsets_in_order():
    assert compute_reminders("2026-03-22") == ["2026-03-15", "2026-03-17", "2026-03-19"]


def test_crosses_month_and_year_boundaries():
    assert compute_reminders("2026-01-02") == ["2025-12-26", "2025-12-28", "2025-12-30"]


def test_reminders_before_1900_are_omitted():
    assert compute_reminders("1900-01-05") == ["1900-01-02"]
    assert compute_reminders("1900-01-08") == ["1900-01-01", "1900-01-03", "1900-01-05"]


@pytest.mark.parametrize("due", ["", "March 22", "2026-02-30", "0001-01-02"])
def test_unusable_due_dates_get_no_reminders(due):
    assert compute_reminders(due) == []
