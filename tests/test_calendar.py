from datetime import datetime, time, timedelta, timezone

import pytest

from helpdesk_sla.core.exceptions import NoBusinessTimeAvailableException, ValidationException
from helpdesk_sla.sla.domain import BusinessCalendar, CalendarResolver, Holiday
from tests.conftest import chicago


def test_window_start_is_business(calendar):
    assert CalendarResolver.is_business_instant(calendar, chicago(2025, 6, 9, 9, 0))


def test_window_end_is_not_business(calendar):
    assert not CalendarResolver.is_business_instant(calendar, chicago(2025, 6, 9, 17, 0))
    last_ms = chicago(2025, 6, 9, 17, 0) - timedelta(milliseconds=1)
    assert CalendarResolver.is_business_instant(calendar, last_ms)


def test_weekend_is_not_business(calendar):
    assert not CalendarResolver.is_business_instant(calendar, chicago(2025, 6, 7, 12, 0))


def test_holiday_is_not_business(calendar_with_monday_holiday):
    assert not CalendarResolver.is_business_instant(
        calendar_with_monday_holiday, chicago(2025, 6, 9, 12, 0)
    )


def test_recurring_holiday_is_not_business(calendar):
    with_christmas = calendar.model_copy(
        update={"holidays": (Holiday(date="12-25", recurring=True, label="Christmas"),)}
    )
    # Friday 2026-12-25
    assert not CalendarResolver.is_business_instant(with_christmas, chicago(2026, 12, 25, 10))
    assert CalendarResolver.is_business_instant(with_christmas, chicago(2026, 12, 24, 10))


def test_instant_is_read_in_calendar_timezone(calendar):
    # 13:00 UTC is 08:00 CDT, 14:00 UTC is 09:00 CDT
    assert not CalendarResolver.is_business_instant(
        calendar, datetime(2025, 6, 9, 13, 0, tzinfo=timezone.utc)
    )
    assert CalendarResolver.is_business_instant(
        calendar, datetime(2025, 6, 9, 14, 0, tzinfo=timezone.utc)
    )


def test_naive_instant_rejected(calendar):
    with pytest.raises(ValidationException):
        CalendarResolver.is_business_instant(calendar, datetime(2025, 6, 9, 10))


def test_next_business_instant_unchanged_inside_window(calendar):
    instant = chicago(2025, 6, 9, 10, 30)
    assert CalendarResolver.next_business_instant(calendar, instant) == instant


def test_next_business_instant_before_window(calendar):
    result = CalendarResolver.next_business_instant(calendar, chicago(2025, 6, 9, 7, 0))
    assert result == chicago(2025, 6, 9, 9, 0)


def test_next_business_instant_after_window(calendar):
    result = CalendarResolver.next_business_instant(calendar, chicago(2025, 6, 9, 18, 0))
    assert result == chicago(2025, 6, 10, 9, 0)


def test_next_business_instant_at_window_end_skips_weekend(calendar):
    result = CalendarResolver.next_business_instant(calendar, chicago(2025, 6, 6, 17, 0))
    assert result == chicago(2025, 6, 9, 9, 0)


def test_next_business_instant_skips_holiday(calendar_with_monday_holiday):
    result = CalendarResolver.next_business_instant(
        calendar_with_monday_holiday, chicago(2025, 6, 7, 12, 0)
    )
    assert result == chicago(2025, 6, 10, 9, 0)


def test_next_business_instant_without_working_days():
    calendar = BusinessCalendar(working_days=[], timezone="America/Chicago")
    with pytest.raises(NoBusinessTimeAvailableException) as exc_info:
        CalendarResolver.next_business_instant(calendar, chicago(2025, 6, 9, 10))
    assert exc_info.value.lookahead_days == 400


def test_next_business_instant_respects_lookahead(calendar):
    friday_evening = chicago(2025, 6, 6, 18, 0)
    with pytest.raises(NoBusinessTimeAvailableException):
        CalendarResolver.next_business_instant(calendar, friday_evening, max_lookahead_days=2)
    assert CalendarResolver.next_business_instant(
        calendar, friday_evening, max_lookahead_days=3
    ) == chicago(2025, 6, 9, 9, 0)


def test_business_hours_between_same_day(calendar):
    hours = CalendarResolver.business_hours_between(
        calendar, chicago(2025, 6, 9, 10, 0), chicago(2025, 6, 9, 12, 30)
    )
    assert hours == pytest.approx(2.5)


def test_business_hours_between_over_weekend(calendar):
    hours = CalendarResolver.business_hours_between(
        calendar, chicago(2025, 6, 6, 16, 0), chicago(2025, 6, 9, 16, 0)
    )
    assert hours == pytest.approx(8.0)


def test_business_hours_between_excludes_holidays(calendar_with_monday_holiday):
    hours = CalendarResolver.business_hours_between(
        calendar_with_monday_holiday, chicago(2025, 6, 6, 16, 0), chicago(2025, 6, 10, 15, 0)
    )
    assert hours == pytest.approx(7.0)


def test_business_hours_between_reversed_is_zero(calendar):
    assert CalendarResolver.business_hours_between(
        calendar, chicago(2025, 6, 9, 12), chicago(2025, 6, 9, 10)
    ) == 0.0


def test_window_spanning_spring_forward_is_shorter():
    # 2025-03-09 02:00 CST jumps to 03:00 CDT
    calendar = BusinessCalendar(
        start=time(1, 0), end=time(4, 0),
        working_days=range(7), timezone="America/Chicago",
    )
    hours = CalendarResolver.business_hours_between(
        calendar, chicago(2025, 3, 9, 0, 0), chicago(2025, 3, 9, 12, 0)
    )
    assert hours == pytest.approx(2.0)
