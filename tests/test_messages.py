from datetime import datetime, timedelta, timezone

import pytest

from helpdesk_sla.core.exceptions import ValidationException
from helpdesk_sla.sla.application import (
    format_business_hours_note,
    format_expectation_message,
    format_time_remaining,
)
from helpdesk_sla.sla.domain.timeutils import from_epoch_ms, hours_to_timedelta, to_epoch_ms
from tests.conftest import CHICAGO, chicago

NOW = datetime(2025, 6, 9, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(days=2, hours=3), "2d 3h remaining"),
        (timedelta(hours=24), "24h 0m remaining"),
        (timedelta(hours=4, minutes=10), "4h 10m remaining"),
        (timedelta(minutes=9, seconds=59), "9m remaining"),
        (timedelta(0), "0m overdue"),
        (-timedelta(minutes=15), "15m overdue"),
        (-timedelta(days=3, hours=1), "3d 1h overdue"),
    ],
)
def test_format_time_remaining(delta, expected):
    assert format_time_remaining(NOW + delta, NOW) == expected


def test_expectation_message_tomorrow():
    message = format_expectation_message(
        chicago(2025, 6, 10, 0, 0), 4, False, chicago(2025, 6, 9, 20, 0), CHICAGO
    )
    assert message == "within 4 hours (tomorrow (Tuesday, June 10) by 12:00 AM)"


def test_expectation_message_fractional_hours():
    message = format_expectation_message(
        chicago(2025, 6, 9, 13, 30), 1.5, True, chicago(2025, 6, 9, 12, 0), CHICAGO
    )
    assert message == "within 1.5 business hours (today by 1:30 PM)"


def test_epoch_milliseconds():
    assert to_epoch_ms(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000
    assert from_epoch_ms(1_749_470_400_000) == datetime(2025, 6, 9, 12, 0, tzinfo=timezone.utc)
    assert to_epoch_ms(chicago(2025, 6, 9, 7, 0)) == 1_749_470_400_000


def test_hours_round_to_milliseconds():
    assert hours_to_timedelta(1 / 3) == timedelta(milliseconds=1_200_000)


def test_epoch_requires_aware_datetime():
    with pytest.raises(ValidationException):
        to_epoch_ms(datetime(2025, 6, 9, 12))


def test_business_hours_note_counts_holidays(calendar_with_monday_holiday):
    assert format_business_hours_note(calendar_with_monday_holiday) == (
        "calculated using business hours: 09:00-17:00, America/Chicago, "
        "excluding 1 configured holiday"
    )
    with_two = calendar_with_monday_holiday.model_copy(
        update={"holidays": calendar_with_monday_holiday.holidays * 2}
    )
    assert format_business_hours_note(with_two).endswith("excluding 2 configured holidays")
