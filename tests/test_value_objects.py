from datetime import date, time

import pytest
from pydantic import ValidationError

from helpdesk_sla.config import Priority, SLAMetricType
from helpdesk_sla.core.exceptions import InvalidPolicyException
from helpdesk_sla.sla.domain import (
    DEFAULT_SLA_SETTINGS,
    BusinessCalendar,
    Holiday,
    PriorityPolicy,
    SLASettings,
)


def test_recurring_holiday_matches_every_year():
    christmas = Holiday(date=date(2020, 12, 25), recurring=True, label="Christmas")
    for year in range(2021, 2035):
        assert christmas.matches(date(year, 12, 25))
    assert not christmas.matches(date(2026, 12, 24))


def test_one_off_holiday_matches_single_date():
    offsite = Holiday(date=date(2025, 6, 9), label="Offsite")
    assert offsite.matches(date(2025, 6, 9))
    assert not offsite.matches(date(2026, 6, 9))


def test_recurring_holiday_accepts_month_day():
    holiday = Holiday(date="12-25", recurring=True)
    assert (holiday.date.month, holiday.date.day) == (12, 25)
    assert holiday.matches(date(2030, 12, 25))


def test_month_day_requires_recurring():
    with pytest.raises(InvalidPolicyException):
        Holiday(date="12-25", recurring=False)


def test_invalid_month_day_rejected():
    with pytest.raises(InvalidPolicyException):
        Holiday(date="02-30", recurring=True)


def test_recurring_leap_day_only_matches_leap_years():
    leap_day = Holiday(date="02-29", recurring=True)
    assert leap_day.matches(date(2028, 2, 29))
    assert not leap_day.matches(date(2027, 2, 28))
    assert not leap_day.matches(date(2027, 3, 1))


def test_calendar_window_must_be_non_empty():
    with pytest.raises(InvalidPolicyException):
        BusinessCalendar(start=time(17, 0), end=time(9, 0))
    with pytest.raises(InvalidPolicyException):
        BusinessCalendar(start=time(9, 0), end=time(9, 0))


def test_calendar_rejects_numeric_window_time():
    with pytest.raises(InvalidPolicyException):
        BusinessCalendar(start="09:00", end=1020)


def test_calendar_rejects_unknown_timezone():
    with pytest.raises(InvalidPolicyException):
        BusinessCalendar(timezone="Mars/Olympus_Mons")


def test_calendar_accepts_weekday_names():
    calendar = BusinessCalendar(working_days=["Monday", "wednesday", 4])
    assert calendar.working_days == frozenset({0, 2, 4})


@pytest.mark.parametrize("day", [7, -1, "funday"])
def test_calendar_rejects_invalid_weekday(day):
    with pytest.raises(InvalidPolicyException):
        BusinessCalendar(working_days=[0, day])


def test_calendar_is_working_date(calendar_with_monday_holiday):
    assert not calendar_with_monday_holiday.is_working_date(date(2025, 6, 9))
    assert calendar_with_monday_holiday.is_working_date(date(2025, 6, 10))
    assert not calendar_with_monday_holiday.is_working_date(date(2025, 6, 7))


def test_calendar_is_immutable(calendar):
    with pytest.raises(ValidationError):
        calendar.timezone = "UTC"


def test_policy_rejects_negative_targets():
    with pytest.raises(InvalidPolicyException):
        PriorityPolicy(response_target_hours=-1, resolution_target_hours=4)
    with pytest.raises(InvalidPolicyException):
        PriorityPolicy(response_target_hours=1, resolution_target_hours=float("nan"))


def test_policy_target_hours_by_metric():
    policy = PriorityPolicy(response_target_hours=2, resolution_target_hours=16)
    assert policy.target_hours(SLAMetricType.RESPONSE) == 2
    assert policy.target_hours(SLAMetricType.RESOLUTION) == 16


def test_settings_rejects_risk_threshold_outside_unit_interval():
    with pytest.raises(InvalidPolicyException):
        SLASettings(risk_threshold=0)
    with pytest.raises(InvalidPolicyException):
        SLASettings(risk_threshold=1.2)


def test_settings_policy_lookup_is_case_insensitive(sla_settings):
    assert sla_settings.policy_for("Medium") is sla_settings.policy_for(Priority.MEDIUM)


def test_settings_unknown_priority(sla_settings):
    with pytest.raises(InvalidPolicyException):
        sla_settings.policy_for("critical")


def test_default_settings():
    assert DEFAULT_SLA_SETTINGS.business_hours.timezone == "America/Chicago"
    assert DEFAULT_SLA_SETTINGS.policy_for("urgent").response_target_hours == 1
    assert DEFAULT_SLA_SETTINGS.policy_for("low").business_hours_only is True
    assert DEFAULT_SLA_SETTINGS.risk_threshold == 0.8


@pytest.mark.parametrize("working_days", [None, 3.5, {"monday": True}])
def test_calendar_rejects_non_list_working_days(working_days):
    with pytest.raises(InvalidPolicyException):
        BusinessCalendar(working_days=working_days)
