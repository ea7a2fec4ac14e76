"""
SLA Value Objects
==================

Immutable value objects for the SLA domain.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared between concurrent
computations; a policy change produces a new snapshot instead of
mutating the one in use.
"""

import datetime as dt
import math
import re
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from helpdesk_sla.config import Priority, SLAMetricType
from helpdesk_sla.core.exceptions import InvalidPolicyException

_MONTH_DAY = re.compile(r"(\d{1,2})-(\d{1,2})")

# Leap year, so a recurring 02-29 can be represented
_LEAP_ANCHOR_YEAR = 2000

WEEKDAY_NAMES = {
    "monday": 0, "tuesday": 1, "wednesday": 2, "thursday": 3,
    "friday": 4, "saturday": 5, "sunday": 6,
}


class Holiday(BaseModel):
    """
    A day excluded from business time.

    Recurring holidays match on (month, day) only, whatever year their
    ``date`` carries. A recurring Feb 29 therefore only matches in leap
    years. One-off holidays match exactly one calendar date.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    recurring: bool = False
    label: str = ""

    @model_validator(mode="before")
    @classmethod
    def parse_month_day(cls, data: Any) -> Any:
        """Accept ``MM-DD`` for recurring holidays."""
        if not isinstance(data, dict) or not isinstance(data.get("date"), str):
            return data

        match = _MONTH_DAY.fullmatch(data["date"].strip())
        if match is None:
            return data

        if not data.get("recurring", False):
            raise InvalidPolicyException(
                "Month-day holiday dates are only valid for recurring holidays",
                {"date": data["date"], "label": data.get("label", "")}
            )
        try:
            parsed = dt.date(_LEAP_ANCHOR_YEAR, int(match.group(1)), int(match.group(2)))
        except ValueError as e:
            raise InvalidPolicyException(
                f"Invalid holiday date {data['date']!r}: {e}",
                {"date": data["date"]}
            ) from e
        return {**data, "date": parsed}

    def matches(self, day: dt.date) -> bool:
        """Check whether the local calendar date falls on this holiday."""
        if self.recurring:
            return (day.month, day.day) == (self.date.month, self.date.day)
        return day == self.date


class BusinessCalendar(BaseModel):
    """
    Business-hours calendar for one tenant or policy domain.

    The daily window is interpreted as wall-clock time in ``timezone``;
    ``start`` is inclusive and ``end`` exclusive. Weekdays follow Python's
    convention, 0=Monday through 6=Sunday.
    """

    model_config = ConfigDict(frozen=True)

    start: dt.time = Field(default=dt.time(9, 0), description="Window start (inclusive)")
    end: dt.time = Field(default=dt.time(17, 0), description="Window end (exclusive)")
    working_days: FrozenSet[int] = Field(
        default=frozenset({0, 1, 2, 3, 4}),
        description="Weekdays that count as business days"
    )
    timezone: str = Field(default="UTC", description="IANA zone identifier")
    holidays: Tuple[Holiday, ...] = Field(default=(), description="Excluded dates")

    @field_validator("start", "end", mode="before")
    @classmethod
    def validate_window_time(cls, v: Any) -> Any:
        # YAML reads an unquoted 17:00 as the sexagesimal integer 1020
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            raise InvalidPolicyException(
                f"Business window times must be 'HH:MM' strings, got {v!r}",
                {"value": v}
            )
        return v

    @field_validator("start", "end")
    @classmethod
    def validate_naive_time(cls, v: dt.time) -> dt.time:
        if v.tzinfo is not None:
            raise InvalidPolicyException(
                "Business window times are local to the calendar timezone "
                "and must not carry their own offset",
                {"value": v.isoformat()}
            )
        return v

    @field_validator("working_days", mode="before")
    @classmethod
    def parse_working_days(cls, v: Any) -> Any:
        """Accept weekday numbers or names."""
        if isinstance(v, (str, int)):
            v = [v]
        if not isinstance(v, (list, tuple, set, frozenset, range)):
            raise InvalidPolicyException(
                f"working_days must be a list of weekdays, got {v!r}",
                {"value": v}
            )
        days = set()
        for item in v:
            if isinstance(item, str):
                name = item.strip().lower()
                if name not in WEEKDAY_NAMES:
                    raise InvalidPolicyException(f"Unknown weekday {item!r}", {"value": item})
                days.add(WEEKDAY_NAMES[name])
            elif isinstance(item, int) and not isinstance(item, bool) and 0 <= item <= 6:
                days.add(item)
            else:
                raise InvalidPolicyException(
                    f"Weekday must be 0-6 or a day name, got {item!r}",
                    {"value": item}
                )
        return frozenset(days)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidPolicyException(
                f"Unknown timezone {v!r}",
                {"timezone": v}
            ) from e
        return v

    @model_validator(mode="after")
    def validate_window(self) -> "BusinessCalendar":
        """Ensure the daily window is non-empty."""
        if self.start >= self.end:
            raise InvalidPolicyException(
                "Business window start must be earlier than end",
                {"start": self.start.isoformat(), "end": self.end.isoformat()}
            )
        return self

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def holiday_for(self, day: dt.date) -> Optional[Holiday]:
        """Get the first holiday matching a local date, if any."""
        for holiday in self.holidays:
            if holiday.matches(day):
                return holiday
        return None

    def is_working_date(self, day: dt.date) -> bool:
        """Check if a local date is a working weekday and not a holiday."""
        return day.weekday() in self.working_days and self.holiday_for(day) is None

    def window_bounds(self, day: dt.date) -> Tuple[dt.datetime, dt.datetime]:
        """
        Get the business window of a local date as UTC instants.

        Wall-clock times that fall in a DST gap resolve with the offset in
        force before the transition (fold=0).
        """
        tz = self.tz
        start = dt.datetime.combine(day, self.start, tzinfo=tz)
        end = dt.datetime.combine(day, self.end, tzinfo=tz)
        return start.astimezone(dt.timezone.utc), end.astimezone(dt.timezone.utc)

    def local_date(self, instant: dt.datetime) -> dt.date:
        return instant.astimezone(self.tz).date()


class PriorityPolicy(BaseModel):
    """SLA budgets for one severity level."""

    model_config = ConfigDict(frozen=True)

    response_target_hours: float = Field(description="Budget for first response")
    resolution_target_hours: float = Field(description="Budget for resolution")
    business_hours_only: bool = Field(
        default=False,
        description="Consume the budget only during business hours"
    )
    enabled: bool = Field(default=True, description="Participates in SLA tracking")

    @model_validator(mode="after")
    def validate_targets(self) -> "PriorityPolicy":
        for name in ("response_target_hours", "resolution_target_hours"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidPolicyException(
                    f"{name} must be a finite non-negative number, got {value!r}",
                    {"field": name, "value": value}
                )
        return self

    def target_hours(self, metric: SLAMetricType) -> float:
        """Get the budget for a metric."""
        if metric == SLAMetricType.RESPONSE:
            return self.response_target_hours
        return self.resolution_target_hours


def _default_policies() -> Dict[str, PriorityPolicy]:
    return {
        Priority.URGENT.value: PriorityPolicy(
            response_target_hours=1, resolution_target_hours=4,
            business_hours_only=False,
        ),
        Priority.HIGH.value: PriorityPolicy(
            response_target_hours=4, resolution_target_hours=8,
            business_hours_only=False,
        ),
        Priority.MEDIUM.value: PriorityPolicy(
            response_target_hours=8, resolution_target_hours=24,
            business_hours_only=True,
        ),
        Priority.LOW.value: PriorityPolicy(
            response_target_hours=24, resolution_target_hours=72,
            business_hours_only=True,
        ),
    }


class SLASettings(BaseModel):
    """
    Complete SLA configuration snapshot: per-priority policies, the
    business calendar they share, and the at-risk threshold.

    Loaded from YAML by the infrastructure layer and handed explicitly to
    every computation.
    """

    model_config = ConfigDict(frozen=True)

    policies: Dict[str, PriorityPolicy] = Field(
        default_factory=_default_policies,
        description="Policy by priority name"
    )
    business_hours: BusinessCalendar = Field(
        default_factory=BusinessCalendar,
        description="Calendar used by business-hours-only policies"
    )
    risk_threshold: float = Field(
        default=0.8,
        description="Fraction of the budget after which an open metric is at risk"
    )

    @field_validator("policies", mode="before")
    @classmethod
    def normalize_priority_keys(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {normalize_priority(k): policy for k, policy in v.items()}
        return v

    @field_validator("risk_threshold")
    @classmethod
    def validate_risk_threshold(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise InvalidPolicyException(
                f"risk_threshold must be in (0, 1], got {v!r}",
                {"risk_threshold": v}
            )
        return v

    def policy_for(self, priority: Union[Priority, str]) -> PriorityPolicy:
        """Get the policy for a priority, failing on unknown priorities."""
        key = normalize_priority(priority)
        try:
            return self.policies[key]
        except KeyError:
            raise InvalidPolicyException(
                f"No SLA policy configured for priority {key!r}",
                {"priority": key, "configured": sorted(self.policies)}
            ) from None


def normalize_priority(priority: Union[Priority, str]) -> str:
    """Map a Priority or free-form name to its policy key."""
    if isinstance(priority, Priority):
        return priority.value
    return str(priority).strip().lower()


DEFAULT_SLA_SETTINGS = SLASettings(
    business_hours=BusinessCalendar(timezone="America/Chicago"),
)
