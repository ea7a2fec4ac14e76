"""Human-readable SLA text: time remaining and expectation messages."""

from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from helpdesk_sla.sla.domain.timeutils import to_utc
from helpdesk_sla.sla.domain.value_objects import BusinessCalendar


def format_time_remaining(deadline: datetime, now: datetime) -> str:
    """
    Format time left before a deadline, or time past it.

    Examples: "2d 3h remaining", "4h 10m remaining", "15m overdue".
    """
    delta = to_utc(deadline, "deadline") - to_utc(now, "now")
    suffix = "remaining" if delta > timedelta(0) else "overdue"
    total_minutes = int(abs(delta).total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)

    if hours > 24:
        days, hours = divmod(hours, 24)
        return f"{days}d {hours}h {suffix}"
    if hours > 0:
        return f"{hours}h {minutes}m {suffix}"
    return f"{minutes}m {suffix}"


def _clock(local: datetime) -> str:
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {meridiem}"


def _long_date(local: datetime) -> str:
    return f"{local:%A}, {local:%B} {local.day}"


def format_expectation_message(
    expected_by: datetime,
    hours: float,
    business_hours_only: bool,
    now: datetime,
    tz: Optional[ZoneInfo] = None
) -> str:
    """
    Describe a deadline relative to ``now`` in the given timezone.

    Example: "within 8 business hours (by 3:00 PM on Monday, March 3)".
    """
    tz = tz or to_utc(now).tzinfo
    local = to_utc(expected_by, "expected_by").astimezone(tz)
    today = to_utc(now, "now").astimezone(tz).date()

    if local.date() == today:
        timeframe = f"today by {_clock(local)}"
    elif local.date() == today + timedelta(days=1):
        timeframe = f"tomorrow ({_long_date(local)}) by {_clock(local)}"
    else:
        timeframe = f"by {_clock(local)} on {_long_date(local)}"

    unit = "hour" if hours == 1 else "hours"
    qualifier = "business " if business_hours_only else ""
    return f"within {hours:g} {qualifier}{unit} ({timeframe})"


def format_business_hours_note(calendar: BusinessCalendar) -> str:
    """
    Describe the calendar behind business-hours deadlines.

    Example: "calculated using business hours: 09:00-17:00,
    America/Chicago, excluding 2 configured holidays".
    """
    note = (
        f"calculated using business hours: "
        f"{calendar.start:%H:%M}-{calendar.end:%H:%M}, {calendar.timezone}"
    )
    count = len(calendar.holidays)
    if count:
        note += f", excluding {count} configured holiday{'' if count == 1 else 's'}"
    return note
