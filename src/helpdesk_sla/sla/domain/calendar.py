"""
Calendar Resolver
=================

Answers "is this instant inside business hours?" and "when do business
hours next begin?" for a BusinessCalendar.

All arithmetic is done on UTC instants. Local dates are only used to pick
which daily window applies, so DST transitions never distort durations.
"""

from datetime import datetime, timedelta

from helpdesk_sla.core.exceptions import NoBusinessTimeAvailableException
from helpdesk_sla.shared.infrastructure.logging import get_logger
from helpdesk_sla.sla.domain.timeutils import timedelta_to_hours, to_utc
from helpdesk_sla.sla.domain.value_objects import BusinessCalendar

logger = get_logger(__name__)

DEFAULT_MAX_LOOKAHEAD_DAYS = 400


class CalendarResolver:
    """
    Pure functions over a business calendar.

    Stateless utility class; every method takes the calendar explicitly.
    """

    @staticmethod
    def is_business_instant(calendar: BusinessCalendar, instant: datetime) -> bool:
        """
        Check whether an instant falls inside business hours.

        True iff the local weekday is a working day, the local date is not a
        holiday, and the local time is in [start, end).
        """
        local = to_utc(instant).astimezone(calendar.tz)
        if not calendar.is_working_date(local.date()):
            return False
        local_time = local.time()
        return calendar.start <= local_time < calendar.end

    @staticmethod
    def next_business_instant(
        calendar: BusinessCalendar,
        instant: datetime,
        max_lookahead_days: int = DEFAULT_MAX_LOOKAHEAD_DAYS
    ) -> datetime:
        """
        Get the first business instant at or after ``instant``.

        Returns ``instant`` itself (in UTC) when it is already business time.
        Otherwise snaps forward to the start of the current or next working,
        non-holiday day's window.

        Raises:
            NoBusinessTimeAvailableException: no window within the lookahead
        """
        current = to_utc(instant)
        first_day = calendar.local_date(current)

        for offset in range(max_lookahead_days + 1):
            day = first_day + timedelta(days=offset)
            if not calendar.is_working_date(day):
                continue
            window_start, window_end = calendar.window_bounds(day)
            if current < window_start:
                return window_start
            if current < window_end:
                return current

        logger.warning(
            "Business calendar lookahead exhausted",
            extra={
                "timezone": calendar.timezone,
                "lookahead_days": max_lookahead_days,
                "searched_from": current.isoformat(),
            }
        )
        raise NoBusinessTimeAvailableException(
            calendar.timezone, max_lookahead_days, current
        )

    @staticmethod
    def window_end(calendar: BusinessCalendar, instant: datetime) -> datetime:
        """Get the end of the business window on the instant's local date."""
        day = calendar.local_date(to_utc(instant))
        return calendar.window_bounds(day)[1]

    @staticmethod
    def business_hours_between(
        calendar: BusinessCalendar,
        start: datetime,
        end: datetime
    ) -> float:
        """
        Count business hours between two instants.

        Holidays and non-working days contribute nothing. Returns 0.0 when
        ``end`` is not after ``start``.
        """
        start_utc = to_utc(start, "start")
        end_utc = to_utc(end, "end")
        if end_utc <= start_utc:
            return 0.0

        total = timedelta(0)
        day = calendar.local_date(start_utc)
        last_day = calendar.local_date(end_utc)
        while day <= last_day:
            if calendar.is_working_date(day):
                window_start, window_end = calendar.window_bounds(day)
                lo = max(window_start, start_utc)
                hi = min(window_end, end_utc)
                if lo < hi:
                    total += hi - lo
            day += timedelta(days=1)

        return timedelta_to_hours(total)
