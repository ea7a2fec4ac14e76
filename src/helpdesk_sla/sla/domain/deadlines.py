"""
Deadline Calculator
===================

Turns a start instant and an hour budget into a deadline, either in
wall-clock hours or by consuming business-hour capacity day by day.
"""

import math
from datetime import datetime
from typing import Optional

from helpdesk_sla.core.exceptions import InvalidPolicyException
from helpdesk_sla.shared.infrastructure.logging import get_logger
from helpdesk_sla.sla.domain.calendar import DEFAULT_MAX_LOOKAHEAD_DAYS, CalendarResolver
from helpdesk_sla.sla.domain.entities import SLADeadlines
from helpdesk_sla.sla.domain.timeutils import hours_to_timedelta, to_utc
from helpdesk_sla.sla.domain.value_objects import BusinessCalendar, PriorityPolicy

logger = get_logger(__name__)


class DeadlineCalculator:
    """
    Pure functions for SLA deadline calculations.

    Results are monotonic in the budget and depend only on the arguments.
    Deadlines are returned in the start instant's timezone.
    """

    @staticmethod
    def compute_deadline(
        start: datetime,
        budget_hours: float,
        business_hours_only: bool,
        calendar: BusinessCalendar,
        max_lookahead_days: int = DEFAULT_MAX_LOOKAHEAD_DAYS
    ) -> datetime:
        """
        Calculate the deadline for a budget.

        Args:
            start: When the budget starts running (timezone-aware)
            budget_hours: Budget in hours
            business_hours_only: Consume the budget only during business hours
            calendar: Business calendar; ignored for wall-clock budgets
            max_lookahead_days: Bound on the search for the next business window

        Returns:
            The deadline instant

        Raises:
            InvalidPolicyException: negative budget, or a deadline beyond the datetime range
            NoBusinessTimeAvailableException: calendar has no reachable window
        """
        if not math.isfinite(budget_hours) or budget_hours < 0:
            raise InvalidPolicyException(
                f"Budget must be a finite non-negative number, got {budget_hours!r}",
                {"budget_hours": budget_hours}
            )

        start_utc = to_utc(start, "start")
        try:
            remaining = hours_to_timedelta(budget_hours)
            wall_clock_deadline = start_utc + remaining
        except OverflowError as e:
            raise _out_of_range(budget_hours) from e

        if not business_hours_only:
            return wall_clock_deadline.astimezone(start.tzinfo)

        cursor = CalendarResolver.next_business_instant(
            calendar, start_utc, max_lookahead_days
        )
        segments = 0
        try:
            while True:
                segments += 1
                segment_end = CalendarResolver.window_end(calendar, cursor)
                available = segment_end - cursor
                if remaining <= available:
                    deadline = cursor + remaining
                    break
                remaining -= available
                cursor = CalendarResolver.next_business_instant(
                    calendar, segment_end, max_lookahead_days
                )
        except OverflowError as e:
            raise _out_of_range(budget_hours) from e

        logger.debug(
            "Business-hours deadline computed",
            extra={
                "budget_hours": budget_hours,
                "segments": segments,
                "timezone": calendar.timezone,
            }
        )
        return deadline.astimezone(start.tzinfo)

    @staticmethod
    def calculate_deadlines(
        policy: PriorityPolicy,
        created_at: datetime,
        calendar: BusinessCalendar,
        max_lookahead_days: int = DEFAULT_MAX_LOOKAHEAD_DAYS
    ) -> Optional[SLADeadlines]:
        """
        Calculate response and resolution deadlines for a policy.

        Returns:
            SLADeadlines, or None when the policy is disabled
        """
        if not policy.enabled:
            return None

        def deadline_for(hours: float) -> datetime:
            return DeadlineCalculator.compute_deadline(
                created_at, hours, policy.business_hours_only,
                calendar, max_lookahead_days
            )

        return SLADeadlines(
            response_deadline=deadline_for(policy.response_target_hours),
            resolution_deadline=deadline_for(policy.resolution_target_hours),
            used_business_hours=policy.business_hours_only,
        )


def _out_of_range(budget_hours: float) -> InvalidPolicyException:
    return InvalidPolicyException(
        f"Budget of {budget_hours!r} hours puts the deadline outside the supported date range",
        {"budget_hours": budget_hours}
    )
