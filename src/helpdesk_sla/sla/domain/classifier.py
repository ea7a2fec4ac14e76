"""
SLA Status Classifier
=====================

Classifies a metric from its deadline, optional completion time and a
reference "now", and produces the supporting figures used for risk
flagging and compliance reporting.
"""

from datetime import datetime
from typing import Optional

from helpdesk_sla.config import SLAMetricType, SLAStatus
from helpdesk_sla.core.exceptions import (
    InvalidPolicyException,
    InvalidTimestampOrderingException,
)
from helpdesk_sla.sla.domain.calendar import CalendarResolver
from helpdesk_sla.sla.domain.entities import SLAMetricResult
from helpdesk_sla.sla.domain.timeutils import timedelta_to_hours, to_utc
from helpdesk_sla.sla.domain.value_objects import BusinessCalendar, PriorityPolicy

DEFAULT_RISK_THRESHOLD = 0.8
RISK_EPSILON = 1e-6


class SLAClassifier:
    """
    Pure functions for SLA status classification.

    The risk fraction is wall-clock elapsed time over the wall-clock span
    from budget start to deadline, for both wall-clock and business-hours
    policies. Business-hours elapsed time is reported separately.
    """

    @staticmethod
    def classify(
        deadline: datetime,
        completed_at: Optional[datetime],
        now: datetime,
        budget_start: datetime,
        risk_threshold: float = DEFAULT_RISK_THRESHOLD,
        enabled: bool = True
    ) -> SLAStatus:
        """
        Calculate the current SLA status of one metric.

        Args:
            deadline: The metric's deadline
            completed_at: When the metric was satisfied, if it has been
            now: Reference time for evaluation
            budget_start: When the budget started running
            risk_threshold: Fraction of the span after which an open metric is at risk
            enabled: False for priorities excluded from SLA tracking

        Returns:
            SLAStatus: Current status

        Raises:
            InvalidTimestampOrderingException: completed_at or now before budget_start
            InvalidPolicyException: risk_threshold outside (0, 1]
        """
        if not enabled:
            return SLAStatus.NOT_APPLICABLE

        if not 0 < risk_threshold <= 1:
            raise InvalidPolicyException(
                f"risk_threshold must be in (0, 1], got {risk_threshold!r}",
                {"risk_threshold": risk_threshold}
            )

        start_utc = to_utc(budget_start, "budget_start")
        deadline_utc = to_utc(deadline, "deadline")
        now_utc = to_utc(now, "now")

        if now_utc < start_utc:
            raise InvalidTimestampOrderingException("now", now, budget_start)

        if completed_at is not None:
            completed_utc = to_utc(completed_at, "completed_at")
            if completed_utc < start_utc:
                raise InvalidTimestampOrderingException("completed_at", completed_at, budget_start)
            if completed_utc <= deadline_utc:
                return SLAStatus.MET
            return SLAStatus.BREACHED

        if now_utc > deadline_utc:
            return SLAStatus.BREACHED

        fraction = SLAClassifier.elapsed_fraction(deadline_utc, now_utc, start_utc)
        if fraction >= risk_threshold - RISK_EPSILON:
            return SLAStatus.AT_RISK
        return SLAStatus.PENDING

    @staticmethod
    def elapsed_fraction(deadline: datetime, now: datetime, budget_start: datetime) -> float:
        """
        Wall-clock fraction of the budget span that has elapsed.

        A zero-length span counts as fully elapsed.
        """
        span = to_utc(deadline) - to_utc(budget_start)
        elapsed = to_utc(now) - to_utc(budget_start)
        if span.total_seconds() <= 0:
            return 1.0
        return elapsed / span

    @staticmethod
    def evaluate_metric(
        metric: SLAMetricType,
        policy: PriorityPolicy,
        deadline: Optional[datetime],
        budget_start: datetime,
        now: datetime,
        completed_at: Optional[datetime],
        calendar: BusinessCalendar,
        risk_threshold: float = DEFAULT_RISK_THRESHOLD
    ) -> SLAMetricResult:
        """
        Classify a metric and compute its supporting figures.

        Elapsed hours run from budget start to completion, or to ``now``
        while the metric is still open, and are measured in business hours
        when the policy is business-hours-only.
        """
        if not policy.enabled or deadline is None:
            return SLAMetricResult(metric=metric, deadline=None, status=SLAStatus.NOT_APPLICABLE)

        status = SLAClassifier.classify(
            deadline, completed_at, now, budget_start, risk_threshold
        )

        end = completed_at if completed_at is not None else now
        if policy.business_hours_only:
            elapsed_hours = CalendarResolver.business_hours_between(calendar, budget_start, end)
        else:
            elapsed_hours = max(0.0, timedelta_to_hours(to_utc(end) - to_utc(budget_start)))

        target_hours = policy.target_hours(metric)
        if target_hours > 0:
            consumed = elapsed_hours / target_hours * 100
        else:
            consumed = 100.0

        return SLAMetricResult(
            metric=metric,
            deadline=deadline,
            status=status,
            elapsed_hours=elapsed_hours,
            budget_consumed_percent=consumed,
            completed_at=completed_at,
        )
