"""
SLA Domain Entities
====================

Results produced by the SLA components.

These objects live only as long as one computation call; the engine keeps
no state between calls. Persisting or displaying them is up to the caller.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from helpdesk_sla.config import STATUS_URGENCY, SLAMetricType, SLAStatus
from helpdesk_sla.sla.domain.timeutils import to_epoch_ms


@dataclass(frozen=True)
class SLADeadlines:
    """Response and resolution deadlines for one request."""

    response_deadline: datetime
    resolution_deadline: datetime
    used_business_hours: bool

    def for_metric(self, metric: SLAMetricType) -> datetime:
        if metric == SLAMetricType.RESPONSE:
            return self.response_deadline
        return self.resolution_deadline


@dataclass(frozen=True)
class SLAMetricResult:
    """Status and supporting figures for a single metric."""

    metric: SLAMetricType
    deadline: Optional[datetime]
    status: SLAStatus
    elapsed_hours: Optional[float] = None
    budget_consumed_percent: Optional[float] = None
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class SLAResult:
    """
    SLA evaluation for a request.

    Deadlines and figures are None when the priority's policy is disabled;
    both statuses are then NOT_APPLICABLE.
    """

    priority: str
    response_deadline: Optional[datetime]
    resolution_deadline: Optional[datetime]
    response_status: SLAStatus
    resolution_status: SLAStatus
    used_business_hours: bool
    response_elapsed_hours: Optional[float] = None
    resolution_elapsed_hours: Optional[float] = None
    response_budget_consumed_percent: Optional[float] = None
    resolution_budget_consumed_percent: Optional[float] = None
    response_completed_at: Optional[datetime] = None
    resolution_completed_at: Optional[datetime] = None

    @classmethod
    def not_applicable(cls, priority: str) -> "SLAResult":
        return cls(
            priority=priority,
            response_deadline=None,
            resolution_deadline=None,
            response_status=SLAStatus.NOT_APPLICABLE,
            resolution_status=SLAStatus.NOT_APPLICABLE,
            used_business_hours=False,
        )

    @classmethod
    def from_metrics(
        cls,
        priority: str,
        response: SLAMetricResult,
        resolution: SLAMetricResult,
        used_business_hours: bool
    ) -> "SLAResult":
        return cls(
            priority=priority,
            response_deadline=response.deadline,
            resolution_deadline=resolution.deadline,
            response_status=response.status,
            resolution_status=resolution.status,
            used_business_hours=used_business_hours,
            response_elapsed_hours=response.elapsed_hours,
            resolution_elapsed_hours=resolution.elapsed_hours,
            response_budget_consumed_percent=response.budget_consumed_percent,
            resolution_budget_consumed_percent=resolution.budget_consumed_percent,
            response_completed_at=response.completed_at,
            resolution_completed_at=resolution.completed_at,
        )

    @property
    def most_urgent_status(self) -> SLAStatus:
        """Get the more urgent of the two statuses."""
        return max(
            (self.response_status, self.resolution_status),
            key=STATUS_URGENCY.index
        )

    @property
    def is_any_breached(self) -> bool:
        return SLAStatus.BREACHED in (self.response_status, self.resolution_status)

    def to_dict(self) -> dict:
        """Convert to dictionary with epoch-millisecond deadlines."""
        return {
            "priority": self.priority,
            "response": {
                "deadline": _epoch_or_none(self.response_deadline),
                "status": self.response_status.value,
                "elapsed_hours": self.response_elapsed_hours,
                "budget_consumed_percent": self.response_budget_consumed_percent,
                "completed_at": _epoch_or_none(self.response_completed_at),
            },
            "resolution": {
                "deadline": _epoch_or_none(self.resolution_deadline),
                "status": self.resolution_status.value,
                "elapsed_hours": self.resolution_elapsed_hours,
                "budget_consumed_percent": self.resolution_budget_consumed_percent,
                "completed_at": _epoch_or_none(self.resolution_completed_at),
            },
            "used_business_hours": self.used_business_hours,
            "overall": {
                "status": self.most_urgent_status.value,
                "is_any_breached": self.is_any_breached,
            },
        }


@dataclass(frozen=True)
class SLAExpectation:
    """Customer-facing description of when a request will be handled."""

    response_expected_by: datetime
    resolution_expected_by: datetime
    response_message: str
    resolution_message: str
    is_business_hours_only: bool
    business_hours_note: Optional[str] = None

    def to_plain_text(self) -> str:
        """Render the expectation block for an acknowledgement message."""
        resolution = self.resolution_message
        if self.business_hours_note:
            resolution += f" ({self.business_hours_note})"
        return (
            "Service Level Expectations:\n"
            f"• Initial response: {self.response_message}\n"
            f"• Resolution target: {resolution}"
        )


def _epoch_or_none(value: Optional[datetime]) -> Optional[int]:
    return to_epoch_ms(value) if value is not None else None
