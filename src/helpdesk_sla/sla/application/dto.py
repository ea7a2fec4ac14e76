"""
SLA Application DTOs
=====================

Data Transfer Objects for callers that store or display SLA results.

Timestamps are integer epoch milliseconds so records can be written
without timezone handling on the consumer side.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from helpdesk_sla.sla.application.messages import format_time_remaining
from helpdesk_sla.sla.domain import SLAResult
from helpdesk_sla.sla.domain.timeutils import to_epoch_ms


# ========== Type Aliases for Literals ==========
SLAStatusStr = Literal["pending", "at_risk", "met", "breached", "not_applicable"]


# ========== Response DTOs ==========

class SLAMetricResponse(BaseModel):
    """SLA figures for one metric."""
    deadline: Optional[int] = Field(None, description="Deadline, epoch milliseconds")
    status: SLAStatusStr = Field(..., description="Current status")
    elapsed_hours: Optional[float] = Field(None, description="Hours elapsed against the budget")
    budget_consumed_percent: Optional[float] = Field(None, description="Budget consumed, percent")
    completed_at: Optional[int] = Field(None, description="Completion time, epoch milliseconds")
    time_remaining: Optional[str] = Field(None, description="Time left or overdue while open, for display")


class SLAResultResponse(BaseModel):
    """SLA evaluation for one request."""
    priority: str
    response: SLAMetricResponse
    resolution: SLAMetricResponse
    used_business_hours: bool
    overall_status: SLAStatusStr
    is_any_breached: bool

    @classmethod
    def from_result(cls, result: SLAResult, now: datetime) -> "SLAResultResponse":
        """
        Build from a domain result.

        ``now`` drives the time-remaining text, which is only shown while a
        metric is still open.
        """

        def metric(deadline, status, elapsed, consumed, completed_at) -> SLAMetricResponse:
            time_remaining = None
            if deadline is not None and completed_at is None:
                time_remaining = format_time_remaining(deadline, now)
            return SLAMetricResponse(
                deadline=to_epoch_ms(deadline) if deadline is not None else None,
                status=status.value,
                elapsed_hours=elapsed,
                budget_consumed_percent=consumed,
                completed_at=to_epoch_ms(completed_at) if completed_at is not None else None,
                time_remaining=time_remaining,
            )

        return cls(
            priority=result.priority,
            response=metric(
                result.response_deadline, result.response_status,
                result.response_elapsed_hours, result.response_budget_consumed_percent,
                result.response_completed_at
            ),
            resolution=metric(
                result.resolution_deadline, result.resolution_status,
                result.resolution_elapsed_hours, result.resolution_budget_consumed_percent,
                result.resolution_completed_at
            ),
            used_business_hours=result.used_business_hours,
            overall_status=result.most_urgent_status.value,
            is_any_breached=result.is_any_breached,
        )
