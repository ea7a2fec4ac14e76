"""
SLA Application Services
=========================

Application services orchestrate the domain components for a request.

Following SOLID principles:
- Single Responsibility: the service only wires policy lookup to the
  pure domain calculations
- Dependency Inversion: policy comes from an ISLAConfigProvider, read once
  per call as an immutable snapshot
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Union

from helpdesk_sla.config import Priority, SLAMetricType
from helpdesk_sla.shared.infrastructure.logging import get_logger, log_latency
from helpdesk_sla.sla.application.messages import (
    format_business_hours_note,
    format_expectation_message,
)
from helpdesk_sla.sla.domain import (
    DEFAULT_MAX_LOOKAHEAD_DAYS,
    DeadlineCalculator,
    SLAClassifier,
    SLADeadlines,
    SLAExpectation,
    SLAResult,
    SLASettings,
)
from helpdesk_sla.sla.domain.value_objects import normalize_priority

logger = get_logger(__name__)


# ========== Configuration Interface (Dependency Inversion) ==========

class ISLAConfigProvider(ABC):
    """Interface for SLA configuration access."""

    @abstractmethod
    def get_config(self) -> SLASettings:
        """Get the current SLA configuration snapshot."""


class StaticSLAConfigProvider(ISLAConfigProvider):
    """Provider over a fixed snapshot."""

    def __init__(self, config: SLASettings):
        self._config = config

    def get_config(self) -> SLASettings:
        return self._config


# ========== Inputs ==========

@dataclass(frozen=True)
class SLARequest:
    """The timestamps of one support request needed for SLA evaluation."""

    priority: Union[Priority, str]
    created_at: datetime
    first_response_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None


# ========== Application Services ==========

class SLAService:
    """
    Service for SLA deadlines and status of support requests.

    Safe to share between threads: it holds no mutable state and reads a
    fresh configuration snapshot on every call.
    """

    def __init__(
        self,
        config_provider: ISLAConfigProvider,
        max_lookahead_days: int = DEFAULT_MAX_LOOKAHEAD_DAYS
    ):
        self._config_provider = config_provider
        self._max_lookahead_days = max_lookahead_days

    @property
    def config_provider(self) -> ISLAConfigProvider:
        return self._config_provider

    @property
    def config(self) -> SLASettings:
        """Get SLA configuration."""
        return self._config_provider.get_config()

    def calculate_deadlines(
        self,
        priority: Union[Priority, str],
        created_at: datetime
    ) -> Optional[SLADeadlines]:
        """
        Calculate deadlines for a new request.

        Returns:
            SLADeadlines, or None if the priority is not tracked
        """
        config = self.config
        return DeadlineCalculator.calculate_deadlines(
            config.policy_for(priority), created_at,
            config.business_hours, self._max_lookahead_days
        )

    def evaluate(
        self,
        priority: Union[Priority, str],
        created_at: datetime,
        now: datetime,
        first_response_at: Optional[datetime] = None,
        resolved_at: Optional[datetime] = None
    ) -> SLAResult:
        """
        Evaluate both SLA metrics of a request.

        Args:
            priority: Request priority
            created_at: Request creation time (start of both budgets)
            now: Reference time for evaluation
            first_response_at: First response time, if any
            resolved_at: Resolution time, if any

        Returns:
            SLAResult with deadlines, statuses and elapsed figures
        """
        config = self.config
        policy = config.policy_for(priority)
        priority_key = normalize_priority(priority)

        deadlines = DeadlineCalculator.calculate_deadlines(
            policy, created_at, config.business_hours, self._max_lookahead_days
        )
        if deadlines is None:
            return SLAResult.not_applicable(priority_key)

        response = SLAClassifier.evaluate_metric(
            SLAMetricType.RESPONSE, policy, deadlines.response_deadline,
            created_at, now, first_response_at,
            config.business_hours, config.risk_threshold
        )
        resolution = SLAClassifier.evaluate_metric(
            SLAMetricType.RESOLUTION, policy, deadlines.resolution_deadline,
            created_at, now, resolved_at,
            config.business_hours, config.risk_threshold
        )

        logger.debug(
            "SLA evaluated",
            extra={
                "priority": priority_key,
                "response_status": response.status.value,
                "resolution_status": resolution.status.value,
            }
        )
        return SLAResult.from_metrics(
            priority_key, response, resolution, deadlines.used_business_hours
        )

    def evaluate_many(
        self,
        requests: Iterable[SLARequest],
        now: datetime,
        correlation_id: Optional[str] = None
    ) -> List[SLAResult]:
        """
        Evaluate a batch of requests against one reference time.

        Each request is evaluated independently; results keep input order.
        """
        batch = list(requests)
        context = {"requests": len(batch)}
        if correlation_id:
            context["correlation_id"] = correlation_id
        with log_latency(logger, "sla_sweep", **context):
            return [
                self.evaluate(
                    request.priority, request.created_at, now,
                    request.first_response_at, request.resolved_at
                )
                for request in batch
            ]

    def describe_expectation(
        self,
        priority: Union[Priority, str],
        created_at: datetime,
        now: datetime
    ) -> Optional[SLAExpectation]:
        """
        Build customer-facing expectation text for a new request.

        Times are rendered in the business calendar's timezone.

        Returns:
            SLAExpectation, or None if the priority is not tracked
        """
        config = self.config
        policy = config.policy_for(priority)
        deadlines = DeadlineCalculator.calculate_deadlines(
            policy, created_at, config.business_hours, self._max_lookahead_days
        )
        if deadlines is None:
            return None

        tz = config.business_hours.tz
        return SLAExpectation(
            response_expected_by=deadlines.response_deadline,
            resolution_expected_by=deadlines.resolution_deadline,
            response_message=format_expectation_message(
                deadlines.response_deadline, policy.response_target_hours,
                policy.business_hours_only, now, tz
            ),
            resolution_message=format_expectation_message(
                deadlines.resolution_deadline, policy.resolution_target_hours,
                policy.business_hours_only, now, tz
            ),
            is_business_hours_only=policy.business_hours_only,
            business_hours_note=(
                format_business_hours_note(config.business_hours)
                if policy.business_hours_only else None
            ),
        )
