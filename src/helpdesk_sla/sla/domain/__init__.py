"""
SLA Domain Layer
================

Domain layer for the SLA engine.

Contains:
- Value Objects: Immutable configuration (Holiday, BusinessCalendar,
  PriorityPolicy, SLASettings)
- Domain Services: Stateless calculations (CalendarResolver,
  DeadlineCalculator, SLAClassifier)
- Entities: Computation results (SLADeadlines, SLAMetricResult, SLAResult,
  SLAExpectation)

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from helpdesk_sla.sla.domain.calendar import CalendarResolver, DEFAULT_MAX_LOOKAHEAD_DAYS
from helpdesk_sla.sla.domain.classifier import SLAClassifier, DEFAULT_RISK_THRESHOLD
from helpdesk_sla.sla.domain.deadlines import DeadlineCalculator
from helpdesk_sla.sla.domain.entities import (
    SLADeadlines,
    SLAMetricResult,
    SLAResult,
    SLAExpectation,
)
from helpdesk_sla.sla.domain.value_objects import (
    Holiday,
    BusinessCalendar,
    PriorityPolicy,
    SLASettings,
    DEFAULT_SLA_SETTINGS,
)

__all__ = [
    # Value Objects
    "Holiday",
    "BusinessCalendar",
    "PriorityPolicy",
    "SLASettings",
    "DEFAULT_SLA_SETTINGS",
    # Domain Services
    "CalendarResolver",
    "DeadlineCalculator",
    "SLAClassifier",
    "DEFAULT_MAX_LOOKAHEAD_DAYS",
    "DEFAULT_RISK_THRESHOLD",
    # Entities
    "SLADeadlines",
    "SLAMetricResult",
    "SLAResult",
    "SLAExpectation",
]
