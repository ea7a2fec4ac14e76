"""
SLA Application Layer
======================

Application layer for the SLA engine.

Contains:
- Services: Orchestrate policy lookup and the domain calculations
- DTOs: Serializable views of SLA results
- Messages: Display text for deadlines

This layer depends on the domain layer and the configuration provider
interface, but not on concrete infrastructure implementations.
"""

from helpdesk_sla.sla.application.dto import SLAMetricResponse, SLAResultResponse
from helpdesk_sla.sla.application.messages import (
    format_business_hours_note,
    format_expectation_message,
    format_time_remaining,
)
from helpdesk_sla.sla.application.services import (
    ISLAConfigProvider,
    SLARequest,
    SLAService,
    StaticSLAConfigProvider,
)

__all__ = [
    # DTOs
    "SLAMetricResponse",
    "SLAResultResponse",
    # Messages
    "format_business_hours_note",
    "format_expectation_message",
    "format_time_remaining",
    # Services
    "SLAService",
    "SLARequest",
    # Configuration Interfaces
    "ISLAConfigProvider",
    "StaticSLAConfigProvider",
]
