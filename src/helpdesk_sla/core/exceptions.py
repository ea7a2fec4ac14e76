"""
Core Exceptions
================

Custom exceptions for the SLA engine.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries. None of them are retried
internally: every computation is deterministic, so an identical input
produces an identical error.
"""

from datetime import datetime
from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class InvalidPolicyException(ConfigurationException):
    """
    Raised when SLA policy or calendar configuration is unusable.

    Covers negative targets, an empty or inverted daily window, unknown
    timezones and malformed holidays. Computation is blocked, never clamped.
    """


class NoBusinessTimeAvailableException(DomainException):
    """Raised when a calendar offers no business window within the lookahead."""

    def __init__(
        self,
        timezone: str,
        lookahead_days: int,
        searched_from: datetime,
        details: Optional[dict] = None
    ):
        self.timezone = timezone
        self.lookahead_days = lookahead_days
        self.searched_from = searched_from
        super().__init__(
            f"No business time available within {lookahead_days} days "
            f"of {searched_from.isoformat()} ({timezone})",
            details or {
                "timezone": timezone,
                "lookahead_days": lookahead_days,
                "searched_from": searched_from.isoformat(),
            }
        )


class InvalidTimestampOrderingException(ValidationException):
    """Raised when a completion or reference time precedes the budget start."""

    def __init__(
        self,
        field_name: str,
        value: datetime,
        budget_start: datetime,
        details: Optional[dict] = None
    ):
        self.field_name = field_name
        self.value = value
        self.budget_start = budget_start
        super().__init__(
            f"{field_name} ({value.isoformat()}) is earlier than "
            f"budget start ({budget_start.isoformat()})",
            details or {
                "field": field_name,
                "value": value.isoformat(),
                "budget_start": budget_start.isoformat(),
            }
        )
