import logging
from datetime import datetime, time
from zoneinfo import ZoneInfo

import pytest

from helpdesk_sla.sla.application import SLAService, StaticSLAConfigProvider
from helpdesk_sla.sla.domain import BusinessCalendar, Holiday, PriorityPolicy, SLASettings

CHICAGO = ZoneInfo("America/Chicago")


def chicago(year, month, day, hour=0, minute=0, second=0):
    return datetime(year, month, day, hour, minute, second, tzinfo=CHICAGO)


@pytest.fixture
def calendar():
    """Monday-Friday 09:00-17:00 in Chicago, no holidays."""
    return BusinessCalendar(
        start=time(9, 0),
        end=time(17, 0),
        working_days={0, 1, 2, 3, 4},
        timezone="America/Chicago",
    )


@pytest.fixture
def calendar_with_monday_holiday(calendar):
    # Monday 2025-06-09
    return calendar.model_copy(
        update={"holidays": (Holiday(date="2025-06-09", label="Company offsite"),)}
    )


@pytest.fixture
def sla_settings(calendar):
    return SLASettings(
        policies={
            "urgent": PriorityPolicy(response_target_hours=1, resolution_target_hours=4),
            "high": PriorityPolicy(response_target_hours=4, resolution_target_hours=8),
            "medium": PriorityPolicy(
                response_target_hours=8, resolution_target_hours=24,
                business_hours_only=True,
            ),
            "low": PriorityPolicy(
                response_target_hours=24, resolution_target_hours=72,
                business_hours_only=True, enabled=False,
            ),
        },
        business_hours=calendar,
        risk_threshold=0.8,
    )


@pytest.fixture
def sla_service(sla_settings):
    return SLAService(StaticSLAConfigProvider(sla_settings))


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
