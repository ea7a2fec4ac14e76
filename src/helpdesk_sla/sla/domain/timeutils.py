"""Instant helpers shared by the SLA components."""

from datetime import datetime, timedelta, timezone

from helpdesk_sla.core.exceptions import ValidationException

_MS_PER_HOUR = 3_600_000


def ensure_aware(value: datetime, field_name: str = "instant") -> datetime:
    """Reject naive datetimes; an instant must carry its offset."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationException(
            f"{field_name} must be timezone-aware",
            {"field": field_name, "value": value.isoformat()}
        )
    return value


def to_utc(value: datetime, field_name: str = "instant") -> datetime:
    return ensure_aware(value, field_name).astimezone(timezone.utc)


def hours_to_timedelta(hours: float) -> timedelta:
    """Convert fractional hours to a timedelta rounded to whole milliseconds."""
    return timedelta(milliseconds=round(hours * _MS_PER_HOUR))


def timedelta_to_hours(delta: timedelta) -> float:
    return delta.total_seconds() / 3600


def to_epoch_ms(value: datetime) -> int:
    """Integer epoch milliseconds for an aware datetime."""
    delta = to_utc(value) - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return delta // timedelta(milliseconds=1)


def from_epoch_ms(ms: int) -> datetime:
    """UTC datetime for integer epoch milliseconds."""
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=ms)
