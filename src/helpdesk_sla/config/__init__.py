"""
Configuration Module
====================

Application settings and configuration management using Pydantic.

Environment settings only describe how the engine runs (log level, where
the policy file lives, lookahead bound). SLA policies themselves are
loaded as immutable snapshots and passed explicitly to every computation.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== SLA Configuration ==========
    sla_config_path: Path = Field(
        default=Path("sla_config.yaml"),
        description="Path to SLA policy YAML file"
    )
    sla_risk_threshold: float = Field(
        default=0.8,
        description="Fraction of the budget after which an open metric is at risk",
        gt=0.0,
        le=1.0
    )
    sla_max_lookahead_days: int = Field(
        default=400,
        description="Days searched for the next business window before giving up",
        ge=1
    )
    sla_watch_config: bool = Field(
        default=False,
        description="Reload the policy file when it changes on disk"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# ========== Constants ==========

class Priority(str, Enum):
    """Request priority levels."""
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SLAMetricType(str, Enum):
    """Types of SLA clocks."""
    RESPONSE = "response"
    RESOLUTION = "resolution"


class SLAStatus(str, Enum):
    """SLA status states."""
    PENDING = "pending"
    AT_RISK = "at_risk"
    MET = "met"
    BREACHED = "breached"
    NOT_APPLICABLE = "not_applicable"


# Ordered from least to most urgent
STATUS_URGENCY = [
    SLAStatus.NOT_APPLICABLE,
    SLAStatus.MET,
    SLAStatus.PENDING,
    SLAStatus.AT_RISK,
    SLAStatus.BREACHED,
]
