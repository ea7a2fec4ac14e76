"""
SLA Infrastructure Layer
=========================

Concrete implementations of application interfaces:
- SLAConfigManager: YAML-backed ISLAConfigProvider with hot reload
"""

from helpdesk_sla.sla.infrastructure.config_loader import (
    ConfigFileHandler,
    SLAConfigManager,
    create_sla_service,
    parse_sla_settings,
)

__all__ = [
    "ConfigFileHandler",
    "SLAConfigManager",
    "create_sla_service",
    "parse_sla_settings",
]
