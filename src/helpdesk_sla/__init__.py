"""
helpdesk_sla
============

Service-level commitment engine for support requests.

Computes first-response and resolution deadlines over a business-hours
calendar and classifies each metric as pending, at risk, met, breached
or not applicable.
"""

__version__ = "1.0.0"
