"""
SLA Module
==========

Bounded context for service-level commitments on support requests.

Responsibilities:
- Resolve business hours over a weekday pattern, timezone and holidays
- Calculate response and resolution deadlines per priority policy
- Classify each metric as pending, at risk, met, breached or not applicable
- Load policy snapshots from YAML

Out of scope: escalation decisions, notifications, request storage.
"""
