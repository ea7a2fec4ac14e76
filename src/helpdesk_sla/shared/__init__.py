"""
Shared Kernel Module
====================

Generic infrastructure used by the SLA bounded context.

DO NOT add SLA business logic to the shared kernel.
"""
