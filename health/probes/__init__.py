# ============================================================================
# DEPENDENCY PROBES
# ============================================================================
# STATUS: Probes - Concrete dependency checks
# PURPOSE: Database, cache, downstream HTTP and function-backed probes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Dependency Probes

Each probe implements DependencyProbe.check(); execute() supplies the
timeout and error handling.

- PostgresProbe: SELECT 1 through the psycopg pool
- RedisProbe: PING
- HttpServiceProbe: GET on a downstream health URL
- CallableProbe: any function returning bool / (bool, msg) / status
"""

from health.probes.database import PostgresProbe
from health.probes.cache import RedisProbe
from health.probes.downstream import HttpServiceProbe
from health.probes.function import CallableProbe

__all__ = [
    "PostgresProbe",
    "RedisProbe",
    "HttpServiceProbe",
    "CallableProbe",
]
