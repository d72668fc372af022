# ============================================================================
# DATABASE PROBE
# ============================================================================
# STATUS: Probes - PostgreSQL connectivity
# PURPOSE: Trivial round-trip against the application's connection pool
# CREATED: 19 OCT 2026
# ============================================================================
"""
Database Probe

Policy:
- SELECT 1 succeeds within budget -> healthy
- succeeds above degraded_after_ms -> degraded
- pool exhausted, connection refused, query error or timeout -> unhealthy
"""

from typing import Optional

from psycopg import Error as PsycopgError
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from health.core import DependencyProbe, ProbeOutcome
from health.errors import ProbeExecutionError


class PostgresProbe(DependencyProbe):
    """
    PostgreSQL connectivity probe.

    Borrows a connection from the pool, so a saturated pool shows up
    as a failing probe rather than a hang.
    """

    name = "database"

    def __init__(
        self,
        pool: AsyncConnectionPool,
        degraded_after_ms: Optional[float] = 500.0,
        connect_timeout: float = 2.0,
        target: Optional[str] = None,
    ):
        """
        Args:
            pool: Async psycopg pool shared with the application
            degraded_after_ms: Soft latency threshold
            connect_timeout: Max wait for a pooled connection
            target: Credential-free host/database label for reports
        """
        self.pool = pool
        self.degraded_after_ms = degraded_after_ms
        self.connect_timeout = connect_timeout
        self.target = target

    async def check(self) -> ProbeOutcome:
        attributes = {"target": self.target} if self.target else {}

        try:
            async with self.pool.connection(timeout=self.connect_timeout) as conn:
                cursor = await conn.execute("SELECT 1")
                row = await cursor.fetchone()

        except PoolTimeout:
            raise ProbeExecutionError(
                f"no pooled connection within {self.connect_timeout}s"
            )
        except PsycopgError as e:
            raise ProbeExecutionError(f"PostgreSQL error: {e}")

        if not row or row[0] != 1:
            return ProbeOutcome.unhealthy(
                "PostgreSQL query returned unexpected result",
                **attributes,
            )

        return ProbeOutcome.healthy("PostgreSQL connected", **attributes)


__all__ = [
    "PostgresProbe",
]
