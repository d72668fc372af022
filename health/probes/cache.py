# ============================================================================
# CACHE PROBE
# ============================================================================
# STATUS: Probes - Redis connectivity
# PURPOSE: PING round-trip against the cache
# CREATED: 19 OCT 2026
# ============================================================================
"""
Cache Probe

PING succeeds -> healthy (degraded above the latency threshold),
connection or protocol errors -> unhealthy.
"""

from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from health.core import DependencyProbe, ProbeOutcome
from health.errors import ProbeExecutionError


class RedisProbe(DependencyProbe):
    """Redis PING probe."""

    name = "cache"

    def __init__(
        self,
        client: Redis,
        degraded_after_ms: Optional[float] = 200.0,
    ):
        self.client = client
        self.degraded_after_ms = degraded_after_ms

    @classmethod
    def from_url(
        cls,
        url: str,
        degraded_after_ms: Optional[float] = 200.0,
        socket_timeout: float = 2.0,
    ) -> "RedisProbe":
        """Build a probe with its own client for the given redis:// URL."""
        client = Redis.from_url(
            url,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )
        return cls(client, degraded_after_ms=degraded_after_ms)

    async def check(self) -> ProbeOutcome:
        try:
            pong = await self.client.ping()
        except RedisError as e:
            raise ProbeExecutionError(f"Redis error: {e}")

        if not pong:
            return ProbeOutcome.unhealthy("Redis PING returned no reply")

        return ProbeOutcome.healthy("Redis reachable")

    async def close(self) -> None:
        await self.client.aclose()


__all__ = [
    "RedisProbe",
]
