# ============================================================================
# DOWNSTREAM SERVICE PROBE
# ============================================================================
# STATUS: Probes - HTTP dependency reachability
# PURPOSE: GET a downstream service's health URL
# CREATED: 19 OCT 2026
# ============================================================================
"""
Downstream Service Probe

- 2xx -> healthy (degraded above the latency threshold)
- any other status -> unhealthy, status code in attributes
- connect errors, timeouts, protocol errors -> unhealthy
"""

from typing import Optional

import httpx

from health.core import DependencyProbe, ProbeOutcome
from health.errors import ProbeExecutionError


class HttpServiceProbe(DependencyProbe):
    """
    Downstream HTTP service probe.

    A client may be injected (shared connection pool, or a mock transport
    in tests); otherwise one client is created per check.
    """

    name = "downstream"

    def __init__(
        self,
        url: str,
        degraded_after_ms: Optional[float] = 1000.0,
        request_timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.degraded_after_ms = degraded_after_ms
        self.request_timeout = request_timeout
        self.client = client

    async def check(self) -> ProbeOutcome:
        try:
            if self.client is not None:
                response = await self.client.get(self.url, timeout=self.request_timeout)
            else:
                async with httpx.AsyncClient(timeout=self.request_timeout) as client:
                    response = await client.get(self.url)

        except httpx.TimeoutException:
            raise ProbeExecutionError(f"request to {self.url} timed out")
        except httpx.ConnectError as e:
            raise ProbeExecutionError(f"cannot connect to {self.url}: {e}")
        except httpx.HTTPError as e:
            raise ProbeExecutionError(f"HTTP error from {self.url}: {e}")

        if not response.is_success:
            return ProbeOutcome.unhealthy(
                f"{self.url} returned status {response.status_code}",
                url=self.url,
                status_code=response.status_code,
            )

        return ProbeOutcome.healthy(
            f"{self.url} reachable",
            url=self.url,
            status_code=response.status_code,
        )


__all__ = [
    "HttpServiceProbe",
]
