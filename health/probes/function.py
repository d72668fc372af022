# ============================================================================
# CALLABLE PROBE
# ============================================================================
# STATUS: Probes - Adapter for plain check functions
# PURPOSE: Turn a sync or async function into a DependencyProbe
# CREATED: 19 OCT 2026
# ============================================================================
"""
Callable Probe

Accepted return values:
- bool: True -> healthy, False -> unhealthy
- (bool, message) tuple
- HealthStatus
- ProbeOutcome

Sync functions run in a worker thread so the probe timeout still bounds
them; a thread that overruns keeps running and its result is discarded.
"""

import asyncio
import inspect
from typing import Any, Callable, Optional

from health.core import DependencyProbe, HealthStatus, ProbeOutcome


class CallableProbe(DependencyProbe):
    """Probe backed by a check function."""

    name = "callable"

    def __init__(
        self,
        func: Callable[[], Any],
        degraded_after_ms: Optional[float] = None,
    ):
        self.func = func
        self.degraded_after_ms = degraded_after_ms

    async def check(self) -> ProbeOutcome:
        if inspect.iscoroutinefunction(self.func):
            value = await self.func()
        else:
            value = await asyncio.to_thread(self.func)
            if inspect.isawaitable(value):
                value = await value
        return _to_outcome(value)


def _to_outcome(value: Any) -> ProbeOutcome:
    if isinstance(value, ProbeOutcome):
        return value
    if isinstance(value, HealthStatus):
        return ProbeOutcome(status=value)
    if isinstance(value, tuple) and len(value) == 2:
        ok, message = value
        if ok:
            return ProbeOutcome.healthy(str(message) if message else None)
        return ProbeOutcome.unhealthy(str(message) if message else "check failed")
    if isinstance(value, bool):
        return ProbeOutcome.healthy() if value else ProbeOutcome.unhealthy("check failed")
    raise TypeError(f"Unsupported check return value: {type(value).__name__}")


__all__ = [
    "CallableProbe",
]
