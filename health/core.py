# ============================================================================
# HEALTH CORE TYPES
# ============================================================================
# STATUS: Core - Probe capability and result types
# PURPOSE: Status ordering, immutable results, bounded-time probe contract
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Core Types

Status Hierarchy (worst wins):
- healthy: Dependency reachable and responsive
- degraded: Dependency works but is outside latency/quality bounds
- unhealthy: Dependency failed, timed out, or is unreachable

A DependencyProbe subclass implements check() only. execute() wraps it
with the contract every probe must honor: bounded time, measured latency,
and no exception ever escaping to the evaluator.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from health.errors import ProbeExecutionError, ProbeTimeoutError

logger = logging.getLogger(__name__)

TIMEOUT_DETAIL = "timeout"


def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def _json_safe(value: Any) -> Any:
    """Reduce an attribute value to JSON-native types; anything else becomes str."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_json_safe(v) for v in value]
    return str(value)


class HealthStatus(str, Enum):
    """Health status values, ordered healthy < degraded < unhealthy."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other: "HealthStatus") -> bool:
        """Enable comparison for 'worst wins' aggregation."""
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: "HealthStatus") -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: "HealthStatus") -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: "HealthStatus") -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity >= other.severity

    @classmethod
    def worst(cls, statuses: Iterable["HealthStatus"]) -> "HealthStatus":
        """Aggregate multiple statuses (worst wins, healthy if empty)."""
        return max(statuses, key=lambda s: s.severity, default=cls.HEALTHY)


_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}


@dataclass
class ProbeOutcome:
    """What a probe's check() observed, before timing is applied."""
    status: HealthStatus
    detail: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def healthy(cls, detail: str = None, **attributes) -> "ProbeOutcome":
        return cls(status=HealthStatus.HEALTHY, detail=detail, attributes=attributes)

    @classmethod
    def degraded(cls, detail: str, **attributes) -> "ProbeOutcome":
        return cls(status=HealthStatus.DEGRADED, detail=detail, attributes=attributes)

    @classmethod
    def unhealthy(cls, detail: str, **attributes) -> "ProbeOutcome":
        return cls(status=HealthStatus.UNHEALTHY, detail=detail, attributes=attributes)


@dataclass(frozen=True)
class ProbeResult:
    """Result of one probe execution. Immutable once produced."""
    name: str
    status: HealthStatus
    latency_ms: float
    detail: Optional[str] = None
    checked_at: datetime = field(default_factory=utc_now)
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.latency_ms < 0:
            object.__setattr__(self, "latency_ms", 0.0)
        object.__setattr__(
            self,
            "attributes",
            MappingProxyType({str(k): _json_safe(v) for k, v in self.attributes.items()}),
        )

    @classmethod
    def failed(
        cls,
        name: str,
        detail: str,
        latency_ms: float,
        **attributes,
    ) -> "ProbeResult":
        """Unhealthy result for a probe that errored or never finished."""
        return cls(
            name=name,
            status=HealthStatus.UNHEALTHY,
            latency_ms=latency_ms,
            detail=detail,
            attributes=attributes,
        )


@dataclass(frozen=True)
class HealthReport:
    """One evaluation of the process. Built fresh per call, never cached."""
    overall_status: HealthStatus
    generated_at: datetime
    uptime_seconds: float
    probes: Tuple[ProbeResult, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "probes", tuple(self.probes))

    def get(self, name: str) -> Optional[ProbeResult]:
        """Look up a probe result by name."""
        for result in self.probes:
            if result.name == name:
                return result
        return None


class DependencyProbe(ABC):
    """
    Base class for dependency probes.

    Subclass and implement check(). Callers use execute(), which never
    raises and always returns within the timeout budget.

    Attributes:
        name: Default name used when the registry does not supply one
        degraded_after_ms: Soft latency threshold; a healthy check slower
            than this is reported as degraded. None disables it.

    Example:
        class DiskProbe(DependencyProbe):
            name = "disk"

            async def check(self) -> ProbeOutcome:
                return ProbeOutcome.healthy()
    """

    name: str = "unnamed"
    degraded_after_ms: Optional[float] = None

    @abstractmethod
    async def check(self) -> ProbeOutcome:
        """
        Run one round-trip against the dependency.

        May raise; execute() converts any exception into a result.
        """

    async def _check_within(self, timeout: float) -> ProbeOutcome:
        """
        Await check() for at most timeout seconds.

        An expired check is cancelled but not awaited, so cleanup that
        blocks on cancellation cannot hold execute() past its budget.

        Raises:
            ProbeTimeoutError: check() did not finish in time
        """
        task = asyncio.create_task(self.check())
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if not done:
            task.cancel()
            task.add_done_callback(_discard_outcome)
            raise ProbeTimeoutError(timeout)

        return task.result()

    async def execute(self, timeout: float, name: Optional[str] = None) -> ProbeResult:
        """
        Run check() bounded by timeout seconds.

        Args:
            timeout: Wall-clock budget for this probe
            name: Name to report (defaults to the probe's own name)

        Returns:
            ProbeResult; failures and timeouts are unhealthy results
        """
        probe_name = name or self.name
        start = time.monotonic()

        try:
            if timeout <= 0:
                raise ProbeTimeoutError(timeout)
            outcome = await self._check_within(timeout)

        except ProbeTimeoutError as e:
            logger.warning(f"Probe {probe_name} timed out: {e}")
            return ProbeResult.failed(
                probe_name,
                TIMEOUT_DETAIL,
                _elapsed_ms(start),
                timeout_seconds=timeout,
            )

        except ProbeExecutionError as e:
            logger.warning(f"Probe {probe_name} failed: {e}")
            return ProbeResult(
                name=probe_name,
                status=e.status or HealthStatus.UNHEALTHY,
                latency_ms=_elapsed_ms(start),
                detail=str(e),
            )

        except Exception as e:
            logger.warning(f"Probe {probe_name} raised {type(e).__name__}: {e}")
            return ProbeResult.failed(
                probe_name,
                str(e) or type(e).__name__,
                _elapsed_ms(start),
                exception_type=type(e).__name__,
            )

        latency_ms = _elapsed_ms(start)
        status = outcome.status
        detail = outcome.detail

        if (
            status == HealthStatus.HEALTHY
            and self.degraded_after_ms is not None
            and latency_ms > self.degraded_after_ms
        ):
            status = HealthStatus.DEGRADED
            detail = (
                f"slow response: {latency_ms:.1f}ms "
                f"(threshold {self.degraded_after_ms:.0f}ms)"
            )

        level = logging.DEBUG if status == HealthStatus.HEALTHY else logging.WARNING
        logger.log(level, f"Probe {probe_name}: {status.value} ({latency_ms:.1f}ms)")

        return ProbeResult(
            name=probe_name,
            status=status,
            latency_ms=latency_ms,
            detail=detail,
            attributes=outcome.attributes,
        )


def _elapsed_ms(start: float) -> float:
    return max(0.0, (time.monotonic() - start) * 1000)


def _discard_outcome(task: asyncio.Task) -> None:
    # Abandoned after a timeout; retrieve any late exception so it is not reported.
    if not task.cancelled():
        task.exception()


__all__ = [
    "TIMEOUT_DETAIL",
    "HealthStatus",
    "ProbeOutcome",
    "ProbeResult",
    "HealthReport",
    "DependencyProbe",
    "utc_now",
]
