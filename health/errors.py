# ============================================================================
# HEALTH ERRORS
# ============================================================================
# STATUS: Core - Error taxonomy for health evaluation
# PURPOSE: Exceptions raised and recovered inside the health engine
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Errors

Only DuplicateNameError and RegistrySealedError escape the engine, and only
at startup. Everything else is recovered into a ProbeResult:

- ProbeExecutionError: probe internal failure -> unhealthy/degraded result
- ProbeTimeoutError: probe exceeded its budget -> unhealthy, detail "timeout"
- OverallTimeoutExceeded: evaluator deadline -> placeholder unhealthy results
"""

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from health.core import HealthStatus


class HealthError(Exception):
    """Base class for health engine errors."""


class ProbeExecutionError(HealthError):
    """
    Raised by a probe's check() to report a failure with a chosen status.

    DependencyProbe.execute() converts it to a ProbeResult carrying
    the status (unhealthy when None) and the message as detail.
    """

    def __init__(self, message: str, status: Optional["HealthStatus"] = None):
        super().__init__(message)
        self.status = status


class ProbeTimeoutError(HealthError):
    """Probe did not finish within its timeout budget."""

    def __init__(self, timeout_seconds: float):
        super().__init__(f"probe exceeded {timeout_seconds}s budget")
        self.timeout_seconds = timeout_seconds


class OverallTimeoutExceeded(HealthError):
    """Detailed evaluation deadline passed with probes still running."""

    def __init__(self, pending: Sequence[str], timeout_seconds: float):
        super().__init__(
            f"overall timeout ({timeout_seconds}s) exceeded, "
            f"pending: {', '.join(pending)}"
        )
        self.pending = list(pending)
        self.timeout_seconds = timeout_seconds


class DuplicateNameError(HealthError):
    """A probe with this name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Probe already registered: {name}")
        self.name = name


class RegistrySealedError(HealthError):
    """Registration attempted after startup sealed the registry."""

    def __init__(self, name: str):
        super().__init__(f"Registry is sealed, cannot register probe: {name}")
        self.name = name


__all__ = [
    "HealthError",
    "ProbeExecutionError",
    "ProbeTimeoutError",
    "OverallTimeoutExceeded",
    "DuplicateNameError",
    "RegistrySealedError",
]
