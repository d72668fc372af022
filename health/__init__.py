# ============================================================================
# HEALTH MODULE
# ============================================================================
# STATUS: Core - Liveness and readiness engine
# PURPOSE: Orchestrator-facing health probes for one service instance
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Module

Liveness and readiness evaluation for a single process:
- /health: Process alive (instant, no I/O)
- /health/detailed: Dependencies reachable (bounded by an overall deadline)

Architecture:
- DependencyProbe: One bounded-time check against one dependency
- ProbeRegistry: Named probes, populated and sealed at startup
- HealthEvaluator: Concurrent execution with per-probe and overall timeouts
- render(): Status code and stable body for the transport layer

Usage:
    from health import ProbeRegistry, HealthEvaluator, create_health_router
    from health.probes import PostgresProbe

    registry = ProbeRegistry()
    registry.register("database", PostgresProbe(pool))
    registry.seal()

    app.include_router(create_health_router(HealthEvaluator(registry)))
"""

from health.core import (
    HealthStatus,
    ProbeOutcome,
    ProbeResult,
    HealthReport,
    DependencyProbe,
)
from health.errors import (
    HealthError,
    ProbeExecutionError,
    ProbeTimeoutError,
    OverallTimeoutExceeded,
    DuplicateNameError,
    RegistrySealedError,
)
from health.registry import ProbeRegistry
from health.evaluator import HealthEvaluator
from health.renderer import render
from health.router import create_health_router

__all__ = [
    # Core types
    "HealthStatus",
    "ProbeOutcome",
    "ProbeResult",
    "HealthReport",
    "DependencyProbe",
    # Errors
    "HealthError",
    "ProbeExecutionError",
    "ProbeTimeoutError",
    "OverallTimeoutExceeded",
    "DuplicateNameError",
    "RegistrySealedError",
    # Registry
    "ProbeRegistry",
    # Evaluator
    "HealthEvaluator",
    # Rendering / transport
    "render",
    "create_health_router",
]
