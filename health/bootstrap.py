# ============================================================================
# PROBE BOOTSTRAP
# ============================================================================
# STATUS: Core - Startup wiring
# PURPOSE: Build the probe registry and evaluator from configuration
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe Bootstrap

Called once from the application lifespan handler, before the server
accepts requests. A DuplicateNameError here aborts startup.
"""

import logging
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from core.config import HealthSettings
from health.evaluator import HealthEvaluator
from health.probes import HttpServiceProbe, PostgresProbe, RedisProbe
from health.registry import ProbeRegistry

logger = logging.getLogger(__name__)


def build_registry(
    settings: HealthSettings,
    pool: Optional[AsyncConnectionPool] = None,
) -> ProbeRegistry:
    """
    Register the configured probes in display order.

    Order: database, cache, then downstream services as listed.
    The registry is returned unsealed so callers can add their own probes.

    Args:
        settings: Health settings
        pool: Database pool; the database probe is skipped without one
    """
    registry = ProbeRegistry()

    if settings.database.enabled and pool is not None:
        registry.register(
            "database",
            PostgresProbe(
                pool,
                degraded_after_ms=settings.database.degraded_ms,
                connect_timeout=settings.health.probe_timeout_seconds,
                target=settings.database.safe_target,
            ),
        )

    if settings.cache.enabled:
        registry.register(
            "cache",
            RedisProbe.from_url(
                settings.cache.redis_url,
                degraded_after_ms=settings.cache.degraded_ms,
                socket_timeout=settings.health.probe_timeout_seconds,
            ),
        )

    for name, url in settings.downstream.services:
        registry.register(
            name,
            HttpServiceProbe(
                url,
                degraded_after_ms=settings.downstream.degraded_ms,
                request_timeout=settings.health.probe_timeout_seconds,
            ),
        )

    logger.info(f"Configured {len(registry)} dependency probes: {', '.join(registry.names()) or 'none'}")
    return registry


def build_evaluator(
    settings: HealthSettings,
    registry: ProbeRegistry,
    started_at: Optional[float] = None,
) -> HealthEvaluator:
    """Seal the registry and wrap it in an evaluator with configured timeouts."""
    if not registry.is_sealed:
        registry.seal()
    return HealthEvaluator(
        registry,
        probe_timeout=settings.health.probe_timeout_seconds,
        overall_timeout=settings.health.overall_timeout_seconds,
        started_at=started_at,
    )


__all__ = [
    "build_registry",
    "build_evaluator",
]
