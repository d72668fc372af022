# ============================================================================
# HEALTH ROUTER
# ============================================================================
# STATUS: Transport - FastAPI health endpoints
# PURPOSE: Expose basic and detailed evaluations over HTTP
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Router

Endpoints:
    GET /health          - Liveness (no I/O, answers while the loop runs)
    GET /health/detailed - Readiness (all registered dependency probes)

Neither endpoint has an authentication dependency. They must stay
reachable when the auth subsystem is itself the failing dependency.

Response Codes:
    200 - Healthy or degraded
    503 - Unhealthy
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from health.evaluator import HealthEvaluator
from health.renderer import render

NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def create_health_router(
    evaluator: HealthEvaluator,
    service: Optional[str] = None,
    version: Optional[str] = None,
    prefix: str = "/health",
) -> APIRouter:
    """
    Build the health router around an evaluator.

    Args:
        evaluator: Evaluator built at startup
        service: Service name reported in bodies
        version: Service version reported in bodies
        prefix: Mount path for the liveness endpoint
    """
    router = APIRouter(prefix=prefix, tags=["Health"])

    @router.get("")
    async def basic_health():
        """
        Liveness probe.

        No external checks, just confirms the process is responsive.
        """
        status_code, body = render(evaluator.evaluate_basic(), service, version)
        return JSONResponse(status_code=status_code, content=body, headers=NO_STORE_HEADERS)

    @router.get("/detailed")
    async def detailed_health():
        """
        Readiness probe.

        Runs every registered dependency probe concurrently under the
        configured deadline.
        """
        report = await evaluator.evaluate_detailed()
        status_code, body = render(report, service, version)
        return JSONResponse(status_code=status_code, content=body, headers=NO_STORE_HEADERS)

    return router


__all__ = [
    "create_health_router",
]
