# ============================================================================
# RESULT RENDERER
# ============================================================================
# STATUS: Core - Transport-neutral rendering of health reports
# PURPOSE: Map overall status to a status code and a stable body shape
# CREATED: 19 OCT 2026
# ============================================================================
"""
Result Renderer

Status code mapping (fixed, inspected by orchestration tooling):
    healthy   -> 200
    degraded  -> 200  (degradation alone keeps the instance in rotation)
    unhealthy -> 503

Body shape is the same for every call and every mode; all keys are
always present, so consumers can diff successive reports.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from health.core import HealthReport, HealthStatus, ProbeResult

STATUS_CODES = {
    HealthStatus.HEALTHY: 200,
    HealthStatus.DEGRADED: 200,
    HealthStatus.UNHEALTHY: 503,
}


class ProbeResultBody(BaseModel):
    """Serialized ProbeResult."""

    name: str
    status: HealthStatus
    latency_ms: float = Field(ge=0)
    detail: Optional[str] = None
    checked_at: str
    attributes: Dict[str, Any] = Field(default_factory=dict)


class HealthReportBody(BaseModel):
    """Serialized HealthReport."""

    overall_status: HealthStatus
    generated_at: str
    uptime_seconds: float = Field(ge=0)
    probes: List[ProbeResultBody] = Field(default_factory=list)
    service: Optional[str] = None
    version: Optional[str] = None


def status_code_for(status: HealthStatus) -> int:
    """Map health status to transport status code."""
    return STATUS_CODES[status]


def format_timestamp(value: datetime) -> str:
    """ISO 8601 in UTC with a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _probe_body(result: ProbeResult) -> ProbeResultBody:
    return ProbeResultBody(
        name=result.name,
        status=result.status,
        latency_ms=round(result.latency_ms, 2),
        detail=result.detail,
        checked_at=format_timestamp(result.checked_at),
        attributes=dict(result.attributes),
    )


def render(
    report: HealthReport,
    service: Optional[str] = None,
    version: Optional[str] = None,
) -> Tuple[int, Dict[str, Any]]:
    """
    Render a report for the transport layer.

    Args:
        report: Report from HealthEvaluator
        service: Service name included in the body
        version: Service version included in the body

    Returns:
        (status_code, JSON-ready body)
    """
    body = HealthReportBody(
        overall_status=report.overall_status,
        generated_at=format_timestamp(report.generated_at),
        uptime_seconds=round(report.uptime_seconds, 3),
        probes=[_probe_body(r) for r in report.probes],
        service=service,
        version=version,
    )
    return status_code_for(report.overall_status), body.model_dump(mode="json")


__all__ = [
    "STATUS_CODES",
    "ProbeResultBody",
    "HealthReportBody",
    "status_code_for",
    "format_timestamp",
    "render",
]
