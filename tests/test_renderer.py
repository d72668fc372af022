# ============================================================================
# RESULT RENDERER TESTS
# ============================================================================
# STATUS: Tests - Status code mapping and body shape
# PURPOSE: Verify the fixed mapping consumed by orchestration tooling
# CREATED: 19 OCT 2026
# ============================================================================
"""
Result Renderer Tests

Run with:
    pytest tests/test_renderer.py -v
"""

from datetime import datetime, timezone

import pytest

from health.core import HealthReport, HealthStatus, ProbeResult
from health.renderer import format_timestamp, render, status_code_for

GENERATED_AT = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
CHECKED_AT = datetime(2026, 10, 19, 11, 59, 59, 500000, tzinfo=timezone.utc)

REPORT_KEYS = {"overall_status", "generated_at", "uptime_seconds", "probes", "service", "version"}
PROBE_KEYS = {"name", "status", "latency_ms", "detail", "checked_at", "attributes"}


def _report(*statuses):
    probes = [
        ProbeResult(
            name=f"dep-{i}",
            status=status,
            latency_ms=12.3456,
            detail=None if status == HealthStatus.HEALTHY else "timeout",
            checked_at=CHECKED_AT,
        )
        for i, status in enumerate(statuses)
    ]
    return HealthReport(
        overall_status=HealthStatus.worst(statuses),
        generated_at=GENERATED_AT,
        uptime_seconds=3600.12345,
        probes=probes,
    )


class TestStatusCodes:

    @pytest.mark.parametrize("status,code", [
        (HealthStatus.HEALTHY, 200),
        (HealthStatus.DEGRADED, 200),
        (HealthStatus.UNHEALTHY, 503),
    ])
    def test_mapping(self, status, code):
        assert status_code_for(status) == code

    def test_degraded_report_stays_in_rotation(self):
        status_code, body = render(_report(HealthStatus.HEALTHY, HealthStatus.DEGRADED))

        assert status_code == 200
        assert body["overall_status"] == "degraded"
        assert body["probes"][1]["status"] == "degraded"
        assert body["probes"][1]["detail"] == "timeout"

    def test_unhealthy_report_is_503_with_detail(self):
        status_code, body = render(_report(HealthStatus.UNHEALTHY))

        assert status_code == 503
        assert body["overall_status"] == "unhealthy"
        assert body["probes"][0]["detail"] == "timeout"


class TestBodyShape:

    def test_basic_report_shape(self):
        report = HealthReport(
            overall_status=HealthStatus.HEALTHY,
            generated_at=GENERATED_AT,
            uptime_seconds=1.5,
        )

        status_code, body = render(report, service="orders", version="1.2.3")

        assert status_code == 200
        assert set(body) == REPORT_KEYS
        assert body == {
            "overall_status": "healthy",
            "generated_at": "2026-10-19T12:00:00Z",
            "uptime_seconds": 1.5,
            "probes": [],
            "service": "orders",
            "version": "1.2.3",
        }

    def test_probe_entries_have_fixed_keys(self):
        _, body = render(_report(HealthStatus.HEALTHY, HealthStatus.UNHEALTHY))

        for entry in body["probes"]:
            assert set(entry) == PROBE_KEYS
        healthy = body["probes"][0]
        assert healthy["detail"] is None
        assert healthy["latency_ms"] == 12.35
        assert healthy["checked_at"] == "2026-10-19T11:59:59.500000Z"
        assert healthy["attributes"] == {}

    def test_rounding(self):
        _, body = render(_report(HealthStatus.HEALTHY))

        assert body["uptime_seconds"] == 3600.123

    def test_rendering_is_deterministic(self):
        report = _report(HealthStatus.HEALTHY, HealthStatus.DEGRADED)

        assert render(report) == render(report)

    def test_naive_timestamp_treated_as_utc(self):
        assert format_timestamp(datetime(2026, 1, 1, 0, 0, 0)) == "2026-01-01T00:00:00Z"

    def test_non_json_attributes_are_stringified(self):
        class Connection:
            def __str__(self):
                return "<conn db1>"

        result = ProbeResult(
            name="pool",
            status=HealthStatus.HEALTHY,
            latency_ms=1.0,
            checked_at=CHECKED_AT,
            attributes={"conn": Connection(), "hosts": ("db1", "db2"), "port": 5432},
        )
        report = HealthReport(
            overall_status=HealthStatus.HEALTHY,
            generated_at=GENERATED_AT,
            uptime_seconds=1.0,
            probes=[result],
        )

        code, body = render(report)

        assert code == 200
        assert body["probes"][0]["attributes"] == {
            "conn": "<conn db1>",
            "hosts": ["db1", "db2"],
            "port": 5432,
        }
