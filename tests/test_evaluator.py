# ============================================================================
# HEALTH EVALUATOR TESTS
# ============================================================================
# STATUS: Tests - Basic and detailed evaluation
# PURPOSE: Aggregation, bounded latency, ordering and liveness isolation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Evaluator Tests

Covers:
1. evaluate_basic() is healthy, empty, and never touches a probe
2. Worst status wins; empty registry behaves like basic
3. Per-probe timeout bounds a hanging dependency
4. Overall timeout bounds probes that ignore their own budget
5. Results keep registration order while probes run concurrently
6. Repeated evaluations on fixed dependencies agree

Run with:
    pytest tests/test_evaluator.py -v
"""

import asyncio
import time
from unittest.mock import AsyncMock

import pytest

from health.core import (
    TIMEOUT_DETAIL,
    DependencyProbe,
    HealthStatus,
    ProbeOutcome,
    ProbeResult,
)
from health.evaluator import OVERALL_TIMEOUT_DETAIL, HealthEvaluator
from health.registry import ProbeRegistry


# ============================================================================
# FIXTURES
# ============================================================================

class FakeProbe(DependencyProbe):
    """Reports a fixed status after a delay, counting calls."""

    def __init__(self, status=HealthStatus.HEALTHY, delay=0.0, detail=None):
        self.status = status
        self.delay = delay
        self.detail = detail
        self.calls = 0

    async def check(self) -> ProbeOutcome:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return ProbeOutcome(status=self.status, detail=self.detail)


class BudgetIgnoringProbe(DependencyProbe):
    """Overrides execute() and sleeps regardless of the timeout it is given."""

    def __init__(self, delay: float):
        self.delay = delay

    async def check(self) -> ProbeOutcome:
        return ProbeOutcome.healthy()

    async def execute(self, timeout, name=None):
        await asyncio.sleep(self.delay)
        return ProbeResult(name=name, status=HealthStatus.HEALTHY, latency_ms=self.delay * 1000)


class BrokenExecuteProbe(DependencyProbe):
    """Violates the contract by raising out of execute()."""

    async def check(self) -> ProbeOutcome:
        return ProbeOutcome.healthy()

    async def execute(self, timeout, name=None):
        raise RuntimeError("probe bug")


def _evaluator(*entries, probe_timeout=1.0, overall_timeout=2.0):
    registry = ProbeRegistry()
    for name, probe in entries:
        registry.register(name, probe)
    registry.seal()
    return HealthEvaluator(registry, probe_timeout=probe_timeout, overall_timeout=overall_timeout)


# ============================================================================
# BASIC
# ============================================================================

class TestEvaluateBasic:

    def test_always_healthy_with_no_probes(self):
        probe = FakeProbe(HealthStatus.UNHEALTHY)
        evaluator = _evaluator(("database", probe))

        report = evaluator.evaluate_basic()

        assert report.overall_status == HealthStatus.HEALTHY
        assert report.probes == ()
        assert report.uptime_seconds >= 0

    def test_never_calls_probes(self):
        probe = FakeProbe()
        probe.execute = AsyncMock()
        evaluator = _evaluator(("database", probe))

        evaluator.evaluate_basic()

        probe.execute.assert_not_called()
        assert probe.calls == 0

    def test_uptime_counts_from_start(self):
        registry = ProbeRegistry()
        evaluator = HealthEvaluator(registry, started_at=time.monotonic() - 42.0)

        report = evaluator.evaluate_basic()

        assert report.uptime_seconds >= 42.0


# ============================================================================
# DETAILED
# ============================================================================

class TestEvaluateDetailed:

    def test_empty_registry_matches_basic(self):
        evaluator = _evaluator()

        report = asyncio.run(evaluator.evaluate_detailed())

        assert report.overall_status == HealthStatus.HEALTHY
        assert report.probes == ()

    def test_single_healthy_database(self):
        evaluator = _evaluator(("database", FakeProbe(delay=0.005)))

        report = asyncio.run(evaluator.evaluate_detailed())

        assert report.overall_status == HealthStatus.HEALTHY
        assert len(report.probes) == 1
        assert report.probes[0].name == "database"
        assert report.probes[0].status == HealthStatus.HEALTHY

    def test_degraded_cache_degrades_overall(self):
        evaluator = _evaluator(
            ("database", FakeProbe(HealthStatus.HEALTHY)),
            ("cache", FakeProbe(HealthStatus.DEGRADED, detail="slow")),
        )

        report = asyncio.run(evaluator.evaluate_detailed())

        assert report.overall_status == HealthStatus.DEGRADED
        assert report.get("cache").status == HealthStatus.DEGRADED
        assert report.get("database").status == HealthStatus.HEALTHY

    @pytest.mark.parametrize("statuses,expected", [
        ([HealthStatus.HEALTHY, HealthStatus.HEALTHY], HealthStatus.HEALTHY),
        ([HealthStatus.HEALTHY, HealthStatus.DEGRADED], HealthStatus.DEGRADED),
        ([HealthStatus.DEGRADED, HealthStatus.UNHEALTHY], HealthStatus.UNHEALTHY),
        ([HealthStatus.UNHEALTHY, HealthStatus.HEALTHY, HealthStatus.DEGRADED], HealthStatus.UNHEALTHY),
    ])
    def test_overall_is_worst(self, statuses, expected):
        entries = [(f"probe-{i}", FakeProbe(s)) for i, s in enumerate(statuses)]
        evaluator = _evaluator(*entries)

        report = asyncio.run(evaluator.evaluate_detailed())

        assert report.overall_status == expected

    def test_hanging_database_times_out_per_probe(self):
        evaluator = _evaluator(
            ("database", FakeProbe(delay=60.0)),
            probe_timeout=0.1,
            overall_timeout=5.0,
        )

        start = time.monotonic()
        report = asyncio.run(evaluator.evaluate_detailed())
        elapsed = time.monotonic() - start

        result = report.get("database")
        assert result.status == HealthStatus.UNHEALTHY
        assert result.detail == TIMEOUT_DETAIL
        assert report.overall_status == HealthStatus.UNHEALTHY
        assert elapsed < 1.0

    def test_overall_timeout_bounds_misbehaving_probes(self):
        evaluator = _evaluator(
            ("database", FakeProbe()),
            ("stuck", BudgetIgnoringProbe(delay=60.0)),
            probe_timeout=10.0,
            overall_timeout=0.2,
        )

        start = time.monotonic()
        report = asyncio.run(evaluator.evaluate_detailed())
        elapsed = time.monotonic() - start

        assert elapsed < 1.5
        assert report.get("database").status == HealthStatus.HEALTHY
        stuck = report.get("stuck")
        assert stuck.status == HealthStatus.UNHEALTHY
        assert stuck.detail == OVERALL_TIMEOUT_DETAIL
        assert stuck.latency_ms >= 0
        assert report.overall_status == HealthStatus.UNHEALTHY

    def test_call_arguments_override_defaults(self):
        evaluator = _evaluator(
            ("database", FakeProbe(delay=60.0)),
            probe_timeout=30.0,
            overall_timeout=30.0,
        )

        start = time.monotonic()
        report = asyncio.run(evaluator.evaluate_detailed(probe_timeout=0.05, overall_timeout=1.0))

        assert time.monotonic() - start < 1.0
        assert report.get("database").detail == TIMEOUT_DETAIL

    def test_probes_run_concurrently(self):
        entries = [(f"dep-{i}", FakeProbe(delay=0.2)) for i in range(5)]
        evaluator = _evaluator(*entries, probe_timeout=1.0, overall_timeout=3.0)

        start = time.monotonic()
        report = asyncio.run(evaluator.evaluate_detailed())
        elapsed = time.monotonic() - start

        assert report.overall_status == HealthStatus.HEALTHY
        assert elapsed < 0.8

    def test_results_keep_registration_order(self):
        evaluator = _evaluator(
            ("slow", FakeProbe(delay=0.1)),
            ("fast", FakeProbe()),
            ("medium", FakeProbe(delay=0.05)),
        )

        report = asyncio.run(evaluator.evaluate_detailed())

        assert [r.name for r in report.probes] == ["slow", "fast", "medium"]

    def test_probe_checked_before_report_generated(self):
        evaluator = _evaluator(
            ("database", FakeProbe()),
            ("stuck", BudgetIgnoringProbe(delay=60.0)),
            overall_timeout=0.1,
        )

        report = asyncio.run(evaluator.evaluate_detailed())

        for result in report.probes:
            assert result.checked_at <= report.generated_at
            assert result.latency_ms >= 0

    def test_execute_raising_is_contained(self):
        evaluator = _evaluator(
            ("database", FakeProbe()),
            ("broken", BrokenExecuteProbe()),
        )

        report = asyncio.run(evaluator.evaluate_detailed())

        broken = report.get("broken")
        assert broken.status == HealthStatus.UNHEALTHY
        assert broken.detail == "probe bug"
        assert report.overall_status == HealthStatus.UNHEALTHY

    def test_repeated_evaluations_agree(self):
        evaluator = _evaluator(
            ("database", FakeProbe(HealthStatus.HEALTHY)),
            ("cache", FakeProbe(HealthStatus.DEGRADED)),
            ("billing", FakeProbe(HealthStatus.UNHEALTHY)),
        )

        async def run_twice():
            return await evaluator.evaluate_detailed(), await evaluator.evaluate_detailed()

        first, second = asyncio.run(run_twice())

        assert first is not second
        assert first.overall_status == second.overall_status
        assert [r.status for r in first.probes] == [r.status for r in second.probes]

    def test_concurrent_evaluations_are_independent(self):
        probe = FakeProbe(delay=0.05)
        evaluator = _evaluator(("database", probe))

        async def run_many():
            return await asyncio.gather(*(evaluator.evaluate_detailed() for _ in range(5)))

        reports = asyncio.run(run_many())

        assert probe.calls == 5
        assert all(r.overall_status == HealthStatus.HEALTHY for r in reports)
        assert len({id(r) for r in reports}) == 5
