# ============================================================================
# HEALTH EVALUATOR
# ============================================================================
# STATUS: Core - Liveness and readiness evaluation
# PURPOSE: Run registered probes concurrently under an overall deadline
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Evaluator

Two evaluation modes:
- evaluate_basic(): liveness. No I/O, always healthy; returning at all
  is the proof that the process is alive.
- evaluate_detailed(): readiness. Runs every registered probe as its own
  task, joins them against an overall deadline, and aggregates with
  'worst wins' semantics.

Execution Strategy:
1. Spawn one task per probe, each bounded by the per-probe timeout
2. asyncio.wait() on all tasks with the overall timeout
3. Probes still pending at the deadline become unhealthy placeholders
   and their tasks are cancelled (best effort)
4. Results are reported in registration order
"""

import asyncio
import time
import uuid
from typing import Dict, List, Optional

from core.logging import ComponentType, get_logger, log_context
from health.core import (
    DependencyProbe,
    HealthReport,
    HealthStatus,
    ProbeResult,
    utc_now,
)
from health.errors import OverallTimeoutExceeded
from health.registry import ProbeRegistry

logger = get_logger(__name__, ComponentType.EVALUATOR)

OVERALL_TIMEOUT_DETAIL = "overall timeout exceeded"


class HealthEvaluator:
    """
    Evaluates process liveness and dependency readiness.

    Holds no per-call state; concurrent evaluations are independent.
    """

    def __init__(
        self,
        registry: ProbeRegistry,
        probe_timeout: float = 2.0,
        overall_timeout: float = 5.0,
        started_at: Optional[float] = None,
    ):
        """
        Initialize evaluator.

        Args:
            registry: Probe registry (populated and sealed at startup)
            probe_timeout: Default per-probe budget in seconds
            overall_timeout: Default deadline for a detailed evaluation
            started_at: time.monotonic() value of process start
        """
        self.registry = registry
        self.probe_timeout = probe_timeout
        self.overall_timeout = overall_timeout
        self.started_at = started_at if started_at is not None else time.monotonic()

    @property
    def uptime_seconds(self) -> float:
        return max(0.0, time.monotonic() - self.started_at)

    def evaluate_basic(self) -> HealthReport:
        """Liveness report: healthy, no probes, current uptime."""
        return HealthReport(
            overall_status=HealthStatus.HEALTHY,
            generated_at=utc_now(),
            uptime_seconds=self.uptime_seconds,
            probes=(),
        )

    async def evaluate_detailed(
        self,
        probe_timeout: Optional[float] = None,
        overall_timeout: Optional[float] = None,
    ) -> HealthReport:
        """
        Readiness report across all registered probes.

        Args:
            probe_timeout: Per-probe budget (defaults to the evaluator's)
            overall_timeout: Deadline for the whole call (defaults to the evaluator's)

        Returns:
            HealthReport with one ProbeResult per registered probe
        """
        probe_timeout = self.probe_timeout if probe_timeout is None else probe_timeout
        overall_timeout = self.overall_timeout if overall_timeout is None else overall_timeout

        entries = self.registry.list_all()
        if not entries:
            return self.evaluate_basic()

        with log_context(operation="evaluate_detailed", request_id=uuid.uuid4().hex[:12]):
            results = await self._run_probes(entries, probe_timeout, overall_timeout)

            overall_status = HealthStatus.worst(r.status for r in results)
            report = HealthReport(
                overall_status=overall_status,
                generated_at=utc_now(),
                uptime_seconds=self.uptime_seconds,
                probes=tuple(results),
            )

            if overall_status != HealthStatus.HEALTHY:
                failing = [
                    f"{r.name}={r.status.value}"
                    for r in results
                    if r.status != HealthStatus.HEALTHY
                ]
                logger.warning(f"Detailed health {overall_status.value}: {', '.join(failing)}")
            else:
                logger.debug(f"Detailed health healthy ({len(results)} probes)")

            return report

    async def _run_probes(
        self,
        entries: List[tuple],
        probe_timeout: float,
        overall_timeout: float,
    ) -> List[ProbeResult]:
        """Run probes concurrently and return results in registration order."""
        start_time = time.monotonic()

        tasks: Dict[str, asyncio.Task] = {
            name: asyncio.create_task(
                self._execute_probe(name, probe, probe_timeout),
                name=f"probe:{name}",
            )
            for name, probe in entries
        }

        results: Dict[str, ProbeResult] = {}
        try:
            await self._join(tasks, max(0.0, overall_timeout))
        except OverallTimeoutExceeded as e:
            logger.warning(str(e))
            elapsed_ms = (time.monotonic() - start_time) * 1000
            for name in e.pending:
                tasks[name].cancel()
                results[name] = ProbeResult.failed(
                    name,
                    OVERALL_TIMEOUT_DETAIL,
                    elapsed_ms,
                    timeout_seconds=overall_timeout,
                )

        for name, task in tasks.items():
            if name in results:
                continue
            try:
                results[name] = task.result()
            except asyncio.CancelledError:
                results[name] = ProbeResult.failed(
                    name,
                    "cancelled",
                    (time.monotonic() - start_time) * 1000,
                )
            except Exception as e:
                # execute() is not supposed to raise; custom overrides might
                logger.error(f"Probe {name} raised out of execute(): {e}")
                results[name] = ProbeResult.failed(
                    name,
                    str(e) or type(e).__name__,
                    (time.monotonic() - start_time) * 1000,
                    exception_type=type(e).__name__,
                )

        return [results[name] for name, _ in entries]

    async def _join(self, tasks: Dict[str, asyncio.Task], timeout: float) -> None:
        """
        Wait for all tasks up to timeout.

        Raises:
            OverallTimeoutExceeded: Listing the probes still running
        """
        if timeout <= 0:
            pending = set(tasks.values())
        else:
            _, pending = await asyncio.wait(
                tasks.values(),
                timeout=timeout,
                return_when=asyncio.ALL_COMPLETED,
            )

        if pending:
            names = [name for name, task in tasks.items() if task in pending]
            raise OverallTimeoutExceeded(names, timeout)

    async def _execute_probe(
        self,
        name: str,
        probe: DependencyProbe,
        timeout: float,
    ) -> ProbeResult:
        with log_context(probe=name):
            return await probe.execute(timeout, name=name)


__all__ = [
    "OVERALL_TIMEOUT_DETAIL",
    "HealthEvaluator",
]
