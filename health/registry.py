# ============================================================================
# PROBE REGISTRY
# ============================================================================
# STATUS: Core - Named dependency probe registration
# PURPOSE: Ordered, startup-populated collection of probes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe Registry

Holds the named probes included in a detailed evaluation. Populated once
at startup, sealed, and read concurrently afterwards without locking.

Usage:
    registry = ProbeRegistry()
    registry.register("database", PostgresProbe(pool))
    registry.register("cache", RedisProbe(client))
    registry.seal()

    for name, probe in registry.list_all():
        ...
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from health.core import DependencyProbe
from health.errors import DuplicateNameError, RegistrySealedError

logger = logging.getLogger(__name__)


class ProbeRegistry:
    """
    Registry for dependency probes.

    Registration order is preserved and determines the order of results
    in a HealthReport.
    """

    def __init__(self):
        self._probes: Dict[str, DependencyProbe] = {}
        self._sealed = False

    def register(self, name: str, probe: DependencyProbe) -> DependencyProbe:
        """
        Register a probe under a unique name.

        Args:
            name: Unique name reported in health results
            probe: Probe instance

        Returns:
            The registered probe

        Raises:
            DuplicateNameError: If name is already registered
            RegistrySealedError: If the registry was sealed
        """
        if self._sealed:
            raise RegistrySealedError(name)
        if not name:
            raise ValueError("Probe name must be a non-empty string")
        if name in self._probes:
            raise DuplicateNameError(name)

        self._probes[name] = probe
        logger.debug(f"Registered probe: {name} ({type(probe).__name__})")
        return probe

    def list_all(self) -> List[Tuple[str, DependencyProbe]]:
        """Get (name, probe) pairs in registration order."""
        return list(self._probes.items())

    def get(self, name: str) -> Optional[DependencyProbe]:
        """Get probe by name."""
        return self._probes.get(name)

    def names(self) -> List[str]:
        return list(self._probes)

    def seal(self) -> None:
        """Mark registry read-only. Called once startup registration is done."""
        self._sealed = True
        logger.info(f"Probe registry sealed ({len(self)} probes: {', '.join(self._probes) or 'none'})")

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def __len__(self) -> int:
        return len(self._probes)

    def __contains__(self, name: str) -> bool:
        return name in self._probes

    def __iter__(self) -> Iterator[Tuple[str, DependencyProbe]]:
        return iter(self.list_all())


__all__ = [
    "ProbeRegistry",
]
