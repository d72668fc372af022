# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Timeouts, thresholds and dependency endpoints for health probes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Design:
- Immutable dataclasses for defaults
- Environment variable overrides via from_env()
- Read once at startup; invalid values fail fast with ValueError
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from psycopg import ProgrammingError
from psycopg.conninfo import conninfo_to_dict

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


def parse_named_urls(raw: str) -> Tuple[Tuple[str, str], ...]:
    """
    Parse "name=url,name=url" into ordered (name, url) pairs.

    Raises:
        ValueError: On an entry without '=' or with an empty side
    """
    pairs = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, url = entry.partition("=")
        name, url = name.strip(), url.strip()
        if not sep or not name or not url:
            raise ValueError(f"Invalid downstream entry {entry!r}, expected name=url")
        pairs.append((name, url))
    return tuple(pairs)


@dataclass(frozen=True)
class HealthDefaults:
    """Evaluator timeouts and service identity."""
    probe_timeout_seconds: float = 2.0
    overall_timeout_seconds: float = 5.0
    service_name: str = "service"

    def __post_init__(self):
        if self.probe_timeout_seconds <= 0:
            raise ValueError("probe_timeout_seconds must be positive")
        if self.overall_timeout_seconds <= 0:
            raise ValueError("overall_timeout_seconds must be positive")

    @classmethod
    def from_env(cls) -> "HealthDefaults":
        """Create from environment variables."""
        return cls(
            probe_timeout_seconds=_env_float("HEALTH_PROBE_TIMEOUT_SECONDS", 2.0),
            overall_timeout_seconds=_env_float("HEALTH_OVERALL_TIMEOUT_SECONDS", 5.0),
            service_name=os.getenv("HEALTH_SERVICE_NAME", "service"),
        )


@dataclass(frozen=True)
class DatabaseDefaults:
    """PostgreSQL connection and probe settings."""
    enabled: bool = True
    database_url: Optional[str] = None
    host: str = "localhost"
    port: int = 5432
    name: str = "postgres"
    user: str = "postgres"
    password: str = ""
    sslmode: str = "prefer"
    pool_min_size: int = 1
    pool_max_size: int = 5
    degraded_ms: float = 500.0

    @property
    def connection_string(self) -> str:
        """DATABASE_URL if set, else built from the individual components."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}"
            f"/{self.name}?sslmode={self.sslmode}"
        )

    @property
    def safe_target(self) -> str:
        """
        Connection target without credentials, for logs and reports.

        Works for both URL and keyword conninfo; only host, port and
        dbname are kept.
        """
        try:
            params = conninfo_to_dict(self.connection_string)
        except ProgrammingError:
            return "invalid conninfo"
        host = params.get("host") or "localhost"
        port = params.get("port") or "5432"
        dbname = params.get("dbname") or ""
        return f"{host}:{port}/{dbname}"

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        return cls(
            enabled=_env_bool("DATABASE_HEALTH_ENABLED", True),
            database_url=os.getenv("DATABASE_URL") or None,
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_env_int("POSTGRES_PORT", 5432),
            name=os.getenv("POSTGRES_DB", "postgres"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            sslmode=os.getenv("POSTGRES_SSLMODE", "prefer"),
            pool_min_size=_env_int("DATABASE_POOL_MIN_SIZE", 1),
            pool_max_size=_env_int("DATABASE_POOL_MAX_SIZE", 5),
            degraded_ms=_env_float("DATABASE_DEGRADED_MS", 500.0),
        )


@dataclass(frozen=True)
class CacheDefaults:
    """Redis cache probe settings. Probe is registered only with a URL."""
    redis_url: Optional[str] = None
    degraded_ms: float = 200.0

    @property
    def enabled(self) -> bool:
        return bool(self.redis_url)

    @classmethod
    def from_env(cls) -> "CacheDefaults":
        return cls(
            redis_url=os.getenv("REDIS_URL") or None,
            degraded_ms=_env_float("CACHE_DEGRADED_MS", 200.0),
        )


@dataclass(frozen=True)
class DownstreamDefaults:
    """Downstream HTTP services probed by URL."""
    services: Tuple[Tuple[str, str], ...] = ()
    degraded_ms: float = 1000.0

    @classmethod
    def from_env(cls) -> "DownstreamDefaults":
        return cls(
            services=parse_named_urls(os.getenv("DOWNSTREAM_HEALTH_URLS", "")),
            degraded_ms=_env_float("DOWNSTREAM_DEGRADED_MS", 1000.0),
        )


@dataclass(frozen=True)
class HealthSettings:
    """All health configuration, read once at startup."""
    health: HealthDefaults = field(default_factory=HealthDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)
    cache: CacheDefaults = field(default_factory=CacheDefaults)
    downstream: DownstreamDefaults = field(default_factory=DownstreamDefaults)

    @classmethod
    def from_env(cls) -> "HealthSettings":
        return cls(
            health=HealthDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
            cache=CacheDefaults.from_env(),
            downstream=DownstreamDefaults.from_env(),
        )


def get_defaults() -> HealthSettings:
    """Build settings from the current environment."""
    return HealthSettings.from_env()


__all__ = [
    "HealthDefaults",
    "DatabaseDefaults",
    "CacheDefaults",
    "DownstreamDefaults",
    "HealthSettings",
    "get_defaults",
    "parse_named_urls",
]
