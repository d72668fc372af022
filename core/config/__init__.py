# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for health evaluation.
"""

from core.config.defaults import (
    HealthDefaults,
    DatabaseDefaults,
    CacheDefaults,
    DownstreamDefaults,
    HealthSettings,
    get_defaults,
    parse_named_urls,
)

__all__ = [
    "HealthDefaults",
    "DatabaseDefaults",
    "CacheDefaults",
    "DownstreamDefaults",
    "HealthSettings",
    "get_defaults",
    "parse_named_urls",
]
