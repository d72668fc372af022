# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Database access layer
# PURPOSE: Connection pool lifecycle for the database probe
# CREATED: 19 OCT 2026
# ============================================================================
"""
Repositories Module

Uses psycopg3 async with connection pooling.
"""

from .database import create_pool, open_pool, get_pool, close_pool

__all__ = [
    "create_pool",
    "open_pool",
    "get_pool",
    "close_pool",
]
