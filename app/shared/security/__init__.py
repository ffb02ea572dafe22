# -*- coding: utf-8 -*-
"""
backend/app/shared/security/__init__.py

Rate limiting de InvoiceDesk.
"""

from .rate_limit_service import (
    RateLimiter,
    RateLimitResult,
    WindowCount,
    InMemoryCounterStore,
    RedisCounterStore,
    build_key,
    get_rate_limiter,
)
from .rate_limit_dep import RateLimitDep, RateLimitExceeded, check_rate_limit

__all__ = [
    "RateLimiter",
    "RateLimitResult",
    "WindowCount",
    "InMemoryCounterStore",
    "RedisCounterStore",
    "build_key",
    "get_rate_limiter",
    "RateLimitDep",
    "RateLimitExceeded",
    "check_rate_limit",
]
