"""Environment-driven defaults for the cache.

Small helpers read typed environment variables; module-level constants
are evaluated once at import time.
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# Guard every cache operation with a lock unless the caller decides otherwise
THREAD_SAFE = _env_bool("AGED_CACHE_THREAD_SAFE", False)

# Level applied by logging.setup_logging() when none is passed
LOG_LEVEL = _env_str("AGED_CACHE_LOG_LEVEL", "WARNING").upper()
