"""Filter pipeline for triggered alarms.

Submodules:
    stages    -- Individual include/exclude stages (type, name, status, pool, ...).
    pipeline  -- FilterPipeline: runs the stages in their fixed order.
    observer  -- Audit observers (no-op default, structlog + metrics).
"""

from vmcheck.filters.observer import FilterObserver, LoggingObserver, NullObserver
from vmcheck.filters.pipeline import FilterPipeline

__all__ = [
    "FilterObserver",
    "FilterPipeline",
    "LoggingObserver",
    "NullObserver",
]
