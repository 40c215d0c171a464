"""
officers.workload — Workload classification.

Pure functions only; the thresholds live in ``core.constants``.
"""

from __future__ import annotations

from django.db import models

from core.constants import (
    WORKLOAD_HIGH_THRESHOLD,
    WORKLOAD_MEDIUM_THRESHOLD,
    WORKLOAD_OVERLOADED_THRESHOLD,
)


class WorkloadLevel(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    OVERLOADED = "overloaded", "Overloaded"


#: Ranking used when choosing between officers (lower is preferred).
WORKLOAD_ORDER: dict[str, int] = {
    WorkloadLevel.LOW: 0,
    WorkloadLevel.MEDIUM: 1,
    WorkloadLevel.HIGH: 2,
    WorkloadLevel.OVERLOADED: 3,
}


def score(active_cases: int | None) -> WorkloadLevel:
    """
    Classify an active-case count.

    ``None`` and negative counts are treated as zero, so 14 active cases
    is ``HIGH`` and 15 is ``OVERLOADED``.
    """
    count = max(active_cases or 0, 0)
    if count >= WORKLOAD_OVERLOADED_THRESHOLD:
        return WorkloadLevel.OVERLOADED
    if count >= WORKLOAD_HIGH_THRESHOLD:
        return WorkloadLevel.HIGH
    if count >= WORKLOAD_MEDIUM_THRESHOLD:
        return WorkloadLevel.MEDIUM
    return WorkloadLevel.LOW


def rank(level: str) -> int:
    """Position of ``level`` in ``WORKLOAD_ORDER``; unknown levels sort last."""
    return WORKLOAD_ORDER.get(level, len(WORKLOAD_ORDER))
