"""
Core constants — **Single Source of Truth** for project-wide magic numbers.

Any formula or business rule that references a numeric constant should
import it from here instead of hardcoding.  This avoids drift between
apps that use the same value.
"""

# ── Workload Classification ─────────────────────────────────────────
# Lower bounds (inclusive) of each workload level, measured in active
# cases.  Anything below WORKLOAD_MEDIUM_THRESHOLD is "low".
#
#     low        : active_cases <  5
#     medium     : 5  <= active_cases < 10
#     high       : 10 <= active_cases < 15
#     overloaded : active_cases >= 15
WORKLOAD_MEDIUM_THRESHOLD: int = 5
WORKLOAD_HIGH_THRESHOLD: int = 10
WORKLOAD_OVERLOADED_THRESHOLD: int = 15

# ── Batch Assignment Pacing ─────────────────────────────────────────
# Minimum interval between two consecutive assignment calls issued by a
# single batch.  Overridable via ``settings.ASSIGNMENT_BATCH_INTERVAL_SECONDS``.
ASSIGNMENT_BATCH_INTERVAL_SECONDS: float = 0.1

# ── Unassigned Queue ────────────────────────────────────────────────
UNASSIGNED_LIST_DEFAULT_LIMIT: int = 10
UNASSIGNED_LIST_MAX_LIMIT: int = 100

# ── Default notes written on assignment rows ────────────────────────
DEFAULT_REASSIGNMENT_REASON: str = "Reassigned by administrator"
