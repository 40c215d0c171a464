"""
Permissions Constants — **Single Source of Truth**

Every permission referenced in code (views, services, tests) MUST use one
of the constants defined here.

Custom workflow permissions are constants that map to codenames
registered via each model's ``Meta.permissions`` tuple.  Adding a new
custom permission requires:
    1. Add the constant below.
    2. Add the ``(codename, description)`` to the related model's
       ``Meta.permissions``.
    3. Run ``makemigrations`` + ``migrate`` to insert it into Django's
       ``auth_permission`` table.

All constants store the **codename only** (no ``app_label.`` prefix).
"""


# ════════════════════════════════════════════════════════════════════
#  OFFICERS APP
# ════════════════════════════════════════════════════════════════════

class OfficersPerms:
    """Permissions for the officers app."""

    VIEW_OFFICER = "view_officer"
    CHANGE_OFFICER = "change_officer"

    # ── Custom workflow permissions ─────────────────────────────────
    CAN_VIEW_AVAILABLE_OFFICERS = "can_view_available_officers"
    """List eligible officers and request an assignment suggestion."""


# ════════════════════════════════════════════════════════════════════
#  CASES APP
# ════════════════════════════════════════════════════════════════════

class CasesPerms:
    """Permissions for the cases app."""

    VIEW_COMPLAINT = "view_complaint"
    CHANGE_COMPLAINT = "change_complaint"

    # ── Custom workflow permissions ─────────────────────────────────
    CAN_ASSIGN_OFFICER = "can_assign_officer"
    """Bind an officer to an unassigned complaint (single or batch)."""

    CAN_REASSIGN_CASE = "can_reassign_case"
    """Move an assigned complaint to a different officer."""

    CAN_VIEW_ASSIGNMENT_HISTORY = "can_view_assignment_history"
    """Read the append-only assignment history of a complaint."""
