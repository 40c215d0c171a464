"""
cases.procedures — Atomic store procedures for officer assignment.

These are the only code paths that write ``CaseAssignment`` rows or touch
officer case counters.  Each procedure runs in a single
``transaction.atomic()`` block, locks the complaint first and then the
officer row(s) in ascending PK order, re-checks its preconditions under
the locks and only then writes.

Procedures never raise for business-rule failures.  They return a plain
dict in the same shape the HTTP RPC layer uses::

    {"success": True, "assignment_id": 7, "officer_name": "...", "message": "..."}
    {"success": False, "error": "...", "code": "already_assigned"}

Database errors propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import F, IntegerField
from django.db.models.functions import Greatest
from django.utils import timezone

from core.domain.exceptions import NotFound
from core.domain.transactions import lock_for_update, lock_many
from officers.models import EmploymentStatus, Officer

from .exceptions import AssignmentErrorKind
from .models import (
    AssignedBy,
    AssignmentStatus,
    AssignmentType,
    CaseAssignment,
    Complaint,
    ComplaintStatus,
    ComplaintStatusLog,
)

logger = logging.getLogger(__name__)


def _failure(code: str, error: str) -> dict[str, Any]:
    logger.warning("Assignment procedure rejected [%s]: %s", code, error)
    return {"success": False, "error": error, "code": str(code)}


def _ineligible(officer: Officer) -> dict[str, Any]:
    return _failure(
        AssignmentErrorKind.OFFICER_NOT_FOUND,
        f"Officer {officer.badge_number} is not eligible for assignment "
        f"(employment status: {officer.employment_status}).",
    )


@transaction.atomic
def assign_officer_to_complaint(
    complaint_id: int,
    officer_id: int,
    admin_id: int,
    notes: str | None = None,
) -> dict[str, Any]:
    """
    Bind an officer to an unassigned complaint.

    Inserts an ``ACTIVE``/``PRIMARY`` assignment row, increments the
    officer's ``active_cases`` and ``total_cases``, moves the complaint to
    ``UNDER_INVESTIGATION`` and writes a status-log row.
    """
    try:
        complaint = lock_for_update(Complaint, complaint_id)
    except NotFound as exc:
        return _failure(AssignmentErrorKind.COMPLAINT_NOT_FOUND, str(exc))
    try:
        officer = lock_for_update(Officer, officer_id)
    except NotFound as exc:
        return _failure(AssignmentErrorKind.OFFICER_NOT_FOUND, str(exc))

    if officer.employment_status != EmploymentStatus.ACTIVE:
        return _ineligible(officer)

    if CaseAssignment.objects.filter(
        complaint=complaint, status=AssignmentStatus.ACTIVE,
    ).exists():
        return _failure(
            AssignmentErrorKind.ALREADY_ASSIGNED,
            f"Complaint {complaint.complaint_number} already has an active assignment.",
        )

    now = timezone.now()
    assignment = CaseAssignment.objects.create(
        complaint=complaint,
        officer=officer,
        assigner_id=admin_id,
        assigned_by=AssignedBy.ADMIN,
        assignment_type=AssignmentType.PRIMARY,
        status=AssignmentStatus.ACTIVE,
        notes=notes or "",
    )
    Officer.objects.filter(pk=officer.pk).update(
        active_cases=F("active_cases") + 1,
        total_cases=F("total_cases") + 1,
        last_assignment_at=now,
    )

    from_status = complaint.status
    complaint.status = ComplaintStatus.UNDER_INVESTIGATION
    complaint.assigned_officer = officer
    complaint.assigned_unit_id = officer.unit_id
    complaint.save(update_fields=["status", "assigned_officer", "assigned_unit", "updated_at"])

    ComplaintStatusLog.objects.create(
        complaint=complaint,
        from_status=from_status,
        to_status=complaint.status,
        changed_by_id=admin_id,
        message=f"Assigned to {officer.full_name} ({officer.badge_number}).",
    )

    return {
        "success": True,
        "assignment_id": assignment.pk,
        "officer_name": officer.full_name,
        "message": f"Complaint {complaint.complaint_number} assigned to {officer.full_name}.",
    }


@transaction.atomic
def reassign_case_to_officer(
    complaint_id: int,
    new_officer_id: int,
    admin_id: int,
    reason: str | None = None,
) -> dict[str, Any]:
    """
    Move an assigned complaint to a different officer.

    Flips the current ``ACTIVE`` row to ``REASSIGNED``, inserts a
    ``REASSIGNMENT`` row carrying ``reason`` in its notes, decrements the
    previous officer's ``active_cases`` (never below zero) and increments
    the new officer's counters.
    """
    try:
        complaint = lock_for_update(Complaint, complaint_id)
    except NotFound as exc:
        return _failure(AssignmentErrorKind.COMPLAINT_NOT_FOUND, str(exc))

    current = (
        CaseAssignment.objects
        .select_for_update()
        .filter(complaint=complaint, status=AssignmentStatus.ACTIVE)
        .first()
    )
    if current is None:
        return _failure(
            AssignmentErrorKind.NO_ACTIVE_ASSIGNMENT,
            f"Complaint {complaint.complaint_number} has no active assignment.",
        )
    if current.officer_id == new_officer_id:
        return _failure(
            AssignmentErrorKind.ALREADY_ASSIGNED,
            f"Complaint {complaint.complaint_number} is already assigned to this officer.",
        )

    try:
        officers = lock_many(Officer, [current.officer_id, new_officer_id])
    except NotFound as exc:
        return _failure(AssignmentErrorKind.OFFICER_NOT_FOUND, str(exc))
    previous, officer = officers[current.officer_id], officers[new_officer_id]

    if officer.employment_status != EmploymentStatus.ACTIVE:
        return _ineligible(officer)

    current.status = AssignmentStatus.REASSIGNED
    current.save(update_fields=["status", "updated_at"])

    assignment = CaseAssignment.objects.create(
        complaint=complaint,
        officer=officer,
        assigner_id=admin_id,
        assigned_by=AssignedBy.ADMIN,
        assignment_type=AssignmentType.REASSIGNMENT,
        status=AssignmentStatus.ACTIVE,
        notes=reason or "",
    )

    Officer.objects.filter(pk=previous.pk).update(
        active_cases=Greatest(F("active_cases") - 1, 0, output_field=IntegerField()),
    )
    Officer.objects.filter(pk=officer.pk).update(
        active_cases=F("active_cases") + 1,
        total_cases=F("total_cases") + 1,
        last_assignment_at=timezone.now(),
    )

    complaint.assigned_officer = officer
    complaint.assigned_unit_id = officer.unit_id
    complaint.save(update_fields=["assigned_officer", "assigned_unit", "updated_at"])

    ComplaintStatusLog.objects.create(
        complaint=complaint,
        from_status=complaint.status,
        to_status=complaint.status,
        changed_by_id=admin_id,
        message=f"Reassigned from {previous.full_name} to {officer.full_name}. {reason or ''}".strip(),
    )

    return {
        "success": True,
        "assignment_id": assignment.pk,
        "new_officer_name": officer.full_name,
        "message": (
            f"Complaint {complaint.complaint_number} reassigned "
            f"from {previous.full_name} to {officer.full_name}."
        ),
    }
