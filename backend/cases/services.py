"""
Cases Service Layer.

This module is the **single source of truth** for officer assignment.
Views must remain thin: validate input via serializers, call a service
method, serialize the result.

Architecture
------------
- ``CaseAssignmentService``  — assign / reassign one complaint, read the
  assignment history and the unassigned queue.
- ``BatchAssignmentService`` — sequential, rate-limited batch of
  ``assign`` calls with per-item results.

Every write goes through the store procedures in ``cases.procedures``.
The service resolves identities and checks preconditions first so that
callers get a typed error without opening a write transaction; the
procedures re-check the same rules under row locks.

The acting administrator is always an explicit argument (``assigner_id``);
nothing here reads the current request.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Callable, Iterable

from django.db import DatabaseError
from django.db.models import QuerySet

from accounts.services import AdminLookupService
from core.constants import (
    DEFAULT_REASSIGNMENT_REASON,
    UNASSIGNED_LIST_DEFAULT_LIMIT,
    UNASSIGNED_LIST_MAX_LIMIT,
)
from core.domain.exceptions import DomainError
from core.ratelimit import IntervalRateLimiter
from officers.models import Officer
from officers.services import OfficerLookupService

from . import procedures as default_procedures
from .exceptions import (
    AlreadyAssigned,
    AssignerNotFound,
    ComplaintNotFound,
    NoActiveAssignment,
    OfficerNotFound,
    StoreFailure,
    error_for_code,
)
from .models import AssignmentStatus, CaseAssignment, Complaint, ComplaintStatus

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str):
    """Re-raise any ``DatabaseError`` inside the block as ``StoreFailure``."""
    try:
        yield
    except DatabaseError as exc:
        logger.exception("Store access during %s failed: %s", operation, exc)
        raise StoreFailure(f"{operation} failed: {exc}") from exc


def _as_pk(value: Any) -> int | None:
    """Integral primary key, or ``None`` (``1.9``, ``"abc"`` and ``True`` are rejected)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


# ═══════════════════════════════════════════════════════════════════
#  Result records
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class AssignmentResult:
    assignment_id: int
    officer_name: str
    message: str


@dataclass(frozen=True)
class BatchItem:
    complaint_id: Any
    officer_id: Any


@dataclass(frozen=True)
class BatchItemResult:
    """Outcome of one batch item.  ``error_kind`` is set only on failure."""

    complaint_id: Any
    officer_id: Any
    success: bool
    assignment_id: int | None = None
    officer_name: str | None = None
    error_kind: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class BatchAssignmentResult:
    success_count: int
    failure_count: int
    results: list[BatchItemResult] = field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════
#  Single-complaint assignment
# ═══════════════════════════════════════════════════════════════════


class CaseAssignmentService:
    """
    Bind officers to complaints through the atomic store procedures.

    Parameters
    ----------
    procedures : module-like, optional
        Provides ``assign_officer_to_complaint`` and
        ``reassign_case_to_officer``.  Defaults to ``cases.procedures``.
    officer_lookup, admin_lookup : callable, optional
        ``identifier -> Officer | None`` and ``identifier -> User | None``.
    """

    def __init__(
        self,
        procedures: ModuleType | Any = None,
        officer_lookup: Callable[[Any], Officer | None] | None = None,
        admin_lookup: Callable[[Any], Any] | None = None,
    ) -> None:
        self.procedures = procedures or default_procedures
        self.officer_lookup = officer_lookup or OfficerLookupService.resolve
        self.admin_lookup = admin_lookup or AdminLookupService.resolve

    # ── Precondition helpers ────────────────────────────────────────

    def _resolve_officer(self, officer_id: Any) -> Officer:
        officer = self.officer_lookup(officer_id)
        if officer is None:
            raise OfficerNotFound(f"Officer '{officer_id}' not found.")
        if not officer.is_eligible:
            raise OfficerNotFound(
                f"Officer {officer.badge_number} is not eligible for assignment "
                f"(employment status: {officer.employment_status})."
            )
        return officer

    def _resolve_assigner(self, assigner_id: Any):
        admin = self.admin_lookup(assigner_id)
        if admin is None:
            raise AssignerNotFound(f"Administrator '{assigner_id}' not found.")
        return admin

    @staticmethod
    def _get_complaint(complaint_id: Any) -> Complaint:
        pk = _as_pk(complaint_id)
        if pk is None:
            raise ComplaintNotFound(f"Complaint '{complaint_id}' not found.")
        try:
            return Complaint.objects.get(pk=pk)
        except Complaint.DoesNotExist:
            raise ComplaintNotFound(f"Complaint '{complaint_id}' not found.")

    @staticmethod
    def _active_assignment(complaint: Complaint) -> CaseAssignment | None:
        return (
            CaseAssignment.objects
            .filter(complaint=complaint, status=AssignmentStatus.ACTIVE)
            .first()
        )

    def _call(self, procedure_name: str, **params: Any) -> dict[str, Any]:
        """
        Run one store procedure and translate its outcome.

        A database error or a malformed reply becomes ``StoreFailure``;
        a ``{"success": False, "code": ...}`` reply becomes the matching
        typed error.
        """
        procedure = getattr(self.procedures, procedure_name)
        with store_errors(procedure_name):
            result = procedure(**params)

        if not isinstance(result, dict):
            logger.error("Store procedure %s returned %r", procedure_name, result)
            raise StoreFailure(f"{procedure_name} returned no result.")
        if not result.get("success"):
            raise error_for_code(result.get("code"), result.get("error"))
        return result

    # ── Commands ────────────────────────────────────────────────────

    def assign(
        self,
        complaint_id: Any,
        officer_id: Any,
        assigner_id: Any,
        notes: str | None = None,
    ) -> AssignmentResult:
        """
        Bind ``officer_id`` to an unassigned complaint.

        Raises
        ------
        OfficerNotFound, AssignerNotFound, ComplaintNotFound
            An identity does not resolve.
        AlreadyAssigned
            The complaint already has an active assignment.
        StoreFailure
            A lookup or the store procedure hit a database error.
        """
        with store_errors("assignment pre-checks"):
            officer = self._resolve_officer(officer_id)
            admin = self._resolve_assigner(assigner_id)
            complaint = self._get_complaint(complaint_id)
            current = self._active_assignment(complaint)

        if current is not None:
            raise AlreadyAssigned(
                f"Complaint {complaint.complaint_number} is already assigned."
            )

        result = self._call(
            "assign_officer_to_complaint",
            complaint_id=complaint.pk,
            officer_id=officer.pk,
            admin_id=admin.pk,
            notes=notes,
        )
        logger.info(
            "Complaint #%d assigned to officer #%d by user %s (assignment #%s)",
            complaint.pk, officer.pk, admin.pk, result.get("assignment_id"),
        )
        return AssignmentResult(
            assignment_id=result["assignment_id"],
            officer_name=result.get("officer_name") or officer.full_name,
            message=result.get("message", ""),
        )

    def reassign(
        self,
        complaint_id: Any,
        new_officer_id: Any,
        assigner_id: Any,
        reason: str | None = None,
    ) -> AssignmentResult:
        """
        Move an assigned complaint to ``new_officer_id``.

        ``officer_name`` in the result holds the new officer.  Reassigning
        to the officer who already holds the case raises ``AlreadyAssigned``.
        """
        with store_errors("reassignment pre-checks"):
            officer = self._resolve_officer(new_officer_id)
            admin = self._resolve_assigner(assigner_id)
            complaint = self._get_complaint(complaint_id)
            current = self._active_assignment(complaint)

        if current is None:
            raise NoActiveAssignment(
                f"Complaint {complaint.complaint_number} has no active assignment."
            )
        if current.officer_id == officer.pk:
            raise AlreadyAssigned(
                f"Complaint {complaint.complaint_number} is already assigned to {officer.full_name}."
            )

        result = self._call(
            "reassign_case_to_officer",
            complaint_id=complaint.pk,
            new_officer_id=officer.pk,
            admin_id=admin.pk,
            reason=reason or DEFAULT_REASSIGNMENT_REASON,
        )
        logger.info(
            "Complaint #%d reassigned from officer #%d to officer #%d by user %s",
            complaint.pk, current.officer_id, officer.pk, admin.pk,
        )
        return AssignmentResult(
            assignment_id=result["assignment_id"],
            officer_name=result.get("new_officer_name") or officer.full_name,
            message=result.get("message", ""),
        )

    # ── Queries ─────────────────────────────────────────────────────

    @staticmethod
    def get_assignment_history(complaint_id: Any) -> QuerySet:
        """All assignment rows of a complaint, newest first."""
        with store_errors("assignment history"):
            complaint = CaseAssignmentService._get_complaint(complaint_id)
        return (
            CaseAssignment.objects
            .filter(complaint=complaint)
            .select_related("officer", "officer__unit", "assigner")
            .order_by("-created_at", "-id")
        )

    @staticmethod
    def _unassigned() -> QuerySet:
        return Complaint.objects.filter(
            status=ComplaintStatus.TO_BE_ASSIGNED,
            assigned_officer__isnull=True,
        )

    @staticmethod
    def count_unassigned() -> int:
        return CaseAssignmentService._unassigned().count()

    @staticmethod
    def list_unassigned(limit: int = UNASSIGNED_LIST_DEFAULT_LIMIT) -> QuerySet:
        """Newest unassigned complaints; ``limit`` is clamped to 1..100."""
        limit = max(1, min(limit, UNASSIGNED_LIST_MAX_LIMIT))
        return (
            CaseAssignmentService._unassigned()
            .select_related("unit")
            .order_by("-created_at", "-id")[:limit]
        )


# ═══════════════════════════════════════════════════════════════════
#  Batch assignment
# ═══════════════════════════════════════════════════════════════════


class BatchAssignmentService:
    """
    Assign several complaints one after another.

    Items run strictly in input order, each one paced by the rate limiter.
    A failing item never aborts the batch: its ``DomainError`` (database
    errors included, as ``StoreFailure``) is recorded in the item's result
    and the next item runs.  Programming errors still propagate.

    Parameters
    ----------
    assignment_service : CaseAssignmentService, optional
    limiter : IntervalRateLimiter, optional
        Defaults to ``IntervalRateLimiter.for_batch_assignment()``.
    """

    def __init__(
        self,
        assignment_service: CaseAssignmentService | None = None,
        limiter: IntervalRateLimiter | None = None,
    ) -> None:
        self.assignment_service = assignment_service or CaseAssignmentService()
        self.limiter = limiter or IntervalRateLimiter.for_batch_assignment()

    def batch_assign(
        self,
        items: Iterable[BatchItem],
        assigner_id: Any,
        notes: str | None = None,
    ) -> BatchAssignmentResult:
        results: list[BatchItemResult] = []
        self.limiter.reset()

        for item in items:
            self.limiter.wait()
            try:
                with store_errors("batch item"):
                    outcome = self.assignment_service.assign(
                        item.complaint_id, item.officer_id, assigner_id, notes,
                    )
            except DomainError as exc:
                kind = getattr(exc, "kind", None)
                logger.warning(
                    "Batch item complaint=%s officer=%s failed [%s]: %s",
                    item.complaint_id, item.officer_id, kind, exc,
                )
                results.append(BatchItemResult(
                    complaint_id=item.complaint_id,
                    officer_id=item.officer_id,
                    success=False,
                    error_kind=str(kind) if kind is not None else None,
                    error=str(exc),
                ))
                continue

            results.append(BatchItemResult(
                complaint_id=item.complaint_id,
                officer_id=item.officer_id,
                success=True,
                assignment_id=outcome.assignment_id,
                officer_name=outcome.officer_name,
            ))

        success_count = sum(1 for r in results if r.success)
        logger.info(
            "Batch assignment by user %s: %d succeeded, %d failed",
            assigner_id, success_count, len(results) - success_count,
        )
        return BatchAssignmentResult(
            success_count=success_count,
            failure_count=len(results) - success_count,
            results=results,
        )
