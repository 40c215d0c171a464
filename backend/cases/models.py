"""
Cases app models.

Covers the assignment side of the complaint lifecycle: a complaint is
filed in ``TO_BE_ASSIGNED``, moves to ``UNDER_INVESTIGATION`` the moment
an officer is bound to it, and every bind/rebind is recorded in the
append-only ``CaseAssignment`` history plus the ``ComplaintStatusLog``
audit trail.
"""

from django.conf import settings
from django.db import models
from django.db.models import Q

from core.models import TimeStampedModel
from core.permissions_constants import CasesPerms


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class ComplaintStatus(models.TextChoices):
    TO_BE_ASSIGNED = "to_be_assigned", "To Be Assigned"
    UNDER_INVESTIGATION = "under_investigation", "Under Investigation"
    REQUIRES_MORE_INFO = "requires_more_info", "Requires More Info"
    RESOLVED = "resolved", "Resolved"
    DISMISSED = "dismissed", "Dismissed"


class ComplaintPriority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    URGENT = "urgent", "Urgent"


class AssignmentType(models.TextChoices):
    PRIMARY = "primary", "Primary"
    REASSIGNMENT = "reassignment", "Reassignment"
    TEMPORARY = "temporary", "Temporary"


class AssignmentStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    REASSIGNED = "reassigned", "Reassigned"
    COMPLETED = "completed", "Completed"


class AssignedBy(models.TextChoices):
    ADMIN = "admin", "Administrator"
    SYSTEM = "system", "System"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Complaint(TimeStampedModel):
    """
    A citizen complaint awaiting (or under) investigation.

    ``crime_type`` is stored as the taxonomy display name.  ``unit`` is
    the unit the complaint was routed to when filed; ``assigned_unit`` is
    the unit of the officer actually bound to it.

    Database invariant: ``assigned_officer`` is NULL exactly when
    ``status`` is ``TO_BE_ASSIGNED``.
    """

    complaint_number = models.CharField(
        max_length=32,
        unique=True,
        verbose_name="Complaint Number",
    )
    title = models.CharField(
        max_length=255,
        verbose_name="Title",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    crime_type = models.CharField(
        max_length=100,
        verbose_name="Crime Type",
    )
    status = models.CharField(
        max_length=32,
        choices=ComplaintStatus.choices,
        default=ComplaintStatus.TO_BE_ASSIGNED,
        verbose_name="Status",
    )
    priority = models.CharField(
        max_length=16,
        choices=ComplaintPriority.choices,
        default=ComplaintPriority.MEDIUM,
        verbose_name="Priority",
    )
    unit = models.ForeignKey(
        "officers.Unit",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="routed_complaints",
        verbose_name="Target Unit",
    )
    assigned_officer = models.ForeignKey(
        "officers.Officer",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="assigned_complaints",
        verbose_name="Assigned Officer",
    )
    assigned_unit = models.ForeignKey(
        "officers.Unit",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_complaints",
        verbose_name="Assigned Unit",
    )

    class Meta:
        verbose_name = "Complaint"
        verbose_name_plural = "Complaints"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="cases_complaint_queue_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(status=ComplaintStatus.TO_BE_ASSIGNED, assigned_officer__isnull=True)
                    | (~Q(status=ComplaintStatus.TO_BE_ASSIGNED) & Q(assigned_officer__isnull=False))
                ),
                name="cases_complaint_officer_matches_status",
            ),
        ]
        permissions = [
            (CasesPerms.CAN_ASSIGN_OFFICER, "Can assign an officer to a complaint"),
            (CasesPerms.CAN_REASSIGN_CASE, "Can reassign a complaint to another officer"),
            (CasesPerms.CAN_VIEW_ASSIGNMENT_HISTORY, "Can view the assignment history of a complaint"),
        ]

    def __str__(self):
        return f"{self.complaint_number} — {self.title}"


class CaseAssignment(TimeStampedModel):
    """
    One bind of an officer to a complaint.

    Rows are never deleted.  A reassignment flips the current row to
    ``REASSIGNED`` and inserts a new ``ACTIVE`` one, so at most one row
    per complaint is ``ACTIVE`` (enforced by a partial unique constraint).
    """

    complaint = models.ForeignKey(
        Complaint,
        on_delete=models.PROTECT,
        related_name="assignments",
        verbose_name="Complaint",
    )
    officer = models.ForeignKey(
        "officers.Officer",
        on_delete=models.PROTECT,
        related_name="assignments",
        verbose_name="Officer",
    )
    assigner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="issued_assignments",
        verbose_name="Assigned By (User)",
    )
    assigned_by = models.CharField(
        max_length=16,
        choices=AssignedBy.choices,
        default=AssignedBy.ADMIN,
        verbose_name="Assigned By",
    )
    assignment_type = models.CharField(
        max_length=16,
        choices=AssignmentType.choices,
        default=AssignmentType.PRIMARY,
        verbose_name="Assignment Type",
    )
    status = models.CharField(
        max_length=16,
        choices=AssignmentStatus.choices,
        default=AssignmentStatus.ACTIVE,
        verbose_name="Status",
    )
    notes = models.TextField(
        blank=True,
        default="",
        verbose_name="Notes",
    )

    class Meta:
        verbose_name = "Case Assignment"
        verbose_name_plural = "Case Assignments"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["complaint"],
                condition=Q(status=AssignmentStatus.ACTIVE),
                name="cases_one_active_assignment",
            ),
        ]

    def __str__(self):
        return (
            f"Complaint #{self.complaint_id} → Officer #{self.officer_id} "
            f"[{self.assignment_type}/{self.status}]"
        )


class ComplaintStatusLog(TimeStampedModel):
    """
    Immutable audit trail of status transitions and officer binds.

    A reassignment keeps the status unchanged but is still logged, with
    the old and new officer in ``message``.
    """

    complaint = models.ForeignKey(
        Complaint,
        on_delete=models.CASCADE,
        related_name="status_logs",
        verbose_name="Complaint",
    )
    from_status = models.CharField(
        max_length=32,
        choices=ComplaintStatus.choices,
        verbose_name="From Status",
    )
    to_status = models.CharField(
        max_length=32,
        choices=ComplaintStatus.choices,
        verbose_name="To Status",
    )
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="complaint_status_changes",
        verbose_name="Changed By",
    )
    message = models.TextField(
        blank=True,
        default="",
        verbose_name="Message",
    )

    class Meta:
        verbose_name = "Complaint Status Log"
        verbose_name_plural = "Complaint Status Logs"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return (
            f"Complaint #{self.complaint_id}: "
            f"{self.from_status} → {self.to_status}"
        )
