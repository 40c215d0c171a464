"""
cases.exceptions — Assignment errors.

Every error carries a ``kind`` from the closed ``AssignmentErrorKind``
enumeration.  The store procedures report failures as
``{"success": False, "error": ..., "code": kind}`` and the service layer
turns the code back into the matching class via ``error_for_code``.
"""

from __future__ import annotations

from django.db import models

from core.domain.exceptions import Conflict, DomainError, NotFound, ServiceUnavailable


class AssignmentErrorKind(models.TextChoices):
    OFFICER_NOT_FOUND = "officer_not_found", "Officer Not Found"
    ASSIGNER_NOT_FOUND = "assigner_not_found", "Assigner Not Found"
    COMPLAINT_NOT_FOUND = "complaint_not_found", "Complaint Not Found"
    ALREADY_ASSIGNED = "already_assigned", "Already Assigned"
    NO_ACTIVE_ASSIGNMENT = "no_active_assignment", "No Active Assignment"
    STORE_FAILURE = "store_failure", "Store Failure"


class OfficerNotFound(NotFound):
    """Unknown officer, or one whose employment status is not active."""

    kind = AssignmentErrorKind.OFFICER_NOT_FOUND

    def __init__(self, message: str = "Officer not found.") -> None:
        super().__init__(message)


class AssignerNotFound(NotFound):
    """The acting identity does not resolve to an active administrator."""

    kind = AssignmentErrorKind.ASSIGNER_NOT_FOUND

    def __init__(self, message: str = "Assigning administrator not found.") -> None:
        super().__init__(message)


class ComplaintNotFound(NotFound):
    kind = AssignmentErrorKind.COMPLAINT_NOT_FOUND

    def __init__(self, message: str = "Complaint not found.") -> None:
        super().__init__(message)


class AlreadyAssigned(Conflict):
    """The complaint already has an active assignment (to this officer, on reassign)."""

    kind = AssignmentErrorKind.ALREADY_ASSIGNED

    def __init__(self, message: str = "Complaint is already assigned.") -> None:
        super().__init__(message)


class NoActiveAssignment(Conflict):
    kind = AssignmentErrorKind.NO_ACTIVE_ASSIGNMENT

    def __init__(self, message: str = "Complaint has no active assignment.") -> None:
        super().__init__(message)


class StoreFailure(ServiceUnavailable):
    """A database error, or a procedure failure with no known code.  Never retried here."""

    kind = AssignmentErrorKind.STORE_FAILURE

    def __init__(self, message: str = "Assignment could not be stored.") -> None:
        super().__init__(message)


_ERRORS_BY_KIND: dict[str, type[DomainError]] = {
    cls.kind: cls
    for cls in (
        OfficerNotFound,
        AssignerNotFound,
        ComplaintNotFound,
        AlreadyAssigned,
        NoActiveAssignment,
        StoreFailure,
    )
}


def error_for_code(code: str | None, message: str | None = None) -> DomainError:
    """Build the exception for a procedure failure code (``StoreFailure`` if unknown)."""
    cls = _ERRORS_BY_KIND.get(code, StoreFailure)
    return cls(message) if message else cls()
