"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler
(``core.domain.exception_handler``) maps them to HTTP responses.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ DRF / HTTP equivalent        │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ ValidationError / 400        │ 400  │
│ PermissionDenied    │ PermissionDenied / 403       │ 403  │
│ NotFound            │ NotFound / 404               │ 404  │
│ Conflict            │ APIException / 409           │ 409  │
│ ServiceUnavailable  │ APIException / 503           │ 503  │
└─────────────────────┴──────────────────────────────┴──────┘

Each app narrows these further (``cases.exceptions``,
``officers.exceptions``) so callers can branch on the concrete class or
on its ``kind`` attribute instead of matching message strings::

    try:
        CaseAssignmentService().assign(complaint_id, officer_id, admin.pk)
    except AlreadyAssigned:
        ...                     # never retry
    except StoreFailure:
        ...                     # safe to retry at a higher layer
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    """

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class PermissionDenied(DomainError):
    """
    The authenticated user does not have the required role or permission
    for this operation.

    Maps to HTTP 403.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    The requested resource does not exist.

    Maps to HTTP 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Typical usage: binding an officer to a case that already has one.
    Maps to HTTP 409.
    """

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)


class ServiceUnavailable(DomainError):
    """
    The backing store (or a query path over it) failed.

    Unlike the other domain errors this one says nothing about the
    request itself, so a caller may retry it.  Maps to HTTP 503.
    """

    def __init__(self, message: str = "The backing store is unavailable.") -> None:
        super().__init__(message)
