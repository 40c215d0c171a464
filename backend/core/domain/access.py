"""
core.domain.access — Role and permission helpers shared by service layers.

This module provides:
  1) ``get_user_role_name`` — normalised role-name helper.
  2) ``is_admin``           — administrator check used when resolving the
                              actor of an assignment.
  3) ``require_permission`` — guard that checks ``has_perm`` (OR-logic).

Service-layer access control uses ``require_permission`` with constants
from ``core.permissions_constants``; role names are informational except
for the administrator check, which must also hold for identities that
carry no Django permissions (e.g. provisioned from the identity provider).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from accounts.models import User

#: Normalised role names that make a user an administrator.
ADMIN_ROLE_NAMES = frozenset({"system_admin", "super_admin"})


def get_user_role_name(user: User) -> str | None:
    """
    Return the lowercased, underscore-joined role name for a user, or
    ``None`` if unassigned.  Superusers are always ``"system_admin"``.
    """
    if user.is_superuser:
        return "system_admin"
    role = getattr(user, "role", None)
    if role is None:
        return None
    return role.name.lower().replace(" ", "_")


def is_admin(user: User) -> bool:
    """Return True if the user is an active superuser or holds an admin role."""
    if not user.is_active:
        return False
    return get_user_role_name(user) in ADMIN_ROLE_NAMES


def require_permission(user: User, *perms: str, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` if the user lacks **all** of
    the given permissions (OR-logic: having any one is sufficient).
    Administrators always pass.

    Args:
        user:    Authenticated user.
        *perms:  One or more full permission strings (``app.codename``).
        message: Optional custom error message.

    Raises:
        core.domain.exceptions.PermissionDenied: If the user has none
            of the listed permissions.

    Example::

        require_permission(user, f"cases.{CasesPerms.CAN_ASSIGN_OFFICER}")
    """
    from core.domain.exceptions import PermissionDenied as DomainPermissionDenied

    if is_admin(user):
        return
    for perm in perms:
        if user.has_perm(perm):
            return
    raise DomainPermissionDenied(
        message or f"Missing required permission: {', '.join(perms)}."
    )
