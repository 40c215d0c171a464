"""
Management command: setup_rbac
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Seeds the base **Roles** of the assignment portal and links each role to
its Django permissions.

This command does NOT create Permission objects: the standard CRUD
permissions and the custom ones declared in ``Meta.permissions`` are
inserted by ``migrate``.

The command is **idempotent**.  Existing roles are updated and their
permissions replaced to match the mapping below.

Usage::

    python manage.py migrate
    python manage.py setup_rbac
"""

from django.contrib.auth.models import Permission
from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import Role
from core.permissions_constants import CasesPerms, OfficersPerms

_ADMIN_PERMISSIONS = [
    ("officers", OfficersPerms.VIEW_OFFICER),
    ("officers", OfficersPerms.CHANGE_OFFICER),
    ("officers", OfficersPerms.CAN_VIEW_AVAILABLE_OFFICERS),
    ("cases", CasesPerms.VIEW_COMPLAINT),
    ("cases", CasesPerms.CHANGE_COMPLAINT),
    ("cases", CasesPerms.CAN_ASSIGN_OFFICER),
    ("cases", CasesPerms.CAN_REASSIGN_CASE),
    ("cases", CasesPerms.CAN_VIEW_ASSIGNMENT_HISTORY),
]

# (role_name, description, hierarchy_level) → [(app_label, codename), ...]
ROLE_PERMISSIONS_MAP: dict[tuple[str, str, int], list[tuple[str, str]]] = {
    (
        "Super Admin",
        "Unrestricted access, including role management.",
        200,
    ): _ADMIN_PERMISSIONS,
    (
        "System Admin",
        "Triages complaints and assigns officers.",
        100,
    ): _ADMIN_PERMISSIONS,
    (
        "Desk Officer",
        "Read-only view of officer availability and assignment history.",
        50,
    ): [
        ("officers", OfficersPerms.VIEW_OFFICER),
        ("officers", OfficersPerms.CAN_VIEW_AVAILABLE_OFFICERS),
        ("cases", CasesPerms.VIEW_COMPLAINT),
        ("cases", CasesPerms.CAN_VIEW_ASSIGNMENT_HISTORY),
    ],
}


class Command(BaseCommand):
    help = "Create or update the base roles and their permissions."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING("Seeding roles & permissions"))

        all_permissions: dict[tuple[str, str], Permission] = {
            (p.content_type.app_label, p.codename): p
            for p in Permission.objects.select_related("content_type")
        }

        roles_created = 0
        warnings = 0

        for (role_name, description, hierarchy_level), perm_keys in ROLE_PERMISSIONS_MAP.items():
            role, created = Role.objects.update_or_create(
                name=role_name,
                defaults={
                    "description": description,
                    "hierarchy_level": hierarchy_level,
                },
            )
            roles_created += int(created)

            resolved = []
            for key in perm_keys:
                perm = all_permissions.get(key)
                if perm is None:
                    warnings += 1
                    self.stdout.write(self.style.WARNING(
                        f"  Permission '{key[0]}.{key[1]}' not found, skipped "
                        f"for role '{role_name}'.  (Run migrate first?)"
                    ))
                    continue
                resolved.append(perm)
            role.permissions.set(resolved)

            self.stdout.write(
                f"  {'Created' if created else 'Updated'} role: {role_name:<14s} "
                f"(hierarchy={hierarchy_level}, permissions={len(resolved)})"
            )

        summary = f"Done: {roles_created} role(s) created, {len(ROLE_PERMISSIONS_MAP)} total."
        if warnings:
            summary += f"  {warnings} permission warning(s)."
        self.stdout.write(self.style.SUCCESS(summary))
