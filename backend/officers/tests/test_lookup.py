"""Tests for officer and administrator identity resolution."""

from __future__ import annotations

import pytest

from accounts.services import AdminLookupService
from officers.services import OfficerLookupService

pytestmark = pytest.mark.django_db


class TestOfficerLookup:

    def test_by_pk(self, create_officer):
        officer = create_officer()
        assert OfficerLookupService.resolve(officer.pk) == officer
        assert OfficerLookupService.resolve(str(officer.pk)) == officer

    def test_by_external_uid(self, create_officer):
        officer = create_officer(external_uid="idp|officer-42")
        assert OfficerLookupService.resolve("idp|officer-42") == officer

    def test_by_badge_number(self, create_officer):
        officer = create_officer(badge_number="CYB-7781")
        assert OfficerLookupService.resolve("CYB-7781") == officer

    @pytest.mark.parametrize("identifier", [None, "", "  ", "nobody", 123456])
    def test_unknown(self, create_officer, identifier):
        create_officer()
        assert OfficerLookupService.resolve(identifier) is None


class TestAdminLookup:

    def test_by_pk_external_uid_and_username(self, create_admin):
        admin = create_admin(username="triage", external_uid="idp|admin-1")
        assert AdminLookupService.resolve(admin.pk) == admin
        assert AdminLookupService.resolve("idp|admin-1") == admin
        assert AdminLookupService.resolve("triage") == admin

    def test_superuser_without_role_is_admin(self, create_user):
        root = create_user(is_superuser=True)
        assert AdminLookupService.resolve(root.pk) == root

    def test_super_admin_role(self, create_user):
        from accounts.models import Role

        role = Role.objects.create(name="Super Admin", hierarchy_level=200)
        user = create_user(role=role)
        assert AdminLookupService.resolve(user.pk) == user

    def test_non_admin_is_rejected(self, create_user):
        from accounts.models import Role

        desk = Role.objects.create(name="Desk Officer", hierarchy_level=50)
        user = create_user(role=desk)
        assert AdminLookupService.resolve(user.pk) is None

    def test_inactive_admin_is_rejected(self, create_admin):
        admin = create_admin(is_active=False)
        assert AdminLookupService.resolve(admin.pk) is None

    def test_unknown(self):
        assert AdminLookupService.resolve("ghost") is None
        assert AdminLookupService.resolve(None) is None
