"""
Integration tests for the complaint assignment endpoints through the
real URL conf and the global exception handler.
"""

from __future__ import annotations

from unittest import mock

from django.contrib.auth.models import Permission
from django.db import DatabaseError
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import Role, User
from cases.models import CaseAssignment, Complaint, ComplaintStatus
from core.permissions_constants import CasesPerms
from core.taxonomy import CrimeCategory
from officers.models import Officer, Unit


@override_settings(ASSIGNMENT_BATCH_INTERVAL_SECONDS=0)
class TestComplaintAssignmentEndpoints(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin_role = Role.objects.create(name="System Admin", hierarchy_level=100)
        cls.desk_role = Role.objects.create(name="Desk Officer", hierarchy_level=50)
        cls.desk_role.permissions.add(Permission.objects.get(
            content_type__app_label="cases",
            codename=CasesPerms.CAN_VIEW_ASSIGNMENT_HISTORY,
        ))

        cls.admin = User.objects.create_user(
            username="assign_admin", password="x", role=cls.admin_role,
        )
        cls.desk = User.objects.create_user(
            username="assign_desk", password="x", role=cls.desk_role,
        )

        cls.unit = Unit.objects.create(
            name="Cyber Crime Investigation Cell", code="CCIC",
            category=CrimeCategory.COMMUNICATION,
        )
        cls.officer = Officer.objects.create(full_name="Dana Reyes", badge_number="CYB-100", unit=cls.unit)
        cls.other = Officer.objects.create(full_name="Eli Park", badge_number="CYB-200", unit=cls.unit)
        cls.complaint = Complaint.objects.create(
            complaint_number="CMP-1", title="Phishing SMS", crime_type="Phishing", unit=cls.unit,
        )
        cls.second = Complaint.objects.create(
            complaint_number="CMP-2", title="Fake profile", crime_type="Fake Social Media Profiles",
        )

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def assign(self, complaint, officer_id):
        return self.client.post(
            reverse("complaint-assign", kwargs={"pk": complaint.pk}),
            {"officer_id": officer_id, "notes": "from queue"},
            format="json",
        )

    def test_assign(self):
        resp = self.assign(self.complaint, self.officer.pk)
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["officer_name"], "Dana Reyes")
        self.complaint.refresh_from_db()
        self.assertEqual(self.complaint.status, ComplaintStatus.UNDER_INVESTIGATION)

    def test_assign_twice_conflicts(self):
        self.assign(self.complaint, self.officer.pk)
        resp = self.assign(self.complaint, "CYB-200")
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["code"], "already_assigned")

    def test_assign_unknown_officer(self):
        resp = self.assign(self.complaint, "CYB-404")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["code"], "officer_not_found")

    def test_assign_unknown_complaint(self):
        resp = self.client.post(
            reverse("complaint-assign", kwargs={"pk": 999999}),
            {"officer_id": self.officer.pk},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["code"], "complaint_not_found")

    def test_assign_requires_officer_id(self):
        resp = self.client.post(
            reverse("complaint-assign", kwargs={"pk": self.complaint.pk}), {}, format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_store_failure_is_503(self):
        with mock.patch(
            "cases.procedures.assign_officer_to_complaint",
            side_effect=DatabaseError("disk full"),
        ):
            resp = self.assign(self.complaint, self.officer.pk)
        self.assertEqual(resp.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(resp.data["code"], "store_failure")

    def test_non_admin_cannot_assign(self):
        self.client.force_authenticate(self.desk)
        resp = self.assign(self.complaint, self.officer.pk)
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(CaseAssignment.objects.exists())

    def test_reassign(self):
        self.assign(self.complaint, self.officer.pk)
        resp = self.client.post(
            reverse("complaint-reassign", kwargs={"pk": self.complaint.pk}),
            {"new_officer_id": self.other.pk, "reason": "workload"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["officer_name"], "Eli Park")

    def test_reassign_without_assignment(self):
        resp = self.client.post(
            reverse("complaint-reassign", kwargs={"pk": self.complaint.pk}),
            {"new_officer_id": self.other.pk},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["code"], "no_active_assignment")

    def test_history_visible_to_desk_officer(self):
        self.assign(self.complaint, self.officer.pk)
        self.client.force_authenticate(self.desk)
        resp = self.client.get(reverse("complaint-assignments", kwargs={"pk": self.complaint.pk}))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data), 1)
        self.assertEqual(resp.data[0]["officer"]["badge_number"], "CYB-100")
        self.assertEqual(resp.data[0]["assigner"]["username"], "assign_admin")

    def test_unassigned_queue(self):
        self.assign(self.complaint, self.officer.pk)
        resp = self.client.get(reverse("complaint-unassigned"), {"limit": 5})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["count"], 1)
        self.assertEqual([c["complaint_number"] for c in resp.data["results"]], ["CMP-2"])

    def test_batch_assign_reports_each_item(self):
        resp = self.client.post(
            reverse("complaint-batch-assign"),
            {
                "assignments": [
                    {"complaint_id": self.complaint.pk, "officer_id": "CYB-100"},
                    {"complaint_id": self.complaint.pk, "officer_id": "CYB-200"},
                    {"complaint_id": self.second.pk, "officer_id": "CYB-200"},
                ],
            },
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["success_count"], 2)
        self.assertEqual(resp.data["failure_count"], 1)
        self.assertEqual(
            [r["error_kind"] for r in resp.data["results"]],
            [None, "already_assigned", None],
        )

    def test_batch_assign_rejects_empty(self):
        resp = self.client.post(reverse("complaint-batch-assign"), {"assignments": []}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
