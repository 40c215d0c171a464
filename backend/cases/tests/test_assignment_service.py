"""
Tests for ``CaseAssignmentService`` against a real test database.

Counters, complaint status, history rows and the status log are all
checked after each operation.
"""

from __future__ import annotations

from unittest import mock

import pytest
from django.db import DatabaseError, OperationalError

from cases.exceptions import (
    AlreadyAssigned,
    AssignerNotFound,
    ComplaintNotFound,
    NoActiveAssignment,
    OfficerNotFound,
    StoreFailure,
)
from cases.models import (
    AssignmentStatus,
    AssignmentType,
    CaseAssignment,
    ComplaintStatus,
    ComplaintStatusLog,
)
from cases.services import CaseAssignmentService
from officers.models import EmploymentStatus

pytestmark = pytest.mark.django_db


@pytest.fixture()
def setup(create_admin, create_unit, create_officer, create_complaint):
    unit = create_unit()
    return {
        "admin": create_admin(external_uid="idp|admin"),
        "unit": unit,
        "officer": create_officer(unit=unit, active_cases=2, total_cases=5),
        "other": create_officer(unit=unit),
        "complaint": create_complaint(unit=unit),
    }


@pytest.fixture()
def service():
    return CaseAssignmentService()


class TestAssign:

    def test_assign_binds_officer_and_updates_counters(self, service, setup):
        complaint, officer, admin = setup["complaint"], setup["officer"], setup["admin"]

        result = service.assign(complaint.pk, officer.pk, admin.pk, notes="urgent triage")

        assert result.officer_name == officer.full_name
        row = CaseAssignment.objects.get(pk=result.assignment_id)
        assert row.status == AssignmentStatus.ACTIVE
        assert row.assignment_type == AssignmentType.PRIMARY
        assert row.assigner == admin
        assert row.notes == "urgent triage"

        officer.refresh_from_db()
        assert (officer.active_cases, officer.total_cases) == (3, 6)
        assert officer.last_assignment_at is not None

        complaint.refresh_from_db()
        assert complaint.status == ComplaintStatus.UNDER_INVESTIGATION
        assert complaint.assigned_officer == officer
        assert complaint.assigned_unit == setup["unit"]

        log = ComplaintStatusLog.objects.get(complaint=complaint)
        assert (log.from_status, log.to_status) == (
            ComplaintStatus.TO_BE_ASSIGNED, ComplaintStatus.UNDER_INVESTIGATION,
        )

    def test_assign_accepts_alternate_identifiers(self, service, setup):
        officer = setup["officer"]
        result = service.assign(setup["complaint"].pk, officer.badge_number, "idp|admin")
        assert result.officer_name == officer.full_name

    def test_assign_twice_is_rejected_and_binding_unchanged(self, service, setup):
        complaint, officer, other = setup["complaint"], setup["officer"], setup["other"]
        service.assign(complaint.pk, officer.pk, setup["admin"].pk)

        with pytest.raises(AlreadyAssigned):
            service.assign(complaint.pk, other.pk, setup["admin"].pk)

        complaint.refresh_from_db()
        other.refresh_from_db()
        assert complaint.assigned_officer == officer
        assert other.active_cases == 0
        assert CaseAssignment.objects.filter(complaint=complaint).count() == 1

    def test_unknown_officer(self, service, setup):
        with pytest.raises(OfficerNotFound):
            service.assign(setup["complaint"].pk, "ghost", setup["admin"].pk)

    def test_inactive_officer_is_not_eligible(self, service, setup, create_officer):
        on_leave = create_officer(employment_status=EmploymentStatus.ON_LEAVE)
        with pytest.raises(OfficerNotFound):
            service.assign(setup["complaint"].pk, on_leave.pk, setup["admin"].pk)

    def test_non_admin_assigner(self, service, setup, create_user):
        clerk = create_user()
        with pytest.raises(AssignerNotFound):
            service.assign(setup["complaint"].pk, setup["officer"].pk, clerk.pk)

    def test_unknown_complaint(self, service, setup):
        with pytest.raises(ComplaintNotFound):
            service.assign(999999, setup["officer"].pk, setup["admin"].pk)

    def test_database_error_becomes_store_failure(self, setup):
        procedures = mock.Mock()
        procedures.assign_officer_to_complaint.side_effect = DatabaseError("connection reset")
        service = CaseAssignmentService(procedures=procedures)

        with pytest.raises(StoreFailure):
            service.assign(setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk)

    def test_lookup_database_error_becomes_store_failure(self, service, setup):
        with mock.patch(
            "cases.services.Complaint.objects.get",
            side_effect=OperationalError("connection reset"),
        ):
            with pytest.raises(StoreFailure):
                service.assign(setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk)

        assert not CaseAssignment.objects.exists()

    def test_officer_lookup_database_error_on_reassign(self, setup):
        CaseAssignmentService().assign(
            setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk,
        )

        def _lookup(identifier):
            raise OperationalError("connection reset")

        service = CaseAssignmentService(officer_lookup=_lookup)
        with pytest.raises(StoreFailure):
            service.reassign(setup["complaint"].pk, setup["other"].pk, setup["admin"].pk)

    @pytest.mark.parametrize("bad_id", ["abc", True])
    def test_malformed_complaint_id(self, service, setup, bad_id):
        with pytest.raises(ComplaintNotFound):
            service.assign(bad_id, setup["officer"].pk, setup["admin"].pk)

    def test_fractional_complaint_id_is_not_truncated(self, service, setup):
        with pytest.raises(ComplaintNotFound):
            service.assign(setup["complaint"].pk + 0.9, setup["officer"].pk, setup["admin"].pk)

        assert not CaseAssignment.objects.exists()

    def test_whole_float_complaint_id_is_accepted(self, service, setup):
        service.assign(float(setup["complaint"].pk), setup["officer"].pk, setup["admin"].pk)
        assert CaseAssignment.objects.filter(complaint=setup["complaint"]).count() == 1

    def test_procedure_failure_code_is_mapped(self, setup):
        procedures = mock.Mock()
        procedures.assign_officer_to_complaint.return_value = {
            "success": False, "error": "raced", "code": "already_assigned",
        }
        service = CaseAssignmentService(procedures=procedures)

        with pytest.raises(AlreadyAssigned, match="raced"):
            service.assign(setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk)

    def test_procedure_unknown_failure_is_store_failure(self, setup):
        procedures = mock.Mock()
        procedures.assign_officer_to_complaint.return_value = {"success": False, "error": "??"}
        service = CaseAssignmentService(procedures=procedures)

        with pytest.raises(StoreFailure):
            service.assign(setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk)

    def test_procedure_receives_resolved_ids(self, setup):
        procedures = mock.Mock()
        procedures.assign_officer_to_complaint.return_value = {
            "success": True, "assignment_id": 11, "officer_name": "X", "message": "ok",
        }
        service = CaseAssignmentService(procedures=procedures)

        service.assign(str(setup["complaint"].pk), setup["officer"].badge_number, "idp|admin")

        procedures.assign_officer_to_complaint.assert_called_once_with(
            complaint_id=setup["complaint"].pk,
            officer_id=setup["officer"].pk,
            admin_id=setup["admin"].pk,
            notes=None,
        )


class TestReassign:

    def test_reassign_moves_case_and_counters(self, service, setup):
        complaint, officer, other, admin = (
            setup["complaint"], setup["officer"], setup["other"], setup["admin"],
        )
        first = service.assign(complaint.pk, officer.pk, admin.pk)

        result = service.reassign(complaint.pk, other.pk, admin.pk, reason="conflict of interest")

        assert result.officer_name == other.full_name
        assert CaseAssignment.objects.get(pk=first.assignment_id).status == AssignmentStatus.REASSIGNED
        new_row = CaseAssignment.objects.get(pk=result.assignment_id)
        assert new_row.status == AssignmentStatus.ACTIVE
        assert new_row.assignment_type == AssignmentType.REASSIGNMENT
        assert new_row.notes == "conflict of interest"

        officer.refresh_from_db()
        other.refresh_from_db()
        assert officer.active_cases == 2
        assert (other.active_cases, other.total_cases) == (1, 1)

        complaint.refresh_from_db()
        assert complaint.assigned_officer == other
        assert complaint.status == ComplaintStatus.UNDER_INVESTIGATION

    def test_default_reason(self, service, setup):
        service.assign(setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk)
        result = service.reassign(setup["complaint"].pk, setup["other"].pk, setup["admin"].pk)
        assert CaseAssignment.objects.get(pk=result.assignment_id).notes == "Reassigned by administrator"

    def test_previous_counter_never_goes_negative(self, service, setup):
        complaint, officer = setup["complaint"], setup["officer"]
        service.assign(complaint.pk, officer.pk, setup["admin"].pk)
        type(officer).objects.filter(pk=officer.pk).update(active_cases=0)

        service.reassign(complaint.pk, setup["other"].pk, setup["admin"].pk)

        officer.refresh_from_db()
        assert officer.active_cases == 0

    def test_requires_active_assignment(self, service, setup):
        with pytest.raises(NoActiveAssignment):
            service.reassign(setup["complaint"].pk, setup["other"].pk, setup["admin"].pk)

    def test_same_officer_is_rejected(self, service, setup):
        service.assign(setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk)
        with pytest.raises(AlreadyAssigned):
            service.reassign(setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk)


class TestQueries:

    def test_history_newest_first(self, service, setup):
        complaint = setup["complaint"]
        service.assign(complaint.pk, setup["officer"].pk, setup["admin"].pk)
        service.reassign(complaint.pk, setup["other"].pk, setup["admin"].pk)

        history = list(service.get_assignment_history(complaint.pk))

        assert [row.assignment_type for row in history] == [
            AssignmentType.REASSIGNMENT, AssignmentType.PRIMARY,
        ]

    def test_history_unknown_complaint(self, service):
        with pytest.raises(ComplaintNotFound):
            service.get_assignment_history(424242)

    def test_unassigned_count_and_list(self, service, setup, create_complaint):
        extra = [create_complaint() for _ in range(3)]
        service.assign(setup["complaint"].pk, setup["officer"].pk, setup["admin"].pk)

        assert service.count_unassigned() == 3
        listed = list(service.list_unassigned(limit=2))
        assert [c.pk for c in listed] == [extra[2].pk, extra[1].pk]

    def test_unassigned_limit_is_clamped(self, service, setup):
        assert len(service.list_unassigned(limit=0)) == 1
        assert len(service.list_unassigned(limit=10_000)) == 1
