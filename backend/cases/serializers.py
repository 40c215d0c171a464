"""
Cases app serializers.

Request serializers validate action payloads; response serializers
render models and the service-layer result records.  **No business
logic lives here**: identity resolution and every assignment rule belong
in ``services.py``.

Structure
---------
1. Query-parameter serializers
2. Action request serializers
3. Read serializers (complaint, assignment history)
4. Result serializers (assignment / batch results)
"""

from __future__ import annotations

from rest_framework import serializers

from core.constants import UNASSIGNED_LIST_DEFAULT_LIMIT, UNASSIGNED_LIST_MAX_LIMIT
from officers.serializers import OfficerSummarySerializer, UnitSummarySerializer

from .models import CaseAssignment, Complaint

BATCH_ASSIGN_MAX_ITEMS = 100


# ═══════════════════════════════════════════════════════════════════
#  1. Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class UnassignedQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=UNASSIGNED_LIST_MAX_LIMIT,
        default=UNASSIGNED_LIST_DEFAULT_LIMIT,
    )


# ═══════════════════════════════════════════════════════════════════
#  2. Action Request Serializers
# ═══════════════════════════════════════════════════════════════════


class AssignOfficerSerializer(serializers.Serializer):
    """
    Payload for ``POST /api/complaints/{id}/assign/``.

    ``officer_id`` accepts the officer's PK, identity-provider id or
    badge number.
    """

    officer_id = serializers.CharField(max_length=128)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ReassignOfficerSerializer(serializers.Serializer):
    new_officer_id = serializers.CharField(max_length=128)
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class BatchItemSerializer(serializers.Serializer):
    complaint_id = serializers.IntegerField(min_value=1)
    officer_id = serializers.CharField(max_length=128)


class BatchAssignSerializer(serializers.Serializer):
    assignments = BatchItemSerializer(many=True, allow_empty=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_assignments(self, value: list[dict]) -> list[dict]:
        if len(value) > BATCH_ASSIGN_MAX_ITEMS:
            raise serializers.ValidationError(
                f"At most {BATCH_ASSIGN_MAX_ITEMS} assignments per batch."
            )
        return value


# ═══════════════════════════════════════════════════════════════════
#  3. Read Serializers
# ═══════════════════════════════════════════════════════════════════


class ComplaintListSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    unit = UnitSummarySerializer(read_only=True)

    class Meta:
        model = Complaint
        fields = [
            "id",
            "complaint_number",
            "title",
            "crime_type",
            "status",
            "status_display",
            "priority",
            "unit",
            "assigned_officer",
            "assigned_unit",
            "created_at",
        ]
        read_only_fields = fields


class CaseAssignmentSerializer(serializers.ModelSerializer):
    officer = OfficerSummarySerializer(read_only=True)
    assigner = serializers.SerializerMethodField()

    class Meta:
        model = CaseAssignment
        fields = [
            "id",
            "complaint",
            "officer",
            "assigner",
            "assigned_by",
            "assignment_type",
            "status",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_assigner(self, obj: CaseAssignment) -> dict | None:
        if obj.assigner is None:
            return None
        return {
            "id": obj.assigner.pk,
            "username": obj.assigner.username,
            "full_name": obj.assigner.get_full_name(),
        }


# ═══════════════════════════════════════════════════════════════════
#  4. Result Serializers
# ═══════════════════════════════════════════════════════════════════


class AssignmentResultSerializer(serializers.Serializer):
    assignment_id = serializers.IntegerField()
    officer_name = serializers.CharField()
    message = serializers.CharField()


class BatchItemResultSerializer(serializers.Serializer):
    complaint_id = serializers.IntegerField()
    officer_id = serializers.CharField()
    success = serializers.BooleanField()
    assignment_id = serializers.IntegerField(allow_null=True)
    officer_name = serializers.CharField(allow_null=True)
    error_kind = serializers.CharField(allow_null=True)
    error = serializers.CharField(allow_null=True)


class BatchAssignmentResultSerializer(serializers.Serializer):
    success_count = serializers.IntegerField()
    failure_count = serializers.IntegerField()
    results = BatchItemResultSerializer(many=True)
