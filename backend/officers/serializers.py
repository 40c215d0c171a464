"""
Officers app serializers.

Request serializers validate query parameters; response serializers
render ``AvailableOfficer`` records (frozen dataclasses, passed in via
``dataclasses.asdict``) and the workload summary dict.  No business
logic lives here.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import AvailabilityStatus, Officer, Unit
from .workload import WorkloadLevel


# ═══════════════════════════════════════════════════════════════════
#  1. Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class EligibleOfficerQuerySerializer(serializers.Serializer):
    """
    Query parameters for ``/api/officers/available/`` and
    ``/api/officers/suggested/``.  Both fields are optional.
    """

    unit_id = serializers.IntegerField(required=False, min_value=1)
    crime_type = serializers.CharField(required=False, allow_blank=True, max_length=100)

    def validate_crime_type(self, value: str) -> str | None:
        return value.strip() or None


# ═══════════════════════════════════════════════════════════════════
#  2. Response Serializers
# ═══════════════════════════════════════════════════════════════════


class AvailableOfficerSerializer(serializers.Serializer):
    officer_id = serializers.IntegerField()
    officer_name = serializers.CharField()
    badge_number = serializers.CharField()
    rank = serializers.CharField(allow_blank=True)
    unit_id = serializers.IntegerField(allow_null=True)
    unit_name = serializers.CharField(allow_null=True)
    unit_category = serializers.CharField(allow_null=True)
    active_cases = serializers.IntegerField()
    total_cases = serializers.IntegerField()
    availability_status = serializers.ChoiceField(choices=AvailabilityStatus.choices)
    last_assignment = serializers.DateTimeField(allow_null=True)
    workload_level = serializers.ChoiceField(choices=WorkloadLevel.choices)


class OfficerWorkloadSerializer(serializers.Serializer):
    officer_id = serializers.IntegerField()
    officer_name = serializers.CharField()
    active_cases = serializers.IntegerField()
    total_cases = serializers.IntegerField()
    resolved_cases = serializers.IntegerField()
    success_rate = serializers.FloatField(help_text="Resolved / total, as a percentage.")
    workload_level = serializers.ChoiceField(choices=WorkloadLevel.choices)


class UnitSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Unit
        fields = ["id", "name", "code", "category", "region", "status"]


class OfficerSummarySerializer(serializers.ModelSerializer):
    """Compact officer rendering embedded in assignment payloads."""

    unit = UnitSummarySerializer(read_only=True)

    class Meta:
        model = Officer
        fields = ["id", "full_name", "badge_number", "rank", "unit"]
