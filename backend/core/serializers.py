"""
Core app serializers.

Read-only response serializers for the crime-type taxonomy endpoints.
Serializers handle field definitions only — the lookups live in
``core.taxonomy``.
"""

from __future__ import annotations

from rest_framework import serializers


class CrimeTypeQuerySerializer(serializers.Serializer):
    """Query parameters for ``GET /api/core/crime-types/``."""

    search = serializers.CharField(
        required=False,
        max_length=100,
        allow_blank=False,
        help_text="Case-insensitive fragment matched against client keys and display names.",
    )
    category = serializers.CharField(
        required=False,
        max_length=100,
        help_text="Restrict to one crime category.",
    )


class CrimeTypeMappingSerializer(serializers.Serializer):
    """One taxonomy row."""

    client_key = serializers.CharField(help_text="Identifier used by the mobile reporting client.")
    display_name = serializers.CharField(help_text="Canonical label stored on complaints.")
    category = serializers.CharField()
    unit = serializers.CharField(help_text="Name of the unit responsible for the category.")


class CrimeTypeResolveSerializer(serializers.Serializer):
    """
    Response for ``GET /api/core/crime-types/resolve/?value=...``.

    Every field except ``value`` is ``null`` when the value matches
    neither representation.
    """

    value = serializers.CharField()
    display_name = serializers.CharField(allow_null=True)
    client_key = serializers.CharField(allow_null=True)
    category = serializers.CharField(allow_null=True)
    unit = serializers.CharField(allow_null=True)
    candidates = CrimeTypeMappingSerializer(many=True)
