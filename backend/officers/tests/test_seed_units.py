"""Tests for the ``seed_units`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from core.taxonomy import CrimeTypeMapper
from officers.models import Unit, UnitCrimeType

pytestmark = pytest.mark.django_db


def _seed(*args) -> str:
    out = StringIO()
    call_command("seed_units", *args, stdout=out)
    return out.getvalue()


def test_creates_one_unit_per_category():
    _seed("--region", "Central")

    assert Unit.objects.count() == 10
    assert UnitCrimeType.objects.count() == 75
    harassment = Unit.objects.get(name="Cyber Crime Against Women and Children")
    assert harassment.code == "CCAWC"
    assert harassment.category == "Harassment & Exploitation"
    assert harassment.region == "Central"
    assert harassment.crime_types.filter(crime_type="Online Predatory Behavior").exists()


def test_is_idempotent():
    _seed()
    _seed()
    assert Unit.objects.count() == 10
    assert UnitCrimeType.objects.count() == 75


def test_prune_removes_unknown_crime_types():
    _seed()
    unit = Unit.objects.get(name=CrimeTypeMapper.unit("phishing"))
    UnitCrimeType.objects.create(unit=unit, crime_type="Retired Crime Type")

    _seed("--prune")

    assert not UnitCrimeType.objects.filter(crime_type="Retired Crime Type").exists()
    assert UnitCrimeType.objects.count() == 75
