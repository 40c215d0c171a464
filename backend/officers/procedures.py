"""
officers.procedures — Server-side availability query.

This is the *primary* read path of the officer directory.  It takes the
same parameters as the portal's availability endpoint and returns plain
dict rows in the wire shape that the directory service converts into
``AvailableOfficer`` records.  Keeping it a separate callable lets the
directory service swap it for a stub in tests, and lets the service fall
back to its own ORM query when this path fails.
"""

from __future__ import annotations

from typing import Any

from django.db.models import Q

from core.taxonomy import CrimeTypeMapper

from .models import EmploymentStatus, Officer, UnitCrimeType
from .workload import score


def _crime_type_filter(crime_type: str) -> Q:
    category = CrimeTypeMapper.category(crime_type)
    if category is not None:
        return Q(unit__category=category)
    unit_ids = UnitCrimeType.objects.filter(
        crime_type__iexact=crime_type,
    ).values("unit_id")
    return Q(unit_id__in=unit_ids)


def get_available_officers_for_assignment(
    unit_id: int | None = None,
    crime_type: str | None = None,
) -> list[dict[str, Any]]:
    """
    Return every assignment-eligible officer matching the filters.

    Parameters
    ----------
    unit_id : int | None
        Restrict to one unit.
    crime_type : str | None
        Crime-type display name.  When it belongs to a known category,
        officers of units owning that category match; otherwise officers of
        units whose crime-type list contains it.

    Returns
    -------
    list[dict]
        Rows ordered by ``active_cases`` then officer id.
    """
    qs = (
        Officer.objects
        .select_related("unit")
        .filter(employment_status=EmploymentStatus.ACTIVE)
    )
    if unit_id is not None:
        qs = qs.filter(unit_id=unit_id)
    if crime_type:
        qs = qs.filter(_crime_type_filter(crime_type))

    return [
        {
            "officer_id": officer.pk,
            "officer_name": officer.full_name,
            "badge_number": officer.badge_number,
            "rank": officer.rank,
            "unit_id": officer.unit_id,
            "unit_name": officer.unit.name if officer.unit else None,
            "unit_category": officer.unit.category if officer.unit else None,
            "active_cases": officer.active_cases,
            "total_cases": officer.total_cases,
            "availability_status": officer.availability_status,
            "last_assignment": officer.last_assignment_at,
            "workload_level": str(score(officer.active_cases)),
        }
        for officer in qs.order_by("active_cases", "pk")
    ]
