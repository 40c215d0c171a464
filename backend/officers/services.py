"""
Officers Service Layer.

Read-side of officer assignment: who *can* take a case, who *should*
take it, and how loaded a given officer is.  Nothing in this module
writes; counters are owned by ``cases.procedures``.

Architecture
------------
- ``OfficerDirectoryService``  — eligible-officer query with an ordered
  list of query strategies.
- ``OfficerSuggestionService`` — pick the least-loaded eligible officer.
- ``OfficerLookupService``     — resolve an officer from pk, identity-provider
  id or badge number.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from django.db import DatabaseError
from django.db.models import Q

from core.domain.exceptions import NotFound
from core.taxonomy import CrimeTypeMapper

from .exceptions import DirectoryUnavailable
from .models import EmploymentStatus, Officer, UnitCrimeType
from .procedures import get_available_officers_for_assignment
from .workload import rank, score

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Result records
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class AvailableOfficer:
    """One eligible officer, in the availability-query wire shape."""

    officer_id: int
    officer_name: str
    badge_number: str
    rank: str
    unit_id: int | None
    unit_name: str | None
    unit_category: str | None
    active_cases: int
    total_cases: int
    availability_status: str
    last_assignment: Any
    workload_level: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "AvailableOfficer":
        active = row.get("active_cases") or 0
        return cls(
            officer_id=row["officer_id"],
            officer_name=row["officer_name"],
            badge_number=row["badge_number"],
            rank=row.get("rank") or "",
            unit_id=row.get("unit_id"),
            unit_name=row.get("unit_name"),
            unit_category=row.get("unit_category"),
            active_cases=active,
            total_cases=row.get("total_cases") or 0,
            availability_status=row.get("availability_status") or "",
            last_assignment=row.get("last_assignment"),
            # Recomputed so every row agrees with the local thresholds.
            workload_level=str(score(active)),
        )

    @classmethod
    def from_officer(cls, officer: Officer) -> "AvailableOfficer":
        unit = officer.unit
        return cls(
            officer_id=officer.pk,
            officer_name=officer.full_name,
            badge_number=officer.badge_number,
            rank=officer.rank,
            unit_id=officer.unit_id,
            unit_name=unit.name if unit else None,
            unit_category=unit.category if unit else None,
            active_cases=officer.active_cases,
            total_cases=officer.total_cases,
            availability_status=officer.availability_status,
            last_assignment=officer.last_assignment_at,
            workload_level=str(score(officer.active_cases)),
        )


@dataclass(frozen=True)
class QueryOutcome:
    """
    Result of one query strategy.

    ``ok`` with ``rows`` (possibly empty) ends the search; an outcome
    carrying ``error`` hands over to the next strategy.
    """

    rows: list[AvailableOfficer] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ═══════════════════════════════════════════════════════════════════
#  Directory
# ═══════════════════════════════════════════════════════════════════


class OfficerDirectoryService:
    """
    Eligible-officer query.

    Strategies are tried in order; the first one that *succeeds* wins,
    even with an empty result.  "No officers match" is never an error.

    1. ``primary`` — the server-side availability query.
    2. ``direct``  — an ORM query that resolves the crime type itself.

    Parameters
    ----------
    availability_query : callable, optional
        ``(unit_id, crime_type) -> list[dict]``.  Defaults to
        ``officers.procedures.get_available_officers_for_assignment``.
    """

    def __init__(
        self,
        availability_query: Callable[..., list[dict[str, Any]]] | None = None,
    ) -> None:
        self.availability_query = availability_query or get_available_officers_for_assignment
        self.strategies: list[tuple[str, Callable[[int | None, str | None], QueryOutcome]]] = [
            ("primary", self._query_primary),
            ("direct", self._query_direct),
        ]

    def find_eligible_officers(
        self,
        unit_id: int | None = None,
        crime_type: str | None = None,
    ) -> list[AvailableOfficer]:
        """
        Return eligible officers ordered by ``active_cases`` then id.

        Raises
        ------
        DirectoryUnavailable
            If every strategy failed.
        """
        last_error: Exception | None = None
        for name, strategy in self.strategies:
            outcome = strategy(unit_id, crime_type)
            if outcome.ok:
                return outcome.rows
            last_error = outcome.error
            logger.warning(
                "Officer directory strategy '%s' failed (unit=%s, crime_type=%s): %s",
                name, unit_id, crime_type, outcome.error,
            )
        logger.error("All officer directory strategies failed: %s", last_error)
        raise DirectoryUnavailable(
            f"Could not query eligible officers: {last_error}"
        )

    # ── Strategy 1: server-side availability query ──────────────────

    def _query_primary(self, unit_id, crime_type) -> QueryOutcome:
        forwarded = crime_type
        if crime_type:
            forwarded = CrimeTypeMapper.normalize_for_store(crime_type)
            if forwarded is None:
                logger.warning(
                    "Crime type '%s' has no taxonomy mapping; forwarding as-is",
                    crime_type,
                )
                forwarded = crime_type
        # The query is pluggable and its rows are untrusted: any failure,
        # including a malformed row, hands over to the direct query.
        try:
            rows = self.availability_query(unit_id=unit_id, crime_type=forwarded)
            officers = [AvailableOfficer.from_row(row) for row in rows]
        except Exception as exc:
            return QueryOutcome(error=exc)
        return QueryOutcome(rows=officers)

    # ── Strategy 2: direct ORM query ────────────────────────────────

    def _query_direct(self, unit_id, crime_type) -> QueryOutcome:
        try:
            qs = (
                Officer.objects
                .select_related("unit")
                .filter(employment_status=EmploymentStatus.ACTIVE)
            )
            if unit_id is not None:
                qs = qs.filter(unit_id=unit_id)
            if crime_type:
                crime_filter = self._resolve_crime_filter(crime_type)
                if crime_filter is None:
                    logger.warning("Crime type '%s' could not be resolved; no officers match", crime_type)
                    return QueryOutcome(rows=[])
                qs = qs.filter(crime_filter)
            rows = [AvailableOfficer.from_officer(o) for o in qs.order_by("active_cases", "pk")]
        except DatabaseError as exc:
            return QueryOutcome(error=exc)
        return QueryOutcome(rows=rows)

    @staticmethod
    def _by_category(crime_type: str) -> Q | None:
        category = CrimeTypeMapper.category(crime_type)
        return Q(unit__category=category) if category else None

    @staticmethod
    def _by_unit_crime_types(crime_type: str) -> Q | None:
        unit_ids = set(
            UnitCrimeType.objects
            .filter(crime_type__iexact=crime_type.strip())
            .values_list("unit_id", flat=True)
        )
        return Q(unit_id__in=unit_ids) if unit_ids else None

    @staticmethod
    def _by_candidates(crime_type: str) -> Q | None:
        categories = {m.category for m in CrimeTypeMapper.find_candidates(crime_type)}
        if not categories:
            return None
        logger.warning(
            "Crime type '%s' resolved by fragment match to categories %s",
            crime_type, sorted(categories),
        )
        return Q(unit__category__in=categories)

    def _resolve_crime_filter(self, crime_type: str) -> Q | None:
        for resolver in (self._by_category, self._by_unit_crime_types, self._by_candidates):
            crime_filter = resolver(crime_type)
            if crime_filter is not None:
                return crime_filter
        return None

    # ── Single-officer workload ─────────────────────────────────────

    @staticmethod
    def get_officer_workload(officer_id: Any) -> dict[str, Any]:
        """
        Return the counters and workload level of one officer.

        Raises ``NotFound`` if the officer cannot be resolved.
        """
        officer = OfficerLookupService.resolve(officer_id)
        if officer is None:
            raise NotFound(f"Officer '{officer_id}' not found.")

        success_rate = 0.0
        if officer.total_cases:
            success_rate = round(officer.resolved_cases / officer.total_cases * 100, 1)

        return {
            "officer_id": officer.pk,
            "officer_name": officer.full_name,
            "active_cases": officer.active_cases,
            "total_cases": officer.total_cases,
            "resolved_cases": officer.resolved_cases,
            "success_rate": success_rate,
            "workload_level": str(score(officer.active_cases)),
        }


# ═══════════════════════════════════════════════════════════════════
#  Suggestion
# ═══════════════════════════════════════════════════════════════════


class OfficerSuggestionService:
    """Pick the least-loaded eligible officer for a case."""

    def __init__(self, directory: OfficerDirectoryService | None = None) -> None:
        self.directory = directory or OfficerDirectoryService()

    def suggest(
        self,
        unit_id: int | None = None,
        crime_type: str | None = None,
    ) -> AvailableOfficer | None:
        """
        Return the best candidate or ``None`` when nobody is eligible.

        Candidates are ranked by workload level, then by ``active_cases``.
        The sort is stable, so ties keep the directory order (officer id).
        Directory errors propagate.
        """
        officers = self.directory.find_eligible_officers(unit_id, crime_type)
        if not officers:
            logger.info("No eligible officer for unit=%s crime_type=%s", unit_id, crime_type)
            return None
        ranked = sorted(officers, key=lambda o: (rank(o.workload_level), o.active_cases))
        return ranked[0]


# ═══════════════════════════════════════════════════════════════════
#  Lookup
# ═══════════════════════════════════════════════════════════════════


class OfficerLookupService:
    """
    Resolve an officer from any of its identifiers.

    Lookup order: primary key → ``external_uid`` → ``badge_number``.
    """

    @staticmethod
    def resolve(identifier: Any) -> Officer | None:
        if identifier is None or str(identifier).strip() == "":
            return None

        qs = Officer.objects.select_related("unit")
        try:
            officer = qs.filter(pk=int(identifier)).first()
        except (TypeError, ValueError):
            officer = None
        if officer is not None:
            return officer

        value = str(identifier).strip()
        return (
            qs.filter(external_uid=value).first()
            or qs.filter(badge_number=value).first()
        )
