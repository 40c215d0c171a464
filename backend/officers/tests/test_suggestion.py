"""Tests for ``OfficerSuggestionService`` using a stub directory."""

from __future__ import annotations

from unittest import mock

import pytest

from officers.exceptions import DirectoryUnavailable
from officers.services import AvailableOfficer, OfficerSuggestionService
from officers.workload import score


def _officer(officer_id: int, active_cases: int) -> AvailableOfficer:
    return AvailableOfficer(
        officer_id=officer_id,
        officer_name=f"Officer {officer_id}",
        badge_number=f"B-{officer_id}",
        rank="Inspector",
        unit_id=1,
        unit_name="Cyber Crime Investigation Cell",
        unit_category="Communication & Social Media Crimes",
        active_cases=active_cases,
        total_cases=active_cases,
        availability_status="available",
        last_assignment=None,
        workload_level=str(score(active_cases)),
    )


def _service(officers):
    directory = mock.Mock()
    directory.find_eligible_officers.return_value = officers
    return OfficerSuggestionService(directory=directory), directory


class TestSuggest:

    def test_no_officers_returns_none(self):
        service, _ = _service([])
        assert service.suggest(None, "phishing") is None

    def test_picks_lowest_workload_level(self):
        service, directory = _service([_officer(1, 16), _officer(2, 12), _officer(3, 6)])
        assert service.suggest(4, "phishing").officer_id == 3
        directory.find_eligible_officers.assert_called_once_with(4, "phishing")

    def test_same_level_prefers_fewer_active_cases(self):
        service, _ = _service([_officer(1, 4), _officer(2, 0), _officer(3, 2)])
        assert service.suggest().officer_id == 2

    def test_ties_keep_directory_order(self):
        service, _ = _service([_officer(7, 1), _officer(3, 1)])
        assert service.suggest().officer_id == 7

    def test_directory_errors_propagate(self):
        directory = mock.Mock()
        directory.find_eligible_officers.side_effect = DirectoryUnavailable()
        with pytest.raises(DirectoryUnavailable):
            OfficerSuggestionService(directory=directory).suggest()


@pytest.mark.django_db
def test_suggest_never_returns_inactive_officer(create_unit, create_officer):
    unit = create_unit()
    create_officer(unit=unit, active_cases=0, employment_status="suspended")
    active = create_officer(unit=unit, active_cases=3)
    assert OfficerSuggestionService().suggest(unit.pk, "phishing").officer_id == active.pk
