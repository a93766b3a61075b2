"""Unit tests for overlapping-declaration detection."""

from datetime import date

import pytest

from src.absence_api.core.services import ConflictChecker
from src.absence_api.entities.service.absence import AbsenceRepository


@pytest.fixture
def existing(repository: AbsenceRepository, absence_payload):
    """Jean Dupont, away from 10 to 15 January 2025."""
    values = {
        **absence_payload,
        "start_date": date(2025, 1, 10),
        "end_date": date(2025, 1, 15),
    }
    return repository.create(values)


@pytest.fixture
def checker(repository: AbsenceRepository) -> ConflictChecker:
    return ConflictChecker(repository)


class TestConflictChecker:
    """Test conflict detection against stored declarations."""

    def test_shared_boundary_day_conflicts(self, checker, existing):
        assert checker.has_conflict("Jean", "Dupont", date(2025, 1, 15), date(2025, 1, 20))

    def test_adjacent_periods_do_not_conflict(self, checker, repository, absence_payload):
        repository.create(
            {
                **absence_payload,
                "start_date": date(2025, 1, 10),
                "end_date": date(2025, 1, 14),
            }
        )

        assert not checker.has_conflict("Jean", "Dupont", date(2025, 1, 15), date(2025, 1, 20))

    def test_enclosing_period_conflicts(self, checker, existing):
        assert checker.has_conflict("Jean", "Dupont", date(2025, 1, 1), date(2025, 1, 31))

    def test_names_are_case_insensitive(self, checker, existing):
        assert checker.has_conflict("jean", "DUPONT", date(2025, 1, 12), date(2025, 1, 13))

    def test_other_person_does_not_conflict(self, checker, existing):
        assert not checker.has_conflict(
            "Marie", "Dupont", date(2025, 1, 12), date(2025, 1, 13)
        )

    def test_excluded_record_is_ignored(self, checker, existing):
        assert not checker.has_conflict(
            "Jean",
            "Dupont",
            date(2025, 1, 12),
            date(2025, 1, 18),
            exclude_id=existing.id,
        )

    def test_exclusion_keeps_other_records(self, checker, existing, repository, absence_payload):
        other = repository.create(
            {
                **absence_payload,
                "start_date": date(2025, 1, 20),
                "end_date": date(2025, 1, 25),
            }
        )

        assert checker.has_conflict(
            "Jean", "Dupont", date(2025, 1, 14), date(2025, 1, 21), exclude_id=other.id
        )

    def test_empty_store(self, checker):
        assert not checker.has_conflict("Jean", "Dupont", date(2025, 1, 10), date(2025, 1, 15))

    def test_accented_capitals_are_case_insensitive(
        self, checker, repository: AbsenceRepository, absence_payload
    ):
        repository.create(
            {
                **absence_payload,
                "first_name": "Élodie",
                "start_date": date(2025, 1, 10),
                "end_date": date(2025, 1, 15),
            }
        )

        assert checker.has_conflict("ÉLODIE", "DUPONT", date(2025, 1, 12), date(2025, 1, 14))
        assert checker.has_conflict(" élodie ", "dupont", date(2025, 1, 15), date(2025, 1, 16))
        assert not checker.has_conflict("Elodie", "Dupont", date(2025, 1, 12), date(2025, 1, 14))
