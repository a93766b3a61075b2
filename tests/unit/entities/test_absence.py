"""Tests for the Absence domain entity."""

from datetime import UTC, date, datetime

import pytest

from src.absence_api.entities.service.absence import Absence, AbsenceRead, ranges_overlap


@pytest.fixture
def absence() -> Absence:
    return Absence(
        id=1,
        start_date=date(2025, 1, 10),
        end_date=date(2025, 1, 15),
        first_name="Jean",
        last_name="Dupont",
        phone="0123456789",
        address="123 Rue de Rivoli, 75001 Paris",
        created_at=datetime(2025, 1, 2, 8, 0, tzinfo=UTC),
    )


class TestRangesOverlap:
    """Test inclusive range overlap."""

    @pytest.mark.parametrize(
        "other,expected",
        [
            ((date(2025, 1, 15), date(2025, 1, 20)), True),
            ((date(2025, 1, 5), date(2025, 1, 10)), True),
            ((date(2025, 1, 11), date(2025, 1, 12)), True),
            ((date(2025, 1, 16), date(2025, 1, 20)), False),
            ((date(2025, 1, 1), date(2025, 1, 9)), False),
        ],
    )
    def test_overlap(self, other, expected):
        assert ranges_overlap(date(2025, 1, 10), date(2025, 1, 15), *other) is expected
        assert ranges_overlap(*other, date(2025, 1, 10), date(2025, 1, 15)) is expected


class TestAbsenceEntity:
    """Test Absence derived values and helpers."""

    def test_derived_values(self, absence: Absence):
        assert absence.duration_days == 5
        assert absence.full_name == "Jean Dupont"
        assert absence.email is None

    def test_is_active_on_bounds(self, absence: Absence):
        assert absence.is_active_on(date(2025, 1, 10))
        assert absence.is_active_on(date(2025, 1, 15))
        assert not absence.is_active_on(date(2025, 1, 16))

    def test_belongs_to_ignores_case(self, absence: Absence):
        assert absence.belongs_to("jean", "DUPONT")
        assert not absence.belongs_to("Jeanne", "Dupont")

    def test_belongs_to_folds_accents_and_sharp_s(self, absence: Absence):
        elodie = absence.model_copy(update={"first_name": "Élodie", "last_name": "Strauß"})

        assert elodie.belongs_to("ÉLODIE", "STRAUSS")
        assert elodie.belongs_to(" élodie", "strauss ")
        assert not elodie.belongs_to("Elodie", "Strauss")

    def test_name_contains(self, absence: Absence):
        elodie = absence.model_copy(update={"first_name": "Élodie", "last_name": "Dupont"})

        assert elodie.name_contains("ÉLO", "DUP")
        assert not elodie.name_contains("ELO", "dup")

    def test_is_recent(self, absence: Absence):
        assert absence.is_recent(datetime(2025, 1, 9, 8, 0, tzinfo=UTC))
        assert not absence.is_recent(datetime(2025, 1, 9, 8, 1, tzinfo=UTC))

    def test_naive_timestamps_are_taken_as_utc(self):
        absence = Absence(
            id=2,
            start_date=date(2025, 1, 10),
            end_date=date(2025, 1, 11),
            first_name="Marie",
            last_name="Curie",
            phone="0612345678",
            address="1 Place de la Mairie, Lyon",
            created_at=datetime(2025, 1, 2, 8, 0),
        )

        assert absence.created_at.tzinfo is UTC

    def test_equality_ignores_timestamps(self, absence: Absence):
        twin = absence.model_copy(update={"updated_at": datetime(2030, 1, 1, tzinfo=UTC)})

        assert twin == absence
        assert hash(twin) == hash(absence)
        assert absence.model_copy(update={"phone": "0698765432"}) != absence

    def test_read_model(self, absence: Absence):
        read = AbsenceRead.from_entity(absence, today=date(2025, 1, 12))

        assert read.id == 1
        assert read.duration_days == 5
        assert read.full_name == "Jean Dupont"
        assert read.is_active is True
