"""Entity: Absence."""

from datetime import date, datetime, timedelta
from typing import Any

from pydantic import Field

from src.absence_api.entities._base import Entity, utcnow


def ranges_overlap(
    first_start: date, first_end: date, second_start: date, second_end: date
) -> bool:
    """Return True when two inclusive date ranges share at least one day.

    Ranges that merely touch (one ends the day the other starts) overlap.
    """
    return not (first_end < second_start or first_start > second_end)


def fold_name(name: str) -> str:
    """Trimmed, case-folded form used to compare names ('ÉLODIE' matches 'Élodie')."""
    return name.strip().casefold()


class Absence(Entity):
    """A declared home absence.

    The declarant leaves their home empty between ``start_date`` and
    ``end_date``; police patrols use the address and contact details.
    """

    start_date: date = Field(description="First day of the absence")
    end_date: date = Field(description="Last day of the absence")
    first_name: str = Field(description="Declarant's first name")
    last_name: str = Field(description="Declarant's last name")
    phone: str = Field(description="Declarant's phone number")
    email: str | None = Field(default=None, description="Declarant's email address")
    address: str = Field(description="Address of the home left empty")

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_active_on(self, day: date) -> bool:
        """Whether the absence covers ``day``."""
        return self.start_date <= day <= self.end_date

    def overlaps_with(self, start_date: date, end_date: date) -> bool:
        return ranges_overlap(self.start_date, self.end_date, start_date, end_date)

    def belongs_to(self, first_name: str, last_name: str) -> bool:
        """Case-insensitive comparison of the declarant's name, accents included."""
        return (
            fold_name(self.first_name) == fold_name(first_name)
            and fold_name(self.last_name) == fold_name(last_name)
        )

    def name_contains(self, first_name: str, last_name: str) -> bool:
        """Whether both name fragments appear in the declarant's names."""
        return (
            fold_name(first_name) in fold_name(self.first_name)
            and fold_name(last_name) in fold_name(self.last_name)
        )

    def is_recent(self, now: datetime | None = None, days: int = 7) -> bool:
        """Whether the declaration was created within the last ``days`` days."""
        now = now or utcnow()
        return self.created_at >= now - timedelta(days=days)

    def __eq__(self, other: Any) -> bool:
        """Compare absences by business attributes, ignoring timestamps."""
        if not isinstance(other, Absence):
            return False

        return (
            self.id == other.id
            and self.start_date == other.start_date
            and self.end_date == other.end_date
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.phone == other.phone
            and self.email == other.email
            and self.address == other.address
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.start_date,
            self.end_date,
            self.first_name,
            self.last_name,
            self.phone,
            self.email,
            self.address,
        ))
