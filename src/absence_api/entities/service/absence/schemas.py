"""Request and response shapes for absence declarations.

Incoming payloads are deliberately loose (every field optional, dates as
raw strings) so that the business validator can report every problem of a
request at once instead of stopping at the first type error.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from src.absence_api.entities.service.absence.entity import Absence


class AbsenceCandidate(BaseModel):
    """Raw declaration fields, as submitted or after a patch merge."""

    model_config = ConfigDict(extra="ignore")

    start_date: str | date | None = Field(
        default=None, description="First day of the absence (YYYY-MM-DD)"
    )
    end_date: str | date | None = Field(
        default=None, description="Last day of the absence (YYYY-MM-DD)"
    )
    first_name: str | None = Field(default=None, description="Declarant's first name")
    last_name: str | None = Field(default=None, description="Declarant's last name")
    phone: str | None = Field(
        default=None, description="French phone number, e.g. 0123456789 or +33123456789"
    )
    email: str | None = Field(default=None, description="Optional email address")
    address: str | None = Field(default=None, description="Address of the home left empty")


class AbsenceCreate(AbsenceCandidate):
    """Payload for declaring a new absence."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "start_date": "2024-01-15",
                    "end_date": "2024-01-20",
                    "first_name": "Jean",
                    "last_name": "Dupont",
                    "phone": "0123456789",
                    "email": "jean.dupont@email.fr",
                    "address": "123 Rue de Rivoli, 75001 Paris, France",
                }
            ]
        },
    )


class AbsenceUpdate(AbsenceCandidate):
    """Partial update: only the fields present in the payload are applied."""

    def changes(self) -> dict:
        """Fields the caller actually supplied.

        ``None`` counts as "not supplied" for required fields; for ``email``
        it clears the stored value.
        """
        supplied = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in supplied.items()
            if value is not None or name == "email"
        }


class AbsenceRead(BaseModel):
    """Absence as returned by the API."""

    id: int
    start_date: date
    end_date: date
    first_name: str
    last_name: str
    phone: str
    email: str | None
    address: str
    created_at: datetime
    updated_at: datetime
    duration_days: int
    full_name: str
    is_active: bool

    @classmethod
    def from_entity(cls, absence: Absence, today: date) -> "AbsenceRead":
        return cls(
            **absence.model_dump(),
            duration_days=absence.duration_days,
            full_name=absence.full_name,
            is_active=absence.is_active_on(today),
        )


class AbsenceStats(BaseModel):
    """Aggregate figures over all declarations."""

    total_absences: int
    active_absences: int
    recent_absences: int
    average_duration: float
