"""Business rules for absence declarations.

Every rule is checked independently and all failures are reported together,
in a stable order: dates, first name, last name, phone, email, address.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, date, datetime, time

from src.absence_api.entities._base import utcnow
from src.absence_api.entities.service.absence.schemas import AbsenceCandidate
from src.absence_api.runtime.config.config_data import AbsenceRulesConfig

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def parse_calendar_date(value: str | date | datetime | None) -> date | None:
    """Parse an ISO calendar date; return None when the value is not a date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_blank_date(value: str | date | None) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class AbsenceValidator:
    """Checks a candidate declaration against the configured rules.

    ``clock`` supplies the current time for the advance-notice rule and must
    return a timezone-aware datetime (naive values are taken as UTC).
    """

    def __init__(
        self,
        rules: AbsenceRulesConfig | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.rules = rules or AbsenceRulesConfig()
        self._clock = clock
        self._phone_pattern = re.compile(
            rf"^(\+{re.escape(self.rules.phone_country_code)}|0)[1-9]\d{{8}}$"
        )

    def now(self) -> datetime:
        current = self._clock()
        if current.tzinfo is None:
            return current.replace(tzinfo=UTC)
        return current

    def validate(
        self, candidate: AbsenceCandidate, check_advance_notice: bool = True
    ) -> list[str]:
        """Return every rule violation of ``candidate``; empty means valid."""
        errors: list[str] = []
        errors += self.check_dates(
            candidate.start_date,
            candidate.end_date,
            check_advance_notice=check_advance_notice,
        )
        errors += self.check_name(candidate.first_name, "Le prénom")
        errors += self.check_name(candidate.last_name, "Le nom de famille")
        errors += self.check_phone(candidate.phone)
        errors += self.check_email(candidate.email)
        errors += self.check_address(candidate.address)
        return errors

    def check_dates(
        self,
        raw_start: str | date | None,
        raw_end: str | date | None,
        check_advance_notice: bool = True,
    ) -> list[str]:
        errors = []
        start = parse_calendar_date(raw_start)
        end = parse_calendar_date(raw_end)

        if start is None:
            errors.append(
                "La date de début est obligatoire"
                if _is_blank_date(raw_start)
                else "La date de début doit être une date valide"
            )
        if end is None:
            errors.append(
                "La date de fin est obligatoire"
                if _is_blank_date(raw_end)
                else "La date de fin doit être une date valide"
            )

        if start is not None and end is not None:
            errors += self.check_period(start, end)

        if start is not None and check_advance_notice:
            errors += self.check_advance_notice(start)

        return errors

    def check_period(self, start: date, end: date) -> list[str]:
        """Ordering and duration bounds of an already parsed period."""
        errors = []
        if end <= start:
            errors.append("La date de fin doit être postérieure à la date de début")

        duration = (end - start).days
        if duration > self.rules.max_duration_days:
            errors.append(
                f"La durée maximale d'absence est de {self.rules.max_duration_days} jours"
            )
        if duration < self.rules.min_duration_days:
            unit = "jour" if self.rules.min_duration_days == 1 else "jours"
            errors.append(
                f"La durée minimale d'absence est de {self.rules.min_duration_days} {unit}"
            )
        return errors

    def check_advance_notice(self, start: date) -> list[str]:
        """The absence must start at least ``min_advance_hours`` from now."""
        starts_at = datetime.combine(start, time.min, tzinfo=UTC)
        hours_until_start = (starts_at - self.now()).total_seconds() / 3600
        if hours_until_start < self.rules.min_advance_hours:
            return [
                "La déclaration doit être faite au moins "
                f"{self.rules.min_advance_hours}h à l'avance"
            ]
        return []

    def check_name(self, value: str | None, label: str) -> list[str]:
        if _is_blank(value):
            return [f"{label} est obligatoire"]

        errors = []
        length = len(value.strip())
        if length < self.rules.min_name_length:
            errors.append(
                f"{label} doit contenir au moins {self.rules.min_name_length} caractères"
            )
        if length > self.rules.max_name_length:
            errors.append(
                f"{label} ne peut pas dépasser {self.rules.max_name_length} caractères"
            )
        return errors

    def check_phone(self, value: str | None) -> list[str]:
        if _is_blank(value):
            return ["Le numéro de téléphone est obligatoire"]
        if not self._phone_pattern.match(value.strip()):
            code = self.rules.phone_country_code
            return [
                "Le numéro de téléphone doit être au format français valide "
                f"(ex: 0123456789 ou +{code}123456789)"
            ]
        return []

    def check_email(self, value: str | None) -> list[str]:
        if _is_blank(value):
            return []

        errors = []
        trimmed = value.strip()
        if not EMAIL_PATTERN.match(trimmed):
            errors.append("L'adresse email doit être valide")
        if len(trimmed) > self.rules.max_email_length:
            errors.append(
                "L'adresse email ne peut pas dépasser "
                f"{self.rules.max_email_length} caractères"
            )
        return errors

    def check_address(self, value: str | None) -> list[str]:
        if _is_blank(value):
            return ["L'adresse du domicile est obligatoire"]

        errors = []
        length = len(value.strip())
        if length < self.rules.min_address_length:
            errors.append(
                f"L'adresse doit contenir au moins {self.rules.min_address_length} caractères"
            )
        if length > self.rules.max_address_length:
            errors.append(
                f"L'adresse ne peut pas dépasser {self.rules.max_address_length} caractères"
            )
        return errors
