"""Absence declaration use cases."""

from datetime import date

from loguru import logger

from src.absence_api.core.exceptions import (
    AbsenceConflictError,
    AbsenceNotFoundError,
    AbsenceValidationError,
    DeletionDisabledError,
    InvalidIdentifierError,
)
from src.absence_api.core.pagination import Page, PageQuery
from src.absence_api.core.services.absence.conflicts import ConflictChecker
from src.absence_api.core.validation import AbsenceValidator, parse_calendar_date
from src.absence_api.entities.service.absence import (
    Absence,
    AbsenceCandidate,
    AbsenceCreate,
    AbsenceRepository,
    AbsenceStats,
    AbsenceUpdate,
)

CANDIDATE_FIELDS = set(AbsenceCandidate.model_fields)
PERIOD_AND_PERSON_FIELDS = {"start_date", "end_date", "first_name", "last_name"}


def _clean(values: dict) -> dict:
    """Trim text, turn a blank email into None and parse dates."""
    cleaned = {}
    for name, value in values.items():
        if name in ("start_date", "end_date"):
            value = parse_calendar_date(value)
        elif isinstance(value, str):
            value = value.strip()
        if name == "email" and not value:
            value = None
        cleaned[name] = value
    return cleaned


class AbsenceService:
    """Creates, amends and queries absence declarations.

    Every write goes through the validator and, when the period or the
    declarant may have changed, through the conflict checker.
    """

    def __init__(
        self,
        repository: AbsenceRepository,
        validator: AbsenceValidator,
        conflict_checker: ConflictChecker | None = None,
        allow_delete: bool = False,
    ):
        self._repository = repository
        self._validator = validator
        self._conflicts = conflict_checker or ConflictChecker(repository)
        self._allow_delete = allow_delete

    def today(self) -> date:
        return self._validator.now().date()

    @staticmethod
    def _check_id(absence_id: int) -> None:
        if absence_id is None or absence_id <= 0:
            raise InvalidIdentifierError()

    def _validate(self, candidate: AbsenceCandidate) -> None:
        errors = self._validator.validate(candidate, check_advance_notice=True)
        if errors:
            logger.bind(errors=errors).info("Absence declaration rejected")
            raise AbsenceValidationError(errors)

    def create_absence(self, data: AbsenceCreate) -> Absence:
        self._validate(data)

        values = _clean(data.model_dump(include=CANDIDATE_FIELDS))
        if self._conflicts.has_conflict(
            values["first_name"],
            values["last_name"],
            values["start_date"],
            values["end_date"],
        ):
            raise AbsenceConflictError()

        absence = self._repository.create(values)
        logger.bind(
            absence_id=absence.id,
            start_date=str(absence.start_date),
            end_date=str(absence.end_date),
        ).info("Absence declared")
        return absence

    def get_absence(self, absence_id: int) -> Absence:
        self._check_id(absence_id)
        absence = self._repository.get(absence_id)
        if absence is None:
            raise AbsenceNotFoundError(absence_id)
        return absence

    def update_absence(self, absence_id: int, patch: AbsenceUpdate) -> Absence:
        """Apply the supplied fields onto the stored absence.

        The merged record is validated as a whole, advance notice included.
        """
        self._check_id(absence_id)
        changes = patch.changes()
        if not changes:
            raise AbsenceValidationError(
                ["Au moins un champ doit être fourni pour la mise à jour"]
            )

        existing = self.get_absence(absence_id)
        merged = AbsenceCandidate(
            **{**existing.model_dump(include=CANDIDATE_FIELDS), **changes}
        )
        self._validate(merged)

        cleaned = _clean(changes)
        if PERIOD_AND_PERSON_FIELDS & cleaned.keys():
            final = {**existing.model_dump(include=CANDIDATE_FIELDS), **cleaned}
            if self._conflicts.has_conflict(
                final["first_name"],
                final["last_name"],
                final["start_date"],
                final["end_date"],
                exclude_id=absence_id,
            ):
                raise AbsenceConflictError()

        updated = self._repository.update(absence_id, cleaned)
        if updated is None:
            raise AbsenceNotFoundError(absence_id)
        logger.bind(absence_id=absence_id, fields=sorted(cleaned)).info("Absence updated")
        return updated

    def list_absences(self, query: PageQuery) -> Page[Absence]:
        return self._repository.list_page(query)

    def delete_absence(self, absence_id: int) -> None:
        self._check_id(absence_id)
        if not self._allow_delete:
            raise DeletionDisabledError()
        if not self._repository.delete(absence_id):
            raise AbsenceNotFoundError(absence_id)
        logger.bind(absence_id=absence_id).info("Absence deleted")

    def find_by_date_range(
        self, start_date: str | date | None, end_date: str | date | None
    ) -> list[Absence]:
        start = parse_calendar_date(start_date)
        end = parse_calendar_date(end_date)
        if start is None or end is None:
            raise AbsenceValidationError(
                self._validator.check_dates(start_date, end_date, check_advance_notice=False)
            )
        if end <= start:
            raise AbsenceValidationError(
                ["La date de fin doit être postérieure à la date de début"]
            )
        return self._repository.find_by_date_range(start, end)

    def find_by_person(self, first_name: str | None, last_name: str | None) -> list[Absence]:
        if not (first_name or "").strip() or not (last_name or "").strip():
            raise AbsenceValidationError(["Le prénom et le nom sont requis"])
        return self._repository.find_by_person(first_name.strip(), last_name.strip())

    def active_absences(self, day: date | None = None) -> list[Absence]:
        return self._repository.find_active(day or self.today())

    def has_active_absence(
        self, first_name: str, last_name: str, day: date | None = None
    ) -> bool:
        return any(
            absence.belongs_to(first_name, last_name)
            for absence in self.active_absences(day)
        )

    def stats(self) -> AbsenceStats:
        absences = self._repository.list_all()
        now = self._validator.now()
        today = now.date()
        recent_days = self._validator.rules.recent_days

        total = len(absences)
        average = (
            sum(absence.duration_days for absence in absences) / total if total else 0
        )
        return AbsenceStats(
            total_absences=total,
            active_absences=sum(1 for absence in absences if absence.is_active_on(today)),
            recent_absences=sum(
                1 for absence in absences if absence.is_recent(now, days=recent_days)
            ),
            average_duration=round(average, 2),
        )
