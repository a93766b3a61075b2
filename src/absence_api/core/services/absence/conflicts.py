"""Detection of overlapping declarations for the same person."""

from datetime import date
from typing import Protocol

from loguru import logger

from src.absence_api.entities.service.absence import Absence


class PersonAbsenceReader(Protocol):
    """Read access the conflict checker needs from the record store."""

    def find_for_person(
        self, first_name: str, last_name: str, start_date: date, end_date: date
    ) -> list[Absence]: ...


class ConflictChecker:
    """Tells whether a person already declared an absence over a period.

    Names are compared case-insensitively; ranges are inclusive, so two
    absences touching on the same day conflict.
    """

    def __init__(self, reader: PersonAbsenceReader):
        self._reader = reader

    def has_conflict(
        self,
        first_name: str,
        last_name: str,
        start_date: date,
        end_date: date,
        exclude_id: int | None = None,
    ) -> bool:
        candidates = self._reader.find_for_person(
            first_name, last_name, start_date, end_date
        )
        for absence in candidates:
            if exclude_id is not None and absence.id == exclude_id:
                continue
            if not absence.belongs_to(first_name, last_name):
                continue
            if absence.overlaps_with(start_date, end_date):
                logger.bind(
                    conflicting_id=absence.id,
                    start_date=str(start_date),
                    end_date=str(end_date),
                ).info("Absence period conflicts with an existing declaration")
                return True
        return False
