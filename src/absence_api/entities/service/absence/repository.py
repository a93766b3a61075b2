"""Absence repository for data access operations."""

from datetime import date

from sqlalchemy import func
from sqlmodel import Session, col, select

from src.absence_api.core.pagination import Page, PageQuery
from src.absence_api.entities._base import utcnow
from src.absence_api.entities.service.absence.entity import Absence
from src.absence_api.entities.service.absence.table import AbsenceTable


class AbsenceRepository:
    """Data-access layer for absence declarations."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: AbsenceTable) -> Absence:
        return Absence.model_validate(row, from_attributes=True)

    def get(self, absence_id: int) -> Absence | None:
        row = self._session.get(AbsenceTable, absence_id)
        if row is None:
            return None
        return self._to_entity(row)

    def exists(self, absence_id: int) -> bool:
        return self._session.get(AbsenceTable, absence_id) is not None

    def create(self, values: dict) -> Absence:
        """Persist a new absence from already validated field values."""
        now = utcnow()
        row = AbsenceTable(**values, created_at=now, updated_at=now)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def update(self, absence_id: int, changes: dict) -> Absence | None:
        row = self._session.get(AbsenceTable, absence_id)
        if row is None:
            return None

        for field, value in changes.items():
            setattr(row, field, value)
        row.updated_at = utcnow()

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, absence_id: int) -> bool:
        row = self._session.get(AbsenceTable, absence_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def list_page(self, query: PageQuery) -> Page[Absence]:
        total = self._session.exec(
            select(func.count()).select_from(AbsenceTable)
        ).one()

        sort_column = col(getattr(AbsenceTable, query.sort_by))
        ordering = sort_column.asc() if query.sort_order == "asc" else sort_column.desc()
        statement = (
            select(AbsenceTable)
            .order_by(ordering, col(AbsenceTable.id).asc())
            .offset(query.offset)
            .limit(query.limit)
        )
        rows = self._session.exec(statement).all()
        return Page[Absence](
            items=[self._to_entity(row) for row in rows],
            query=query,
            total_items=total,
        )

    def list_all(self) -> list[Absence]:
        rows = self._session.exec(select(AbsenceTable)).all()
        return [self._to_entity(row) for row in rows]

    def find_for_person(
        self, first_name: str, last_name: str, start_date: date, end_date: date
    ) -> list[Absence]:
        """Absences of the named person (case-insensitive) overlapping a period.

        SQL narrows the period; names are compared in Python because SQLite's
        ``lower()`` leaves accented capitals untouched.
        """
        statement = select(AbsenceTable).where(
            col(AbsenceTable.start_date) <= end_date,
            col(AbsenceTable.end_date) >= start_date,
        )
        absences = (self._to_entity(row) for row in self._session.exec(statement))
        return [absence for absence in absences if absence.belongs_to(first_name, last_name)]

    def find_by_date_range(self, start_date: date, end_date: date) -> list[Absence]:
        """Absences overlapping a period, earliest first."""
        statement = (
            select(AbsenceTable)
            .where(
                col(AbsenceTable.start_date) <= end_date,
                col(AbsenceTable.end_date) >= start_date,
            )
            .order_by(col(AbsenceTable.start_date).asc())
        )
        rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]

    def find_by_person(self, first_name: str, last_name: str) -> list[Absence]:
        """Absences whose names contain the given fragments, newest first."""
        statement = select(AbsenceTable).order_by(col(AbsenceTable.created_at).desc())
        absences = (self._to_entity(row) for row in self._session.exec(statement))
        return [absence for absence in absences if absence.name_contains(first_name, last_name)]

    def find_active(self, day: date) -> list[Absence]:
        """Absences covering ``day``, earliest start first."""
        statement = (
            select(AbsenceTable)
            .where(
                col(AbsenceTable.start_date) <= day,
                col(AbsenceTable.end_date) >= day,
            )
            .order_by(col(AbsenceTable.start_date).asc())
        )
        rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]
