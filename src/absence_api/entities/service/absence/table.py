"""Absence database table model."""

from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from src.absence_api.entities._base import EntityTable


class AbsenceTable(EntityTable, table=True):
    """Database persistence model for absence declarations.

    This represents how the Absence entity is stored in the database.
    It's separate from the domain entity to keep validation rules out of
    the persistence layer.
    """

    __tablename__ = "absences"
    __table_args__ = (
        sa.Index("ix_absences_period", "start_date", "end_date"),
        sa.Index("ix_absences_person", "first_name", "last_name"),
    )

    start_date: date
    end_date: date
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    phone: str = Field(max_length=20)
    email: str | None = Field(default=None, max_length=100)
    address: str = Field(sa_type=sa.Text)
