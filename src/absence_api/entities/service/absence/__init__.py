"""Entity package: Absence."""

from .entity import Absence, ranges_overlap
from .repository import AbsenceRepository
from .schemas import (
    AbsenceCandidate,
    AbsenceCreate,
    AbsenceRead,
    AbsenceStats,
    AbsenceUpdate,
)
from .table import AbsenceTable

__all__ = [
    "Absence",
    "AbsenceCandidate",
    "AbsenceCreate",
    "AbsenceRead",
    "AbsenceRepository",
    "AbsenceStats",
    "AbsenceTable",
    "AbsenceUpdate",
    "ranges_overlap",
]
