"""Core services exports."""

# Absence Services
from .absence.absence_service import AbsenceService
from .absence.conflicts import ConflictChecker

# Database Service
from .database.db_session import DbSessionService

__all__ = [
    # Absence Services
    "AbsenceService",
    "ConflictChecker",
    # Database Service
    "DbSessionService",
]
