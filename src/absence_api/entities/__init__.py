"""Entities organised by business concept.

Each entity package holds:
- entity.py: domain model with business logic
- table.py: database persistence model
- repository.py: data access layer
- schemas.py: request and response shapes
"""

from .service.absence import Absence, AbsenceRepository, AbsenceTable

__all__ = [
    "Absence",
    "AbsenceRepository",
    "AbsenceTable",
]
