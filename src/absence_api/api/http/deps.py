"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.absence_api.api.http.app_data import ApplicationDependencies
from src.absence_api.core.services import AbsenceService, ConflictChecker
from src.absence_api.core.validation import AbsenceValidator
from src.absence_api.entities.service.absence import AbsenceRepository
from src.absence_api.runtime.context import get_config


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session for the duration of the request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_absence_repository(
    db: Session = Depends(get_db_session),
) -> AbsenceRepository:
    """Get the absence repository bound to the request session."""
    return AbsenceRepository(db)


def get_absence_validator() -> AbsenceValidator:
    """Get a validator configured with the current business rules."""
    return AbsenceValidator(get_config().absences.rules)


def get_absence_service(
    repository: AbsenceRepository = Depends(get_absence_repository),
    validator: AbsenceValidator = Depends(get_absence_validator),
) -> AbsenceService:
    """Get the absence service instance."""
    return AbsenceService(
        repository,
        validator,
        ConflictChecker(repository),
        allow_delete=get_config().absences.allow_delete,
    )
