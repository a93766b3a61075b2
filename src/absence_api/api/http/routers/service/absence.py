"""Absence declaration API router."""

from datetime import date

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from src.absence_api.api.http.deps import get_absence_service, get_db_session
from src.absence_api.api.http.responses import (
    ErrorResponse,
    PaginatedResponse,
    PaginationInfo,
    SuccessResponse,
)
from src.absence_api.core.exceptions import AbsenceValidationError
from src.absence_api.core.pagination import normalize_pagination
from src.absence_api.core.services import AbsenceService
from src.absence_api.entities.service.absence import (
    Absence,
    AbsenceCreate,
    AbsenceRead,
    AbsenceStats,
    AbsenceUpdate,
)
from src.absence_api.runtime.context import get_config

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)


def _read(service: AbsenceService, absences: list[Absence]) -> list[AbsenceRead]:
    today = service.today()
    return [AbsenceRead.from_entity(absence, today) for absence in absences]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[AbsenceRead],
)
def create_absence(
    payload: AbsenceCreate,
    session: Session = Depends(get_db_session),
    service: AbsenceService = Depends(get_absence_service),
) -> SuccessResponse[AbsenceRead]:
    """Declare a new absence."""
    absence = service.create_absence(payload)
    session.commit()
    return SuccessResponse[AbsenceRead](
        message="Déclaration d'absence créée avec succès",
        data=AbsenceRead.from_entity(absence, service.today()),
    )


@router.get("", response_model=PaginatedResponse[AbsenceRead])
def list_absences(
    page: str | None = None,
    limit: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    service: AbsenceService = Depends(get_absence_service),
) -> PaginatedResponse[AbsenceRead]:
    """List absences, one page at a time.

    Out-of-range or unknown parameters fall back to their defaults rather
    than failing the request.
    """
    query = normalize_pagination(
        page, limit, sort_by, sort_order, config=get_config().absences.pagination
    )
    result = service.list_absences(query)
    return PaginatedResponse[AbsenceRead](
        data=_read(service, result.items),
        pagination=PaginationInfo.from_page(result),
    )


@router.get("/search", response_model=SuccessResponse[list[AbsenceRead]])
def search_absences(
    start_date: str | None = None,
    end_date: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    service: AbsenceService = Depends(get_absence_service),
) -> SuccessResponse[list[AbsenceRead]]:
    """Search by overlapping period or by declarant name."""
    if start_date is not None or end_date is not None:
        absences = service.find_by_date_range(start_date, end_date)
    elif first_name is not None or last_name is not None:
        absences = service.find_by_person(first_name, last_name)
    else:
        raise AbsenceValidationError(
            ["Indiquez start_date et end_date, ou first_name et last_name"],
            message="Critères de recherche manquants",
        )
    return SuccessResponse[list[AbsenceRead]](
        message="Données récupérées avec succès",
        data=_read(service, absences),
    )


@router.get("/active", response_model=SuccessResponse[list[AbsenceRead]])
def active_absences(
    on: date | None = None,
    service: AbsenceService = Depends(get_absence_service),
) -> SuccessResponse[list[AbsenceRead]]:
    """Absences covering the given day (today by default)."""
    return SuccessResponse[list[AbsenceRead]](
        message="Données récupérées avec succès",
        data=_read(service, service.active_absences(on)),
    )


@router.get("/stats", response_model=SuccessResponse[AbsenceStats])
def absence_stats(
    service: AbsenceService = Depends(get_absence_service),
) -> SuccessResponse[AbsenceStats]:
    """Aggregate figures over every declaration."""
    return SuccessResponse[AbsenceStats](data=service.stats())


@router.get("/{absence_id}", response_model=SuccessResponse[AbsenceRead])
def get_absence(
    absence_id: int,
    service: AbsenceService = Depends(get_absence_service),
) -> SuccessResponse[AbsenceRead]:
    """Get an absence by ID."""
    absence = service.get_absence(absence_id)
    return SuccessResponse[AbsenceRead](
        data=AbsenceRead.from_entity(absence, service.today())
    )


@router.put("/{absence_id}", response_model=SuccessResponse[AbsenceRead])
def update_absence(
    absence_id: int,
    payload: AbsenceUpdate,
    session: Session = Depends(get_db_session),
    service: AbsenceService = Depends(get_absence_service),
) -> SuccessResponse[AbsenceRead]:
    """Amend an absence; only the supplied fields change."""
    absence = service.update_absence(absence_id, payload)
    session.commit()
    return SuccessResponse[AbsenceRead](
        message="Déclaration d'absence mise à jour avec succès",
        data=AbsenceRead.from_entity(absence, service.today()),
    )


@router.delete(
    "/{absence_id}",
    response_model=SuccessResponse[None],
    responses={501: {"model": ErrorResponse}},
)
def delete_absence(
    absence_id: int,
    session: Session = Depends(get_db_session),
    service: AbsenceService = Depends(get_absence_service),
) -> SuccessResponse[None]:
    """Delete an absence, when deletion is enabled."""
    service.delete_absence(absence_id)
    session.commit()
    return SuccessResponse[None](
        message="Déclaration d'absence supprimée avec succès", data=None
    )
