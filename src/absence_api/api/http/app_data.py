from dataclasses import dataclass

from src.absence_api.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
