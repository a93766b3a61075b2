"""Exceptions raised by the absence services.

The HTTP layer turns each of these into an error envelope; see the exception
handlers registered in ``api/http/app.py``.
"""


class AbsenceError(Exception):
    """Base class for expected, user-facing absence failures."""

    status_code = 400

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class AbsenceValidationError(AbsenceError):
    """One or more business rules rejected the declaration."""

    def __init__(self, errors: list[str], message: str = "Validation échouée"):
        super().__init__(message, list(errors))


class AbsenceConflictError(AbsenceError):
    """The declarant already has an absence overlapping the requested period."""

    status_code = 409

    def __init__(
        self,
        message: str = "Une absence existe déjà pour cette personne sur cette période",
    ):
        super().__init__(message)


class AbsenceNotFoundError(AbsenceError):
    status_code = 404

    def __init__(self, absence_id: int):
        super().__init__(f"Aucune absence trouvée avec l'ID {absence_id}")
        self.absence_id = absence_id


class InvalidIdentifierError(AbsenceError):
    def __init__(self, message: str = "L'ID doit être un nombre positif valide"):
        super().__init__(message)


class DeletionDisabledError(AbsenceError):
    status_code = 501

    def __init__(
        self,
        message: str = "La suppression d'absences n'est pas encore implémentée",
    ):
        super().__init__(message)
