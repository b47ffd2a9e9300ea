"""
Errori del dominio teams.
Ogni errore porta lo status HTTP e il messaggio da restituire al client;
i router li traducono in JSONResponse con chiave "message".
"""

from typing import Any


class TeamServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_content(self) -> dict[str, Any]:
        return {"message": self.message}


class TeamValidationError(TeamServiceError):
    """Campi mancanti o non validi. errors: campo -> lista di messaggi."""

    status_code = 422

    def __init__(self, errors: dict[str, list[str]], message: str = "The given data was invalid."):
        super().__init__(message)
        self.errors = errors

    def to_content(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class TeamNotFoundError(TeamServiceError):
    status_code = 404

    def __init__(self, team_id: int):
        super().__init__("Team not found")
        self.team_id = team_id


class TeamConflictError(TeamServiceError):
    """Violazione del vincolo unico (name, city)."""

    status_code = 409


class StoreFailure(TeamServiceError):
    """Errore imprevisto del database; il dettaglio viene esposto in "error"."""

    status_code = 500

    def __init__(self, message: str, error: str):
        super().__init__(message)
        self.error = error

    def to_content(self) -> dict[str, Any]:
        return {"message": self.message, "error": self.error}
