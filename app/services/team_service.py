"""
Servizio teams: listing filtrato/paginato, CRUD e health check.
Ogni operazione rilegge o scrive tramite TeamStore; nessuna cache tra richieste.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from app.core.errors import TeamNotFoundError, TeamServiceError, TeamValidationError
from app.models.team import Team
from app.schemas.teams import HealthResponse, TeamCreate, TeamOut, TeamPageResponse, TeamUpdate
from app.services.blob_store import BlobStore
from app.services.logo_resolver import resolve_logo
from app.services.team_input import TeamInput
from app.services.team_mapper import to_dto
from app.services.team_store import DEFAULT_ORDER, TeamFilters, TeamOrder, TeamStore

logger = logging.getLogger(__name__)

SERVICE_NAME = "teams-api"

# alias accettati per sortBy -> colonna
SORT_ALIASES: dict[str, Any] = {
    "id": Team.id,
    "name": Team.name,
    "nombre": Team.name,
    "city": Team.city,
    "ciudad": Team.city,
    "createdAt": Team.created_at,
    "created_at": Team.created_at,
    "updatedAt": Team.updated_at,
    "updated_at": Team.updated_at,
}


def resolve_order(sort_by: str | None, sort_dir: str | None, sort: str | None = None) -> TeamOrder:
    """
    sortBy/sortDir, oppure la forma compatta sort=campo,direzione.
    Campo non riconosciuto o assente -> id DESC.
    """
    if not sort_by and sort:
        sort_by, _, dir_part = sort.partition(",")
        sort_dir = sort_dir or dir_part
    column = SORT_ALIASES.get((sort_by or "").strip())
    if column is None:
        return DEFAULT_ORDER
    return TeamOrder(column, descending=(sort_dir or "").strip().lower() == "desc")


def _validate(model: type[BaseModel], data: dict[str, Any]) -> dict[str, Any]:
    """Valida con Pydantic; ritorna solo i campi forniti."""
    try:
        return model.model_validate(data).model_dump(exclude_unset=True)
    except ValidationError as e:
        errors: dict[str, list[str]] = {}
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"]) or "body"
            errors.setdefault(field, []).append(err["msg"])
        raise TeamValidationError(errors) from e


class TeamService:
    def __init__(self, db: Session, blob_store: BlobStore | None = None):
        self._store = TeamStore(db)
        self._blob_store = blob_store or BlobStore()

    def list_teams_paged(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str | None = None,
        city: str | None = None,
        order: TeamOrder = DEFAULT_ORDER,
    ) -> TeamPageResponse:
        page = max(page, 1)
        page_size = max(page_size, 1)
        filters = TeamFilters(search=(search or "").strip() or None, city=(city or "").strip() or None)
        total = self._store.count(filters)
        teams = self._store.find(filters, order=order, offset=(page - 1) * page_size, limit=page_size)
        return TeamPageResponse(
            items=[to_dto(t) for t in teams],
            totalItems=total,
            page=page,
            pageSize=page_size,
        )

    def list_teams(self, search: str | None = None, city: str | None = None) -> list[TeamOut]:
        filters = TeamFilters(search=(search or "").strip() or None, city=(city or "").strip() or None)
        return [to_dto(t) for t in self._store.find(filters)]

    def _get_or_404(self, team_id: int) -> Team:
        team = self._store.get(team_id)
        if team is None:
            raise TeamNotFoundError(team_id)
        return team

    def get_team(self, team_id: int) -> TeamOut:
        return to_dto(self._get_or_404(team_id))

    def _discard_new_logo(self, team_input: TeamInput, logo_url: str | None) -> None:
        """Rimuove il blob appena scritto se la scrittura del record fallisce."""
        # un URL passato così com'è non è stato creato da questa richiesta
        if logo_url is not None and logo_url != team_input.logo_text:
            self._blob_store.delete_url(logo_url)

    def create_team(self, team_input: TeamInput) -> TeamOut:
        data = _validate(TeamCreate, team_input.provided())
        logo_url = resolve_logo(team_input, self._blob_store)
        try:
            team = self._store.insert(name=data["name"], city=data.get("city") or "", logo_url=logo_url)
        except TeamServiceError:
            self._discard_new_logo(team_input, logo_url)
            raise
        logger.info("Team creato id=%s name=%s", team.id, team.name)
        return to_dto(team)

    def update_team(self, team_id: int, team_input: TeamInput) -> TeamOut:
        team = self._get_or_404(team_id)
        values = _validate(TeamUpdate, team_input.provided())
        logo_url = resolve_logo(team_input, self._blob_store)
        if logo_url is not None:
            values["logo_url"] = logo_url
        if values:
            try:
                team = self._store.update(team, values)
            except TeamServiceError:
                self._discard_new_logo(team_input, logo_url)
                raise
            logger.info("Team aggiornato id=%s campi=%s", team.id, sorted(values))
        return to_dto(team)

    def delete_team(self, team_id: int) -> None:
        team = self._get_or_404(team_id)
        self._store.delete(team)
        logger.info("Team eliminato id=%s", team_id)

    def check_health(self) -> HealthResponse:
        """Prova minima di connessione al DB; l'errore finisce nel campo db."""
        try:
            self._store.ping()
            db_status = "ok"
        except Exception as e:
            logger.warning("health check DB fallito: %s", e)
            db_status = str(e)
        return HealthResponse(
            service=SERVICE_NAME,
            status="OK",
            db=db_status,
            time=datetime.now(timezone.utc),
        )
