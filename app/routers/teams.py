"""
API Teams: listing (completo e paginato), dettaglio, creazione, aggiornamento
parziale ed eliminazione. Il body di create/update può arrivare come multipart,
form urlencoded o JSON; la normalizzazione è in app.services.team_input.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette import status
from starlette.concurrency import run_in_threadpool

from app.core.database import get_db
from app.core.errors import StoreFailure, TeamServiceError
from app.schemas.teams import TeamOut, TeamPageResponse
from app.services.blob_store import BlobStore, get_blob_store
from app.services.team_input import normalize, read_body
from app.services.team_service import TeamService, resolve_order

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["teams"])

# limiti superiori: offset = (page - 1) * pageSize deve restare un intero SQL valido
MAX_PAGE = 1_000_000
MAX_PAGE_SIZE = 1000


def get_team_service(
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
) -> TeamService:
    return TeamService(db, blob_store)


def _error_response(e: TeamServiceError) -> JSONResponse:
    if isinstance(e, StoreFailure):
        logger.error("Errore store: %s", e.error)
    else:
        logger.warning("Richiesta teams rifiutata (%s): %s", e.status_code, e.message)
    return JSONResponse(status_code=e.status_code, content=e.to_content())


@router.get("/teams", response_model=list[TeamOut])
def list_teams(
    search: str | None = None,
    q: str | None = None,
    city: str | None = None,
    ciudad: str | None = None,
    service: TeamService = Depends(get_team_service),
):
    """Tutte le squadre filtrate, ordinate per id DESC, senza paginazione."""
    try:
        return service.list_teams(search=search or q, city=city or ciudad)
    except TeamServiceError as e:
        return _error_response(e)


@router.get("/teams-paged", response_model=TeamPageResponse)
def list_teams_paged(
    page: int = Query(1, le=MAX_PAGE),
    page_size: int = Query(10, alias="pageSize", le=MAX_PAGE_SIZE),
    search: str | None = None,
    q: str | None = None,
    city: str | None = None,
    ciudad: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
    sort: str | None = Query(None, description="Forma compatta: campo,direzione"),
    service: TeamService = Depends(get_team_service),
):
    """
    Listing paginato. search/q cerca in name o city, city/ciudad filtra solo city.
    sortBy accetta alias (nombre, ciudad, ...); senza sortBy valido ordina per id DESC.
    totalItems è calcolato prima della paginazione.
    """
    try:
        return service.list_teams_paged(
            page=page,
            page_size=page_size,
            search=search or q,
            city=city or ciudad,
            order=resolve_order(sort_by, sort_dir, sort),
        )
    except TeamServiceError as e:
        return _error_response(e)


@router.get("/teams/{team_id}", response_model=TeamOut)
def show_team(team_id: int, service: TeamService = Depends(get_team_service)):
    try:
        return service.get_team(team_id)
    except TeamServiceError as e:
        return _error_response(e)


@router.post("/teams", response_model=TeamOut, status_code=status.HTTP_201_CREATED)
async def create_team(request: Request, service: TeamService = Depends(get_team_service)):
    """
    Crea una squadra. 422 se name manca o supera 120 caratteri,
    409 se esiste già la coppia (name, city).
    """
    team_input = normalize(await read_body(request))
    try:
        return await run_in_threadpool(service.create_team, team_input)
    except TeamServiceError as e:
        return _error_response(e)


@router.api_route("/teams/{team_id}", methods=["PUT", "PATCH"], response_model=TeamOut)
async def update_team(team_id: int, request: Request, service: TeamService = Depends(get_team_service)):
    """Update parziale: i campi assenti restano invariati, il logo solo se risolto."""
    team_input = normalize(await read_body(request))
    try:
        return await run_in_threadpool(service.update_team, team_id, team_input)
    except TeamServiceError as e:
        return _error_response(e)


@router.delete("/teams/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_team(team_id: int, service: TeamService = Depends(get_team_service)):
    try:
        service.delete_team(team_id)
    except TeamServiceError as e:
        return _error_response(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
