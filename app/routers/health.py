"""Health check router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.teams import HealthResponse
from app.services.team_service import TeamService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
@router.get("/api/health", response_model=HealthResponse)
def health(db: Session = Depends(get_db)):
    """Health check for load balancers and monitoring. Il DB non raggiungibile non fa fallire la richiesta."""
    return TeamService(db).check_health()
