"""Mapping Team ORM -> DTO di risposta, con sanificazione dell'URL del logo."""

from app.models.team import Team
from app.schemas.teams import TeamOut
from app.services.logo_resolver import allowed_url_prefixes


def sanitize_logo_url(value: str | None) -> str | None:
    """Solo URL http(s) o path sotto il prefisso di storage; qualsiasi altro valore non viene esposto."""
    if value and value.startswith(allowed_url_prefixes()):
        return value
    return None


def to_dto(team: Team) -> TeamOut:
    logo = sanitize_logo_url(team.logo_url)
    city = team.city or None
    return TeamOut(
        id=team.id,
        name=team.name,
        nombre=team.name,
        city=city,
        ciudad=city,
        logoUrl=logo,
        logo_url=logo,
        logo=logo,
        createdAt=team.created_at,
        updatedAt=team.updated_at,
    )
