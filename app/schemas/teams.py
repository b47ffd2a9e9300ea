"""Pydantic schemas per API Teams."""

from datetime import datetime

from pydantic import BaseModel, Field


# --- Input (validazione dopo la normalizzazione degli alias) ---


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    city: str | None = Field(None, max_length=120)


class TeamUpdate(BaseModel):
    """Update parziale: solo i campi presenti vengono validati e applicati."""
    name: str | None = Field(None, min_length=1, max_length=120)
    city: str | None = Field(None, max_length=120)


# --- Output ---


class TeamOut(BaseModel):
    """
    DTO squadra. Espone gli stessi valori con alias inglesi, spagnoli
    e legacy (logo, logo_url) per i client esistenti.
    """
    id: int
    name: str
    nombre: str
    city: str | None = None
    ciudad: str | None = None
    logoUrl: str | None = None
    logo_url: str | None = None
    logo: str | None = None
    createdAt: datetime | None = None
    updatedAt: datetime | None = None


class TeamPageResponse(BaseModel):
    items: list[TeamOut]
    totalItems: int
    page: int
    pageSize: int


class HealthResponse(BaseModel):
    service: str
    status: str
    db: str
    time: datetime
