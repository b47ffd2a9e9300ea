"""
Accesso alla tabella teams: filtri, ordinamento, paginazione e CRUD.
Unico punto che parla con SQLAlchemy; traduce gli errori del DB negli
errori di dominio (Conflict per il vincolo unico, StoreFailure per il resto).
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from sqlalchemy import or_, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.core.errors import StoreFailure, TeamConflictError
from app.models.team import Team

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"  # SQLSTATE PostgreSQL
MAX_ID = 2**63 - 1  # BIGINT


@dataclass(frozen=True)
class TeamFilters:
    search: str | None = None
    city: str | None = None


@dataclass(frozen=True, eq=False)
class TeamOrder:
    column: Any
    descending: bool = False


DEFAULT_ORDER = TeamOrder(Team.id, descending=True)


def _contains_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    return "unique" in str(orig).lower()


class TeamStore:
    def __init__(self, db: Session):
        self._db = db

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OverflowError) as e:
            # OverflowError: parametro intero non rappresentabile dal driver
            self._db.rollback()
            logger.exception("Errore DB durante %s: %s", action, e)
            raise StoreFailure("Database error", str(e)[:300]) from e

    def _filtered(self, filters: TeamFilters) -> Query:
        q = self._db.query(Team)
        if filters.search:
            pattern = _contains_pattern(filters.search)
            q = q.filter(or_(Team.name.ilike(pattern, escape="\\"), Team.city.ilike(pattern, escape="\\")))
        if filters.city:
            q = q.filter(Team.city.ilike(_contains_pattern(filters.city), escape="\\"))
        return q

    def count(self, filters: TeamFilters) -> int:
        with self._store_errors("count teams"):
            return self._filtered(filters).count()

    def find(
        self,
        filters: TeamFilters,
        order: TeamOrder = DEFAULT_ORDER,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Team]:
        q = self._filtered(filters)
        q = q.order_by(order.column.desc() if order.descending else order.column.asc())
        if order.column is not Team.id:
            q = q.order_by(Team.id.desc())
        if offset:
            q = q.offset(offset)
        if limit is not None:
            q = q.limit(limit)
        with self._store_errors("list teams"):
            return q.all()

    def get(self, team_id: int) -> Team | None:
        if not 0 < team_id <= MAX_ID:
            return None
        with self._store_errors("get team"):
            return self._db.get(Team, team_id)

    def insert(self, name: str, city: str, logo_url: str | None) -> Team:
        team = Team(name=name, city=city, logo_url=logo_url)
        self._db.add(team)
        self._commit(
            team,
            conflict_message=f"Team already exists for name '{name}' and city '{city}'.",
        )
        return team

    def update(self, team: Team, values: dict[str, Any]) -> Team:
        for key, value in values.items():
            setattr(team, key, value)
        self._commit(
            team,
            conflict_message=(
                f"Another team with name '{team.name}' and city '{team.city}' already exists."
            ),
        )
        return team

    def delete(self, team: Team) -> None:
        with self._store_errors("delete team"):
            self._db.delete(team)
            self._db.commit()

    def ping(self) -> None:
        self._db.execute(text("SELECT 1"))

    def _commit(self, team: Team, conflict_message: str) -> None:
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            if is_unique_violation(e):
                logger.info("Conflitto vincolo unico: %s", conflict_message)
                raise TeamConflictError(conflict_message) from e
            logger.exception("Errore integrità DB: %s", e)
            raise StoreFailure("Database error", str(e.orig)[:300]) from e
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.exception("Errore DB durante commit: %s", e)
            raise StoreFailure("Database error", str(e)[:300]) from e
        with self._store_errors("save team"):
            self._db.refresh(team)
