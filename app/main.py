"""Teams API: gestione squadre (nome, città, logo)."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import get_cors_origins, get_log_level, get_storage_dir, get_storage_url_prefix
from app.core.database import init_db
from app.routers import health_router, teams_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Teams API",
    description="CRUD squadre con ricerca, paginazione e upload logo.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(teams_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Parametri non validi (es. page non numerico): stesso formato degli altri errori."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = str(err["loc"][-1]) if err["loc"] else "request"
        errors.setdefault(field, []).append(err["msg"])
    return JSONResponse(status_code=422, content={"message": "The given data was invalid.", "errors": errors})


storage_dir = get_storage_dir()
storage_dir.mkdir(parents=True, exist_ok=True)
app.mount(get_storage_url_prefix(), StaticFiles(directory=str(storage_dir)), name="storage")


@app.on_event("startup")
def on_startup():
    """Configura il logging e crea le tabelle all'avvio."""
    logging.basicConfig(level=get_log_level(), format="%(levelname)s [%(name)s] %(message)s")
    init_db()
    logger.info("Storage loghi in %s", storage_dir.resolve())
