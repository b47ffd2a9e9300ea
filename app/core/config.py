"""Application configuration. Load from environment."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def get_database_url() -> str:
    """Return DATABASE_URL from environment. Raises if missing."""
    url = os.environ.get("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is required")
    return url


def get_storage_dir() -> Path:
    """Directory radice del blob store locale (loghi caricati)."""
    return Path(os.environ.get("STORAGE_DIR", "storage"))


def get_storage_url_prefix() -> str:
    """Prefisso pubblico con cui vengono serviti i file del blob store."""
    return "/" + os.environ.get("STORAGE_URL_PREFIX", "/storage").strip("/")


def get_cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()
