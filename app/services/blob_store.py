"""
Blob store locale: salva byte sotto una chiave generata e restituisce l'URL pubblico.
I file sono serviti da StaticFiles montato sul prefisso di storage (vedi app.main).
"""

import logging
import uuid
from pathlib import Path

from app.core.config import get_storage_dir, get_storage_url_prefix

logger = logging.getLogger(__name__)


class BlobStore:
    def __init__(self, root_dir: Path | None = None, url_prefix: str | None = None):
        self._root = Path(root_dir) if root_dir is not None else get_storage_dir()
        self._prefix = (url_prefix or get_storage_url_prefix()).rstrip("/")

    @staticmethod
    def generate_key(namespace: str, extension: str) -> str:
        """Chiave univoca tipo 'logos/3f2a...c1.png'."""
        return f"{namespace.strip('/')}/{uuid.uuid4().hex}.{extension}"

    def put(self, key: str, data: bytes) -> str:
        """Scrive i byte sotto key e ritorna l'URL pubblico."""
        path = self._root / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("blob salvato key=%s bytes=%s", key, len(data))
        return self.url_for(key)

    def url_for(self, key: str) -> str:
        return f"{self._prefix}/{key}"

    def delete_url(self, url: str) -> None:
        """Rimuove il blob indicato da un URL pubblico di questo store; altri URL sono ignorati."""
        if not url.startswith(self._prefix + "/"):
            return
        key = url[len(self._prefix) + 1:]
        (self._root / key).unlink(missing_ok=True)
        logger.info("blob rimosso key=%s", key)


def get_blob_store() -> BlobStore:
    """Dependency FastAPI: legge la configurazione a ogni richiesta."""
    return BlobStore()
