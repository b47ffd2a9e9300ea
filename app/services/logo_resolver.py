"""
Risoluzione del logo di una squadra.

Ordine: file caricato -> data URI base64 -> URL diretto. Restituisce l'URL
finale oppure None ("nessun logo fornito", il valore esistente resta).
Un data URI non decodificabile non è un errore: viene ignorato.
"""

import base64
import binascii
import logging
import re
from pathlib import PurePath

from app.core.config import get_storage_url_prefix
from app.services.blob_store import BlobStore
from app.services.team_input import LogoUpload, TeamInput

logger = logging.getLogger(__name__)

LOGO_NAMESPACE = "logos"

MIME_EXTENSIONS: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


def allowed_url_prefixes() -> tuple[str, ...]:
    """URL assoluti http(s) o path sotto il prefisso pubblico dello storage."""
    return ("http://", "https://", get_storage_url_prefix().rstrip("/") + "/")


def extension_for_mime(mime: str | None) -> str:
    return MIME_EXTENSIONS.get((mime or "").lower(), "bin")


def _upload_extension(upload: LogoUpload) -> str:
    suffix = PurePath(upload.filename).suffix.lstrip(".").lower()
    if suffix and suffix.isalnum():
        return suffix
    return extension_for_mime(upload.content_type)


def decode_data_uri(value: str) -> tuple[str, bytes] | None:
    """(mime, bytes) se value è un data URI base64 valido, altrimenti None."""
    match = DATA_URI_RE.match(value)
    if not match:
        return None
    payload = re.sub(r"\s+", "", match.group("payload"))
    if not payload:
        return None
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("data URI logo non decodificabile (mime=%s), ignorato", match.group("mime"))
        return None
    return match.group("mime"), data


def resolve_logo(team_input: TeamInput, store: BlobStore) -> str | None:
    upload = team_input.logo_upload
    if upload is not None:
        key = store.generate_key(LOGO_NAMESPACE, _upload_extension(upload))
        return store.put(key, upload.data)

    value = team_input.logo_text
    if not value:
        return None

    if value.startswith("data:"):
        decoded = decode_data_uri(value)
        if decoded is None:
            return None
        mime, data = decoded
        key = store.generate_key(LOGO_NAMESPACE, extension_for_mime(mime))
        return store.put(key, data)

    if value.startswith(allowed_url_prefixes()):
        return value
    return None
