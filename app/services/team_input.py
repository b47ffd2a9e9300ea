"""
Normalizzazione dell'input delle richieste teams.

Il body viene letto una sola volta e classificato in una "forma" (multipart,
form urlencoded, JSON, vuoto); poi i campi canonici (name, city, logo) vengono
estratti consultando una tabella di alias ordinati (inglese, spagnolo, varianti
di maiuscole). Il primo alias con valore non nullo e non vuoto vince.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request
from starlette.datastructures import UploadFile

logger = logging.getLogger(__name__)

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name", "nombre", "Name", "Nombre"),
    "city": ("city", "ciudad", "City", "Ciudad"),
    "logo": ("logo", "Logo", "logo_url", "LogoUrl", "logoUrl"),
}

FILE_ALIASES: tuple[str, ...] = (
    "logo", "Logo", "file", "File", "logoFile", "LogoFile",
    "imagen", "Imagen", "image", "Image",
)


@dataclass(frozen=True)
class LogoUpload:
    filename: str
    content_type: str | None
    data: bytes


@dataclass
class MultipartBody:
    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, LogoUpload] = field(default_factory=dict)


@dataclass
class FormBody:
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class JsonBody:
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class EmptyBody:
    @property
    def fields(self) -> dict[str, Any]:
        return {}


BodyShape = MultipartBody | FormBody | JsonBody | EmptyBody


@dataclass
class TeamInput:
    """Valori canonici estratti dal body; None = campo non fornito."""
    name: Any = None
    city: Any = None
    logo_text: str | None = None
    logo_upload: LogoUpload | None = None

    def provided(self) -> dict[str, Any]:
        """Solo i campi effettivamente presenti (per update parziale)."""
        return {k: v for k, v in (("name", self.name), ("city", self.city)) if v is not None}


def _parse_json_object(raw: bytes) -> dict[str, Any] | None:
    if not raw or not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


async def read_body(request: Request) -> BodyShape:
    """
    Legge il body una volta e ne determina la forma.
    Content type diversi da multipart/urlencoded vengono provati come JSON,
    anche se il client non ha dichiarato application/json.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    raw = await request.body()

    if content_type == "multipart/form-data":
        body = MultipartBody()
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                data = await value.read()
                await value.close()
                if not value.filename and not data:
                    continue
                body.files.setdefault(
                    key, LogoUpload(filename=value.filename or "", content_type=value.content_type, data=data)
                )
            else:
                body.fields.setdefault(key, value)
        return body

    if content_type == "application/x-www-form-urlencoded":
        # JSON inviato con content type form: il parser form non produrrebbe campi utili
        parsed = _parse_json_object(raw)
        if parsed is not None:
            logger.debug("body urlencoded interpretato come JSON")
            return JsonBody(fields=parsed)
        form = await request.form()
        fields: dict[str, Any] = {}
        for key, value in form.multi_items():
            fields.setdefault(key, value)
        return FormBody(fields=fields) if fields else EmptyBody()

    parsed = _parse_json_object(raw)
    if parsed is not None:
        return JsonBody(fields=parsed)
    return EmptyBody()


def pick(fields: dict[str, Any], canonical: str) -> Any:
    """Primo valore non nullo e non vuoto tra gli alias del campo canonico."""
    for alias in FIELD_ALIASES[canonical]:
        value = fields.get(alias)
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        return value
    return None


def pick_upload(body: BodyShape) -> LogoUpload | None:
    if not isinstance(body, MultipartBody):
        return None
    for alias in FILE_ALIASES:
        upload = body.files.get(alias)
        if upload is not None:
            return upload
    return None


def normalize(body: BodyShape) -> TeamInput:
    fields = body.fields
    logo = pick(fields, "logo")
    return TeamInput(
        name=pick(fields, "name"),
        city=pick(fields, "city"),
        logo_text=logo if isinstance(logo, str) else None,
        logo_upload=pick_upload(body),
    )
