import base64

import pytest

from app.services.blob_store import BlobStore
from app.services.logo_resolver import decode_data_uri, extension_for_mime, resolve_logo
from app.services.team_input import LogoUpload, TeamInput

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture
def store(tmp_path):
    return BlobStore(root_dir=tmp_path, url_prefix="/storage")


def _data_uri(mime: str, data: bytes) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode()}"


@pytest.mark.parametrize(
    "mime, ext",
    [("image/jpeg", "jpg"), ("image/png", "png"), ("image/webp", "webp"), ("image/gif", "gif"), ("image/svg+xml", "bin")],
)
def test_extension_for_mime(mime, ext):
    assert extension_for_mime(mime) == ext


def test_data_uri_is_decoded_and_stored(store, tmp_path):
    url = resolve_logo(TeamInput(logo_text=_data_uri("image/png", PNG_BYTES)), store)
    assert url.startswith("/storage/logos/")
    assert url.endswith(".png")
    stored = tmp_path / url.removeprefix("/storage/")
    assert stored.read_bytes() == PNG_BYTES


def test_unknown_mime_is_stored_as_bin(store):
    url = resolve_logo(TeamInput(logo_text=_data_uri("application/pdf", b"%PDF")), store)
    assert url.endswith(".bin")


def test_invalid_base64_returns_none(store, tmp_path):
    assert resolve_logo(TeamInput(logo_text="data:image/png;base64,@@not base64@@"), store) is None
    assert not (tmp_path / "logos").exists()


def test_empty_payload_is_a_decode_failure():
    assert decode_data_uri("data:image/png;base64,") is None


@pytest.mark.parametrize(
    "value",
    ["http://example.com/logo.png", "https://cdn.example.com/a.webp", "/storage/logos/abc.png"],
)
def test_allowed_urls_pass_through(store, value):
    assert resolve_logo(TeamInput(logo_text=value), store) == value


@pytest.mark.parametrize("value", ["C:/logos/a.png", "/var/www/logo.png", "ftp://host/a.png"])
def test_other_strings_are_ignored(store, value):
    assert resolve_logo(TeamInput(logo_text=value), store) is None


def test_no_logo_returns_none(store):
    assert resolve_logo(TeamInput(name="Lions"), store) is None


def test_upload_wins_over_text_logo(store, tmp_path):
    upload = LogoUpload(filename="crest.JPEG", content_type="image/jpeg", data=b"jpeg-bytes")
    url = resolve_logo(TeamInput(logo_text="https://cdn.example.com/other.png", logo_upload=upload), store)
    assert url.startswith("/storage/logos/")
    assert url.endswith(".jpeg")
    assert (tmp_path / url.removeprefix("/storage/")).read_bytes() == b"jpeg-bytes"


def test_upload_without_suffix_uses_content_type(store):
    upload = LogoUpload(filename="crest", content_type="image/webp", data=b"webp")
    assert resolve_logo(TeamInput(logo_upload=upload), store).endswith(".webp")


def test_generated_keys_are_unique():
    assert BlobStore.generate_key("logos", "png") != BlobStore.generate_key("logos", "png")


def test_pass_through_follows_configured_storage_prefix(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_URL_PREFIX", "/media")
    store = BlobStore(root_dir=tmp_path)
    assert resolve_logo(TeamInput(logo_text="/media/logos/a.png"), store) == "/media/logos/a.png"
    url = resolve_logo(TeamInput(logo_text=_data_uri("image/png", PNG_BYTES)), store)
    assert url.startswith("/media/logos/")


def test_delete_url_removes_only_own_blobs(store, tmp_path):
    url = store.put("logos/a.png", b"a")
    store.delete_url("https://cdn.example.com/logos/a.png")
    assert (tmp_path / "logos" / "a.png").exists()
    store.delete_url(url)
    assert not (tmp_path / "logos" / "a.png").exists()
