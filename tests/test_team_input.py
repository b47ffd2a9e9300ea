from app.services.team_input import (
    EmptyBody,
    FormBody,
    JsonBody,
    LogoUpload,
    MultipartBody,
    normalize,
    pick,
    pick_upload,
)


def test_pick_follows_alias_order():
    fields = {"Nombre": "Third", "nombre": "Second", "name": "First"}
    assert pick(fields, "name") == "First"


def test_pick_skips_null_and_blank_values():
    fields = {"name": None, "nombre": "   ", "Name": " Lions "}
    assert pick(fields, "name") == "Lions"


def test_pick_returns_none_when_no_alias_found():
    assert pick({"team": "Lions"}, "name") is None


def test_pick_keeps_non_string_values_for_validation():
    assert pick({"name": 123}, "name") == 123


def test_normalize_spanish_json_body():
    body = JsonBody(fields={"nombre": "Leones", "ciudad": "Metro", "logoUrl": "https://cdn.example.com/l.png"})
    team_input = normalize(body)
    assert team_input.name == "Leones"
    assert team_input.city == "Metro"
    assert team_input.logo_text == "https://cdn.example.com/l.png"
    assert team_input.logo_upload is None


def test_normalize_empty_body_has_no_fields():
    team_input = normalize(EmptyBody())
    assert team_input.provided() == {}
    assert team_input.logo_text is None


def test_provided_only_returns_present_fields():
    team_input = normalize(FormBody(fields={"city": "Norte"}))
    assert team_input.provided() == {"city": "Norte"}


def test_pick_upload_uses_file_aliases_in_order():
    first = LogoUpload(filename="a.png", content_type="image/png", data=b"a")
    second = LogoUpload(filename="b.png", content_type="image/png", data=b"b")
    body = MultipartBody(fields={}, files={"image": second, "logoFile": first})
    assert pick_upload(body) is first


def test_pick_upload_ignores_non_multipart_bodies():
    assert pick_upload(JsonBody(fields={"logo": "data:image/png;base64,AAAA"})) is None


def test_non_string_logo_is_ignored():
    team_input = normalize(JsonBody(fields={"name": "Lions", "logo": {"url": "x"}}))
    assert team_input.logo_text is None
