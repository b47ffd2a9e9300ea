from starlette import status

from app.services.team_store import TeamStore


def test_health_ok(client):
    response = client.get("/api/health")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "OK"
    assert data["db"] == "ok"
    assert data["service"] == "teams-api"
    assert "time" in data


def test_health_without_prefix(client):
    assert client.get("/health").status_code == status.HTTP_200_OK


def test_health_reports_db_failure(client, monkeypatch):
    def broken_ping(self):
        raise RuntimeError("could not connect to server")

    monkeypatch.setattr(TeamStore, "ping", broken_ping)
    response = client.get("/api/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "OK"
    assert response.json()["db"] == "could not connect to server"
