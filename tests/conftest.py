import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="teams-api-test-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'teams.db')}"
os.environ["STORAGE_DIR"] = os.path.join(_TMP_DIR, "storage")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.database import SessionLocal, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Team  # noqa: E402

init_db()


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def clean_teams():
    yield
    session = SessionLocal()
    try:
        session.query(Team).delete()
        session.commit()
    finally:
        session.close()


@pytest.fixture
def storage_dir():
    return os.environ["STORAGE_DIR"]
