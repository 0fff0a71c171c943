import io

import pytest
from fastapi.testclient import TestClient
from fpdf import FPDF
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobseeker import dependencies
from jobseeker.config import settings
from jobseeker.database import init_db
from jobseeker.main import app
from jobseeker.services.platform import Platform

SIGNUP = {
    "email": "nimal@example.com",
    "password": "secret1",
    "confirm_password": "secret1",
    "name": "Nimal Perera",
    "phone": "0771234567",
}


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "JobSeekerData"
    data_path.mkdir()
    (data_path / "storage").mkdir()
    return data_path


@pytest.fixture
def test_db(tmp_data):
    db_path = tmp_data / "db.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    init_db(db_path)
    yield TestSession
    engine.dispose()


@pytest.fixture
def platform(tmp_data, test_db, monkeypatch):
    """A fresh platform wired to the temporary database, served by the app."""
    p = Platform(test_db, storage_dir=tmp_data / "storage")
    monkeypatch.setattr(dependencies, "_platform", p)
    return p


@pytest.fixture
def client(tmp_data, platform):
    original_data_path = settings.data_path
    settings.data_path = tmp_data
    with TestClient(app) as c:
        yield c
    settings.data_path = original_data_path


def authorize(client, session: dict) -> dict:
    client.headers["Authorization"] = f"Bearer {session['token']}"
    return session


def sign_up(client, payload: dict = SIGNUP) -> dict:
    r = client.post("/api/v1/session/signup", json=payload)
    assert r.status_code == 201
    return authorize(client, r.json())


def log_in(client, email: str = SIGNUP["email"], password: str = SIGNUP["password"]) -> dict:
    r = client.post("/api/v1/session/login", json={"email": email, "password": password})
    assert r.status_code == 200
    return authorize(client, r.json())


@pytest.fixture
def signed_in(client):
    return sign_up(client)


@pytest.fixture
def seeded(signed_in, client):
    r = client.post("/api/v1/jobs/seed")
    assert r.status_code == 200
    return r.json()


def make_pdf(text: str = "Curriculum Vitae") -> bytes:
    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", size=12)
    pdf.cell(0, 10, text)
    return bytes(pdf.output())


@pytest.fixture
def resume_pdf():
    return io.BytesIO(make_pdf())
