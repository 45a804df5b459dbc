# tests/conftest.py
import os

# keep the app's own engine off the on-disk database file
os.environ["DATABASE_URL"] = "sqlite://"

import tempfile
from datetime import datetime, timedelta, timezone
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from intake import settings
from intake.main import app
from intake.db import Base, get_db
from intake.models import Enquiry  # noqa: F401  (registers the table)


# --- Temporary SQLite DB file for the whole test session ---
@pytest.fixture(scope="session")
def tmp_db_url():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    url = f"sqlite:///{path}"
    yield url
    try:
        os.remove(path)
    except OSError:
        pass


@pytest.fixture(scope="session")
def engine(tmp_db_url):
    eng = create_engine(tmp_db_url, connect_args={"check_same_thread": False}, future=True)
    Base.metadata.create_all(bind=eng)
    return eng


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    db = TestingSession()
    _clear_all(db)
    try:
        yield db
    finally:
        db.rollback()
        db.close()


# --- Override FastAPI's DB dependency to use our test session ---
@pytest.fixture(autouse=True)
def override_get_db(db_session, monkeypatch):
    monkeypatch.setattr(settings, "STORE_BACKEND", "sql")
    def _get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def memory_client(monkeypatch):
    """Same app, started with the in-memory backend."""
    monkeypatch.setattr(settings, "STORE_BACKEND", "memory")
    with TestClient(app) as c:
        yield c


class StepClock:
    """Deterministic clock: every call is one second after the previous one."""
    def __init__(self, start=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


class SequenceIds:
    def __init__(self, *ids):
        self._ids = list(ids)

    def next_id(self):
        return self._ids.pop(0)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def sequence_ids():
    return SequenceIds


# --- Utility: clear the enquiries table ---
def _clear_all(db):
    db.execute(text("DELETE FROM enquiries"))
    db.commit()


@pytest.fixture
def sample_form():
    """A realistic submission from the current enquiry form."""
    return {
        "childName": "Olivia",
        "parentName": "Jane Smith",
        "email": "jane.smith@example.com",
        "phone": "07700 900123",
        "stage": "Upper",
        "gender": "Female",
        "boardingPreference": "Full Boarding",
        "academicInterests": ["Sciences", "Mathematics"],
        "activities": ["Drama", "Music"],
        "specificSports": "Hockey",
        "universityAspirations": "Medicine at Oxford",
        "priorities": {"academic": 3, "sports": 1, "pastoral": 2, "activities": 2},
        "additionalInfo": "Plays grade 6 violin",
    }
