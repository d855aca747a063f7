import os

# Settings are read once at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_PIN"] = "4321"
os.environ["TIMEZONE"] = "America/Sao_Paulo"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kiosk.client.api import KioskApiClient
from kiosk.domain.models.checkin import CheckIn
from kiosk.infrastructure.database import create_db_engine, get_db, init_db
from kiosk.infrastructure.repositories.checkin_repository import SQLAlchemyCheckInRepository
from kiosk.main import app

ADMIN_PIN = "4321"


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def repo(session_factory):
    db = session_factory()
    yield SQLAlchemyCheckInRepository(db, CheckIn)
    db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/admin/login", json={"pin": ADMIN_PIN})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def api(client):
    return KioskApiClient(http=client)


class FakeAlerts:
    def __init__(self, confirm_answer: bool = True):
        self.messages = []
        self.confirmations = []
        self.confirm_answer = confirm_answer

    def alert(self, message):
        self.messages.append(message)

    def confirm(self, message):
        self.confirmations.append(message)
        return self.confirm_answer


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def alerts():
    return FakeAlerts()


@pytest.fixture
def clock():
    return FakeClock()
