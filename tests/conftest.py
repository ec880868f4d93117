import os
import tempfile

from passlib.context import CryptContext

# Settings are read at import time, so the secrets must exist before the app loads
os.environ.setdefault("GMAIL_USER", "tutor@example.com")
os.environ.setdefault("GMAIL_PASS", "app-password")
os.environ.setdefault("TWILIO_ACCOUNT_SID", "ACtest")
os.environ.setdefault("TWILIO_AUTH_TOKEN", "test-token")
os.environ.setdefault("TWILIO_PHONE_NUMBER", "+15005550006")
os.environ.setdefault("SESSIONS_PASSWORD_HASH", CryptContext(schemes=["bcrypt"], bcrypt__rounds=4).hash("tutor123"))
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "tutoring-backend-tests", "errors.log"))

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tutoring_backend.config import settings
from tutoring_backend.database import Base
from tutoring_backend.main import app
from tutoring_backend.services import email_service, sms_service

# ------------------ engine ------------------
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(bind=engine)
Base.metadata.create_all(bind=engine)


# ------------------ fixtures ------------------
@pytest.fixture(autouse=True)
def override_db(monkeypatch, tmp_path):
    monkeypatch.setattr("tutoring_backend.database.SessionLocal", TestingSessionLocal)
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    yield
    # fresh tables for every test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture(autouse=True)
def mailer(monkeypatch):
    fm = MagicMock()
    fm.send_message = AsyncMock()
    monkeypatch.setattr(email_service, "fm", fm)
    return fm


@pytest.fixture(autouse=True)
def sms_client(monkeypatch):
    client = MagicMock()
    client.messages.create.return_value = MagicMock(sid="SM0001")
    monkeypatch.setattr(sms_service, "client", client)
    return client


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def booking_form():
    return {
        "name": "A",
        "surname": "B",
        "age": "15",
        "gender": "F",
        "city": "X",
        "province": "Y",
        "phone": "+2700000",
        "email": "a@b.com",
        "subject": "Math",
        "topic": "Algebra",
        "datetime": "2024-01-01T10:00",
    }
