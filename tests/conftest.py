import os

# Must be set before config is imported
os.environ["DATABASE_URL"] = "sqlite://"

import re

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import AuthSettings, MailSettings, Settings
from core.database import SessionLocal, engine
from core.exceptions import MailDeliveryError
from models.base import Base
from utils.auth_flow import AuthFlow
from utils.lecturer_manager import LecturerManager
from utils.mailer import Mailer
from utils.student_manager import StudentManager
from utils.token_issuer import TokenIssuer

TEST_SECRET = "test-secret"

LECTURER = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com",
    "password": "analytical-engine",
}

STUDENT = {
    "firstName": "Chinedu",
    "lastName": "Okafor",
    "email": "chinedu@example.com",
    "matricNumber": "20190001",
    "level": "300",
    "gender": "male",
    "images": ["img/chinedu-1.jpg"],
}


class FakeMailer(Mailer):
    """Records outgoing mail instead of talking to SMTP."""

    def __init__(self):
        super().__init__(MailSettings(host="smtp.invalid"))
        self.outbox = []
        self.fail = False

    def send(self, to, subject, body):
        if self.fail:
            raise MailDeliveryError()
        self.outbox.append({"to": to, "subject": subject, "body": body})

    def last_otp(self):
        return re.search(r"\b(\d{6})\b", self.outbox[-1]["body"]).group(1)


@pytest.fixture
def settings():
    return Settings(
        auth=AuthSettings(secret_key=TEST_SECRET, bcrypt_rounds=4),
        mail=MailSettings(),
    )


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def flow(db, settings, mailer):
    return AuthFlow(
        LecturerManager(db, bcrypt_rounds=settings.auth.bcrypt_rounds),
        StudentManager(db),
        TokenIssuer(settings.auth),
        mailer,
        settings.auth,
    )


@pytest.fixture
def client(db, settings, mailer):
    app = create_app(settings=settings, mailer=mailer)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sign_up(client):
    """Create a lecturer and return (response body, bearer headers).

    The cookie jar is cleared so each test chooses its identity explicitly.
    """

    def _sign_up(**overrides):
        response = client.post("/lecturer/signup", json={**LECTURER, **overrides})
        assert response.status_code == 201, response.text
        client.cookies.clear()
        body = response.json()
        return body, {"Authorization": f"Bearer {body['token']}"}

    return _sign_up
