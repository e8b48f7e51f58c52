import os
import tempfile

# Settings are read at import time, so the environment must be ready first
_TMP_DIR = tempfile.mkdtemp(prefix="booksocial-tests-")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-booksocial")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/test.db"
os.environ["FILE_UPLOAD_PATH"] = os.path.join(_TMP_DIR, "uploads")

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.models.user import User
from app.repositories import user as user_repository
from app.services.account import DEFAULT_ROLE
from app.services.auth import create_access_token, get_password_hash
from app.services.email import get_email_service

PASSWORD = "s3cret-password"


class RecordingMailer:
    """Stands in for EmailService and keeps every email it was asked to send."""

    def __init__(self):
        self.sent = []

    def send_email_async(self, to, username, template, confirmation_url, activation_code, subject):
        self.sent.append({
            "to": to,
            "username": username,
            "template": template,
            "confirmation_url": confirmation_url,
            "activation_code": activation_code,
            "subject": subject,
        })


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    user_repository.ensure_role(session, DEFAULT_ROLE)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(db, mailer):
    app.dependency_overrides[get_email_service] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(email=None, enabled=True, locked=False, firstname="Jane", lastname="Doe"):
        counter["n"] += 1
        user = User(
            firstname=firstname,
            lastname=lastname,
            email=email or f"user{counter['n']}@example.com",
            password_hash=get_password_hash(PASSWORD),
            enabled=enabled,
            account_locked=locked
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        user_repository.assign_role(db, user, user_repository.find_role_by_name(db, DEFAULT_ROLE))
        db.commit()
        return user

    return _make_user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(subject=user.email)}"}


@pytest.fixture
def headers_for():
    return auth_headers
