"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.deed import Deed  # noqa: E402
from models.user import User  # noqa: E402
from sessions import SessionClaims, encode_session_token  # noqa: E402

TEST_SESSION_SECRET = "test-session-secret-0123456789abcdef"


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SESSION_SECRET = TEST_SESSION_SECRET
    SESSION_TOKEN_TTL = None
    RATE_LIMIT = "1000 per minute"
    CORS_ORIGINS = "*"


def build_app(**overrides) -> Flask:
    """Create an application with the test config plus ``overrides``."""

    class TestConfig(_BaseTestConfig):
        pass

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
    return application


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = build_app()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def make_user(app: Flask):
    """Persist a user and return its id."""

    def _make_user(
        email: str,
        password: str = "Password123",
        *,
        name: str = "Test User",
        role: str = "user",
        credits: int = 0,
        region: str | None = None,
    ) -> int:
        with app.app_context():
            user = User(name=name, email=email, role=role, credits=credits, region=region)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture()
def make_deed(app: Flask):
    """Persist a deed for ``user_id`` and return its id."""

    def _make_deed(user_id: int, title: str = "Park cleanup", **fields) -> int:
        fields.setdefault("proof_url", "https://example.com/proof.png")
        with app.app_context():
            deed = Deed(user_id=user_id, title=title, **fields)
            db.session.add(deed)
            db.session.commit()
            return deed.id

    return _make_deed


def auth_headers(user_id: int, role: str = "user") -> dict[str, str]:
    token = encode_session_token(SessionClaims(user_id=user_id, role=role), TEST_SESSION_SECRET)
    return {"Authorization": f"Bearer {token}"}
