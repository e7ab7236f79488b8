"""Concurrent verification of one deed must credit its owner exactly once."""

from __future__ import annotations

import threading

import pytest

from conftest import auth_headers, build_app
from models import db
from models.deed import Deed
from models.user import User


@pytest.fixture()
def file_app(tmp_path):
    """An app backed by an on-disk database so each request gets its own connection."""

    application = build_app(SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'race.db'}")

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


def _seed(app) -> tuple[int, int, list[int]]:
    with app.app_context():
        admin = User(name="Admin", email="admin@example.com", role="admin")
        admin.set_password("AdminPass123")
        owner = User(name="Owner", email="owner@example.com")
        owner.set_password("OwnerPass123")
        db.session.add_all([admin, owner])
        db.session.flush()
        deeds = [
            Deed(user_id=owner.id, title=f"Deed {i}", proof_url="https://example.com/p.png")
            for i in range(3)
        ]
        db.session.add_all(deeds)
        db.session.commit()
        return admin.id, owner.id, [deed.id for deed in deeds]


def _verify_concurrently(app, admin_id: int, deed_id: int) -> list[int]:
    barrier = threading.Barrier(2)
    statuses: list[int] = []
    errors: list[BaseException] = []
    lock = threading.Lock()

    def _worker():
        client = app.test_client()
        try:
            barrier.wait(timeout=5)
            response = client.post(
                "/api/verify",
                json={"deed_id": deed_id},
                headers=auth_headers(admin_id, "admin"),
            )
            with lock:
                statuses.append(response.status_code)
        except BaseException as exc:  # surfaced in the main thread
            with lock:
                errors.append(exc)

    threads = [threading.Thread(target=_worker) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert not errors, errors
    return statuses


def test_simultaneous_verify_credits_once(file_app):
    admin_id, owner_id, deed_ids = _seed(file_app)

    for expected_credits, deed_id in enumerate(deed_ids, start=1):
        statuses = _verify_concurrently(file_app, admin_id, deed_id)

        assert sorted(statuses) == [200, 409]
        with file_app.app_context():
            assert db.session.get(User, owner_id).credits == expected_credits
            assert db.session.get(Deed, deed_id).status == "verified"
