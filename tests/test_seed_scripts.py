"""Tests for the administrator seeding script."""

from __future__ import annotations

from models import db
from models.user import User
from scripts import seed_admin


def test_seed_admin_reads_environment_when_run(app, monkeypatch, capsys):
    monkeypatch.setattr(seed_admin, "create_app", lambda: app)
    monkeypatch.setenv("ADMIN_NAME", "Head Neighbor")
    monkeypatch.setenv("ADMIN_EMAIL", "  Boss@Example.COM ")
    monkeypatch.setenv("ADMIN_PASSWORD", "SeededPass99")

    seed_admin.main()

    assert "Admin user created: boss@example.com" in capsys.readouterr().out
    with app.app_context():
        admin = User.query.filter_by(email="boss@example.com").one()
        assert admin.name == "Head Neighbor"
        assert admin.is_admin
        assert admin.check_password("SeededPass99")


def test_seed_admin_promotes_existing_user(app, make_user, monkeypatch, capsys):
    user_id = make_user("member@example.com")
    monkeypatch.setattr(seed_admin, "create_app", lambda: app)
    monkeypatch.setenv("ADMIN_EMAIL", "member@example.com")
    monkeypatch.setenv("ADMIN_PASSWORD", "PromotedPass1")

    seed_admin.main()

    assert "Admin user updated" in capsys.readouterr().out
    with app.app_context():
        user = db.session.get(User, user_id)
        assert user.role == "admin"
        assert user.check_password("PromotedPass1")
