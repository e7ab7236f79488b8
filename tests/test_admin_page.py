"""Tests for the cookie-gated administrator review page."""

from __future__ import annotations

from flask.testing import FlaskClient

from conftest import TEST_SESSION_SECRET
from sessions import SessionClaims, encode_session_token


def _set_session_cookie(client: FlaskClient, user_id: int, role: str) -> None:
    token = encode_session_token(SessionClaims(user_id=user_id, role=role), TEST_SESSION_SECRET)
    client.set_cookie("deeds_session", token)


def test_admin_page_redirects_anonymous_visitors(client: FlaskClient):
    response = client.get("/admin")

    assert response.status_code == 403
    assert response.mimetype == "text/html"
    body = response.get_data(as_text=True)
    assert "/login.html" in body
    assert '"/admin"' in body


def test_admin_page_rejects_non_admin(client: FlaskClient, make_user):
    user_id = make_user("user@example.com")
    _set_session_cookie(client, user_id, "user")

    assert client.get("/admin").status_code == 403


def test_admin_page_lists_pending_deeds(client: FlaskClient, make_user, make_deed):
    admin_id = make_user("admin@example.com", role="admin")
    owner_id = make_user("owner@example.com", name="Olive")
    make_deed(owner_id, "Pending <b>deed</b>")
    make_deed(owner_id, "Done deed", status="verified")
    _set_session_cookie(client, admin_id, "admin")

    response = client.get("/admin")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Olive" in body
    assert "Pending &lt;b&gt;deed&lt;/b&gt;" in body
    assert "Done deed" not in body
