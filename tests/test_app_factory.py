"""Tests for the Flask application factory and request routing."""
from __future__ import annotations


def test_health_endpoint_returns_ok(client):
    """The health endpoint should respond with an OK payload."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert response.headers.get("X-Request-ID")


def test_blueprints_registered(app):
    """Application factory should register expected blueprints."""
    bps = set(app.blueprints.keys())
    assert {"auth", "deeds", "community", "admin"}.issubset(bps)


def test_api_routes_are_exact(app):
    rules = {
        (rule.rule, method)
        for rule in app.url_map.iter_rules()
        for method in rule.methods - {"HEAD", "OPTIONS"}
    }
    expected = {
        ("/api/auth/signup", "POST"),
        ("/api/auth/login", "POST"),
        ("/api/auth/logout", "POST"),
        ("/api/deeds", "GET"),
        ("/api/deeds", "POST"),
        ("/api/verify", "POST"),
        ("/api/deed_catalog", "GET"),
        ("/api/leaderboard", "GET"),
        ("/api/profile", "GET"),
    }
    assert expected.issubset(rules)


def test_options_on_any_path_returns_preflight(client):
    for path in ("/api/deeds", "/api/does-not-exist", "/"):
        response = client.options(path)
        assert response.status_code == 204
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "GET,POST,OPTIONS"
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type, Authorization"


def test_unknown_path_is_plain_text_404(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True) == "Not found"


def test_wrong_method_is_plain_text_404(client):
    response = client.get("/api/verify")
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "Not found"


def test_api_responses_carry_cors_header(client):
    response = client.get("/api/leaderboard", headers={"Origin": "https://app.example"})
    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "*"


def test_json_error_shape_for_invalid_request(client):
    response = client.post(
        "/api/auth/signup",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "Bad Request"
    assert "Request content type" in payload["message"]
    assert payload["request_id"]


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
