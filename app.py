"""Application factory."""

import json
import os
import uuid

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from config import Config
from models import db
from routes.admin import admin_bp
from routes.auth import auth_bp
from routes.community import community_bp
from routes.deeds import deeds_bp

migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}
GENERIC_ERROR_MESSAGE = "We could not complete your request. Please try again later."


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)

    # CORS
    origins = app.config.get("CORS_ORIGINS", "*")
    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        send_wildcard=origins == "*",
    )

    # Rate limiting
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    headers_enabled = app.config.get("RATELIMIT_HEADERS_ENABLED", True)
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())

    global limiter
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "60 per minute")],
        storage_uri=storage_uri,
        headers_enabled=headers_enabled,
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Preflight
    @app.before_request
    def _answer_preflight():
        if request.method == "OPTIONS":
            return "", 204, PREFLIGHT_HEADERS
        return None

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(deeds_bp, url_prefix="/api")
    app.register_blueprint(community_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/admin")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)

    return app


def _error_payload(message: str, error: str, request_id: str, code: str | None = None) -> dict:
    payload = {"message": message, "error": error, "request_id": request_id}
    if code:
        payload["code"] = code
    return payload


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        # Unrouted method/path combinations get a bare plain-text 404.
        if request.url_rule is None and isinstance(error, (NotFound, MethodNotAllowed)):
            return "Not found", 404, {"Content-Type": "text/plain; charset=utf-8"}

        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = _error_payload(
            error.description or getattr(error, "name", "Error"),
            getattr(error, "name", "Error"),
            request_id,
            getattr(error, "error_code", None),
        )
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(SQLAlchemyError)
    def _handle_store_error(error: SQLAlchemyError):
        request_id = g.get("request_id") or str(uuid.uuid4())
        db.session.rollback()
        app.logger.exception("Store operation failed", exc_info=error)
        response = jsonify(
            _error_payload(GENERIC_ERROR_MESSAGE, "Internal Server Error", request_id)
        )
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        response = jsonify(
            _error_payload(GENERIC_ERROR_MESSAGE, "Internal Server Error", request_id)
        )
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
