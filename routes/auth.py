"""Authentication blueprint providing signup, login and logout endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, Response, current_app, jsonify, request
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import Conflict, NotFound, Unauthorized

from models import db
from models.deed import DEED_VERIFIED, Deed
from models.user import User
from sessions import SessionClaims, encode_session_token, session_secret
from utils.errors import ValidationError
from utils.request_validation import normalize_email, parse_json_request, sanitize_text

auth_bp = Blueprint("auth", __name__)


def _is_local_request() -> bool:
    host = (request.host or "").split(":", 1)[0].lower()
    return host in {"localhost", "127.0.0.1", "::1", "[::1]"}


def _set_session_cookie(response: Response, token: str, max_age: int) -> Response:
    response.set_cookie(
        current_app.config["DEEDS_SESSION_COOKIE"],
        token,
        max_age=max_age,
        path="/",
        secure=not _is_local_request(),
        httponly=True,
        samesite="Strict",
    )
    return response


def _issue_token(user: User) -> str:
    return encode_session_token(SessionClaims(user_id=user.id, role=user.role), session_secret())


def _completed_count(user_id: int) -> int:
    return (
        db.session.query(func.count(Deed.id))
        .filter(Deed.user_id == user_id, Deed.status == DEED_VERIFIED)
        .scalar()
        or 0
    )


def _first_name(user: User) -> str:
    return (user.name or "").split(" ", 1)[0] or user.email


@auth_bp.route("/signup", methods=["POST"])
def signup():
    """Create an account and start a session for it."""

    payload = parse_json_request(request)
    name = sanitize_text(payload.get("name"))
    email = normalize_email(payload.get("email"))
    password = str(payload.get("password") or "")

    if not name or not email or not password:
        raise ValidationError("Name, email, and password are required.", "missing_fields")
    min_length = current_app.config.get("PASSWORD_MIN_LENGTH", 8)
    if len(password) < min_length:
        raise ValidationError(
            f"Passwords must be at least {min_length} characters long.",
            "password_too_short",
        )

    existing = User.query.filter(func.lower(User.email) == email).first()
    if existing is not None:
        raise Conflict("An account with this email already exists. Please log in.")

    user = User(
        name=name,
        email=email,
        role="user",
        region=sanitize_text(payload.get("region")) or None,
        sector=sanitize_text(payload.get("sector")) or None,
    )
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup for the same address.
        db.session.rollback()
        raise Conflict("An account with this email already exists. Please log in.")

    current_app.logger.info("New account created for user %s", user.id)

    token = _issue_token(user)
    profile = user.to_profile(completed=0)
    profile["session_token"] = token

    response = jsonify({"message": f"Welcome to Deeds, {_first_name(user)}!", "profile": profile})
    response.status_code = HTTPStatus.CREATED
    return _set_session_cookie(response, token, current_app.config["SESSION_MAX_AGE"])


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate a user and return a session token."""

    payload = parse_json_request(request)
    email = normalize_email(payload.get("email"))
    password = str(payload.get("password") or "")

    if not email or not password:
        raise ValidationError("Email and password are required.", "missing_fields")

    user = User.query.filter(func.lower(User.email) == email).first()
    if user is None:
        raise NotFound("We could not find that account. Please sign up first.")

    if not user.check_password(password):
        raise Unauthorized("Invalid email or password.")

    token = _issue_token(user)
    profile = user.to_profile(completed=_completed_count(user.id))
    profile["session_token"] = token

    response = jsonify({"message": f"Welcome back, {_first_name(user)}!", "profile": profile})
    return _set_session_cookie(response, token, current_app.config["SESSION_MAX_AGE"])


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Clear the session cookie."""

    response = jsonify({"message": "Logged out successfully."})
    return _set_session_cookie(response, "", 0)
