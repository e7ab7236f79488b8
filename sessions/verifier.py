"""Session token verification and per-request session loading."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass

import jwt
from flask import current_app, g, request

from utils.request_validation import MAX_ID

from .secret import resolve_session_secret
from .tokens import ALGORITHM, decode_session_token

logger = logging.getLogger(__name__)

_BEARER_RE = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)
_UNSET = object()


@dataclass(frozen=True)
class Session:
    """Identity extracted from a verified session token."""

    user_id: int
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def _subject_id(payload: dict) -> int | None:
    subject = payload.get("sub")
    if isinstance(subject, bool):
        return None
    if isinstance(subject, int):
        user_id = subject
    elif isinstance(subject, str) and subject.isascii() and subject.isdigit():
        user_id = int(subject)
    else:
        return None
    return user_id if 0 < user_id <= MAX_ID else None


def verify_session_token(
    token: str | None, secret: str, max_age: int | None = None
) -> Session | None:
    """Return the session asserted by ``token`` or ``None``.

    The signature must match exactly. When ``max_age`` is given, tokens
    issued more than ``max_age`` seconds ago are rejected as stale. Never
    raises.
    """

    if not token or not secret:
        return None
    if decode_session_token(token) is None:
        logger.debug("Rejected malformed session token")
        return None

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["sub"]},
        )
    except jwt.PyJWTError as exc:
        logger.info("Rejected session token: %s", exc)
        return None

    user_id = _subject_id(payload)
    if user_id is None:
        logger.info("Rejected session token with invalid subject")
        return None

    if max_age is not None:
        issued_at = payload.get("iat")
        if not isinstance(issued_at, int) or time.time() - issued_at > max_age:
            logger.info("Rejected stale session token for user %s", user_id)
            return None

    role = payload.get("role") or "user"
    if not isinstance(role, str):
        return None
    return Session(user_id=user_id, role=role)


def session_secret() -> str:
    """Signing secret for the running application."""

    return resolve_session_secret(current_app.config.get("SESSION_SECRET"))


def token_from_request() -> str | None:
    """Return the bearer token, falling back to the session cookie."""

    match = _BEARER_RE.match(request.headers.get("Authorization", ""))
    if match:
        token = match.group(1).strip()
        if token:
            return token
    cookie_name = current_app.config.get("DEEDS_SESSION_COOKIE", "deeds_session")
    return request.cookies.get(cookie_name) or None


def load_session() -> Session | None:
    """Verify the current request's token once and cache the result on ``g``."""

    cached = g.get("deeds_session", _UNSET)
    if cached is not _UNSET:
        return cached

    session = verify_session_token(
        token_from_request(),
        session_secret(),
        max_age=current_app.config.get("SESSION_TOKEN_TTL"),
    )
    g.deeds_session = session
    return session
