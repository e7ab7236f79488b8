"""Session tokens, request session loading, and authorization guards."""

from .guards import (
    require_owner_or_admin,
    require_role,
    require_session,
    role_required,
)
from .tokens import DecodedToken, SessionClaims, decode_session_token, encode_session_token
from .verifier import Session, load_session, session_secret, verify_session_token

__all__ = [
    "DecodedToken",
    "Session",
    "SessionClaims",
    "decode_session_token",
    "encode_session_token",
    "load_session",
    "require_owner_or_admin",
    "require_role",
    "require_session",
    "role_required",
    "session_secret",
    "verify_session_token",
]
