"""Authorization guards placed in front of view functions."""

from __future__ import annotations

from functools import wraps

from werkzeug.exceptions import Forbidden, Unauthorized

from .verifier import Session, load_session


def require_session() -> Session:
    """Return the request's session or raise 401."""

    session = load_session()
    if session is None:
        raise Unauthorized("Authentication required.")
    return session


def require_role(session: Session, role: str) -> Session:
    if session.role != role:
        raise Forbidden(f"{role.capitalize()} access required.")
    return session


def require_owner_or_admin(
    session: Session, owner_id: int, message: str | None = None
) -> Session:
    """Allow the resource owner or an administrator through, 403 otherwise."""

    if session.is_admin or session.user_id == owner_id:
        return session
    raise Forbidden(message or "You can only access your own records.")


def role_required(role: str):
    """Require a session holding ``role`` before ``view`` runs."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            require_role(require_session(), role)
            return view(*args, **kwargs)

        return wrapper

    return decorator
