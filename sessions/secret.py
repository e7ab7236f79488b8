"""Resolution of the session signing secret."""

from __future__ import annotations

import logging
import secrets
import threading

logger = logging.getLogger(__name__)


class _EphemeralSecret:
    """Random secret created at most once per process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: str | None = None

    def get(self) -> str:
        value = self._value
        if value is not None:
            return value
        with self._lock:
            if self._value is None:
                self._value = secrets.token_hex(32)
                logger.warning(
                    "SESSION_SECRET is not configured. Generated an ephemeral "
                    "secret; sessions will not survive a process restart."
                )
            return self._value


_ephemeral_secret = _EphemeralSecret()


def resolve_session_secret(configured: str | None) -> str:
    """Return the configured secret, or the process-wide fallback when blank."""

    if configured is not None:
        normalized = str(configured).strip()
        if normalized:
            return normalized
    return _ephemeral_secret.get()
