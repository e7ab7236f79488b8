"""Compact signed session tokens.

A token is three base64url segments joined by dots: a header
``{"alg": "HS256", "typ": "JWT"}``, a claims object ``{"sub", "role",
"iat"}``, and an HMAC-SHA256 signature over ``header.claims``.
"""

from __future__ import annotations

import binascii
import json
import time
from dataclasses import dataclass

import jwt
from jwt.utils import base64url_decode, base64url_encode

ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionClaims:
    """Identity asserted by a session token."""

    user_id: int
    role: str = "user"
    issued_at: int | None = None

    def to_payload(self) -> dict:
        issued_at = self.issued_at if self.issued_at is not None else int(time.time())
        return {"sub": str(self.user_id), "role": self.role or "user", "iat": issued_at}


@dataclass(frozen=True)
class DecodedToken:
    """Unverified parts of a token."""

    header: dict
    payload: dict
    signature: bytes
    signing_input: bytes


def encode_session_token(claims: SessionClaims, secret: str) -> str:
    """Serialize and sign ``claims`` with ``secret``."""

    if not secret:
        raise ValueError("A signing secret is required to issue session tokens.")
    return jwt.encode(claims.to_payload(), secret, algorithm=ALGORITHM)


def _decode_json_segment(segment: str) -> dict | None:
    try:
        value = json.loads(base64url_decode(segment.encode("ascii")))
    except (UnicodeError, binascii.Error, ValueError):
        return None
    return value if isinstance(value, dict) else None


def decode_session_token(token: str | None) -> DecodedToken | None:
    """Split a token into its parts without checking the signature.

    Returns ``None`` for anything that is not exactly three non-empty
    segments with JSON-object header and payload.
    """

    if not token or not isinstance(token, str):
        return None
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        return None

    header_segment, payload_segment, signature_segment = parts
    header = _decode_json_segment(header_segment)
    payload = _decode_json_segment(payload_segment)
    if header is None or payload is None:
        return None
    try:
        signature = base64url_decode(signature_segment.encode("ascii"))
    except (UnicodeError, binascii.Error, ValueError):
        return None
    # Non-canonical encodings are rejected so every signature character counts.
    if base64url_encode(signature).decode("ascii") != signature_segment:
        return None

    return DecodedToken(
        header=header,
        payload=payload,
        signature=signature,
        signing_input=f"{header_segment}.{payload_segment}".encode("ascii"),
    )
