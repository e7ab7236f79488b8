"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import urlsplit

from flask import Request
from werkzeug.exceptions import BadRequest

from utils.errors import ValidationError

_WHITESPACE_RE = re.compile(r"\s+")

# Largest id the store's signed 64-bit INTEGER column can hold.
MAX_ID = 2**63 - 1


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if not data.get(key)]
        if missing:
            raise ValidationError(
                "Missing required fields: {}.".format(", ".join(sorted(missing))),
                "missing_fields",
            )

    return data


def sanitize_text(value: object) -> str:
    """Trim a value and collapse internal whitespace runs to single spaces."""

    if value is None or value is False:
        return ""
    return _WHITESPACE_RE.sub(" ", str(value)).strip()


def require_text(value: object, field: str, message: str | None = None) -> str:
    text = sanitize_text(value)
    if not text:
        raise ValidationError(message or f"{field} is required.", f"{field}_missing")
    return text


def normalize_email(raw_email: object) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""

    return sanitize_text(raw_email).lower()


def normalize_proof_url(value: object) -> str:
    """Return a normalized absolute URL for a deed's proof link.

    An empty value and an unparseable value are reported with different
    error codes so clients can tell "missing" from "invalid" apart.
    """

    text = sanitize_text(value)
    if not text:
        raise ValidationError(
            "A proof URL is required to submit your deed.", "proof_url_missing"
        )

    invalid = ValidationError(
        "Please provide a valid proof link, including http:// or https://.",
        "proof_url_invalid",
    )
    if " " in text:
        raise invalid
    try:
        parts = urlsplit(text)
        # Accessing the port validates it.
        parts.port
    except ValueError:
        raise invalid from None
    if not parts.scheme or not parts.netloc or not parts.hostname:
        raise invalid

    # Host names are case-insensitive; userinfo is not.
    userinfo, at, hostport = parts.netloc.rpartition("@")
    path = parts.path or "/"
    return parts._replace(
        scheme=parts.scheme.lower(),
        netloc=userinfo + at + hostport.lower(),
        path=path,
    ).geturl()


def parse_positive_int(value: object, field: str) -> int:
    """Coerce ``value`` to a positive integer or raise a 400 error."""

    invalid = ValidationError(f"A valid {field} must be provided.", "invalid_id")
    if isinstance(value, bool) or value is None:
        raise invalid
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise invalid
        number = int(value)
    else:
        text = str(value).strip()
        if not (text.isascii() and text.isdigit()):
            raise invalid
        number = int(text)
    if number <= 0 or number > MAX_ID:
        raise invalid
    return number
