"""Application configuration module."""

import os


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///deeds.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Sessions
    SESSION_SECRET = os.getenv("SESSION_SECRET")
    DEEDS_SESSION_COOKIE = "deeds_session"
    SESSION_MAX_AGE = _int_env("SESSION_MAX_AGE", 30 * 24 * 60 * 60)
    # None disables the server-side freshness check.
    SESSION_TOKEN_TTL = _int_env("SESSION_TOKEN_TTL", None)
    PASSWORD_MIN_LENGTH = 8

    # Deeds
    DEFAULT_DEED_REWARD = _int_env("DEFAULT_DEED_REWARD", 1)
    LEADERBOARD_LIMIT = _int_env("LEADERBOARD_LIMIT", 50)
    DEEDS_LIST_LIMIT = _int_env("DEEDS_LIST_LIMIT", 100)

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Rate limiting
    RATE_LIMIT = os.getenv("RATE_LIMIT", "60 per minute")
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")
