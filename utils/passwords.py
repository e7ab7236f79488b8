"""Password hashing helpers."""

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Return a salted hash suitable for storing in ``users.password_hash``."""

    return generate_password_hash(password)


def verify_password(password: str, digest: str | None) -> bool:
    """Check ``password`` against a stored hash; malformed hashes never match."""

    if not digest:
        return False
    try:
        return check_password_hash(digest, password)
    except ValueError:
        return False
