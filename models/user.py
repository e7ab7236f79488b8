"""User model definition."""

from datetime import UTC, datetime

from utils.passwords import hash_password, verify_password

from . import db


ROLES = ("user", "admin")
VERIFICATION_STATUSES = ("pending", "approved", "rejected")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(db.Model):
    """Represents a participant who logs deeds and earns credits."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.String(16),
        nullable=False,
        default="user",
        server_default=db.text("'user'"),
    )
    credits = db.Column(
        db.Integer,
        nullable=False,
        default=0,
        server_default=db.text("0"),
    )
    region = db.Column(db.String(120), nullable=True)
    sector = db.Column(db.String(120), nullable=True)
    verification_status = db.Column(
        db.String(32),
        nullable=False,
        default="pending",
        server_default=db.text("'pending'"),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    __table_args__ = (db.CheckConstraint("credits >= 0", name="ck_users_credits"),)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    def to_profile(self, *, completed: int | None = None) -> dict:
        """Serialize the account fields shown to the owner after login."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "region": self.region,
            "sector": self.sector,
            "verification_status": self.verification_status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "credits": self.credits or 0,
            "completed": completed or 0,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
