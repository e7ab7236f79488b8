"""Deed model definition."""

from datetime import UTC, datetime

from . import db


DEED_PENDING = "pending"
DEED_VERIFIED = "verified"
DEED_STATUSES = (DEED_PENDING, DEED_VERIFIED)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Deed(db.Model):
    """A good deed submitted by a user and awaiting administrator review."""

    __tablename__ = "deeds"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(
        db.String(64),
        nullable=False,
        default="general",
        server_default=db.text("'general'"),
    )
    proof_url = db.Column(db.String(2048), nullable=False)
    impact = db.Column(db.String(255), nullable=True)
    duration = db.Column(db.String(120), nullable=True)
    status = db.Column(
        db.String(16),
        nullable=False,
        default=DEED_PENDING,
        server_default=db.text("'pending'"),
        index=True,
    )
    # Reward granted on verification; NULL falls back to the configured default.
    reward = db.Column(db.Integer, nullable=True)
    # Credits actually awarded, zero until the deed is verified.
    credits = db.Column(
        db.Integer,
        nullable=False,
        default=0,
        server_default=db.text("0"),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)
    verified_at = db.Column(db.DateTime, nullable=True)

    owner = db.relationship(
        "User",
        backref=db.backref("deeds", lazy="dynamic"),
    )

    @property
    def is_verified(self) -> bool:
        return self.status == DEED_VERIFIED

    def __repr__(self) -> str:
        return f"<Deed id={self.id} user_id={self.user_id} status={self.status}>"

    def to_dict(self, include_owner: bool = False) -> dict:
        """Serialize the deed into a dictionary."""

        data = {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description or "",
            "category": self.category or "general",
            "proof_url": self.proof_url,
            "impact": self.impact or "",
            "duration": self.duration or "",
            "status": self.status,
            "reward": self.reward,
            "credits": self.credits or 0,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "verified_at": self.verified_at.isoformat() if self.verified_at else None,
        }
        if include_owner:
            owner = self.owner
            data["user_name"] = owner.name if owner else "Unknown"
            data["user_email"] = owner.email if owner else ""
        return data
