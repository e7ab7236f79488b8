"""Deed catalog model definition."""

from . import db


class DeedCatalogEntry(db.Model):
    """Read-only template offered to users when choosing a deed to log."""

    __tablename__ = "deed_catalog"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=True)
    impact = db.Column(db.String(255), nullable=True)
    duration = db.Column(db.String(120), nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "duration": self.duration,
        }
