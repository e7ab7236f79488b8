"""Public read-only endpoints: leaderboard, profile summary and deed catalog."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import case, func

from models import db
from models.deed import DEED_VERIFIED, Deed
from models.deed_catalog import DeedCatalogEntry
from models.user import User
from routes.deeds import profile_summary
from utils.request_validation import parse_positive_int

community_bp = Blueprint("community", __name__)


@community_bp.route("/leaderboard", methods=["GET"])
def leaderboard():
    """Rank users by credits, then verified deeds, then name."""

    verified = func.count(case((Deed.status == DEED_VERIFIED, 1))).label("verified")
    total = func.count(Deed.id).label("total")
    credits = func.coalesce(User.credits, 0)

    rows = (
        db.session.query(
            User.id,
            User.name,
            User.region,
            User.sector,
            credits.label("credits"),
            verified,
            total,
        )
        .outerjoin(Deed, Deed.user_id == User.id)
        .group_by(User.id)
        .order_by(credits.desc(), verified.desc(), User.name.asc())
        .limit(current_app.config.get("LEADERBOARD_LIMIT", 50))
        .all()
    )

    return jsonify(
        [
            {
                "id": row.id,
                "name": row.name or "Neighbor",
                "region": row.region,
                "sector": row.sector or "General",
                "credits": int(row.credits or 0),
                "verified": int(row.verified or 0),
                "total": int(row.total or 0),
            }
            for row in rows
        ]
    )


@community_bp.route("/profile", methods=["GET"])
def profile():
    """Return a user's credits and deed counts."""

    user_id = parse_positive_int(request.args.get("user_id"), "user_id")
    summary = profile_summary(user_id)
    if summary is None:
        return jsonify({"message": "User not found"})
    return jsonify(summary)


@community_bp.route("/deed_catalog", methods=["GET"])
def deed_catalog():
    entries = DeedCatalogEntry.query.order_by(DeedCatalogEntry.id.asc()).all()
    return jsonify([entry.to_dict() for entry in entries])
