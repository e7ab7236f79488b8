"""Deeds blueprint: submission, listing, and administrator verification."""

from __future__ import annotations

from datetime import UTC, datetime

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import case, func, update
from sqlalchemy.orm import joinedload
from werkzeug.exceptions import Conflict, Forbidden, NotFound

from models import db
from models.deed import DEED_STATUSES, DEED_VERIFIED, Deed
from models.user import User
from sessions import require_owner_or_admin, require_session, role_required
from utils.errors import ValidationError
from utils.request_validation import (
    normalize_proof_url,
    parse_json_request,
    parse_positive_int,
    require_text,
    sanitize_text,
)

deeds_bp = Blueprint("deeds", __name__)


def _optional_reward(value: object) -> int | None:
    if value in (None, ""):
        return None
    try:
        return parse_positive_int(value, "reward")
    except ValidationError:
        raise ValidationError("reward must be a positive integer.", "invalid_reward") from None


def profile_summary(user_id: int) -> dict | None:
    """Return credits and deed counts for ``user_id``."""

    row = (
        db.session.query(
            User.id,
            User.name,
            User.email,
            User.credits,
            func.count(Deed.id).label("total_deeds"),
            func.count(case((Deed.status == DEED_VERIFIED, 1))).label("verified_deeds"),
        )
        .outerjoin(Deed, Deed.user_id == User.id)
        .filter(User.id == user_id)
        .group_by(User.id)
        .first()
    )
    if row is None:
        return None
    return {
        "id": row.id,
        "name": row.name,
        "email": row.email,
        "credits": int(row.credits or 0),
        "total_deeds": int(row.total_deeds or 0),
        "verified_deeds": int(row.verified_deeds or 0),
    }


@deeds_bp.route("/deeds", methods=["POST"])
def create_deed():
    """Submit a deed for review on behalf of the session's user."""

    session = require_session()
    payload = parse_json_request(request)

    user_id = parse_positive_int(payload.get("user_id"), "user_id")
    title = require_text(payload.get("title"), "title", "A deed title is required.")
    proof_url = normalize_proof_url(payload.get("proof_url"))
    reward = _optional_reward(payload.get("reward"))

    if user_id != session.user_id:
        raise Forbidden("Cannot submit deeds for other users.")

    if db.session.get(User, user_id) is None:
        raise NotFound("We could not find that user account. Please log in again.")

    deed = Deed(
        user_id=user_id,
        title=title,
        description=sanitize_text(payload.get("description")) or None,
        category=sanitize_text(payload.get("category")) or "general",
        proof_url=proof_url,
        impact=sanitize_text(payload.get("impact")) or None,
        duration=sanitize_text(payload.get("duration")) or None,
        reward=reward,
    )
    db.session.add(deed)
    db.session.commit()

    current_app.logger.info("Deed %s submitted by user %s", deed.id, user_id)

    return (
        jsonify(
            {
                "success": True,
                "message": "Deed submitted for review.",
                "deed_id": deed.id,
                "status": deed.status,
            }
        ),
        201,
    )


@deeds_bp.route("/deeds", methods=["GET"])
def list_deeds():
    """List deeds; non-admins only ever see their own."""

    session = require_session()

    status = sanitize_text(request.args.get("status")).lower()
    if status and status != "all" and status not in DEED_STATUSES:
        raise ValidationError(
            "status must be one of: all, {}.".format(", ".join(DEED_STATUSES)),
            "invalid_status",
        )

    requested_user_id = None
    raw_user_id = request.args.get("user_id")
    if raw_user_id not in (None, ""):
        requested_user_id = parse_positive_int(raw_user_id, "user_id")

    if requested_user_id is not None:
        require_owner_or_admin(
            session, requested_user_id, "You can only view your own deeds."
        )
    elif not session.is_admin:
        requested_user_id = session.user_id

    query = Deed.query.options(joinedload(Deed.owner))
    if status and status != "all":
        query = query.filter(Deed.status == status)
    if requested_user_id is not None:
        query = query.filter(Deed.user_id == requested_user_id)

    deeds = (
        query.order_by(Deed.created_at.desc(), Deed.id.desc())
        .limit(current_app.config.get("DEEDS_LIST_LIMIT", 100))
        .all()
    )
    return jsonify([deed.to_dict(include_owner=True) for deed in deeds])


@deeds_bp.route("/verify", methods=["POST"])
@role_required("admin")
def verify_deed():
    """Mark a deed verified and credit its owner exactly once."""

    payload = parse_json_request(request)
    if payload.get("deed_id") in (None, ""):
        raise ValidationError("Missing deed_id.", "missing_fields")
    deed_id = parse_positive_int(payload.get("deed_id"), "deed_id")
    default_reward = current_app.config.get("DEFAULT_DEED_REWARD", 1)

    # The status condition makes the transition one-way: of any number of
    # concurrent callers only one sees a changed row.
    result = db.session.execute(
        update(Deed)
        .where(Deed.id == deed_id, Deed.status != DEED_VERIFIED)
        .values(
            status=DEED_VERIFIED,
            verified_at=func.coalesce(Deed.verified_at, datetime.now(UTC)),
            credits=func.coalesce(Deed.reward, default_reward),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.session.rollback()
        if db.session.get(Deed, deed_id) is None:
            raise NotFound("We couldn't find that deed.")
        raise Conflict("This deed is already verified.")

    deed = db.session.get(Deed, deed_id, populate_existing=True)
    db.session.execute(
        update(User)
        .where(User.id == deed.user_id)
        .values(credits=User.credits + deed.credits)
        .execution_options(synchronize_session=False)
    )
    db.session.commit()

    current_app.logger.info(
        "Deed %s verified; user %s credited %s", deed.id, deed.user_id, deed.credits
    )

    return jsonify(
        {
            "success": True,
            "message": "Deed verified.",
            "deed": {
                "id": deed.id,
                "status": deed.status,
                "reward": deed.credits,
                "verified_at": deed.verified_at.isoformat() if deed.verified_at else None,
            },
            "profile": profile_summary(deed.user_id),
        }
    )
