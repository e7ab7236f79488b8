"""Seed an administrator user."""

import os

from app import create_app
from models import db
from models.user import User
from utils.request_validation import normalize_email


def main() -> None:
    name = os.getenv("ADMIN_NAME", "Deeds Admin")
    email = normalize_email(os.getenv("ADMIN_EMAIL", "admin@example.com"))
    password = os.getenv("ADMIN_PASSWORD", "AdminPass123")

    app = create_app()
    with app.app_context():
        admin = User.query.filter_by(email=email).first()
        if admin is None:
            admin = User(
                name=name,
                email=email,
                role="admin",
                verification_status="approved",
            )
            admin.set_password(password)
            db.session.add(admin)
            action = "created"
        else:
            admin.role = "admin"
            admin.verification_status = "approved"
            admin.set_password(password)
            action = "updated"
        db.session.commit()
        print(f"Admin user {action}: {email}")


if __name__ == "__main__":
    main()
