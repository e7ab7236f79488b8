"""Browser-rendered administrator pages gated by the session cookie."""

from __future__ import annotations

from flask import Blueprint, current_app, render_template_string, request
from sqlalchemy.orm import joinedload

from models.deed import DEED_PENDING, Deed
from sessions import load_session

admin_bp = Blueprint("admin", __name__)

ACCESS_DENIED_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Access Denied</title>
  <script>
    sessionStorage.setItem("returnUrl", {{ return_url|tojson }});
    window.location.href = "/login.html";
  </script>
</head>
<body>
  <p>Redirecting to login...</p>
</body>
</html>"""

REVIEW_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Deeds review</title>
</head>
<body>
  <h1>Pending deeds</h1>
  {% if deeds %}
  <table>
    <thead>
      <tr><th>ID</th><th>Submitted by</th><th>Title</th><th>Proof</th><th>Submitted</th></tr>
    </thead>
    <tbody>
      {% for deed in deeds %}
      <tr data-deed-id="{{ deed.id }}">
        <td>{{ deed.id }}</td>
        <td>{{ deed.user_name }}</td>
        <td>{{ deed.title }}</td>
        <td><a href="{{ deed.proof_url }}" rel="noopener noreferrer" target="_blank">proof</a></td>
        <td>{{ deed.created_at }}</td>
      </tr>
      {% endfor %}
    </tbody>
  </table>
  {% else %}
  <p>No deeds are waiting for review.</p>
  {% endif %}
</body>
</html>"""


@admin_bp.route("", methods=["GET"])
def review_page():
    """Render the pending-deed queue for administrators."""

    session = load_session()
    if session is None or not session.is_admin:
        current_app.logger.info("Denied admin page to %s", request.remote_addr)
        html = render_template_string(ACCESS_DENIED_TEMPLATE, return_url=request.path)
        return html, 403, {"Content-Type": "text/html; charset=utf-8"}

    pending = (
        Deed.query.options(joinedload(Deed.owner))
        .filter(Deed.status == DEED_PENDING)
        .order_by(Deed.created_at.asc(), Deed.id.asc())
        .all()
    )
    return render_template_string(
        REVIEW_TEMPLATE, deeds=[deed.to_dict(include_owner=True) for deed in pending]
    )
