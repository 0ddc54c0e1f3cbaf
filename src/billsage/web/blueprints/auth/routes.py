"""Login route issuing bearer tokens."""

from __future__ import annotations

from flask import jsonify, request

from ....errors import AuthenticationError
from ....services import auth
from ...security import current_context
from . import bp


@bp.post("/login")
def login():
    """Exchange username/password for a bearer token."""

    payload = request.get_json(silent=True) or {}
    ctx = current_context()
    user = auth.authenticate(
        username=str(payload.get("username", "")),
        password=str(payload.get("password", "")),
        session_factory=ctx.session_factory,
    )
    if user is None:
        raise AuthenticationError("Invalid username or password")
    return jsonify({"token": auth.issue_token(user, ctx.config.SECRET_KEY)})
