"""Bearer-token guard for JSON endpoints."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable

from flask import current_app, g, request

from ..context import AppContext, UserSession
from ..errors import AuthenticationError
from ..services.auth import resolve_token


def current_context() -> AppContext:
    return current_app.config["BILLSAGE_CONTEXT"]


def current_session() -> UserSession:
    return g.user_session


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def require_session(view: Callable[..., Any]) -> Callable[..., Any]:
    """Resolve the bearer token into ``g.user_session`` or answer 401."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any):
        ctx = current_context()
        token = _bearer_token()
        if not token:
            raise AuthenticationError("Missing bearer token")
        g.user_session = resolve_token(
            token, ctx.config.SECRET_KEY, max_age=ctx.config.TOKEN_MAX_AGE
        )
        return view(*args, **kwargs)

    return wrapper
