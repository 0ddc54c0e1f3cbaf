"""Authentication: users, passwords and bearer tokens."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlmodel import select

from ..context import UserSession
from ..errors import AuthenticationError, PreconditionError
from ..infra.database import SessionFactory
from ..models.user import User

_hasher = PasswordHasher()
_TOKEN_SALT = "billsage-bearer"
LOCAL_USERNAME = "local"


def get_user_by_username(username: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by username."""
    username = username.strip()
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user:
            session.expunge(user)
        return user


def create_user(*, username: str, password: str, session_factory: SessionFactory) -> User:
    """Create a new user with hashed password."""

    username = username.strip()
    if not username:
        raise PreconditionError("Username cannot be empty")
    if not password:
        raise PreconditionError("Password cannot be empty")
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            raise PreconditionError("Username already exists")
        user = User(username=username, password_hash=password_hash)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def authenticate(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    username = username.strip()
    if not username:
        return None
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            return None

        user.last_login = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def ensure_local_user(session_factory: SessionFactory) -> User:
    """Create or return the default local profile (passwordless desktop mode)."""

    with session_factory() as session:
        user = session.exec(select(User).where(User.username == LOCAL_USERNAME)).first()
        if user:
            session.expunge(user)
            return user
        user = User(username=LOCAL_USERNAME, password_hash=_hasher.hash(LOCAL_USERNAME))
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def _serializer(secret_key: str) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key, salt=_TOKEN_SALT)


def issue_token(user: User, secret_key: str) -> str:
    """Return a signed bearer token identifying ``user``."""

    if user.id is None:
        raise PreconditionError("User must be persisted before issuing a token")
    return _serializer(secret_key).dumps({"uid": user.id, "username": user.username})


def resolve_token(token: str, secret_key: str, *, max_age: int) -> UserSession:
    """Verify a bearer token and return the session it stands for."""

    if not token:
        raise AuthenticationError("Unauthorized")
    try:
        payload = _serializer(secret_key).loads(token, max_age=max_age)
    except SignatureExpired as exc:
        raise AuthenticationError("Token expired") from exc
    except BadSignature as exc:
        raise AuthenticationError("Unauthorized") from exc
    try:
        return UserSession(user_id=int(payload["uid"]), username=str(payload["username"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Unauthorized") from exc


__all__ = [
    "LOCAL_USERNAME",
    "authenticate",
    "create_user",
    "ensure_local_user",
    "get_user_by_username",
    "issue_token",
    "resolve_token",
]
