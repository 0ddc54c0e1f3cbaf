"""Tests for users, passwords and bearer tokens."""

from __future__ import annotations

import pytest
from itsdangerous import URLSafeTimedSerializer

from billsage.errors import AuthenticationError, PreconditionError
from billsage.services import auth


def test_authenticate_with_correct_password(session_factory, user):
    found = auth.authenticate(username="tester", password="s3cret-pass", session_factory=session_factory)

    assert found is not None
    assert found.id == user.id
    assert found.last_login is not None


def test_authenticate_rejects_wrong_password(session_factory, user):
    assert auth.authenticate(username="tester", password="nope", session_factory=session_factory) is None
    assert auth.authenticate(username="ghost", password="x", session_factory=session_factory) is None


def test_duplicate_username_is_rejected(session_factory, user):
    with pytest.raises(PreconditionError):
        auth.create_user(username="tester", password="other", session_factory=session_factory)


def test_empty_password_is_rejected(session_factory):
    with pytest.raises(PreconditionError):
        auth.create_user(username="newbie", password="", session_factory=session_factory)


def test_ensure_local_user_is_idempotent(session_factory):
    first = auth.ensure_local_user(session_factory)
    second = auth.ensure_local_user(session_factory)

    assert first.id == second.id
    assert first.username == auth.LOCAL_USERNAME


def test_token_round_trip(user):
    token = auth.issue_token(user, "secret")

    session = auth.resolve_token(token, "secret", max_age=60)

    assert session.user_id == user.id
    assert session.username == "tester"


def test_token_signed_with_other_key_is_rejected(user):
    token = auth.issue_token(user, "secret")

    with pytest.raises(AuthenticationError):
        auth.resolve_token(token, "different", max_age=60)


def test_expired_token_is_rejected(user):
    token = auth.issue_token(user, "secret")

    with pytest.raises(AuthenticationError, match="expired"):
        auth.resolve_token(token, "secret", max_age=-1)


def test_token_without_user_fields_is_rejected():
    token = URLSafeTimedSerializer("secret", salt="billsage-bearer").dumps({"hello": 1})

    with pytest.raises(AuthenticationError):
        auth.resolve_token(token, "secret", max_age=60)


def test_empty_token_is_rejected():
    with pytest.raises(AuthenticationError):
        auth.resolve_token("", "secret", max_age=60)
