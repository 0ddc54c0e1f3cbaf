"""Tests for the Flask CLI commands."""

from __future__ import annotations

from datetime import timedelta

import pytest

from billsage.web import create_app

from .conftest import TODAY


@pytest.fixture
def runner(ctx):
    return create_app(context=ctx).test_cli_runner()


def test_create_user(runner, ctx):
    result = runner.invoke(args=["billsage-create-user", "alice", "--password", "pw"])

    assert result.exit_code == 0
    assert "Created user alice" in result.output


def test_create_duplicate_user_fails(runner, user):
    result = runner.invoke(args=["billsage-create-user", "tester", "--password", "pw"])

    assert result.exit_code != 0
    assert "already exists" in result.output


def test_seed_demo(runner, ctx, user_session):
    result = runner.invoke(args=["billsage-seed-demo", "tester"])

    assert result.exit_code == 0
    assert len(ctx.day_detail.load_day(user_session, TODAY).bills) == 1
    assert len(ctx.goals.list_goals(user_session).active) == 2


def test_remind_lists_due_bills(runner, bill_factory, user):
    bill_factory(due_date=TODAY + timedelta(days=1), description="Phone", amount="45")

    result = runner.invoke(args=["billsage-remind", "tester"])

    assert result.exit_code == 0
    assert "Bill Due Tomorrow: Phone - $45.00" in result.output


def test_remind_unknown_user(runner):
    result = runner.invoke(args=["billsage-remind", "nobody"])

    assert result.exit_code != 0
    assert "No such user" in result.output
