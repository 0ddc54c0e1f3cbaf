"""Flask CLI commands for BillSage."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import click
from flask import current_app

from .context import AppContext, UserSession
from .services import auth
from .services.notifications import notification_for


def _context() -> AppContext:
    return current_app.config["BILLSAGE_CONTEXT"]


def _session_for(ctx: AppContext, username: str) -> UserSession:
    user = auth.get_user_by_username(username, ctx.session_factory)
    if user is None:
        raise click.ClickException(f"No such user: {username}")
    return UserSession.for_user(user)


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("billsage-create-user")
    @click.argument("username")
    @click.password_option()
    def create_user(username: str, password: str) -> None:
        """Create a login for the HTTP API."""

        try:
            user = auth.create_user(
                username=username, password=password, session_factory=_context().session_factory
            )
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Created user {user.username} (id {user.id})")

    @app.cli.command("billsage-seed-demo")
    @click.argument("username")
    def seed_demo(username: str) -> None:
        """Add sample bills and goals in the current month."""

        ctx = _context()
        session = _session_for(ctx, username)
        today = ctx.clock()
        samples = [
            (today, "Electric bill", Decimal("84.20"), "bill"),
            (today + timedelta(days=1), "Phone", Decimal("45.00"), "bill"),
            (today + timedelta(days=3), "Car insurance", Decimal("132.75"), "bill"),
            (today + timedelta(days=5), "Paycheck", Decimal("1450.00"), "income"),
            (today + timedelta(days=6), "Call landlord", None, "reminder"),
        ]
        for day, description, amount, kind in samples:
            ctx.day_detail.add_item(session, day, description, amount=amount, type=kind)
        ctx.goals.add_goal(session, "Build a $500 emergency fund", target_amount="500", priority=3)
        ctx.goals.add_goal(session, "Pay off the credit card", priority=2)
        click.echo(f"Seeded {len(samples)} bills and 2 goals for {username}.")

    @app.cli.command("billsage-remind")
    @click.argument("username")
    def remind(username: str) -> None:
        """Print the reminders that would fire today."""

        ctx = _context()
        session = _session_for(ctx, username)
        today: date = ctx.clock()
        count = 0
        for bill in ctx.reminders.upcoming_unpaid(session, today):
            notification = notification_for(bill, today)
            if notification is None:
                continue
            count += 1
            click.echo(f"[{notification.tag}] {notification.title}: {notification.body}")
        if not count:
            click.echo("No reminders due.")
