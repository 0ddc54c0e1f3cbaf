"""Tests for bill reminder selection and copy."""

from __future__ import annotations

from datetime import timedelta

import pytest

from billsage.models import BillStatus
from billsage.services.notifications import (
    BaseNotifier,
    ReminderService,
    check_upcoming_bills,
    format_amount,
    notification_for,
)

from .conftest import TODAY, RecordingNotifier


def test_unpaid_bill_three_days_out_fires_once(ctx, user_session, bill_factory, notifier):
    bill = bill_factory(due_date=TODAY + timedelta(days=3), description="Internet", amount="60.00")

    fired = ctx.reminders.run(user_session)

    assert len(fired) == 1
    assert notifier.shown == fired
    shown = notifier.shown[0]
    assert shown.title == "Upcoming Bill"
    assert shown.body == "Internet due in 3 days - $60.00"
    assert shown.tag == f"bill-{bill.id}"
    assert shown.require_interaction is True


def test_paid_bill_is_silent(ctx, user_session, bill_factory, notifier):
    bill_factory(due_date=TODAY + timedelta(days=3), status=BillStatus.PAID)

    assert ctx.reminders.run(user_session) == []
    assert notifier.shown == []


@pytest.mark.parametrize("offset", [2, 4, 5, 6, 7, -1])
def test_other_offsets_are_silent(bill_factory, offset):
    bill = bill_factory(due_date=TODAY + timedelta(days=offset))

    assert notification_for(bill, TODAY) is None


@pytest.mark.parametrize(
    "offset, title, body",
    [
        (0, "Bill Due Today!", "Rent - $1200.00"),
        (1, "Bill Due Tomorrow", "Rent - $1200.00"),
    ],
)
def test_today_and_tomorrow_copy(bill_factory, offset, title, body):
    bill = bill_factory(due_date=TODAY + timedelta(days=offset), description="Rent", amount="1200")

    notification = notification_for(bill, TODAY)

    assert notification.title == title
    assert notification.body == body


def test_payment_arrangement_still_reminds(bill_factory):
    bill = bill_factory(status=BillStatus.PAYMENT_ARRANGEMENT, pa_date=TODAY)

    assert notification_for(bill, TODAY).title == "Bill Due Today!"


def test_unknown_amount_copy(bill_factory):
    bill = bill_factory(description="Water", amount=None)

    assert notification_for(bill, TODAY).body == "Water - Amount TBD"
    assert format_amount(None) == "Amount TBD"


def test_each_bill_fires_at_most_once_per_check(ctx, user_session, bill_factory, notifier):
    bill_factory(due_date=TODAY, description="A")
    bill_factory(due_date=TODAY + timedelta(days=1), description="B")
    bill_factory(due_date=TODAY + timedelta(days=3), description="C")
    bill_factory(due_date=TODAY + timedelta(days=9), description="Too far")

    ctx.reminders.run(user_session)

    tags = [n.tag for n in notifier.shown]
    assert len(tags) == len(set(tags)) == 3


def test_denied_permission_suppresses_everything(bill_factory):
    denied = RecordingNotifier(granted=False)
    bills = [bill_factory(due_date=TODAY)]

    assert check_upcoming_bills(bills, denied, today=TODAY) == []
    assert check_upcoming_bills(bills, denied, today=TODAY) == []
    assert denied.shown == []
    assert denied.permission_requests == 1


def test_permission_is_asked_once(bill_factory, notifier):
    bills = [bill_factory(due_date=TODAY)]

    check_upcoming_bills(bills, notifier, today=TODAY)
    check_upcoming_bills(bills, notifier, today=TODAY)

    assert notifier.permission_requests == 1
    assert len(notifier.shown) == 2


def test_run_classifies_against_the_day_it_fetched(ctx, user_session, bill_factory, notifier):
    bill_factory(due_date=TODAY + timedelta(days=3), description="Insurance")
    days = iter([TODAY, TODAY + timedelta(days=1)])
    service = ReminderService(ctx.bill_repo, notifier, clock=lambda: next(days))

    fired = service.run(user_session)

    assert [n.title for n in fired] == ["Upcoming Bill"]


def test_base_notifier_requires_show():
    with pytest.raises(TypeError):
        BaseNotifier()
