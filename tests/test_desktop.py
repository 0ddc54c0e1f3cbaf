"""Tests for the desktop calendar cells and banner notifier."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from billsage.desktop.calendar_view import CalendarScreen, cell_lines, cell_marker, format_cell_total
from billsage.desktop.notifier import FletNotifier
from billsage.models import BillStatus
from billsage.services.calendar import DaySummary
from billsage.services.notifications import BillNotification

from .conftest import TODAY


class FakePage:
    def __init__(self):
        self.banner = None
        self.updates = 0

    def update(self):
        self.updates += 1


def _summary(**overrides):
    values = dict(
        day=date(2025, 10, 15),
        all_paid=False,
        has_payment_arrangement=False,
        item_count=0,
        total_amount=Decimal("0"),
    )
    values.update(overrides)
    return DaySummary(**values)


def test_cell_total_rounds_to_whole_dollars():
    assert format_cell_total(Decimal("0")) == ""
    assert format_cell_total(Decimal("42.50")) == "$43"
    assert format_cell_total(Decimal("1234.49")) == "$1,234"


def test_paid_badge_wins_over_pa_marker():
    assert cell_marker(_summary(all_paid=True, item_count=1)) == "✓"
    assert cell_marker(_summary(has_payment_arrangement=True, item_count=2)) == "PA"
    assert cell_marker(_summary()) == ""


def test_cell_lines():
    summary = _summary(item_count=2, total_amount=Decimal("75.25"), has_payment_arrangement=True)

    assert cell_lines(summary) == ["15", "PA", "2 items", "$75"]
    assert cell_lines(_summary()) == ["15"]


def test_notifier_without_page_denies_permission():
    assert FletNotifier().request_permission() is False


def test_notifier_replaces_banner_with_same_tag():
    page = FakePage()
    notifier = FletNotifier(page)
    first = BillNotification(title="Upcoming Bill", body="Rent due in 3 days - $10.00", tag="bill-1")
    second = BillNotification(title="Bill Due Tomorrow", body="Rent - $10.00", tag="bill-1")

    notifier.show(first)
    old_banner = page.banner
    notifier.show(second)

    assert old_banner.open is False
    assert page.banner is notifier.shown["bill-1"]
    assert page.banner.open is True
    assert list(notifier.shown) == ["bill-1"]
    assert page.updates == 2


def test_notifier_dismiss():
    page = FakePage()
    notifier = FletNotifier(page)
    notifier.show(BillNotification(title="Bill Due Today!", body="Gas - $5.00", tag="bill-2"))

    notifier.dismiss("bill-2")

    assert notifier.shown == {}
    assert page.banner.open is False


@pytest.fixture
def screen(ctx, user_session):
    screen = CalendarScreen(ctx, FakePage(), user_session)
    screen.build()
    return screen


def test_rejected_add_keeps_typed_values(screen):
    screen.description_field.value = "Rent"
    screen.amount_field.value = "abc"

    screen.add_bill()

    assert screen.description_field.value == "Rent"
    assert screen.amount_field.value == "abc"
    assert screen.page.snack_bar.open is True
    assert screen.ctx.day_detail.load_day(screen.session, TODAY).bills == []


def test_successful_add_clears_form_and_shows_note(screen):
    screen.description_field.value = "Rent"
    screen.amount_field.value = "1200"
    screen.note_field.value = "Pay at the office"

    screen.add_bill()

    assert screen.description_field.value == ""
    assert screen.amount_field.value == ""
    assert screen.note_field.value == ""
    bills = screen.ctx.day_detail.load_day(screen.session, TODAY).bills
    assert [(b.description, b.note) for b in bills] == [("Rent", "Pay at the office")]
    assert "Pay at the office" in screen.bill_list.controls[0].subtitle.value


def test_set_payment_arrangement_from_day_panel(screen, bill_factory):
    bill = bill_factory()
    screen.pa_date_field.value = "2025-10-30"

    screen.set_payment_arrangement(bill.id)

    stored = screen.ctx.bill_repo.get_by_id(bill.id, user_id=screen.session.user_id)
    assert stored.status == BillStatus.PAYMENT_ARRANGEMENT
    assert stored.pa_date == date(2025, 10, 30)
    assert screen.pa_date_field.value == ""


def test_invalid_pa_date_is_kept_for_correction(screen, bill_factory):
    bill = bill_factory()
    screen.pa_date_field.value = "next week"

    screen.set_payment_arrangement(bill.id)

    assert screen.pa_date_field.value == "next week"
    stored = screen.ctx.bill_repo.get_by_id(bill.id, user_id=screen.session.user_id)
    assert stored.status == BillStatus.UNPAID
