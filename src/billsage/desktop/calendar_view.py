"""Month calendar and day editor."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ..errors import BillSageError
from ..logging_config import get_logger
from ..models.bill import Bill, BillStatus, BillType
from ..services.calendar import DaySummary, MonthView, next_month, previous_month

if TYPE_CHECKING:
    from ..context import AppContext, UserSession
    from ..services.day_detail import DayDetail

logger = get_logger("desktop.calendar")

PAID_BADGE = "✓"
PA_MARKER = "PA"


def format_cell_total(amount: Decimal) -> str:
    """Whole-dollar total for a grid cell, blank when nothing is owed."""

    if amount <= 0:
        return ""
    whole = amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"${whole:,}"


def cell_marker(summary: DaySummary) -> str:
    if summary.show_paid_badge:
        return PAID_BADGE
    if summary.show_payment_arrangement_marker:
        return PA_MARKER
    return ""


def cell_lines(summary: DaySummary) -> list[str]:
    lines = [str(summary.day.day)]
    marker = cell_marker(summary)
    if marker:
        lines.append(marker)
    if summary.item_count:
        noun = "item" if summary.item_count == 1 else "items"
        lines.append(f"{summary.item_count} {noun}")
    total = format_cell_total(summary.total_amount)
    if total:
        lines.append(total)
    return lines


def bill_subtitle(bill: Bill) -> str:
    status = BillStatus(bill.status)
    text = f"{bill.type} · {status.value.replace('_', ' ')}"
    if status == BillStatus.PAYMENT_ARRANGEMENT and bill.pa_date:
        text = f"{text} ({bill.pa_date.isoformat()})"
    if bill.note:
        text = f"{text}\n{bill.note}"
    return text


def _cell_color(summary: DaySummary) -> Optional[str]:
    if summary.show_paid_badge:
        return ft.Colors.GREEN_100
    if summary.show_payment_arrangement_marker:
        return ft.Colors.AMBER_100
    if summary.item_count:
        return ft.Colors.BLUE_50
    return None


class CalendarScreen:
    """Month grid on the left, the selected day's bills and editor on the right."""

    def __init__(self, ctx: AppContext, page: ft.Page, session: UserSession):
        self.ctx = ctx
        self.page = page
        self.session = session

        today = ctx.clock()
        self.year = today.year
        self.month = today.month
        self.day = today

        self.title = ft.Text(size=22, weight=ft.FontWeight.BOLD)
        self.grid = ft.GridView(
            runs_count=7, max_extent=120, child_aspect_ratio=1.1, spacing=4, run_spacing=4, expand=True
        )
        self.day_title = ft.Text(size=18, weight=ft.FontWeight.BOLD)
        self.day_totals = ft.Text()
        self.bill_list = ft.Column(spacing=6, scroll=ft.ScrollMode.AUTO, expand=True)

        self.description_field = ft.TextField(label="Description", expand=True)
        self.amount_field = ft.TextField(label="Amount", width=120)
        self.type_field = ft.Dropdown(
            label="Type",
            width=140,
            value=BillType.BILL.value,
            options=[ft.dropdown.Option(t.value, t.value.title()) for t in BillType],
        )
        self.note_field = ft.TextField(label="Note", expand=True)
        self.pa_date_field = ft.TextField(label="PA date (YYYY-MM-DD)", width=200)

    def notify(self, message: str) -> None:
        self.page.snack_bar = ft.SnackBar(content=ft.Text(message))
        self.page.snack_bar.open = True
        self.page.update()

    def render_month(self, view: MonthView) -> None:
        self.title.value = view.title
        self.grid.controls.clear()
        for name in view.weekday_names:
            self.grid.controls.append(
                ft.Container(content=ft.Text(name, weight=ft.FontWeight.BOLD), alignment=ft.alignment.center)
            )
        for summary in view.cells():
            if summary is None:
                self.grid.controls.append(ft.Container())
                continue
            self.grid.controls.append(
                ft.Container(
                    content=ft.Column([ft.Text(line, size=12) for line in cell_lines(summary)], spacing=0),
                    bgcolor=_cell_color(summary),
                    border=ft.border.all(2 if summary.day == self.day else 1, ft.Colors.OUTLINE),
                    border_radius=6,
                    padding=6,
                    on_click=lambda _, d=summary.day: self.select_day(d),
                )
            )

    def render_day(self, detail: DayDetail) -> None:
        self.day_title.value = detail.day.strftime("%A, %B %d, %Y")
        self.day_totals.value = f"Bills: ${detail.total_bills:.2f}   Income: ${detail.total_income:.2f}"
        self.bill_list.controls.clear()
        if not detail.bills:
            self.bill_list.controls.append(ft.Text("Nothing scheduled for this day.", italic=True))
        for bill in detail.bills:
            amount = "" if bill.amount is None else f"${bill.amount:.2f}"
            self.bill_list.controls.append(
                ft.ListTile(
                    leading=ft.Checkbox(
                        value=bill.status == BillStatus.PAID,
                        on_change=lambda _, bid=bill.id: self.toggle_paid(bid),
                    ),
                    title=ft.Text(f"{bill.description} {amount}".strip()),
                    subtitle=ft.Text(bill_subtitle(bill)),
                    trailing=ft.Row(
                        [
                            ft.IconButton(
                                ft.Icons.EVENT_REPEAT,
                                tooltip="Set payment arrangement",
                                on_click=lambda _, bid=bill.id: self.set_payment_arrangement(bid),
                            ),
                            ft.IconButton(
                                ft.Icons.DELETE_OUTLINE,
                                tooltip="Delete",
                                on_click=lambda _, bid=bill.id: self.delete_bill(bid),
                            ),
                        ],
                        tight=True,
                        spacing=0,
                    ),
                )
            )

    def reload_month(self) -> None:
        self.render_month(self.ctx.calendar.load_month(self.session, self.year, self.month))

    def select_day(self, day: date) -> None:
        self.day = day
        self.render_day(self.ctx.day_detail.load_day(self.session, day))
        self.reload_month()
        self.page.update()

    def mutate(self, action: Callable[[], DayDetail]) -> bool:
        """Run a day mutation and re-render; return False when it was rejected."""

        try:
            detail = action()
        except BillSageError as exc:
            self.notify(str(exc))
            return False
        self.render_day(detail)
        self.reload_month()
        self.page.update()
        return True

    def add_bill(self, _=None) -> None:
        added = self.mutate(
            lambda: self.ctx.day_detail.add_item(
                self.session,
                self.day,
                self.description_field.value or "",
                amount=self.amount_field.value,
                type=self.type_field.value or BillType.BILL.value,
                note=self.note_field.value,
            )
        )
        if not added:
            return
        self.description_field.value = ""
        self.amount_field.value = ""
        self.note_field.value = ""
        self.page.update()

    def toggle_paid(self, bill_id: int) -> None:
        self.mutate(lambda: self.ctx.day_detail.toggle_paid(self.session, bill_id))

    def delete_bill(self, bill_id: int) -> None:
        self.mutate(lambda: self.ctx.day_detail.delete_item(self.session, bill_id))

    def set_payment_arrangement(self, bill_id: int) -> None:
        raw = (self.pa_date_field.value or "").strip()
        try:
            pa_date = date.fromisoformat(raw)
        except ValueError:
            self.notify("Enter the payment arrangement date as YYYY-MM-DD")
            return
        if self.mutate(
            lambda: self.ctx.day_detail.set_payment_arrangement_date(self.session, bill_id, pa_date)
        ):
            self.pa_date_field.value = ""
            self.page.update()

    def shift_month(self, step: int) -> None:
        mover = next_month if step > 0 else previous_month
        self.year, self.month = mover(self.year, self.month)
        logger.info("Month changed", extra={"year": self.year, "month": self.month})
        self.reload_month()
        self.page.update()

    def build(self) -> ft.Control:
        header = ft.Row(
            [
                ft.IconButton(ft.Icons.CHEVRON_LEFT, tooltip="Previous month", on_click=lambda _: self.shift_month(-1)),
                self.title,
                ft.IconButton(ft.Icons.CHEVRON_RIGHT, tooltip="Next month", on_click=lambda _: self.shift_month(1)),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
        )
        day_panel = ft.Container(
            width=420,
            padding=12,
            content=ft.Column(
                [
                    self.day_title,
                    self.day_totals,
                    ft.Divider(),
                    self.bill_list,
                    self.pa_date_field,
                    ft.Divider(),
                    ft.Row([self.description_field]),
                    ft.Row([self.note_field]),
                    ft.Row(
                        [
                            self.amount_field,
                            self.type_field,
                            ft.FilledButton("Add", icon=ft.Icons.ADD, on_click=self.add_bill),
                        ]
                    ),
                ],
                expand=True,
            ),
        )

        self.reload_month()
        self.render_day(self.ctx.day_detail.load_day(self.session, self.day))
        return ft.Row(
            [ft.Column([header, self.grid], expand=True), ft.VerticalDivider(width=1), day_panel],
            expand=True,
        )


def build_calendar_view(ctx: AppContext, page: ft.Page, session: UserSession) -> ft.Control:
    """Build the calendar screen for ``session``."""

    return CalendarScreen(ctx, page, session).build()


__all__ = [
    "CalendarScreen",
    "bill_subtitle",
    "build_calendar_view",
    "cell_lines",
    "cell_marker",
    "format_cell_total",
]
