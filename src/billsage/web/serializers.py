"""JSON shapes for API responses."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..errors import PreconditionError
from ..models import Bill, ChatMessage, Goal
from ..services.calendar import DaySummary, MonthView
from ..services.day_detail import DayDetail
from ..services.goals import GoalBoard


def _money(value: Optional[Decimal]) -> Optional[float]:
    return None if value is None else float(value)


def _iso(value: Optional[date]) -> Optional[str]:
    return None if value is None else value.isoformat()


def parse_date(raw: Any, field: str = "date") -> date:
    if not isinstance(raw, str) or not raw.strip():
        raise PreconditionError(f"{field} is required")
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise PreconditionError(f"{field} must be an ISO date (YYYY-MM-DD)") from exc


def parse_optional_date(raw: Any, field: str) -> Optional[date]:
    if raw in (None, ""):
        return None
    return parse_date(raw, field)


def bill_to_dict(bill: Bill) -> dict[str, Any]:
    return {
        "id": bill.id,
        "date": _iso(bill.due_date),
        "description": bill.description,
        "amount": _money(bill.amount),
        "type": bill.type,
        "status": bill.status,
        "note": bill.note,
        "pa_date": _iso(bill.pa_date),
    }


def day_detail_to_dict(detail: DayDetail) -> dict[str, Any]:
    return {
        "date": detail.day.isoformat(),
        "bills": [bill_to_dict(b) for b in detail.bills],
        "total_bills": float(detail.total_bills),
        "total_income": float(detail.total_income),
    }


def day_summary_to_dict(summary: DaySummary) -> dict[str, Any]:
    return {
        "date": summary.day.isoformat(),
        "all_paid": summary.all_paid,
        "has_payment_arrangement": summary.has_payment_arrangement,
        "item_count": summary.item_count,
        "total_amount": float(summary.total_amount),
    }


def month_view_to_dict(view: MonthView) -> dict[str, Any]:
    return {
        "year": view.year,
        "month": view.month,
        "title": view.title,
        "leading_blanks": view.leading_blanks,
        "days": [day_summary_to_dict(d) for d in view.days],
    }


def goal_to_dict(goal: Goal) -> dict[str, Any]:
    return {
        "id": goal.id,
        "goal": goal.goal,
        "target_amount": _money(goal.target_amount),
        "target_date": _iso(goal.target_date),
        "priority": goal.priority,
        "status": goal.status,
    }


def goal_board_to_dict(board: GoalBoard) -> dict[str, Any]:
    return {
        "active": [goal_to_dict(g) for g in board.active],
        "completed": [goal_to_dict(g) for g in board.completed],
    }


def chat_message_to_dict(message: ChatMessage) -> dict[str, Any]:
    return {
        "id": message.id,
        "message": message.message,
        "role": message.role,
        "created_at": message.created_at.isoformat(),
    }
