"""Calendar month grid, day detail and bill mutation routes.

Every mutation answers with the reloaded day, never a locally patched one.
"""

from __future__ import annotations

from flask import jsonify, request

from ....models.bill import BillType
from ...security import current_context, current_session, require_session
from ...serializers import (
    day_detail_to_dict,
    month_view_to_dict,
    parse_date,
    parse_optional_date,
)
from . import bp


@bp.get("/calendar/<int:year>/<int:month>")
@require_session
def month(year: int, month: int):
    view = current_context().calendar.load_month(current_session(), year, month)
    return jsonify(month_view_to_dict(view))


@bp.get("/days/<iso_date>/bills")
@require_session
def day_bills(iso_date: str):
    detail = current_context().day_detail.load_day(current_session(), parse_date(iso_date))
    return jsonify(day_detail_to_dict(detail))


@bp.post("/days/<iso_date>/bills")
@require_session
def add_bill(iso_date: str):
    payload = request.get_json(silent=True) or {}
    detail = current_context().day_detail.add_item(
        current_session(),
        parse_date(iso_date),
        description=str(payload.get("description") or ""),
        amount=payload.get("amount"),
        type=payload.get("type") or BillType.BILL.value,
        note=payload.get("note"),
    )
    return jsonify(day_detail_to_dict(detail)), 201


@bp.post("/bills/<int:bill_id>/toggle-paid")
@require_session
def toggle_paid(bill_id: int):
    detail = current_context().day_detail.toggle_paid(current_session(), bill_id)
    return jsonify(day_detail_to_dict(detail))


@bp.post("/bills/<int:bill_id>/status")
@require_session
def set_status(bill_id: int):
    payload = request.get_json(silent=True) or {}
    detail = current_context().day_detail.set_status(
        current_session(),
        bill_id,
        str(payload.get("status") or ""),
        pa_date=parse_optional_date(payload.get("pa_date"), "pa_date"),
    )
    return jsonify(day_detail_to_dict(detail))


@bp.post("/bills/<int:bill_id>/payment-arrangement")
@require_session
def set_payment_arrangement(bill_id: int):
    payload = request.get_json(silent=True) or {}
    detail = current_context().day_detail.set_payment_arrangement_date(
        current_session(), bill_id, parse_date(payload.get("pa_date"), "pa_date")
    )
    return jsonify(day_detail_to_dict(detail))


@bp.delete("/bills/<int:bill_id>")
@require_session
def delete_bill(bill_id: int):
    detail = current_context().day_detail.delete_item(current_session(), bill_id)
    return jsonify(day_detail_to_dict(detail))
