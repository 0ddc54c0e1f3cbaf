"""Goal routes."""

from __future__ import annotations

from flask import jsonify, request

from ....models.goal import GoalPriority
from ...security import current_context, current_session, require_session
from ...serializers import goal_board_to_dict, parse_optional_date
from . import bp


@bp.get("")
@require_session
def list_goals():
    board = current_context().goals.list_goals(current_session())
    return jsonify(goal_board_to_dict(board))


@bp.post("")
@require_session
def add_goal():
    payload = request.get_json(silent=True) or {}
    board = current_context().goals.add_goal(
        current_session(),
        str(payload.get("goal") or ""),
        target_amount=payload.get("target_amount"),
        target_date=parse_optional_date(payload.get("target_date"), "target_date"),
        priority=payload.get("priority", GoalPriority.LOW.value),
    )
    return jsonify(goal_board_to_dict(board)), 201


@bp.post("/<int:goal_id>/toggle")
@require_session
def toggle_goal(goal_id: int):
    board = current_context().goals.toggle_status(current_session(), goal_id)
    return jsonify(goal_board_to_dict(board))


@bp.delete("/<int:goal_id>")
@require_session
def delete_goal(goal_id: int):
    board = current_context().goals.delete_goal(current_session(), goal_id)
    return jsonify(goal_board_to_dict(board))
