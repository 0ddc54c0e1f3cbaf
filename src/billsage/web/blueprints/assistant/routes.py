"""Assistant endpoint: ``{message}`` in, ``{reply}`` or ``{error}`` out."""

from __future__ import annotations

from flask import jsonify, request

from ...security import current_context, current_session, require_session
from ...serializers import chat_message_to_dict
from . import bp


@bp.get("/history")
@require_session
def history():
    messages = current_context().chat.load_history(current_session())
    return jsonify({"messages": [chat_message_to_dict(m) for m in messages]})


@bp.post("")
@require_session
def send_message():
    payload = request.get_json(silent=True) or {}
    message = payload.get("message")
    if not isinstance(message, str) or not message.strip():
        return jsonify({"error": "Message is required"}), 400

    turn = current_context().chat.send_message(current_session(), message)
    if turn.ok:
        return jsonify({"reply": turn.reply})
    return jsonify({"error": turn.error}), 500
