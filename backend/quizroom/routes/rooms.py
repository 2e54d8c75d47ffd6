from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..game.models import scoreboard_payload

bp = Blueprint("rooms", __name__)


@bp.get("/rooms/<code>")
def get_room(code: str):
    # Rooms are created over Socket.IO so the host connection owns them;
    # this route only lets the join screen check a code before connecting.
    engine = current_app.extensions["quizroom"]
    room = engine.registry.get_room(code)
    if not room:
        return jsonify({"error": "room_not_found"}), 404

    with room.lock:
        payload = {
            "code": room.code,
            "phase": room.phase.value,
            "questionNumber": room.current_question_index + 1,
            "totalQuestions": len(room.questions),
            "players": scoreboard_payload(engine.get_scoreboard(room)),
        }
    return jsonify(payload)
