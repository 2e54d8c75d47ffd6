from __future__ import annotations

import logging
from typing import Any

from flask import request
from flask_socketio import SocketIO, close_room, emit, join_room

from ..game.codes import normalize_room_code
from ..game.engine import GameEngine
from ..game.errors import ErrorKind, GameError
from ..game.models import Room, scoreboard_payload
from . import events

logger = logging.getLogger(__name__)


def _payload(data: Any) -> dict:
    return data if isinstance(data, dict) else {}


def _parse_answer_index(raw: Any) -> int:
    # Only JSON integers; floats and numeric strings are not indexes.
    # bool is an int subclass, so true/false are excluded explicitly.
    if not isinstance(raw, int) or isinstance(raw, bool):
        raise GameError(ErrorKind.INVALID_ANSWER)
    return raw


def register_socketio_handlers(socketio: SocketIO, engine: GameEngine) -> None:
    registry = engine.registry

    def _fail(error_event: str, err: GameError) -> dict:
        logger.debug("%s rejected for %s: %s", error_event, request.sid, err.kind.value)
        payload = err.to_payload()
        emit(error_event, payload)
        return payload

    def _broadcast_players(room: Room) -> None:
        socketio.emit(
            events.PLAYERS_UPDATED,
            scoreboard_payload(engine.get_scoreboard(room)),
            to=room.code,
        )

    def _host_room(data: Any, action: str) -> Room:
        room = registry.require_room(normalize_room_code(_payload(data).get("roomCode")))
        engine.require_host(room, request.sid, action)
        return room

    @socketio.on(events.ROOM_CREATE)
    def room_create(data=None):
        room = registry.create_room(request.sid)
        join_room(room.code)
        emit(events.ROOM_CREATED, {"roomCode": room.code})
        return {"ok": True, "roomCode": room.code}

    @socketio.on(events.ROOM_JOIN)
    def room_join(data=None):
        payload = _payload(data)
        room_code = normalize_room_code(payload.get("roomCode"))
        name = payload.get("name")

        try:
            registry.join_room(room_code, request.sid, name if isinstance(name, str) else "")
            room = registry.require_room(room_code)
        except GameError as err:
            return _fail(events.ROOM_ERROR, err)

        join_room(room.code)
        _broadcast_players(room)
        emit(events.ROOM_JOINED, {"roomCode": room.code})
        return {"ok": True}

    @socketio.on(events.GAME_START)
    def game_start(data=None):
        try:
            room = _host_room(data, "start")
            started = engine.start_game(room)
        except GameError as err:
            return _fail(events.GAME_ERROR, err)

        socketio.emit(events.QUESTION_STARTED, started.to_payload(), to=room.code)
        return {"ok": True}

    @socketio.on(events.ANSWER_SUBMIT)
    def answer_submit(data=None):
        payload = _payload(data)
        try:
            room = registry.require_room(normalize_room_code(payload.get("roomCode")))
            answer_index = _parse_answer_index(payload.get("answerIndex"))
            engine.submit_answer(room, request.sid, answer_index)
        except GameError as err:
            return _fail(events.GAME_ERROR, err)

        _broadcast_players(room)
        emit(events.ANSWER_ACCEPTED)
        return {"ok": True}

    @socketio.on(events.GAME_REVEAL)
    def game_reveal(data=None):
        try:
            room = _host_room(data, "reveal")
            result = engine.reveal_answers(room)
        except GameError as err:
            return _fail(events.GAME_ERROR, err)

        socketio.emit(events.ROUND_ENDED, result.to_payload(), to=room.code)
        socketio.emit(events.PLAYERS_UPDATED, scoreboard_payload(result.scoreboard), to=room.code)
        return {"ok": True}

    @socketio.on(events.GAME_NEXT)
    def game_next(data=None):
        try:
            room = _host_room(data, "advance")
        except GameError as err:
            return _fail(events.GAME_ERROR, err)

        try:
            started = engine.next_question(room)
        except GameError as err:
            if err.kind is not ErrorKind.GAME_ENDED:
                return _fail(events.GAME_ERROR, err)
            final_scores = engine.get_scoreboard(room)
            socketio.emit(events.GAME_ENDED, {"scoreboard": scoreboard_payload(final_scores)}, to=room.code)
            return {"ok": True, "done": True}

        socketio.emit(events.QUESTION_STARTED, started.to_payload(), to=room.code)
        return {"ok": True}

    @socketio.on(events.ROOM_END)
    def room_end(data=None):
        try:
            room = _host_room(data, "end")
        except GameError as err:
            return _fail(events.ROOM_ERROR, err)

        final_scores = engine.end_room(room)
        socketio.emit(events.GAME_ENDED, {"scoreboard": scoreboard_payload(final_scores)}, to=room.code)
        close_room(room.code)
        return {"ok": True}

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        for departure in registry.leave_room(request.sid):
            if departure.room_closed:
                socketio.emit(events.ROOM_CLOSED, {"roomCode": departure.code}, to=departure.code)
                close_room(departure.code)
                continue

            room = registry.get_room(departure.code)
            if room is not None:
                _broadcast_players(room)
