from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Expected, user-facing failures of room and game actions."""

    ROOM_NOT_FOUND = "room_not_found"
    INVALID_NAME = "invalid_name"
    NAME_TAKEN = "name_taken"
    ALREADY_IN_ROOM = "already_in_room"
    NOT_HOST = "not_host"
    NO_QUESTIONS = "no_questions"
    QUESTION_NOT_ACTIVE = "question_not_active"
    NO_CURRENT_QUESTION = "no_current_question"
    PLAYER_NOT_IN_ROOM = "player_not_in_room"
    ALREADY_ANSWERED = "already_answered"
    INVALID_ANSWER = "invalid_answer"
    GAME_ENDED = "game_ended"


DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.ROOM_NOT_FOUND: "Room not found",
    ErrorKind.INVALID_NAME: "Name must be 1-24 characters",
    ErrorKind.NAME_TAKEN: "That name is already taken in this room",
    ErrorKind.ALREADY_IN_ROOM: "You already joined this room",
    ErrorKind.NOT_HOST: "Only the host can do that",
    ErrorKind.NO_QUESTIONS: "No questions",
    ErrorKind.QUESTION_NOT_ACTIVE: "Question is not active",
    ErrorKind.NO_CURRENT_QUESTION: "No current question",
    ErrorKind.PLAYER_NOT_IN_ROOM: "Player not in room",
    ErrorKind.ALREADY_ANSWERED: "Already answered",
    ErrorKind.INVALID_ANSWER: "Invalid answer",
    ErrorKind.GAME_ENDED: "Game has ended",
}


class GameError(Exception):
    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"ok": False, "error": self.kind.value, "message": self.message}
