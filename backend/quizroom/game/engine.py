from __future__ import annotations

import logging
import time
from typing import Callable

from .errors import ErrorKind, GameError
from .models import QuestionStarted, QuizQuestion, RevealResult, Room, ScoreboardEntry
from .registry import RoomRegistry
from .scoring import points_for_answer

logger = logging.getLogger(__name__)


HOST_ACTION_MESSAGES = {
    "start": "Only host can start",
    "reveal": "Only host can reveal",
    "advance": "Only host can advance",
    "end": "Only host can end",
}


class GameEngine:
    """Question flow and scoring for rooms held by a :class:`RoomRegistry`.

    Every operation runs under ``room.lock`` for its whole duration, so calls
    on one room are atomic with respect to each other. Time limits only feed
    the scoring bonus; nothing closes a question except :meth:`reveal_answers`.
    """

    def __init__(self, registry: RoomRegistry, clock: Callable[[], float] = time.monotonic) -> None:
        self.registry = registry
        self._clock = clock

    def require_host(self, room: Room, connection_id: str, action: str) -> None:
        if room.host_connection_id != connection_id:
            raise GameError(ErrorKind.NOT_HOST, HOST_ACTION_MESSAGES.get(action))

    def current_question(self, room: Room) -> QuizQuestion | None:
        with room.lock:
            return room.current_question

    def start_game(self, room: Room) -> QuestionStarted:
        # Starting again mid-game rewinds to the first question; scores stay.
        with room.lock:
            if not room.questions:
                raise GameError(ErrorKind.NO_QUESTIONS)

            room.current_question_index = 0
            room.ended = False
            started = self._begin_question_locked(room)

        logger.info("Game started in room %s (%d questions)", room.code, len(room.questions))
        return started

    def next_question(self, room: Room) -> QuestionStarted:
        with room.lock:
            next_index = room.current_question_index + 1
            if next_index >= len(room.questions):
                room.question_active = False
                room.ended = True
                logger.info("Game ended in room %s", room.code)
                raise GameError(ErrorKind.GAME_ENDED)

            room.current_question_index = next_index
            return self._begin_question_locked(room)

    def _begin_question_locked(self, room: Room) -> QuestionStarted:
        question = room.questions[room.current_question_index]
        room.question_started_at = self._clock()
        room.question_active = True

        for player in room.players.values():
            player.has_answered_current_question = False
            player.last_answer_index = None

        return QuestionStarted(
            question=question,
            question_number=room.current_question_index + 1,
            total_questions=len(room.questions),
        )

    def submit_answer(self, room: Room, connection_id: str, answer_index: int) -> None:
        with room.lock:
            if not room.question_active:
                raise GameError(ErrorKind.QUESTION_NOT_ACTIVE)

            question = room.current_question
            if question is None:
                raise GameError(ErrorKind.NO_CURRENT_QUESTION)

            player = room.players.get(connection_id)
            if player is None:
                raise GameError(ErrorKind.PLAYER_NOT_IN_ROOM)

            if player.has_answered_current_question:
                raise GameError(ErrorKind.ALREADY_ANSWERED)

            if not 0 <= answer_index < len(question.choices):
                raise GameError(ErrorKind.INVALID_ANSWER)

            # Scored later, at reveal.
            player.last_answer_index = answer_index
            player.has_answered_current_question = True

    def reveal_answers(self, room: Room) -> RevealResult:
        """Close the active question and award points.

        Every correct player is scored against the elapsed time at reveal,
        not at their own submission. A second reveal on a closed question
        returns the same result without scoring again.
        """
        with room.lock:
            question = room.current_question
            if question is None:
                raise GameError(ErrorKind.NO_CURRENT_QUESTION)

            if not room.question_active:
                return RevealResult(question.correct_index, self.get_scoreboard(room))

            room.question_active = False

            now = self._clock()
            started_at = room.question_started_at if room.question_started_at is not None else now
            elapsed = now - started_at

            for player in room.players.values():
                if not player.has_answered_current_question or player.last_answer_index is None:
                    continue
                correct = player.last_answer_index == question.correct_index
                player.score += points_for_answer(correct, question.time_limit_seconds, elapsed)

            scoreboard = self.get_scoreboard(room)
            number = room.current_question_index + 1

        logger.info(
            "Question %d revealed in room %s after %.1fs",
            number,
            room.code,
            elapsed,
        )
        return RevealResult(question.correct_index, scoreboard)

    def get_scoreboard(self, room: Room) -> list[ScoreboardEntry]:
        with room.lock:
            entries = [
                ScoreboardEntry(
                    name=p.name,
                    score=p.score,
                    answered=p.has_answered_current_question,
                    last_answer_index=p.last_answer_index,
                )
                for p in room.players.values()
            ]
        return sorted(entries, key=lambda e: (-e.score, e.name.lower()))

    def end_room(self, room: Room) -> list[ScoreboardEntry]:
        final_scores = self.get_scoreboard(room)
        self.registry.remove_room(room.code)
        return final_scores
