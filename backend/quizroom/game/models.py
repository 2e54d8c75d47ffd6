from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from threading import RLock


class RoomPhase(str, Enum):
    NOT_STARTED = "not_started"
    QUESTION_ACTIVE = "question_active"
    QUESTION_CLOSED = "question_closed"
    ENDED = "ended"


@dataclass(frozen=True)
class QuizQuestion:
    text: str
    choices: tuple[str, ...]
    correct_index: int
    time_limit_seconds: int

    def __post_init__(self) -> None:
        # Accept any sequence of choices but store an immutable tuple.
        object.__setattr__(self, "choices", tuple(self.choices))
        if len(self.choices) < 2:
            raise ValueError("a question needs at least two choices")
        if not 0 <= self.correct_index < len(self.choices):
            raise ValueError(f"correct_index {self.correct_index} out of range")
        if self.time_limit_seconds <= 0:
            raise ValueError("time_limit_seconds must be positive")


@dataclass
class PlayerState:
    connection_id: str
    name: str
    score: int = 0
    last_answer_index: int | None = None
    has_answered_current_question: bool = False


@dataclass
class Room:
    code: str
    host_connection_id: str
    questions: tuple[QuizQuestion, ...] = ()
    current_question_index: int = -1
    question_started_at: float | None = None
    question_active: bool = False
    ended: bool = False
    players: dict[str, PlayerState] = field(default_factory=dict)
    lock: RLock = field(default_factory=RLock, repr=False, compare=False)

    @property
    def current_question(self) -> QuizQuestion | None:
        if 0 <= self.current_question_index < len(self.questions):
            return self.questions[self.current_question_index]
        return None

    @property
    def phase(self) -> RoomPhase:
        if self.ended:
            return RoomPhase.ENDED
        if self.current_question_index < 0:
            return RoomPhase.NOT_STARTED
        if self.question_active:
            return RoomPhase.QUESTION_ACTIVE
        return RoomPhase.QUESTION_CLOSED


@dataclass(frozen=True)
class ScoreboardEntry:
    name: str
    score: int
    answered: bool
    last_answer_index: int | None

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "score": self.score,
            "answered": self.answered,
            "lastAnswerIndex": self.last_answer_index,
        }


def scoreboard_payload(entries: list[ScoreboardEntry]) -> list[dict]:
    return [e.to_payload() for e in entries]


@dataclass(frozen=True)
class QuestionStarted:
    question: QuizQuestion
    question_number: int
    total_questions: int

    def to_payload(self) -> dict:
        # correct_index stays on the server until reveal.
        return {
            "text": self.question.text,
            "choices": list(self.question.choices),
            "timeLimitSeconds": self.question.time_limit_seconds,
            "questionNumber": self.question_number,
            "totalQuestions": self.total_questions,
        }


@dataclass(frozen=True)
class RevealResult:
    correct_index: int
    scoreboard: list[ScoreboardEntry]

    def to_payload(self) -> dict:
        return {
            "correctIndex": self.correct_index,
            "scoreboard": scoreboard_payload(self.scoreboard),
        }


@dataclass(frozen=True)
class Departure:
    code: str
    room_closed: bool
