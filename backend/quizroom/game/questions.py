from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Sequence

from .models import QuizQuestion

logger = logging.getLogger(__name__)

QuestionSource = Callable[[], Sequence[QuizQuestion]]


DEFAULT_QUESTIONS: tuple[QuizQuestion, ...] = (
    QuizQuestion(
        text="What year is it today?",
        choices=("2024", "2025", "2026", "2027"),
        correct_index=2,
        time_limit_seconds=15,
    ),
    QuizQuestion(
        text="Which one is a fruit?",
        choices=("Carrot", "Apple", "Celery", "Potato"),
        correct_index=1,
        time_limit_seconds=12,
    ),
    QuizQuestion(
        text="2 + 2 = ?",
        choices=("3", "4", "5", "22"),
        correct_index=1,
        time_limit_seconds=10,
    ),
)


def default_questions() -> Sequence[QuizQuestion]:
    return DEFAULT_QUESTIONS


def _require_int(data: dict, key: str) -> int:
    value = data[key]
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def question_from_dict(data: dict) -> QuizQuestion:
    return QuizQuestion(
        text=str(data["text"]),
        choices=tuple(str(c) for c in data["choices"]),
        correct_index=_require_int(data, "correctIndex"),
        time_limit_seconds=_require_int(data, "timeLimitSeconds"),
    )


def load_questions(path: str | Path) -> tuple[QuizQuestion, ...]:
    """Read a question set from a JSON file.

    The file holds either a list of questions or ``{"questions": [...]}``,
    each question shaped like
    ``{"text", "choices", "correctIndex", "timeLimitSeconds"}``.
    Malformed files raise ``ValueError``.
    """
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)

    if isinstance(raw, dict):
        raw = raw.get("questions")
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a list of questions")

    try:
        questions = tuple(question_from_dict(q) for q in raw)
    except (KeyError, TypeError) as exc:
        raise ValueError(f"{path}: malformed question ({exc})") from exc

    logger.info("Loaded %d questions from %s", len(questions), path)
    return questions


def file_question_source(path: str | Path) -> QuestionSource:
    questions = load_questions(path)
    return lambda: questions
