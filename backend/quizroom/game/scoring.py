from __future__ import annotations

BASE_POINTS = 500
TIME_BONUS_PER_SECOND = 10


def time_remaining(time_limit_seconds: float, elapsed_seconds: float) -> float:
    return max(0.0, time_limit_seconds - max(0.0, elapsed_seconds))


def points_for_answer(correct: bool, time_limit_seconds: float, elapsed_seconds: float) -> int:
    """Points for one answer: base plus a bonus for the time left on the clock.

    The bonus is rounded with Python's ``round`` (ties go to the even integer).
    """
    if not correct:
        return 0
    remaining = time_remaining(time_limit_seconds, elapsed_seconds)
    return BASE_POINTS + round(remaining * TIME_BONUS_PER_SECOND)
