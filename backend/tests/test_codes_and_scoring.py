import pytest

from quizroom.game import codes
from quizroom.game.codes import (
    ROOM_CODE_ALPHABET,
    ROOM_CODE_ATTEMPTS,
    generate_room_code,
    normalize_room_code,
)
from quizroom.game.scoring import points_for_answer, time_remaining


# ---------------------------------------------------------------------------
# Room codes
# ---------------------------------------------------------------------------

class TestRoomCodes:
    def test_alphabet_has_no_ambiguous_characters(self):
        for ch in "01OI":
            assert ch not in ROOM_CODE_ALPHABET
        assert len(set(ROOM_CODE_ALPHABET)) == len(ROOM_CODE_ALPHABET)

    def test_code_is_four_characters_from_alphabet(self):
        for _ in range(200):
            code = generate_room_code(set())
            assert len(code) == 4
            assert all(ch in ROOM_CODE_ALPHABET for ch in code)

    def test_collision_retries_then_falls_back_to_six(self, monkeypatch):
        calls = []

        def always_a(alphabet):
            calls.append(alphabet)
            return "A"

        monkeypatch.setattr(codes.secrets, "choice", always_a)
        code = generate_room_code({"AAAA"})

        assert code == "AAAAAA"
        assert len(calls) == ROOM_CODE_ATTEMPTS * 4 + 6

    def test_collision_check_is_case_insensitive(self, monkeypatch):
        monkeypatch.setattr(codes.secrets, "choice", lambda alphabet: "B")
        assert generate_room_code(["bbbb"]) == "BBBBBB"

    def test_returns_first_free_code(self, monkeypatch):
        letters = iter("CCCC" + "DDDD")
        monkeypatch.setattr(codes.secrets, "choice", lambda alphabet: next(letters))
        assert generate_room_code({"CCCC"}) == "DDDD"

    @pytest.mark.parametrize("raw,expected", [
        ("  abcd ", "ABCD"),
        ("XyZ2", "XYZ2"),
        ("", ""),
        (None, ""),
        (1234, "1234"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_room_code(raw) == expected


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

class TestScoring:
    def test_instant_correct_answer(self):
        assert points_for_answer(True, 15, 0) == 650

    def test_wrong_answer_scores_nothing(self):
        assert points_for_answer(False, 15, 0) == 0

    def test_bonus_shrinks_with_elapsed_time(self):
        assert points_for_answer(True, 15, 3) == 620
        assert points_for_answer(True, 10, 4.5) == 555

    def test_late_answer_keeps_base_points(self):
        assert points_for_answer(True, 15, 15) == 500
        assert points_for_answer(True, 15, 90) == 500

    def test_negative_elapsed_is_clamped(self):
        assert points_for_answer(True, 15, -5) == 650

    def test_bonus_rounds_half_to_even(self):
        # 0.25s left -> 2.5 bonus -> 2; 0.75s left -> 7.5 bonus -> 8
        assert points_for_answer(True, 10, 9.75) == 502
        assert points_for_answer(True, 10, 9.25) == 508

    def test_time_remaining_never_negative(self):
        assert time_remaining(10, 12) == 0.0
        assert time_remaining(10, 4) == 6.0
