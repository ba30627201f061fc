"""Tests for mastery level rules and review scheduling."""

from datetime import datetime, timedelta

import pytest

from periodic_progress.learning.mastery import (
    apply_answer,
    apply_view,
    next_mastery_level,
    next_review_interval,
)
from periodic_progress.models.progress import LearningState, MasteryLevel

NOW = datetime(2026, 3, 10, 9, 30)


@pytest.mark.parametrize(
    ("correct", "wrong", "seen", "expected"),
    [
        (5, 1, 0, MasteryLevel.MASTERED),  # 83.3%
        (5, 2, 0, MasteryLevel.PRACTICING),  # 71.4%, fails the 80% bound
        (3, 2, 0, MasteryLevel.PRACTICING),  # exactly 60%
        (3, 3, 1, MasteryLevel.LEARNING),  # 50%
        (0, 0, 0, MasteryLevel.NEW),
        (4, 1, 0, MasteryLevel.PRACTICING),  # 80% but too few correct for mastered
        (8, 2, 0, MasteryLevel.MASTERED),  # exactly 80%
        (2, 0, 3, MasteryLevel.LEARNING),
        (2, 0, 0, MasteryLevel.NEW),
    ],
)
def test_next_mastery_level_boundaries(correct, wrong, seen, expected):
    assert next_mastery_level(correct, wrong, seen) == expected


def test_next_mastery_level_is_deterministic():
    results = {next_mastery_level(5, 2, 4) for _ in range(10)}
    assert results == {MasteryLevel.PRACTICING}


def test_review_intervals():
    assert next_review_interval(MasteryLevel.NEW) == timedelta(0)
    assert next_review_interval(MasteryLevel.LEARNING) == timedelta(days=1)
    assert next_review_interval(MasteryLevel.PRACTICING) == timedelta(days=3)
    assert next_review_interval(MasteryLevel.MASTERED) == timedelta(days=7)


class TestApplyView:
    def test_increments_seen_and_sets_review_time(self):
        state = apply_view(LearningState(), NOW)
        assert state.times_seen == 1
        assert state.last_reviewed_at == NOW

    def test_does_not_change_mastery(self):
        state = apply_view(LearningState(), NOW)
        assert state.mastery_level == MasteryLevel.NEW

    def test_input_left_untouched(self):
        original = LearningState()
        apply_view(original, NOW)
        assert original.times_seen == 0


class TestApplyAnswer:
    def test_correct_answer_after_view(self):
        state = apply_answer(apply_view(LearningState(), NOW), True, NOW)
        assert state.times_correct == 1
        assert state.times_wrong == 0
        assert state.mastery_level == MasteryLevel.LEARNING
        assert state.next_review_at == NOW + timedelta(days=1)

    def test_wrong_answer_without_view_stays_new(self):
        state = apply_answer(LearningState(), False, NOW)
        assert state.times_wrong == 1
        assert state.mastery_level == MasteryLevel.NEW
        assert state.next_review_at == NOW

    def test_reaches_mastered_after_five_correct(self):
        state = LearningState()
        for _ in range(5):
            state = apply_answer(state, True, NOW)
        assert state.mastery_level == MasteryLevel.MASTERED
        assert state.next_review_at == NOW + timedelta(days=7)

    def test_drops_back_when_accuracy_falls(self):
        state = LearningState(times_seen=2, times_correct=5, times_wrong=1)
        state = apply_answer(state, False, NOW)  # 5/7 = 71.4%
        assert state.mastery_level == MasteryLevel.PRACTICING
        assert state.next_review_at == NOW + timedelta(days=3)
