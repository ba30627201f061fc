"""Smoke tests for progress models."""

import uuid
from datetime import datetime

import pytest
from pydantic import ValidationError

from periodic_progress.models.progress import (
    GameSession,
    GameStats,
    GameType,
    LearningState,
    MasteryLevel,
    UserProgress,
)


class TestUserProgress:
    def test_default_values(self):
        progress = UserProgress()
        assert progress.favorite_element_ids == set()
        assert progress.study_state == {}
        assert progress.sessions == []
        assert progress.current_streak_days == 0
        assert progress.best_streak_days == 0
        assert progress.last_study_date is None
        assert progress.total_study_minutes == 0
        assert progress.accuracy_percent == 0.0

    def test_accuracy_percent(self):
        progress = UserProgress(total_answers=8, total_correct_answers=6)
        assert progress.accuracy_percent == pytest.approx(75.0)

    def test_correct_cannot_exceed_total(self):
        with pytest.raises(ValidationError):
            UserProgress(total_answers=1, total_correct_answers=2)

    def test_negative_counters_rejected(self):
        with pytest.raises(ValidationError):
            UserProgress(total_study_minutes=-5)


class TestLearningState:
    def test_defaults(self):
        state = LearningState()
        assert state.mastery_level == MasteryLevel.NEW
        assert state.accuracy_percent == 0.0

    def test_accuracy(self):
        state = LearningState(times_correct=3, times_wrong=1)
        assert state.accuracy_percent == pytest.approx(75.0)


class TestGameSession:
    def test_defaults(self):
        session = GameSession(
            game_type=GameType.PAIRS,
            duration_seconds=90,
            correct_answers=8,
            total_answers=8,
            score=2400,
        )
        assert isinstance(session.id, uuid.UUID)
        assert isinstance(session.played_at, datetime)
        assert session.accuracy_percent == pytest.approx(100.0)

    def test_frozen(self):
        session = GameSession(
            game_type=GameType.QUIZ,
            duration_seconds=30,
            correct_answers=1,
            total_answers=2,
            score=100,
        )
        with pytest.raises(ValidationError):
            session.score = 5

    def test_unique_ids(self):
        kwargs = dict(game_type=GameType.BINGO, duration_seconds=0, correct_answers=0,
                      total_answers=0, score=0)
        assert GameSession(**kwargs).id != GameSession(**kwargs).id

    def test_correct_cannot_exceed_total(self):
        with pytest.raises(ValidationError):
            GameSession(
                game_type=GameType.QUIZ,
                duration_seconds=30,
                correct_answers=3,
                total_answers=2,
                score=100,
            )

    def test_zero_answers_accuracy(self):
        session = GameSession(
            game_type=GameType.BINGO,
            duration_seconds=10,
            correct_answers=0,
            total_answers=0,
            score=0,
        )
        assert session.accuracy_percent == 0.0


class TestEnums:
    def test_game_type_values(self):
        assert GameType.FAMILY_MAP == "familyMap"
        assert GameType.LIGHTNING_CHALLENGE == "lightningChallenge"
        assert len(GameType) == 7

    def test_estimated_minutes(self):
        assert GameType.FLASHCARDS.estimated_minutes == 10
        assert GameType.LIGHTNING_CHALLENGE.estimated_minutes == 1
        assert all(g.estimated_minutes > 0 for g in GameType)

    def test_mastery_values(self):
        assert [level.value for level in MasteryLevel] == [
            "new", "learning", "practicing", "mastered",
        ]


def test_game_stats_defaults():
    stats = GameStats()
    assert stats.plays == 0
    assert stats.average_accuracy == 0.0
