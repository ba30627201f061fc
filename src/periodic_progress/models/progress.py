"""User progress data models."""

import uuid
from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MasteryLevel(StrEnum):
    """Coarse study progress for a single element."""

    NEW = "new"
    LEARNING = "learning"
    PRACTICING = "practicing"
    MASTERED = "mastered"


class GameType(StrEnum):
    """Games that record sessions."""

    FLASHCARDS = "flashcards"
    QUIZ = "quiz"
    BINGO = "bingo"
    FAMILY_MAP = "familyMap"
    GUESS_PROPERTY = "guessProperty"
    PAIRS = "pairs"
    LIGHTNING_CHALLENGE = "lightningChallenge"

    @property
    def estimated_minutes(self) -> int:
        """Typical length of one session in minutes."""
        return _ESTIMATED_MINUTES[self]


_ESTIMATED_MINUTES: dict[GameType, int] = {
    GameType.FLASHCARDS: 10,
    GameType.QUIZ: 5,
    GameType.BINGO: 15,
    GameType.FAMILY_MAP: 8,
    GameType.GUESS_PROPERTY: 7,
    GameType.PAIRS: 5,
    GameType.LIGHTNING_CHALLENGE: 1,
}


def _percent(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100


class LearningState(BaseModel):
    """Study history of one element."""

    model_config = ConfigDict(extra="forbid")

    times_seen: int = Field(default=0, ge=0)
    times_correct: int = Field(default=0, ge=0)
    times_wrong: int = Field(default=0, ge=0)
    last_reviewed_at: datetime | None = None
    next_review_at: datetime | None = None
    mastery_level: MasteryLevel = MasteryLevel.NEW

    @property
    def accuracy_percent(self) -> float:
        return _percent(self.times_correct, self.times_correct + self.times_wrong)


class GameSession(BaseModel):
    """Outcome of one completed game. Immutable once created."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    game_type: GameType
    played_at: datetime = Field(default_factory=datetime.now)
    duration_seconds: int = Field(ge=0)
    correct_answers: int = Field(ge=0)
    total_answers: int = Field(ge=0)
    score: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_answers(self) -> "GameSession":
        if self.correct_answers > self.total_answers:
            raise ValueError("correct_answers exceeds total_answers")
        return self

    @property
    def accuracy_percent(self) -> float:
        return _percent(self.correct_answers, self.total_answers)


class UserProgress(BaseModel):
    """Durable progress record, one per installation."""

    model_config = ConfigDict(extra="forbid")

    favorite_element_ids: set[int] = Field(default_factory=set)
    study_state: dict[int, LearningState] = Field(default_factory=dict)
    sessions: list[GameSession] = Field(default_factory=list)
    unlocked_achievements: set[str] = Field(default_factory=set)
    current_streak_days: int = Field(default=0, ge=0)
    best_streak_days: int = Field(default=0, ge=0)
    last_study_date: date | None = None
    total_correct_answers: int = Field(default=0, ge=0)
    total_answers: int = Field(default=0, ge=0)
    total_study_minutes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_totals(self) -> "UserProgress":
        if self.total_correct_answers > self.total_answers:
            raise ValueError("total_correct_answers exceeds total_answers")
        return self

    @property
    def accuracy_percent(self) -> float:
        """Share of all recorded answers that were correct, 0-100."""
        return _percent(self.total_correct_answers, self.total_answers)


class GameStats(BaseModel):
    """Aggregate outcome of all sessions of one game type."""

    plays: int = 0
    average_accuracy: float = 0.0
