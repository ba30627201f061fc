"""Session score formulas for each game."""

import math
from enum import StrEnum


class Difficulty(StrEnum):
    """Difficulty picked for pairs and family map games."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def multiplier(self) -> float:
        return _MULTIPLIERS[self]


class QuizDifficulty(StrEnum):
    """Quiz difficulty; ``mixed`` draws questions from every tier."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    MIXED = "mixed"

    @property
    def multiplier(self) -> float:
        return _MULTIPLIERS[self]


_MULTIPLIERS: dict[str, float] = {
    "easy": 1.0,
    "medium": 1.5,
    "hard": 2.0,
    "mixed": 1.3,
}


class BingoPattern(StrEnum):
    """Winning lines on a 5x5 bingo card."""

    HORIZONTAL_1 = "horizontal1"
    HORIZONTAL_2 = "horizontal2"
    HORIZONTAL_3 = "horizontal3"
    HORIZONTAL_4 = "horizontal4"
    HORIZONTAL_5 = "horizontal5"
    VERTICAL_1 = "vertical1"
    VERTICAL_2 = "vertical2"
    VERTICAL_3 = "vertical3"
    VERTICAL_4 = "vertical4"
    VERTICAL_5 = "vertical5"
    DIAGONAL_1 = "diagonal1"
    DIAGONAL_2 = "diagonal2"
    FULL_CARD = "fullCard"

    @property
    def points(self) -> int:
        if self is BingoPattern.FULL_CARD:
            return 500
        if self in (BingoPattern.DIAGONAL_1, BingoPattern.DIAGONAL_2):
            return 150
        return 100


class LightningQuestionType(StrEnum):
    """Question kinds asked in the lightning challenge."""

    SYMBOL_TRUE = "symbolTrue"
    IS_METAL = "isMetal"
    IS_GAS = "isGas"
    GROUP_NUMBER = "groupNumber"
    PERIOD_NUMBER = "periodNumber"
    SYMBOL_MATCH = "symbolMatch"
    FAMILY_MATCH = "familyMatch"

    @property
    def base_points(self) -> int:
        if self in (LightningQuestionType.SYMBOL_TRUE, LightningQuestionType.SYMBOL_MATCH):
            return 10
        if self in (LightningQuestionType.GROUP_NUMBER, LightningQuestionType.PERIOD_NUMBER):
            return 20
        return 15


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def flashcards_score(correct: int, incorrect: int, elapsed_seconds: int) -> int:
    """Accuracy points (up to 1000) plus one point per second under 1000 s."""
    total = correct + incorrect
    if total == 0:
        return 0
    time_bonus = max(0, 1000 - elapsed_seconds)
    return correct * 1000 // total + time_bonus


def quiz_score(
    correct: int,
    incorrect: int,
    answer_seconds: list[float],
    difficulty: QuizDifficulty = QuizDifficulty.MIXED,
) -> int:
    """Score a quiz from its answers and per-question answer times.

    Args:
        correct: Correct answers.
        incorrect: Wrong answers.
        answer_seconds: Time taken for each answered question.
        difficulty: Difficulty the quiz was played at.

    Returns:
        Session score.
    """
    total = correct + incorrect
    if total == 0:
        return 0
    base = correct * 1000 // total
    avg_time = sum(answer_seconds) / len(answer_seconds) if answer_seconds else 0.0
    time_bonus = max(0, int((10 - avg_time) * 10))
    return int((base + time_bonus) * difficulty.multiplier)


def family_map_score(
    correct: int,
    element_count: int,
    elapsed_seconds: int,
    difficulty: Difficulty = Difficulty.MEDIUM,
) -> int:
    """Score a family classification round.

    Faster than 10 s per element earns 50 points per second saved.
    """
    if element_count <= 0:
        return 0
    base = correct * 1000 // element_count
    avg_time = elapsed_seconds / element_count
    time_bonus = max(0, int((10 - avg_time) * 50))
    return int((base + time_bonus) * difficulty.multiplier)


def pairs_score(
    total_pairs: int,
    moves: int,
    elapsed_seconds: int,
    difficulty: Difficulty = Difficulty.MEDIUM,
) -> int:
    """Score a completed matching-pairs board.

    One move per pair is the minimum possible, which earns the full
    500-point efficiency bonus.
    """
    if total_pairs <= 0:
        return 0
    efficiency_bonus = _round_half_up(500 * total_pairs / max(moves, total_pairs))
    time_bonus = max(0, 300 - elapsed_seconds)
    return _round_half_up((1000 + efficiency_bonus + time_bonus) * difficulty.multiplier)


def bingo_score(patterns: list[BingoPattern]) -> int:
    """Sum of the points of every pattern completed on the card."""
    return sum(pattern.points for pattern in patterns)


def guess_property_points(guess: float | None, actual: float) -> int:
    """Points for a single estimate, banded by relative error."""
    if guess is None:
        return 0
    if actual == 0:
        # No relative error exists; only an exact answer counts.
        return 100 if guess == 0 else 10
    error = abs(guess - actual) / abs(actual)
    if error <= 0.05:
        return 100
    elif error <= 0.15:
        return 80
    elif error <= 0.30:
        return 60
    elif error <= 0.50:
        return 40
    elif error <= 0.75:
        return 20
    else:
        return 10


def guess_property_score(answers: list[tuple[float | None, float]]) -> int:
    """Total over ``(guess, actual)`` pairs for a session."""
    return sum(guess_property_points(guess, actual) for guess, actual in answers)


def lightning_points(base_points: int, answer_seconds: float, streak: int) -> int:
    """Points for one correct lightning answer.

    Args:
        base_points: Points of the question type.
        answer_seconds: Time taken to answer.
        streak: Consecutive correct answers, including this one.

    Returns:
        Points awarded.
    """
    points = base_points
    if answer_seconds < 2.0:
        points += 10
    elif answer_seconds < 4.0:
        points += 5

    if streak >= 10:
        points = int(points * 2.0)
    elif streak >= 5:
        points = int(points * 1.5)
    return points
