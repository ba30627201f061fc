"""Mastery level rules and review scheduling for studied elements."""

from datetime import datetime, timedelta

from periodic_progress.models.progress import LearningState, MasteryLevel

MASTERED_MIN_CORRECT = 5
MASTERED_MIN_ACCURACY = 80
PRACTICING_MIN_CORRECT = 3
PRACTICING_MIN_ACCURACY = 60

REVIEW_INTERVALS: dict[MasteryLevel, timedelta] = {
    MasteryLevel.NEW: timedelta(0),
    MasteryLevel.LEARNING: timedelta(days=1),
    MasteryLevel.PRACTICING: timedelta(days=3),
    MasteryLevel.MASTERED: timedelta(days=7),
}


def _meets_accuracy(times_correct: int, times_wrong: int, threshold: int) -> bool:
    # Integer comparison so 60% and 80% boundaries are exact.
    total = times_correct + times_wrong
    if total == 0:
        return False
    return 100 * times_correct >= threshold * total


def next_mastery_level(
    times_correct: int, times_wrong: int, times_seen: int = 0
) -> MasteryLevel:
    """Classify an element from its answer counters.

    Rules are checked in order and the first match wins:
    mastered (>= 5 correct, >= 80% accuracy), practicing (>= 3 correct,
    >= 60% accuracy), learning (viewed at least once), otherwise new.

    Args:
        times_correct: Correct answers recorded for the element.
        times_wrong: Wrong answers recorded for the element.
        times_seen: Number of recorded views.

    Returns:
        The mastery level for these counters.
    """
    if times_correct >= MASTERED_MIN_CORRECT and _meets_accuracy(
        times_correct, times_wrong, MASTERED_MIN_ACCURACY
    ):
        return MasteryLevel.MASTERED
    if times_correct >= PRACTICING_MIN_CORRECT and _meets_accuracy(
        times_correct, times_wrong, PRACTICING_MIN_ACCURACY
    ):
        return MasteryLevel.PRACTICING
    if times_seen > 0:
        return MasteryLevel.LEARNING
    return MasteryLevel.NEW


def next_review_interval(level: MasteryLevel) -> timedelta:
    """Time until the element should be reviewed again."""
    return REVIEW_INTERVALS[level]


def apply_view(state: LearningState, now: datetime) -> LearningState:
    """Return a copy of ``state`` with one more view recorded."""
    return state.model_copy(
        update={
            "times_seen": state.times_seen + 1,
            "last_reviewed_at": now,
        }
    )


def apply_answer(state: LearningState, was_correct: bool, now: datetime) -> LearningState:
    """Return a copy of ``state`` with one answer recorded.

    Updates the counters, recomputes the mastery level and schedules the
    next review relative to ``now``.
    """
    times_correct = state.times_correct + (1 if was_correct else 0)
    times_wrong = state.times_wrong + (0 if was_correct else 1)
    level = next_mastery_level(times_correct, times_wrong, state.times_seen)
    return state.model_copy(
        update={
            "times_correct": times_correct,
            "times_wrong": times_wrong,
            "mastery_level": level,
            "next_review_at": now + next_review_interval(level),
        }
    )
