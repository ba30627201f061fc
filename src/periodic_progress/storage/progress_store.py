"""Progress store: single owner of the user's progress record."""

from collections.abc import Callable
from datetime import datetime

import structlog

from periodic_progress.errors import DecodeError, PersistenceWriteError
from periodic_progress.learning.mastery import apply_answer, apply_view
from periodic_progress.learning.streak import advance_streak
from periodic_progress.models.progress import (
    GameSession,
    GameStats,
    GameType,
    LearningState,
    MasteryLevel,
    UserProgress,
)
from periodic_progress.storage.backend import KeyValueBackend
from periodic_progress.storage.codec import decode_progress, encode_progress

logger = structlog.get_logger()

ProgressListener = Callable[[UserProgress], None]


class ProgressStore:
    """Mediates every change to :class:`UserProgress` and persists after each one.

    The record is loaded from ``backend`` on construction. A missing or
    unreadable blob starts a fresh record. Every mutation rewrites the whole
    record under ``key`` and then notifies subscribers.

    Args:
        backend: Storage for the encoded record.
        key: Storage key of the record.
        clock: Returns the current time; defaults to ``datetime.now``.
        raise_on_write_error: Re-raise :class:`PersistenceWriteError` after the
            in-memory change is applied instead of only logging it.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        key: str = "progress",
        clock: Callable[[], datetime] | None = None,
        raise_on_write_error: bool = False,
    ):
        self._backend = backend
        self._key = key
        self._clock = clock or datetime.now
        self._raise_on_write_error = raise_on_write_error
        self._listeners: list[ProgressListener] = []
        self._progress = self._load()

    def _load(self) -> UserProgress:
        data = self._backend.get(self._key)
        if data is None:
            return UserProgress()
        try:
            return decode_progress(data)
        except DecodeError as e:
            logger.warning("progress_load_failed", key=self._key, error=str(e))
            return UserProgress()

    def _save(self) -> None:
        try:
            self._backend.put(self._key, encode_progress(self._progress))
        except PersistenceWriteError as e:
            logger.error("progress_write_failed", key=self._key, error=str(e))
            if self._raise_on_write_error:
                raise

    def _commit(self) -> None:
        """Persist the record and notify subscribers."""
        try:
            self._save()
        finally:
            snapshot = self.progress
            for listener in list(self._listeners):
                listener(snapshot)

    @property
    def progress(self) -> UserProgress:
        """Deep copy of the current record."""
        return self._progress.model_copy(deep=True)

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after each change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Favorites

    def add_favorite(self, element_id: int) -> None:
        self._progress.favorite_element_ids.add(element_id)
        logger.debug("favorite_added", element_id=element_id)
        self._commit()

    def remove_favorite(self, element_id: int) -> None:
        self._progress.favorite_element_ids.discard(element_id)
        logger.debug("favorite_removed", element_id=element_id)
        self._commit()

    def is_favorite(self, element_id: int) -> bool:
        return element_id in self._progress.favorite_element_ids

    def toggle_favorite(self, element_id: int) -> bool:
        """Flip the favorite flag and return the new value."""
        if self.is_favorite(element_id):
            self.remove_favorite(element_id)
            return False
        self.add_favorite(element_id)
        return True

    # Study state

    def learning_state(self, element_id: int) -> LearningState | None:
        state = self._progress.study_state.get(element_id)
        return state.model_copy() if state is not None else None

    def mastery_level(self, element_id: int) -> MasteryLevel:
        state = self._progress.study_state.get(element_id)
        return state.mastery_level if state is not None else MasteryLevel.NEW

    def record_element_view(self, element_id: int) -> None:
        state = self._progress.study_state.get(element_id) or LearningState()
        self._progress.study_state[element_id] = apply_view(state, self._clock())
        self._commit()

    def record_answer(self, element_id: int, was_correct: bool) -> None:
        """Record an answer about one element.

        Updates the element's counters, mastery level and next review time,
        and the record-wide answer totals.
        """
        state = self._progress.study_state.get(element_id) or LearningState()
        updated = apply_answer(state, was_correct, self._clock())
        self._progress.study_state[element_id] = updated
        self._progress.total_answers += 1
        if was_correct:
            self._progress.total_correct_answers += 1
        if updated.mastery_level != state.mastery_level:
            logger.info(
                "mastery_changed",
                element_id=element_id,
                old_level=state.mastery_level.value,
                new_level=updated.mastery_level.value,
            )
        self._commit()

    def due_for_review(self, now: datetime | None = None) -> list[int]:
        """Element ids whose scheduled review time has passed, ascending."""
        now = now or self._clock()
        return sorted(
            element_id
            for element_id, state in self._progress.study_state.items()
            if state.next_review_at is not None and state.next_review_at <= now
        )

    def mastery_breakdown(self) -> dict[MasteryLevel, int]:
        """Number of studied elements at each mastery level."""
        counts = {level: 0 for level in MasteryLevel}
        for state in self._progress.study_state.values():
            counts[state.mastery_level] += 1
        return counts

    # Game sessions

    def record_game_session(self, session: GameSession) -> None:
        self._progress.sessions.append(session)
        # Partial minutes are dropped, not rounded.
        self._progress.total_study_minutes += session.duration_seconds // 60
        logger.info(
            "game_session_recorded",
            game_type=session.game_type.value,
            score=session.score,
            duration_seconds=session.duration_seconds,
        )
        self._commit()

    def finish_session(
        self,
        game_type: GameType,
        duration_seconds: int,
        correct_answers: int,
        total_answers: int,
        score: int,
    ) -> GameSession:
        """Create a session stamped with the store's clock and record it.

        Sessions built elsewhere should set ``played_at`` with the same kind
        of clock (naive or timezone-aware) so :meth:`sessions` can order them.
        """
        session = GameSession(
            game_type=game_type,
            played_at=self._clock(),
            duration_seconds=duration_seconds,
            correct_answers=correct_answers,
            total_answers=total_answers,
            score=score,
        )
        self.record_game_session(session)
        return session

    def sessions(
        self, game_type: GameType | None = None, limit: int | None = None
    ) -> list[GameSession]:
        """Recorded sessions, newest first.

        Args:
            game_type: Only return sessions of this game.
            limit: Maximum number of sessions to return.
        """
        found = [
            s for s in self._progress.sessions
            if game_type is None or s.game_type == game_type
        ]
        found.sort(key=lambda s: s.played_at, reverse=True)
        if limit is not None:
            found = found[:limit]
        return found

    def game_stats(self) -> dict[GameType, GameStats]:
        """Play count and mean session accuracy for every game type."""
        stats = {}
        for game_type in GameType:
            played = self.sessions(game_type)
            average = (
                sum(s.accuracy_percent for s in played) / len(played) if played else 0.0
            )
            stats[game_type] = GameStats(plays=len(played), average_accuracy=average)
        return stats

    # Streaks and achievements

    def update_streak(self, now: datetime | None = None) -> None:
        """Count today's activity toward the daily streak.

        Repeated calls on the same calendar day change nothing and do not
        write. Meant to run once per app activation.
        """
        if not advance_streak(self._progress, now or self._clock()):
            return
        logger.info(
            "streak_updated",
            current=self._progress.current_streak_days,
            best=self._progress.best_streak_days,
        )
        self._commit()

    def unlock_achievement(self, achievement_id: str) -> bool:
        """Mark an achievement unlocked. Returns False if it already was."""
        if achievement_id in self._progress.unlocked_achievements:
            return False
        self._progress.unlocked_achievements.add(achievement_id)
        logger.info("achievement_unlocked", achievement_id=achievement_id)
        self._commit()
        return True

    # Whole record

    def reset_progress(self) -> None:
        self._progress = UserProgress()
        logger.info("progress_reset")
        self._commit()

    def export_snapshot(self) -> bytes:
        return encode_progress(self._progress)

    def import_snapshot(self, data: bytes) -> bool:
        """Replace the record with a snapshot from :meth:`export_snapshot`.

        Returns:
            False if ``data`` could not be decoded; the current record is
            left as it was.
        """
        try:
            imported = decode_progress(data)
        except DecodeError as e:
            logger.warning("progress_import_rejected", error=str(e))
            return False
        self._progress = imported
        logger.info("progress_imported", sessions=len(imported.sessions))
        self._commit()
        return True
