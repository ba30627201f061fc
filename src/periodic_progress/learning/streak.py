"""Daily study streak bookkeeping."""

from datetime import date, datetime

from periodic_progress.models.progress import UserProgress


def local_day(moment: datetime) -> date:
    """Calendar day of ``moment`` in the local timezone.

    Naive datetimes are taken to be local already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def advance_streak(progress: UserProgress, now: datetime) -> bool:
    """Update streak counters in place for a study activity at ``now``.

    Args:
        progress: Record to update.
        now: Time of the activity.

    Returns:
        True if the record changed, False for a repeat on the same day.
    """
    today = local_day(now)
    last = progress.last_study_date

    if last is None:
        progress.current_streak_days = 1
        progress.best_streak_days = 1
        progress.last_study_date = today
        return True

    gap = (today - last).days
    if gap == 0:
        return False

    if gap == 1:
        progress.current_streak_days += 1
        progress.best_streak_days = max(
            progress.best_streak_days, progress.current_streak_days
        )
    else:
        # Two or more days missed, or the clock moved backwards.
        progress.current_streak_days = 1
    progress.last_study_date = today
    return True
