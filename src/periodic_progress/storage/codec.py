"""Snapshot encoding for the progress record."""

from pydantic import ValidationError

from periodic_progress.errors import DecodeError
from periodic_progress.models.progress import UserProgress


def encode_progress(progress: UserProgress) -> bytes:
    """Serialize the full record as UTF-8 JSON."""
    return progress.model_dump_json().encode("utf-8")


def decode_progress(data: bytes) -> UserProgress:
    """Parse a snapshot produced by :func:`encode_progress`.

    Every top-level field must be present, so an empty or unrelated JSON
    object is not mistaken for a fresh record.

    Raises:
        DecodeError: ``data`` is not valid JSON or does not match the schema.
    """
    try:
        progress = UserProgress.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(
            f"progress snapshot rejected ({e.error_count()} errors)", cause=e
        ) from e
    missing = set(UserProgress.model_fields) - progress.model_fields_set
    if missing:
        raise DecodeError(f"progress snapshot missing fields: {', '.join(sorted(missing))}")
    return progress
