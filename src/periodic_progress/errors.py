"""Error types raised by the progress core."""


class ProgressError(Exception):
    """Base class for progress core errors."""


class DecodeError(ProgressError):
    """Stored or imported bytes do not match the progress schema."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class PersistenceWriteError(ProgressError):
    """The storage backend failed to write a record."""
