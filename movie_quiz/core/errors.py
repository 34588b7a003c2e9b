"""Exception types shared by the quiz engine, statistics and question sources."""

from __future__ import annotations


class MovieQuizError(Exception):
    """Base class for all MovieQuiz errors."""


class InvalidInput(MovieQuizError, ValueError):
    """Raised when an operation receives malformed arguments."""


class NoActiveRound(MovieQuizError, RuntimeError):
    """Raised when an operation needs a running round and there is none."""


class PersistenceError(MovieQuizError, OSError):
    """Raised by a key-value backend when a value could not be written."""


class SourceUnavailable(MovieQuizError):
    """Raised or delivered when a question source cannot provide a question."""


class PersistenceWarning(UserWarning):
    """Non-fatal report of a statistics value that could not be persisted."""

    def __init__(self, key: str, cause: BaseException) -> None:
        super().__init__(f"Could not persist '{key}': {cause}")
        self.key = key
        self.cause = cause


class QuestionAlreadyAnswered(NoActiveRound):
    """Raised when the current question is answered a second time."""
