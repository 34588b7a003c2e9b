"""Domain models for the movie quiz."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Callable

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class Question:
    """Yes/no question about a single movie."""

    image_key: str
    prompt: str
    correct_answer: bool


@dataclass(frozen=True, slots=True)
class AnswerResult:
    """Outcome of scoring one answer."""

    is_correct: bool
    is_round_finished: bool


@dataclass(frozen=True, slots=True)
class AdvanceResult:
    """Outcome of moving past the current question."""

    finished: bool
    next_index: int


class EngineState(Enum):
    """Lifecycle of a quiz round."""

    UNINITIALIZED = auto()
    IN_ROUND = auto()
    FINISHED = auto()


@dataclass(frozen=True, slots=True)
class GameRecord:
    """One completed round as stored in the statistics."""

    correct: int
    total: int
    played_at: datetime

    def is_better_than(self, other: GameRecord) -> bool:
        # Ties keep the earlier record.
        return self.correct > other.correct

    def to_dict(self) -> dict[str, object]:
        return {
            "correct": self.correct,
            "total": self.total,
            "date": self.played_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> GameRecord:
        played_at = datetime.fromisoformat(str(payload["date"]))
        if played_at.tzinfo is None:
            played_at = played_at.replace(tzinfo=timezone.utc)
        return cls(
            correct=int(payload["correct"]),
            total=int(payload["total"]),
            played_at=played_at,
        )

    @classmethod
    def empty(cls) -> GameRecord:
        return cls(correct=0, total=0, played_at=EPOCH)


@dataclass(frozen=True, slots=True)
class StatisticsSnapshot:
    """Read-only view of the aggregate statistics."""

    total_accuracy: float | None  # None until at least one answer was stored
    games_count: int
    best_game: GameRecord
    cumulative_correct: int
    cumulative_total: int


@dataclass(frozen=True, slots=True)
class QuizStepViewModel:
    """Everything needed to render the current question."""

    image_key: str
    question: str
    question_number: str


@dataclass(frozen=True, slots=True)
class QuizResultsViewModel:
    """Everything needed to render the end-of-round summary."""

    title: str
    text: str
    button_text: str
    correct: int
    total: int


@dataclass(slots=True)
class AlertModel:
    """Content of a modal alert plus the action to run when it is dismissed."""

    title: str
    message: str
    button_text: str
    completion: Callable[[], None]
