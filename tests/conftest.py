from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from movie_quiz.core.models import Question
from movie_quiz.core.question_source import DEFAULT_MOVIE_QUESTIONS, StaticQuestionSource
from movie_quiz.core.quiz_manager import MovieQuizManager
from movie_quiz.core.services.key_value_store import InMemoryKeyValueStore
from movie_quiz.core.services.quiz_engine import QuizEngine
from movie_quiz.core.services.statistics_store import StatisticsStore


class TickingClock:
    """Deterministic clock that moves one minute forward on every call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def questions() -> list[Question]:
    return [
        Question(f"Movie {index}", "Is the rating of this movie greater than 6?", index % 2 == 0)
        for index in range(10)
    ]


@pytest.fixture
def engine() -> QuizEngine:
    return QuizEngine()


@pytest.fixture
def backend() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def statistics(backend, clock) -> StatisticsStore:
    return StatisticsStore(backend, clock=clock)


@pytest.fixture
def manager(statistics) -> MovieQuizManager:
    return MovieQuizManager(source=StaticQuestionSource(DEFAULT_MOVIE_QUESTIONS), statistics=statistics)


class DeferredSource:
    """Holds question requests until the test releases them."""

    def __init__(self) -> None:
        self._inner = StaticQuestionSource(DEFAULT_MOVIE_QUESTIONS)
        self.pending: list = []

    def request_next_question(self, callback) -> None:
        self.pending.append(callback)

    def release(self) -> None:
        while self.pending:
            self._inner.request_next_question(self.pending.pop(0))

    def fail_next(self, error) -> None:
        self.pending.pop(0)(None, error)


@pytest.fixture
def deferred_source() -> DeferredSource:
    return DeferredSource()


@pytest.fixture
def deferred_manager(deferred_source, statistics) -> MovieQuizManager:
    return MovieQuizManager(source=deferred_source, statistics=statistics)
