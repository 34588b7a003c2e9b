"""Question sources and the callback contract used to deliver questions."""

from __future__ import annotations

import random
from typing import Callable, Protocol, Sequence

from movie_quiz.constants.quiz_constants import DEFAULT_RATING_THRESHOLD
from movie_quiz.core.errors import InvalidInput, SourceUnavailable
from movie_quiz.core.models import Question

QuestionCallback = Callable[[Question | None, SourceUnavailable | None], None]
"""Invoked exactly once per request with a question, or ``None`` and the failure."""

_DEFAULT_PROMPT = f"Is the rating of this movie greater than {DEFAULT_RATING_THRESHOLD}?"

DEFAULT_MOVIE_QUESTIONS: tuple[Question, ...] = (
    Question("The Godfather", _DEFAULT_PROMPT, True),
    Question("The Dark Knight", _DEFAULT_PROMPT, True),
    Question("Kill Bill", _DEFAULT_PROMPT, True),
    Question("The Avengers", _DEFAULT_PROMPT, True),
    Question("Deadpool", _DEFAULT_PROMPT, True),
    Question("The Green Knight", _DEFAULT_PROMPT, True),
    Question("Old", _DEFAULT_PROMPT, False),
    Question("The Ice Age Adventures of Buck Wild", _DEFAULT_PROMPT, False),
    Question("Tesla", _DEFAULT_PROMPT, False),
    Question("Vivarium", _DEFAULT_PROMPT, False),
)


class QuestionSource(Protocol):
    """Anything that can hand out questions one at a time."""

    def request_next_question(self, callback: QuestionCallback) -> None: ...


class StaticQuestionSource:
    """Serves a fixed list of questions, cycling back to the start when exhausted."""

    def __init__(
        self,
        questions: Sequence[Question] = DEFAULT_MOVIE_QUESTIONS,
        shuffle: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        if not questions:
            raise InvalidInput("A static question source needs at least one question.")
        self._questions = list(questions)
        self._shuffle = shuffle
        self._rng = rng or random.Random()
        self._order: list[Question] = []
        self._position = 0

    def request_next_question(self, callback: QuestionCallback) -> None:
        if self._position >= len(self._order):
            self._order = list(self._questions)
            if self._shuffle:
                self._rng.shuffle(self._order)
            self._position = 0
        question = self._order[self._position]
        self._position += 1
        callback(question, None)
