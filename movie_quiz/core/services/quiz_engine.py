"""State machine that walks one round of yes/no questions."""

from __future__ import annotations

import random
from typing import Sequence

from movie_quiz.core.errors import InvalidInput, NoActiveRound, QuestionAlreadyAnswered
from movie_quiz.core.models import AdvanceResult, AnswerResult, EngineState, Question


class QuizEngine:
    """Owns the question sequence, the current position and the running score.

    Scoring and moving on are separate steps: ``submit_answer`` never touches
    the current index, ``advance`` is the only operation that moves forward.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._questions: list[Question] | None = None
        self._current_index: int = 0
        self._correct_count: int = 0
        self._answered: bool = False
        self._finished: bool = False

    def start(self, questions: Sequence[Question], shuffle: bool = False) -> None:
        """Install a new question sequence and reset the counters."""
        if not questions:
            raise InvalidInput("A round needs at least one question.")
        installed = list(questions)
        if shuffle:
            self._rng.shuffle(installed)
        self._questions = installed
        self._current_index = 0
        self._correct_count = 0
        self._answered = False
        self._finished = False

    def restart(self, questions: Sequence[Question] | None = None, shuffle: bool = False) -> None:
        """Start over with the previous sequence, or with a fresh one when given."""
        if questions is None:
            if self._questions is None:
                raise NoActiveRound("Cannot restart before a round was started.")
            questions = self._questions
        self.start(questions, shuffle=shuffle)

    def current_question(self) -> Question:
        questions = self._require_active()
        return questions[self._current_index]

    def submit_answer(self, choice: bool) -> AnswerResult:
        """Score ``choice`` against the current question."""
        question = self.current_question()
        if self._answered:
            raise QuestionAlreadyAnswered(
                f"Question {self._current_index + 1} has already been answered."
            )
        is_correct = choice == question.correct_answer
        if is_correct:
            self._correct_count += 1
        self._answered = True
        return AnswerResult(is_correct=is_correct, is_round_finished=self.is_last_question())

    def advance(self) -> AdvanceResult:
        """Move to the next question, or finish the round after the last one.

        Once finished, further calls change nothing and keep reporting
        ``finished=True``.
        """
        if self._questions is None:
            raise NoActiveRound("No round has been started.")
        if self._finished:
            return AdvanceResult(finished=True, next_index=self._current_index)
        if self.is_last_question():
            self._finished = True
            return AdvanceResult(finished=True, next_index=self._current_index)

        self._current_index += 1
        self._answered = False
        return AdvanceResult(finished=False, next_index=self._current_index)

    def questions_amount(self) -> int:
        return len(self._questions) if self._questions is not None else 0

    def is_last_question(self) -> bool:
        if self._questions is None:
            return False
        return self._current_index == len(self._questions) - 1

    def correct_answers(self) -> int:
        return self._correct_count

    def current_index(self) -> int:
        return self._current_index

    def is_current_answered(self) -> bool:
        return self._answered

    def is_finished(self) -> bool:
        return self._finished

    def state(self) -> EngineState:
        if self._questions is None:
            return EngineState.UNINITIALIZED
        if self._finished:
            return EngineState.FINISHED
        return EngineState.IN_ROUND

    def _require_active(self) -> list[Question]:
        if self._questions is None:
            raise NoActiveRound("No round has been started.")
        if self._finished:
            raise NoActiveRound("The round has finished; restart to play again.")
        return self._questions
