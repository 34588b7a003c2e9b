"""Round coordination shared between the Qt window and the API server."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable

from movie_quiz.constants.quiz_constants import QUESTIONS_AMOUNT
from movie_quiz.constants.ui_constants import RESULT_BUTTON_TEXT, RESULT_TITLE
from movie_quiz.core.errors import InvalidInput, NoActiveRound, SourceUnavailable
from movie_quiz.core.models import (
    AnswerResult,
    EngineState,
    Question,
    QuizResultsViewModel,
    QuizStepViewModel,
    StatisticsSnapshot,
)
from movie_quiz.core.question_source import QuestionSource
from movie_quiz.core.services.quiz_engine import QuizEngine
from movie_quiz.core.services.statistics_store import StatisticsStore

logger = logging.getLogger(__name__)

_RECORD_DATE_FORMAT = "%d.%m.%y %H:%M"


def format_results_text(correct: int, total: int, snapshot: StatisticsSnapshot) -> str:
    """Build the end-of-round summary shown to the player."""
    best = snapshot.best_game
    if snapshot.total_accuracy is None:
        accuracy = "n/a"
    else:
        accuracy = f"{snapshot.total_accuracy * 100:.2f}%"
    return "\n".join(
        [
            f"Your result: {correct}/{total}",
            f"Quizzes played: {snapshot.games_count}",
            f"Record: {best.correct}/{best.total} ({best.played_at.strftime(_RECORD_DATE_FORMAT)})",
            f"Average accuracy: {accuracy}",
        ]
    )


class MovieQuizManager:
    """Facade over the quiz engine, the statistics store and a question source."""

    def __init__(
        self,
        source: QuestionSource,
        statistics: StatisticsStore,
        engine: QuizEngine | None = None,
        questions_amount: int = QUESTIONS_AMOUNT,
    ) -> None:
        if questions_amount < 1:
            raise InvalidInput("A round needs at least one question.")
        self._lock = Lock()
        self._source = source
        self._statistics = statistics
        self._engine = engine or QuizEngine()
        self._questions_amount = questions_amount
        self._last_results: QuizResultsViewModel | None = None
        self._generation = 0
        self._collecting = False

    # --- Round setup ---

    def collect_round(
        self,
        on_ready: Callable[[QuizStepViewModel], None],
        on_failure: Callable[[SourceUnavailable], None],
    ) -> None:
        """Request a full round from the source, then start it.

        Questions are requested one at a time. The first failed or empty
        delivery abandons the collection and leaves the current round as it is.
        Starting another collection supersedes this one: its remaining
        deliveries are dropped and neither callback runs.
        """
        with self._lock:
            self._generation += 1
            self._collecting = True
            generation = self._generation
        collected: list[Question] = []

        def request_next() -> None:
            self._source.request_next_question(handle_delivery)

        def handle_delivery(question: Question | None, error: SourceUnavailable | None) -> None:
            if question is None:
                failure = error or SourceUnavailable("No question was delivered.")
                with self._lock:
                    if generation != self._generation:
                        logger.debug("Dropping failure of superseded collection: %s", failure)
                        return
                    self._collecting = False
                logger.warning("Round collection aborted after %s question(s): %s", len(collected), failure)
                on_failure(failure)
                return
            if not self._is_current_collection(generation):
                logger.debug("Dropping question of superseded collection")
                return
            collected.append(question)
            if len(collected) < self._questions_amount:
                request_next()
                return
            step = self._start_collected_round(collected, generation)
            if step is not None:
                on_ready(step)

        request_next()

    def is_collecting(self) -> bool:
        """Whether a round is still being collected from the source."""
        with self._lock:
            return self._collecting

    def start_round(self, questions: list[Question]) -> QuizStepViewModel:
        with self._lock:
            return self._start_locked(questions)

    def _start_collected_round(self, questions: list[Question], generation: int) -> QuizStepViewModel | None:
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping superseded round of %s questions", len(questions))
                return None
            self._collecting = False
            return self._start_locked(questions)

    def _start_locked(self, questions: list[Question]) -> QuizStepViewModel:
        self._engine.start(questions)
        self._last_results = None
        logger.info("Started a round of %s questions", len(questions))
        return self._convert(self._engine.current_question())

    def _is_current_collection(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def restart_round(self) -> QuizStepViewModel:
        """Replay the questions of the previous round from the beginning."""
        with self._lock:
            self._engine.restart()
            self._last_results = None
            return self._convert(self._engine.current_question())

    # --- Gameplay ---

    def current_step(self) -> QuizStepViewModel:
        with self._lock:
            return self._convert(self._engine.current_question())

    def answer(self, choice: bool) -> AnswerResult:
        with self._lock:
            return self._engine.submit_answer(choice)

    def show_next_question_or_results(self) -> QuizStepViewModel | QuizResultsViewModel:
        """Advance past the answered question; store the round when it was the last one."""
        with self._lock:
            if self._engine.is_finished():
                if self._last_results is None:
                    raise NoActiveRound("The round finished without results.")
                return self._last_results

            outcome = self._engine.advance()
            if not outcome.finished:
                return self._convert(self._engine.current_question())

            correct = self._engine.correct_answers()
            total = self._engine.questions_amount()
            snapshot = self._statistics.store(correct, total)
            self._last_results = QuizResultsViewModel(
                title=RESULT_TITLE,
                text=format_results_text(correct, total, snapshot),
                button_text=RESULT_BUTTON_TEXT,
                correct=correct,
                total=total,
            )
            return self._last_results

    # --- Read-only state ---

    def statistics(self) -> StatisticsSnapshot:
        with self._lock:
            return self._statistics.snapshot()

    def state(self) -> EngineState:
        with self._lock:
            return self._engine.state()

    def correct_answers(self) -> int:
        with self._lock:
            return self._engine.correct_answers()

    def questions_amount(self) -> int:
        with self._lock:
            return self._engine.questions_amount()

    def is_current_answered(self) -> bool:
        with self._lock:
            return self._engine.is_current_answered()

    def last_results(self) -> QuizResultsViewModel | None:
        with self._lock:
            return self._last_results

    def _convert(self, question: Question) -> QuizStepViewModel:
        return QuizStepViewModel(
            image_key=question.image_key,
            question=question.prompt,
            question_number=f"{self._engine.current_index() + 1}/{self._engine.questions_amount()}",
        )
