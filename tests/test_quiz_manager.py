"""
Tests for round coordination.

Tests cover:
- Collecting a round from a question source
- Playing a full round and storing its statistics
- Leaving state untouched when the source fails
"""

from datetime import datetime, timezone

import pytest

from movie_quiz.core.errors import NoActiveRound, SourceUnavailable
from movie_quiz.core.models import (
    EngineState,
    GameRecord,
    QuizResultsViewModel,
    QuizStepViewModel,
    StatisticsSnapshot,
)
from movie_quiz.core.question_source import DEFAULT_MOVIE_QUESTIONS, StaticQuestionSource
from movie_quiz.core.quiz_manager import MovieQuizManager, format_results_text


class FlakySource:
    """Delivers a few questions, then reports a failure."""

    def __init__(self, successes: int, error: SourceUnavailable | None = None) -> None:
        self._inner = StaticQuestionSource(DEFAULT_MOVIE_QUESTIONS)
        self._remaining = successes
        self._error = error

    def request_next_question(self, callback):
        if self._remaining <= 0:
            callback(None, self._error)
            return
        self._remaining -= 1
        self._inner.request_next_question(callback)


def collect(manager: MovieQuizManager) -> tuple[list[QuizStepViewModel], list[SourceUnavailable]]:
    ready: list[QuizStepViewModel] = []
    failures: list[SourceUnavailable] = []
    manager.collect_round(on_ready=ready.append, on_failure=failures.append)
    return ready, failures


def play_alternating(manager: MovieQuizManager) -> QuizResultsViewModel:
    """Answer correctly, then wrongly, and so on until the results appear."""
    outcome = None
    for index, question in enumerate(DEFAULT_MOVIE_QUESTIONS):
        choice = question.correct_answer if index % 2 == 0 else not question.correct_answer
        manager.answer(choice)
        outcome = manager.show_next_question_or_results()
    assert isinstance(outcome, QuizResultsViewModel)
    return outcome


class TestRoundCollection:
    """Test gathering questions before a round starts."""

    def test_collect_round_starts_at_first_question(self, manager):
        ready, failures = collect(manager)

        assert failures == []
        assert ready == [
            QuizStepViewModel(
                image_key="The Godfather",
                question="Is the rating of this movie greater than 6?",
                question_number="1/10",
            )
        ]
        assert manager.state() == EngineState.IN_ROUND

    def test_failed_delivery_leaves_engine_untouched(self, statistics):
        manager = MovieQuizManager(
            source=FlakySource(3, SourceUnavailable("network down")), statistics=statistics
        )

        ready, failures = collect(manager)

        assert ready == []
        assert [str(error) for error in failures] == ["network down"]
        assert manager.state() == EngineState.UNINITIALIZED

    def test_empty_delivery_is_reported_as_failure(self, statistics):
        manager = MovieQuizManager(source=FlakySource(0), statistics=statistics)

        ready, failures = collect(manager)

        assert ready == []
        assert len(failures) == 1
        assert isinstance(failures[0], SourceUnavailable)

    def test_failed_collection_keeps_running_round(self, statistics):
        manager = MovieQuizManager(
            source=FlakySource(2, SourceUnavailable("timeout")), statistics=statistics
        )
        manager.start_round(list(DEFAULT_MOVIE_QUESTIONS))
        manager.answer(True)
        manager.show_next_question_or_results()

        ready, failures = collect(manager)

        assert ready == []
        assert len(failures) == 1
        assert manager.current_step().question_number == "2/10"


class TestRoundPlay:
    """Test answering and finishing rounds."""

    def test_alternating_answers_score_half(self, manager):
        collect(manager)

        results = play_alternating(manager)

        assert results.correct == 5
        assert results.total == 10
        assert "Your result: 5/10" in results.text
        assert "Average accuracy: 50.00%" in results.text
        snapshot = manager.statistics()
        assert snapshot.games_count == 1
        assert snapshot.best_game.correct == 5
        assert snapshot.total_accuracy == pytest.approx(0.5)

    def test_counter_follows_progress(self, manager):
        collect(manager)
        manager.answer(True)

        step = manager.show_next_question_or_results()

        assert isinstance(step, QuizStepViewModel)
        assert step.question_number == "2/10"
        assert step.image_key == "The Dark Knight"

    def test_results_are_stored_only_once(self, manager):
        collect(manager)
        first = play_alternating(manager)

        again = manager.show_next_question_or_results()

        assert again == first
        assert manager.statistics().games_count == 1

    def test_answer_after_finish_fails(self, manager):
        collect(manager)
        play_alternating(manager)

        with pytest.raises(NoActiveRound):
            manager.answer(True)

    def test_new_round_after_results(self, manager):
        collect(manager)
        play_alternating(manager)

        ready, _ = collect(manager)

        assert ready[0].question_number == "1/10"
        assert manager.correct_answers() == 0
        assert manager.last_results() is None

    def test_restart_round_replays_questions(self, manager):
        collect(manager)
        manager.answer(True)
        manager.show_next_question_or_results()

        step = manager.restart_round()

        assert step.question_number == "1/10"
        assert step.image_key == "The Godfather"

    def test_two_rounds_accumulate(self, manager):
        collect(manager)
        play_alternating(manager)
        collect(manager)
        for question in DEFAULT_MOVIE_QUESTIONS:
            manager.answer(question.correct_answer)
            outcome = manager.show_next_question_or_results()

        assert "Quizzes played: 2" in outcome.text
        assert "Record: 10/10" in outcome.text
        assert manager.statistics().total_accuracy == pytest.approx(0.75)


class TestResultsText:
    def test_undefined_accuracy_is_shown_as_not_available(self):
        snapshot = StatisticsSnapshot(
            total_accuracy=None,
            games_count=0,
            best_game=GameRecord.empty(),
            cumulative_correct=0,
            cumulative_total=0,
        )

        text = format_results_text(0, 0, snapshot)

        assert "Average accuracy: n/a" in text
        assert "Record: 0/0 (01.01.70 00:00)" in text

    def test_record_date_is_formatted(self):
        snapshot = StatisticsSnapshot(
            total_accuracy=0.7,
            games_count=3,
            best_game=GameRecord(8, 10, datetime(2024, 5, 17, 9, 30, tzinfo=timezone.utc)),
            cumulative_correct=21,
            cumulative_total=30,
        )

        text = format_results_text(7, 10, snapshot)

        assert text.splitlines() == [
            "Your result: 7/10",
            "Quizzes played: 3",
            "Record: 8/10 (17.05.24 09:30)",
            "Average accuracy: 70.00%",
        ]


class TestOverlappingCollections:
    """Test collections whose questions arrive later."""

    def test_collecting_until_last_question_arrives(self, deferred_manager, deferred_source):
        ready, failures = collect(deferred_manager)

        assert deferred_manager.is_collecting() is True
        assert ready == []

        deferred_source.release()

        assert deferred_manager.is_collecting() is False
        assert [step.question_number for step in ready] == ["1/10"]
        assert failures == []

    def test_newer_collection_supersedes_older_one(self, deferred_manager, deferred_source):
        first_ready, first_failures = collect(deferred_manager)
        second_ready, second_failures = collect(deferred_manager)

        deferred_source.release()

        assert first_ready == []
        assert first_failures == []
        assert len(second_ready) == 1
        assert deferred_manager.state() == EngineState.IN_ROUND

    def test_superseded_collection_does_not_reset_running_round(self, deferred_manager, deferred_source):
        collect(deferred_manager)
        collect(deferred_manager)
        deferred_source.release()
        for question_number in ("1/10", "2/10"):
            assert deferred_manager.current_step().question_number == question_number
            deferred_manager.answer(True)
            deferred_manager.show_next_question_or_results()

        deferred_source.release()

        assert deferred_source.pending == []
        assert deferred_manager.current_step().question_number == "3/10"

    def test_superseded_failure_is_not_reported(self, deferred_manager, deferred_source):
        first_ready, first_failures = collect(deferred_manager)
        second_ready, _ = collect(deferred_manager)

        deferred_source.fail_next(SourceUnavailable("stale"))
        deferred_source.release()

        assert first_failures == []
        assert first_ready == []
        assert len(second_ready) == 1
        assert deferred_manager.is_collecting() is False

    def test_failure_ends_collection(self, deferred_manager, deferred_source):
        _, failures = collect(deferred_manager)

        deferred_source.fail_next(SourceUnavailable("offline"))

        assert [str(error) for error in failures] == ["offline"]
        assert deferred_manager.is_collecting() is False
        assert deferred_manager.state() == EngineState.UNINITIALIZED
