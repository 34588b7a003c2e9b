"""Builds yes/no questions from the remote movie feed on background threads."""

from __future__ import annotations

import logging
from pathlib import Path
import random
from threading import Lock, Thread
from typing import Callable

from movie_quiz.constants.quiz_constants import RATING_THRESHOLD_SPREAD
from movie_quiz.core.errors import SourceUnavailable
from movie_quiz.core.models import Question
from movie_quiz.core.movies_loader import MostPopularMovie, MoviesLoader
from movie_quiz.core.question_source import QuestionCallback

logger = logging.getLogger(__name__)

BackgroundRunner = Callable[[Callable[[], None]], None]


def run_in_thread(task: Callable[[], None]) -> None:
    Thread(target=task, name="MovieQuestionWorker", daemon=True).start()


class RemoteQuestionFactory:
    """Question source that asks whether a movie's rating beats a threshold."""

    def __init__(
        self,
        loader: MoviesLoader,
        poster_cache_dir: Path,
        rng: random.Random | None = None,
        runner: BackgroundRunner = run_in_thread,
    ) -> None:
        self._loader = loader
        self._poster_cache_dir = poster_cache_dir
        self._rng = rng or random.Random()
        self._runner = runner
        self._lock = Lock()
        self._movies: list[MostPopularMovie] = []

    def load_data(self, callback: Callable[[SourceUnavailable | None], None]) -> None:
        """Fetch the movie list in the background and report the outcome."""

        def task() -> None:
            try:
                self._ensure_movies()
            except SourceUnavailable as exc:
                logger.warning("Movie list unavailable: %s", exc)
                callback(exc)
                return
            callback(None)

        self._runner(task)

    def request_next_question(self, callback: QuestionCallback) -> None:
        def task() -> None:
            try:
                question = self._build_question()
            except SourceUnavailable as exc:
                logger.warning("Question unavailable: %s", exc)
                callback(None, exc)
                return
            callback(question, None)

        self._runner(task)

    def _ensure_movies(self) -> list[MostPopularMovie]:
        with self._lock:
            if not self._movies:
                self._movies = self._loader.load_movies()
            return list(self._movies)

    def _build_question(self) -> Question:
        movies = self._ensure_movies()
        movie = self._rng.choice(movies)
        poster_path = self._loader.download_poster(movie, self._poster_cache_dir)
        threshold = self._pick_threshold(movie.rating_value)
        return Question(
            image_key=str(poster_path),
            prompt=f"Is the rating of this movie greater than {threshold}?",
            correct_answer=movie.rating_value > threshold,
        )

    def _pick_threshold(self, rating: float) -> int:
        anchor = int(rating)
        low = max(1, anchor - RATING_THRESHOLD_SPREAD)
        high = min(9, anchor + RATING_THRESHOLD_SPREAD)
        if low > high:
            return max(1, min(9, anchor))
        return self._rng.randint(low, high)
